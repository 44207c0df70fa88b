from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from .builder import RollBuilder
from .evaluator import RandomSource
from .formatting import FormatOptions
from .limits import roll_expression_capped
from .models import ConstantValue, Expression, ExprTuple
from .parser import parse_expression
from .results import ExpressionResult


def _now_utc_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def roll(text: str, rng: RandomSource | None = None) -> ExpressionResult:
    """Parse and roll ``text``. Raises DiceError for invalid input.

    >>> roll("5 - 3").total
    2
    """
    builder = RollBuilder().parse(text)
    if rng is not None:
        builder.with_rng(rng)
    return builder.finalize().roll()


def expression_tuples(text: str) -> list[ExprTuple]:
    """``(signed_count, sides)`` for every term; constants come out as ``(value, 1)``."""
    return parse_expression(text).to_tuples()


def roll_tuples(tuples: Iterable[ExprTuple], rng: RandomSource | None = None) -> ExpressionResult:
    """Roll terms given in the form produced by :func:`expression_tuples`."""
    builder = RollBuilder().with_tuples(tuples)
    if rng is not None:
        builder.with_rng(rng)
    return builder.finalize().roll()


def _rng_source(rng: RandomSource | None) -> str:
    if rng is None:
        return "secrets.SystemRandom"
    cls = type(rng)
    return f"{cls.__module__}.{cls.__qualname__}"


def audit_record(
    text: str,
    expression: Expression,
    result: ExpressionResult,
    rng: RandomSource | None = None,
    options: FormatOptions | None = None,
) -> dict[str, Any]:
    """Structured, JSON-friendly account of one roll."""
    evaluated_terms: list[dict[str, Any]] = []
    for expr, value in result.pairs:
        if isinstance(value, ConstantValue):
            evaluated_terms.append(
                {
                    "type": "constant",
                    "value": value.value,
                    "sign": str(expr.sign),
                    "subtotal": value.value,
                }
            )
            continue

        evaluated_terms.append(
            {
                "type": "dice",
                "count": expr.term.count,
                "sides": expr.term.sides,
                "sign": str(expr.sign),
                # One-sided dice draw nothing and may be astronomically many.
                "rolls": [] if expr.term.sides == 1 else list(value.parts),
                "subtotal": value.value,
            }
        )

    return {
        "request_id": uuid.uuid4().hex,
        "timestamp": _now_utc_iso(),
        "input": text,
        "normalized_expression": str(expression),
        "rng": {
            "source": _rng_source(rng),
            "nonce": str(uuid.uuid4()),
        },
        "terms": evaluated_terms,
        "total": result.total,
        "explanation": result.format(options),
    }


def roll_from_text(
    text: str,
    *,
    cap: int,
    rng: RandomSource | None = None,
    options: FormatOptions | None = None,
) -> dict[str, Any]:
    """Parse, cap-check, then roll. Raises DiceError for invalid input."""
    expression = parse_expression(text)
    result = roll_expression_capped(expression, cap, rng)
    return audit_record(text, expression, result, rng=rng, options=options)
