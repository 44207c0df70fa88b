"""Overflow-checked evaluation of parsed dice expressions.

Python integers never overflow, so the signed 64-bit range is enforced by hand:
every addition goes through :func:`checked_add`, and the direction of a failure
is worked out from the sign of what was being added.
"""

from __future__ import annotations

import logging
import secrets
import threading
from typing import Protocol

from .errors import OverflowNegative, OverflowPositive, negate_error
from .models import (
    I64_MAX,
    I64_MIN,
    ConstantTerm,
    ConstantValue,
    DiceTerm,
    EvaluatedTerm,
    Expression,
    RepeatedParts,
    RolledDie,
    Sign,
    Term,
)
from .results import ExpressionResult


logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything that yields a uniform integer in ``[a, b]``.

    ``random.Random``, ``secrets.SystemRandom`` and seeded test doubles all fit.
    """

    def randint(self, a: int, b: int) -> int: ...


_local = threading.local()


def default_rng() -> RandomSource:
    """Per-thread system randomness, created on first use."""
    rng = getattr(_local, "rng", None)
    if rng is None:
        rng = secrets.SystemRandom()
        _local.rng = rng
    return rng


def checked_add(a: int, b: int) -> int | None:
    """``a + b`` if it fits in a signed 64-bit integer, else ``None``."""
    result = a + b
    if I64_MIN <= result <= I64_MAX:
        return result
    return None


def _roll_dice(term: DiceTerm, rng: RandomSource) -> RolledDie:
    if term.sides == 1:
        # One-sided dice are fully determined: no draws.
        return RolledDie(total=term.count, parts=RepeatedParts(1, term.count))

    total = 0
    parts: list[int] = []
    for _ in range(term.count):
        face = rng.randint(1, term.sides)
        acc = checked_add(total, face)
        if acc is None:
            # Faces are never negative, so the raw roll can only overflow upward.
            raise OverflowPositive(f"Rolling {term} exceeds the 64-bit range.")
        total = acc
        parts.append(face)
    return RolledDie(total=total, parts=tuple(parts))


def roll_term(term: Term, rng: RandomSource) -> EvaluatedTerm:
    """Evaluate one unsigned term."""
    if isinstance(term, DiceTerm):
        return _roll_dice(term, rng)
    if isinstance(term, ConstantTerm):
        return ConstantValue(value=term.value)
    raise TypeError(f"not a term: {term!r}")


def evaluate(expression: Expression, rng: RandomSource) -> ExpressionResult:
    """Roll every term of ``expression`` in order and sum them.

    The n-th draw from ``rng`` always belongs to the n-th die in source order,
    so a seeded source reproduces the same result. The first failure aborts
    the whole evaluation.

    Raises:
        OverflowPositive: the sum (or one term) grows past the 64-bit maximum.
        OverflowNegative: the sum drops below the 64-bit minimum.
    """
    pairs = []
    total = 0
    for expr in expression:
        try:
            rolled = roll_term(expr.term, rng)
        except OverflowPositive as exc:
            # Subtracting an overflowing magnitude underflows the sum instead.
            if expr.sign is Sign.NEGATIVE:
                raise negate_error(exc) from exc
            raise

        evaluated = expr.sign * rolled
        acc = checked_add(total, evaluated.value)
        if acc is None:
            if evaluated.value > 0:
                raise OverflowPositive(f"Adding {expr} pushes the total past the 64-bit maximum.")
            raise OverflowNegative(f"Adding {expr} pushes the total below the 64-bit minimum.")
        total = acc
        pairs.append((expr, evaluated))

    logger.debug("Evaluated %s => %d", expression, total)
    return ExpressionResult(pairs=tuple(pairs), total=total)
