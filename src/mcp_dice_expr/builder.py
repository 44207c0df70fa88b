"""Step-by-step assembly of a roll.

More flexible than :func:`mcp_dice_expr.dice.roll`: the expression can come
from text or from ``(signed_count, sides)`` tuples, and the randomness source
can be swapped out::

    roll = RollBuilder().parse("2d6 + 3").with_rng(random.Random(42)).finalize()
    first = roll.roll()
    second = roll.roll()  # fresh draws from the same source
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .errors import NoExpression
from .evaluator import RandomSource, default_rng, evaluate
from .models import Expression, ExprTuple
from .parser import parse_expression
from .results import ExpressionResult


logger = logging.getLogger(__name__)


class RollBuilder:
    def __init__(self) -> None:
        self._expression: Expression | None = None
        self._rng: RandomSource | None = None

    def parse(self, text: str) -> RollBuilder:
        self._expression = parse_expression(text)
        return self

    def with_tuples(self, tuples: Iterable[ExprTuple]) -> RollBuilder:
        self._expression = Expression.from_tuples(tuples)
        return self

    def with_expression(self, expression: Expression) -> RollBuilder:
        self._expression = expression
        return self

    def with_rng(self, rng: RandomSource) -> RollBuilder:
        self._rng = rng
        return self

    def finalize(self) -> Roll:
        if self._expression is None:
            raise NoExpression()
        # The default source is only looked up when no rng was supplied.
        rng = self._rng if self._rng is not None else default_rng()
        return Roll(self._expression, rng)


class Roll:
    """A finalized expression bound to its randomness source."""

    def __init__(self, expression: Expression, rng: RandomSource) -> None:
        self.expression = expression
        self._rng = rng

    def roll(self) -> ExpressionResult:
        logger.debug("Rolling %s", self.expression)
        return evaluate(self.expression, self._rng)
