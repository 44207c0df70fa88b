"""Admission control for expressions from untrusted callers.

``"99999999999d6"`` parses fine but would never finish rolling; these helpers
count the work up front and refuse before any randomness is consumed.
"""

from __future__ import annotations

import logging

from .errors import ExceededCap
from .evaluator import RandomSource, default_rng, evaluate
from .models import DiceTerm, Expression
from .parser import parse_expression
from .results import ExpressionResult


logger = logging.getLogger(__name__)


def exceeds_cap(expression: Expression, cap: int) -> bool:
    """True if evaluating ``expression`` takes more than ``cap`` steps.

    A step is one die draw, one one-sided dice term (rolled without draws) or
    one constant. Stops scanning as soon as the cap is passed.
    """
    steps = 0
    for term in expression.terms():
        if isinstance(term, DiceTerm) and term.sides > 1:
            steps += term.count
        else:
            steps += 1
        if steps > cap:
            return True
    return False


def roll_expression_capped(
    expression: Expression, cap: int, rng: RandomSource | None = None
) -> ExpressionResult:
    if exceeds_cap(expression, cap):
        logger.warning("Refusing to roll %s: more than %d steps", expression, cap)
        raise ExceededCap(f"'{expression}' needs more than {cap} rolls.")
    return evaluate(expression, rng if rng is not None else default_rng())


def roll_capped(text: str, cap: int, rng: RandomSource | None = None) -> ExpressionResult:
    """Parse and roll ``text``, refusing with ``ExceededCap`` instead of evaluating
    anything that takes more than ``cap`` steps."""
    return roll_expression_capped(parse_expression(text), cap, rng)
