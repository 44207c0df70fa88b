"""Parse, roll and render tabletop dice expressions such as ``2d6 + 3 - d20``."""

from .builder import Roll, RollBuilder
from .dice import expression_tuples, roll, roll_tuples
from .errors import (
    DiceError,
    ExceededCap,
    IntegerTooLarge,
    InvalidDie,
    InvalidExpression,
    NoExpression,
    OverflowNegative,
    OverflowPositive,
)
from .evaluator import evaluate
from .formatting import FormatOptions
from .limits import exceeds_cap, roll_capped
from .models import Expression
from .parser import parse_expression
from .results import ExpressionResult

__all__ = [
    "DiceError",
    "ExceededCap",
    "Expression",
    "ExpressionResult",
    "FormatOptions",
    "IntegerTooLarge",
    "InvalidDie",
    "InvalidExpression",
    "NoExpression",
    "OverflowNegative",
    "OverflowPositive",
    "Roll",
    "RollBuilder",
    "evaluate",
    "exceeds_cap",
    "expression_tuples",
    "parse_expression",
    "roll",
    "roll_capped",
    "roll_tuples",
]
