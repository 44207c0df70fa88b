from __future__ import annotations

import logging
import random

from mcp.server.fastmcp import FastMCP

from .config import settings
from .dice import audit_record, roll_from_text
from .errors import DiceError
from .evaluator import RandomSource
from .formatting import FormatOptions
from .limits import roll_expression_capped
from .models import Expression
from .parser import parse_expression


logger = logging.getLogger(__name__)

mcp = FastMCP("mcp-dice-expr")

_EXPLANATION = FormatOptions().total_right().concise()

_rng: RandomSource | None = random.Random(settings.rng_seed) if settings.rng_seed is not None else None


@mcp.tool()
def roll_dice(text: str):
    """Roll a dice expression such as '2d6 + 3 - d20'.

    Input: text (string)
    Output: structured JSON with audit details + explanation

    Raises a hard error (exception) on invalid input.
    """

    logger.info("roll_dice %r", text)
    try:
        return roll_from_text(text, cap=settings.roll_cap, rng=_rng, options=_EXPLANATION)
    except DiceError as e:
        # Fail-fast: surface stable error codes in the message.
        raise ValueError(str(e)) from None


@mcp.tool()
def parse_dice(text: str):
    """Parse a dice expression into (signed_count, sides) tuples.

    Constants come out as (value, 1). Nothing is rolled.
    """

    try:
        expression = parse_expression(text)
    except DiceError as e:
        raise ValueError(str(e)) from None
    return {
        "input": text,
        "normalized_expression": str(expression),
        "tuples": [list(t) for t in expression.to_tuples()],
    }


@mcp.tool()
def roll_dice_tuples(tuples: list[list[int]]):
    """Roll terms given as [signed_count, sides] pairs, e.g. [[2, 6], [3, 1]] for '2d6 + 3'."""

    logger.info("roll_dice_tuples %r", tuples)
    try:
        expression = Expression.from_tuples(tuples)
        result = roll_expression_capped(expression, settings.roll_cap, _rng)
    except DiceError as e:
        raise ValueError(str(e)) from None
    return audit_record(str(expression), expression, result, rng=_rng, options=_EXPLANATION)


def run() -> None:
    # stderr only: stdout carries the stdio transport.
    logging.basicConfig(level=settings.log_level.upper())
    mcp.run()


if __name__ == "__main__":
    run()
