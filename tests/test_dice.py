import random
import re

import pytest

from mcp_dice_expr import roll as package_roll
from mcp_dice_expr.dice import expression_tuples, roll, roll_from_text, roll_tuples
from mcp_dice_expr.errors import ExceededCap, InvalidDie, InvalidExpression
from mcp_dice_expr.formatting import FormatOptions


def test_roll_constants():
    assert roll("5 + 3").total == 8
    assert roll("5 - 3").total == 2
    assert package_roll is roll


def test_roll_bounds():
    for seed in range(20):
        total = roll("d20 + 5 - d2", random.Random(seed)).total
        assert 5 - 2 + 1 <= total <= 5 + 20 - 1


def test_roll_rejects_trailing_text():
    with pytest.raises(InvalidExpression):
        roll("10dlol")


@pytest.mark.parametrize(
    ("text", "tuples"),
    [
        ("2d6 + 3 - d20", [(2, 6), (3, 1), (-1, 20)]),
        ("-4", [(-4, 1)]),
        ("3d1", [(3, 1)]),
    ],
)
def test_expression_tuples(text, tuples):
    assert expression_tuples(text) == tuples


def test_roll_tuples(scripted):
    result = roll_tuples([(2, 6), (3, 1), (-1, 20)], scripted([1, 2, 20]))
    assert result.total == 1 + 2 + 3 - 20


def test_roll_tuples_round_trip(exploding_rng):
    assert roll_tuples(expression_tuples("7 - 2 + 10"), exploding_rng).total == 15


@pytest.mark.parametrize("tup", [(1, 0), (-1, -6)])
def test_roll_tuples_rejects_invalid_dice(tup):
    with pytest.raises(InvalidDie):
        roll_tuples([tup])


def test_roll_from_text_audit_record(scripted):
    record = roll_from_text("2d6 - 1", cap=10, rng=scripted([6, 3]), options=FormatOptions().total_right())

    assert re.fullmatch(r"[0-9a-f]{32}", record["request_id"])
    assert record["timestamp"].endswith("Z")
    assert record["input"] == "2d6 - 1"
    assert record["normalized_expression"] == "2d6 - 1"
    assert record["rng"]["source"].endswith("ScriptedRng")
    assert record["terms"] == [
        {"type": "dice", "count": 2, "sides": 6, "sign": "+", "rolls": [6, 3], "subtotal": 9},
        {"type": "constant", "value": -1, "sign": "-", "subtotal": -1},
    ]
    assert record["total"] == 8
    assert record["explanation"] == "(2d6 → 6 + 3) - 1 = 8"


def test_roll_from_text_default_source():
    record = roll_from_text("d4", cap=10)
    assert record["rng"]["source"] == "secrets.SystemRandom"
    assert 1 <= record["total"] <= 4


def test_roll_from_text_respects_cap(exploding_rng):
    with pytest.raises(ExceededCap):
        roll_from_text("99999999999d6", cap=1000, rng=exploding_rng)


def test_roll_from_text_one_sided_dice_list_no_rolls(exploding_rng):
    record = roll_from_text("99999999999d1", cap=5, rng=exploding_rng, options=FormatOptions().concise())
    assert record["terms"][0]["rolls"] == []
    assert record["total"] == 99999999999
    assert record["explanation"] == "(99999999999d1 → 99999999999)"
