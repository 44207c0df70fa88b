import pytest

from mcp_dice_expr.errors import DiceError, IntegerTooLarge, InvalidDie, InvalidExpression
from mcp_dice_expr.parser import parse_expression


@pytest.mark.parametrize(
    ("text", "error", "prefix"),
    [
        ("", InvalidExpression, "[INVALID_EXPRESSION]"),
        ("   ", InvalidExpression, "[INVALID_EXPRESSION]"),
        ("10dlol", InvalidExpression, "[INVALID_EXPRESSION]"),
        ("2d6 +", InvalidExpression, "[INVALID_EXPRESSION]"),
        ("2 d6", InvalidExpression, "[INVALID_EXPRESSION]"),
        ("2d6 * 2", InvalidExpression, "[INVALID_EXPRESSION]"),
        ("(2d6 + 3)", InvalidExpression, "[INVALID_EXPRESSION]"),
        ("2D6", InvalidExpression, "[INVALID_EXPRESSION]"),
        ("d", InvalidExpression, "[INVALID_EXPRESSION]"),
        ("+-5", InvalidExpression, "[INVALID_EXPRESSION]"),
        ("2d6 ++ 1", InvalidExpression, "[INVALID_EXPRESSION]"),
        ("d20 plus 3", InvalidExpression, "[INVALID_EXPRESSION]"),
        ("٤", InvalidExpression, "[INVALID_EXPRESSION]"),  # Arabic-Indic four
        ("d0", InvalidDie, "[INVALID_DIE]"),
        ("3 + 2d0 - 1", InvalidDie, "[INVALID_DIE]"),
        ("9223372036854775808", IntegerTooLarge, "[INTEGER_TOO_LARGE]"),
        ("1 + 9223372036854775808d6", IntegerTooLarge, "[INTEGER_TOO_LARGE]"),
        ("d99999999999999999999", IntegerTooLarge, "[INTEGER_TOO_LARGE]"),
    ],
)
def test_parse_rejections(text, error, prefix):
    with pytest.raises(error) as exc:
        parse_expression(text)
    assert str(exc.value).startswith(prefix)


def test_trailing_text_is_rejected_before_invalid_die():
    with pytest.raises(InvalidExpression) as exc:
        parse_expression("d0 lol")
    assert not isinstance(exc.value, InvalidDie)


def test_integer_too_large_is_an_invalid_expression():
    with pytest.raises(InvalidExpression):
        parse_expression("99999999999999999999")


def test_every_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_expression("nope")
    assert issubclass(DiceError, ValueError)


@pytest.mark.parametrize(
    "text",
    ["9" * 5000, "d" + "9" * 5000, "1 + " + "9" * 5000 + "d6", "0000000000009223372036854775808"],
)
def test_overlong_literals_are_integer_too_large(text):
    with pytest.raises(IntegerTooLarge) as exc:
        parse_expression(text)
    assert len(str(exc.value)) < 100


def test_leading_zeros_do_not_count_towards_the_limit():
    parsed = parse_expression("00000000000000000000009223372036854775807d06")
    assert [expr.to_tuple() for expr in parsed] == [(2**63 - 1, 6)]
