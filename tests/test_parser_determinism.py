from mcp_dice_expr.parser import parse_expression


def test_parse_is_deterministic():
    text = "4d6 - 2 + d20"
    a = parse_expression(text)
    b = parse_expression(text)

    assert a == b
    assert str(a) == str(b)
    assert a.to_tuples() == b.to_tuples()
