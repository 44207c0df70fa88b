from __future__ import annotations

import re

from .errors import IntegerTooLarge, InvalidExpression
from .models import I64_MAX, ConstantTerm, DiceTerm, Expr, Expression, Sign, Term


# Only ASCII digits count; str.isdigit() would also accept other scripts.
_DICE_RE = re.compile(r"(?P<count>[0-9]*)d(?P<sides>[0-9]+)")
_INTEGER_RE = re.compile(r"[0-9]+")
_SEPARATOR_RE = re.compile(r"[ \t]*(?P<op>[+-])[ \t]*")

_RawTerm = tuple[int | None, int]  # (count or None for constants, sides or value)


def _to_integer(digits: str) -> int:
    # Length first: int() refuses very long digit strings with a plain ValueError.
    significant = digits.lstrip("0")
    if len(significant) > len(str(I64_MAX)) or int(significant or "0") > I64_MAX:
        raise IntegerTooLarge(f"A {len(significant)}-digit number does not fit in 63 bits.")
    return int(significant or "0")


def _scan_term(text: str, pos: int) -> tuple[_RawTerm, int] | None:
    m = _DICE_RE.match(text, pos)
    if m:
        count_str = m.group("count")
        count = _to_integer(count_str) if count_str else 1
        return (count, _to_integer(m.group("sides"))), m.end()

    m = _INTEGER_RE.match(text, pos)
    if m:
        return (None, _to_integer(m.group())), m.end()
    return None


def _scan_separator(text: str, pos: int) -> tuple[Sign, int] | None:
    m = _SEPARATOR_RE.match(text, pos)
    if not m:
        return None
    return (Sign.POSITIVE if m.group("op") == "+" else Sign.NEGATIVE), m.end()


def _scan(text: str) -> list[tuple[Sign, _RawTerm]]:
    pos = 0
    sign = Sign.POSITIVE
    leading = _scan_separator(text, pos)
    if leading:
        sign, pos = leading

    first = _scan_term(text, pos)
    if first is None:
        raise InvalidExpression(f"Expected a term at position {pos} in '{text}'. Example: '2d6 + 3'.")
    raw, pos = first
    scanned = [(sign, raw)]

    while True:
        sep = _scan_separator(text, pos)
        if sep is None:
            break
        sign, after_sep = sep
        nxt = _scan_term(text, after_sep)
        if nxt is None:
            # Leave the dangling operator unconsumed; reported as trailing text.
            break
        raw, pos = nxt
        scanned.append((sign, raw))

    # Reject "10dlol" instead of quietly reading it as 10.
    if pos != len(text):
        raise InvalidExpression(f"Could not understand '{text[pos:]}' in '{text}'. Example: '2d6 + 3'.")
    return scanned


def _build_term(raw: _RawTerm) -> Term:
    count, number = raw
    if count is None:
        return ConstantTerm(value=number)
    return DiceTerm(count=count, sides=number)


def parse_expression(text: str) -> Expression:
    """Parse a dice expression such as ``"2d6 + 3 - d20"``.

    Raises:
        InvalidExpression: the text is not an expression or has trailing input.
        IntegerTooLarge: a literal does not fit in 63 bits.
        InvalidDie: a die has zero sides.
    """
    scanned = _scan(text.strip())
    return Expression(exprs=tuple(Expr(term=_build_term(raw), sign=sign) for sign, raw in scanned))
