"""Rendering of evaluated dice expressions.

Layout: ``[T = ](EXP → N [+ N]*) [+ (EXP → N [+ N]*)]*[ = T]``
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING

from .models import ConstantTerm, EvaluatedTerm, Expr, RolledDie, Sign

if TYPE_CHECKING:
    from .results import ExpressionResult


ARROW = "→"


class TotalPosition(Enum):
    LEFT = "left"
    RIGHT = "right"
    SUPPRESSED = "suppressed"


class TermSeparator(Enum):
    PLUS_SIGN = "plus_sign"
    COMMA = "comma"


@dataclass(frozen=True)
class FormatOptions:
    """Display options for dice results.

    Every option method returns a new instance, so calls chain::

        FormatOptions().total_left().term_commas().term_list_parens().concise()
    """

    total_position: TotalPosition = TotalPosition.SUPPRESSED
    summarize_terms: bool = False
    term_separators: TermSeparator = TermSeparator.PLUS_SIGN
    term_parentheses: bool = True
    term_list_parentheses: bool = False
    # Set internally when a plus-sign separator already shows the sign.
    ignore_sign: bool = field(default=False, repr=False)

    def exclude_sign(self) -> FormatOptions:
        return replace(self, ignore_sign=True)

    def total_left(self) -> FormatOptions:
        """Show the total first: ``total = ...``."""
        return replace(self, total_position=TotalPosition.LEFT)

    def total_right(self) -> FormatOptions:
        """Show the total last: ``... = total``."""
        return replace(self, total_position=TotalPosition.RIGHT)

    def no_total(self) -> FormatOptions:
        """Leave the total out of a term listing. This is the default."""
        return replace(self, total_position=TotalPosition.SUPPRESSED)

    def concise(self) -> FormatOptions:
        """Dice terms render as ``(Dice → Total)``."""
        return replace(self, summarize_terms=True)

    def verbose(self) -> FormatOptions:
        """Dice terms render as ``(Dice → Die1 + Die2 + ...)``. This is the default."""
        return replace(self, summarize_terms=False)

    def term_commas(self) -> FormatOptions:
        return replace(self, term_separators=TermSeparator.COMMA)

    def term_pluses(self) -> FormatOptions:
        return replace(self, term_separators=TermSeparator.PLUS_SIGN)

    def dice_parens(self) -> FormatOptions:
        return replace(self, term_parentheses=True)

    def no_term_parens(self) -> FormatOptions:
        return replace(self, term_parentheses=False)

    def term_list_parens(self) -> FormatOptions:
        return replace(self, term_list_parentheses=True)

    def no_term_list_parens(self) -> FormatOptions:
        return replace(self, term_list_parentheses=False)


def _format_int(value: int, options: FormatOptions) -> str:
    return str(abs(value)) if options.ignore_sign else str(value)


def _format_rolled(die: RolledDie, options: FormatOptions) -> str:
    if options.summarize_terms or len(die.parts) <= 1:
        return _format_int(die.total, options)

    sign = Sign.POSITIVE if options.ignore_sign else die.sign
    prefix = "-" if sign is Sign.NEGATIVE else ""
    return prefix + f" {sign} ".join(str(part) for part in die.parts)


def format_evaluated(value: EvaluatedTerm, options: FormatOptions) -> str:
    if isinstance(value, RolledDie):
        return _format_rolled(value, options)
    return _format_int(value.value, options)


def format_expr(expr: Expr, options: FormatOptions) -> str:
    if options.ignore_sign:
        return str(expr.term)
    return str(expr)


def _format_pair(expr: Expr, value: EvaluatedTerm, options: FormatOptions) -> str:
    if isinstance(expr.term, ConstantTerm):
        return format_evaluated(value, options)
    if expr.term.sides == 1:
        # Every face of a one-sided die is 1; listing them all is unbounded work.
        realised = _format_int(value.value, options)
    else:
        realised = format_evaluated(value, options)
    body = f"{format_expr(expr, options)} {ARROW} {realised}"
    return f"({body})" if options.term_parentheses else body


def format_result(result: ExpressionResult, options: FormatOptions | None = None) -> str:
    """Render ``result`` under ``options`` (defaults when ``None``)."""
    options = options or FormatOptions()
    pairs = result.pairs
    listing = len(pairs) > 1 or len(pairs[0][1].parts) > 1
    if not listing:
        # A single plain value: the total is all there is to show.
        return str(result.total)

    pluses = options.term_separators is TermSeparator.PLUS_SIGN
    term_options = options.exclude_sign() if pluses else options

    chunks: list[str] = []
    if options.total_position is TotalPosition.LEFT:
        chunks.append(f"{result.total} = ")
    if options.term_list_parentheses:
        chunks.append("(")

    for index, (expr, value) in enumerate(pairs):
        if pluses:
            if index == 0:
                if value.sign is Sign.NEGATIVE:
                    chunks.append("-")
            else:
                chunks.append(f" {value.sign} ")
        elif index:
            chunks.append(", ")
        chunks.append(_format_pair(expr, value, term_options))

    if options.term_list_parentheses:
        chunks.append(")")
    if options.total_position is TotalPosition.RIGHT:
        chunks.append(f" = {result.total}")
    return "".join(chunks)
