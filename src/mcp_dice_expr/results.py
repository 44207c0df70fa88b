from __future__ import annotations

from dataclasses import dataclass

from .formatting import FormatOptions, format_result
from .models import EvaluatedTerm, Expr


@dataclass(frozen=True)
class ExpressionResult:
    """Outcome of one evaluation.

    ``pairs`` keeps every source term next to what it rolled, in source order;
    ``total`` is their checked sum.
    """

    pairs: tuple[tuple[Expr, EvaluatedTerm], ...]
    total: int

    def format(self, options: FormatOptions | None = None) -> str:
        return format_result(self, options)

    def __str__(self) -> str:
        return self.format()
