from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import TypeAlias, overload

from .errors import IntegerTooLarge, InvalidDie, InvalidExpression


# Results are kept inside the signed 64-bit range; literals inside the
# non-negative half of it.
I64_MAX = 2**63 - 1
I64_MIN = -(2**63)

ExprTuple: TypeAlias = tuple[int, int]


class Sign(Enum):
    POSITIVE = 1
    NEGATIVE = -1

    def __neg__(self) -> Sign:
        return Sign.NEGATIVE if self is Sign.POSITIVE else Sign.POSITIVE

    def __mul__(self, other):
        if self is Sign.POSITIVE:
            return other
        return -other

    __rmul__ = __mul__

    def __str__(self) -> str:
        return "+" if self is Sign.POSITIVE else "-"


def _check_magnitude(value: int, what: str) -> None:
    if value > I64_MAX:
        raise IntegerTooLarge(f"{what} does not fit in 63 bits.")


@dataclass(frozen=True)
class DiceTerm:
    count: int
    sides: int

    def __post_init__(self) -> None:
        # Counts and sizes are magnitudes; the sign lives on Expr.
        if self.sides < 1:
            raise InvalidDie("A die needs at least one side. Example: '2d6'.")
        if self.count < 0:
            raise InvalidDie("Dice count must not be negative. Example: '2d6'.")
        _check_magnitude(self.count, "Dice count")
        _check_magnitude(self.sides, "Die size")

    def __str__(self) -> str:
        return f"{self.count}d{self.sides}"


@dataclass(frozen=True)
class ConstantTerm:
    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise InvalidExpression("Constant magnitude must not be negative.")
        _check_magnitude(self.value, "Constant")

    def __str__(self) -> str:
        return str(self.value)


Term: TypeAlias = DiceTerm | ConstantTerm


@dataclass(frozen=True)
class Expr:
    term: Term
    sign: Sign = Sign.POSITIVE

    def __str__(self) -> str:
        prefix = "-" if self.sign is Sign.NEGATIVE else ""
        return f"{prefix}{self.term}"

    def to_tuple(self) -> ExprTuple:
        if isinstance(self.term, DiceTerm):
            return self.sign * self.term.count, self.term.sides
        return self.sign * self.term.value, 1

    @classmethod
    def from_tuple(cls, tup: ExprTuple) -> Expr:
        """Build an ``Expr`` from ``(signed_count, sides)``.

        ``sides == 1`` denotes a constant whose value is ``signed_count``.
        """
        if len(tup) != 2:
            raise InvalidExpression(f"Expected (signed_count, sides), got {tup!r}. Example: (2, 6).")
        signed_count, sides = tup
        sign = Sign.NEGATIVE if signed_count < 0 else Sign.POSITIVE
        magnitude = abs(signed_count)
        if sides < 1:
            raise InvalidDie("A die needs at least one side. Example: (2, 6).")
        if sides == 1:
            return cls(term=ConstantTerm(value=magnitude), sign=sign)
        return cls(term=DiceTerm(count=magnitude, sides=sides), sign=sign)


@dataclass(frozen=True)
class Expression:
    """An ordered, non-empty list of signed terms."""

    exprs: tuple[Expr, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "exprs", tuple(self.exprs))
        if not self.exprs:
            raise InvalidExpression("An expression needs at least one term. Example: 'd20'.")

    def __iter__(self) -> Iterator[Expr]:
        return iter(self.exprs)

    def __len__(self) -> int:
        return len(self.exprs)

    def __str__(self) -> str:
        first, *rest = self.exprs
        chunks = [str(first)]
        for expr in rest:
            chunks.append(f"{expr.sign} {expr.term}")
        return " ".join(chunks)

    def terms(self) -> list[Term]:
        return [expr.term for expr in self.exprs]

    def to_tuples(self) -> list[ExprTuple]:
        return [expr.to_tuple() for expr in self.exprs]

    @classmethod
    def from_tuples(cls, tuples: Iterable[ExprTuple]) -> Expression:
        return cls(exprs=tuple(Expr.from_tuple(tuple(t)) for t in tuples))  # lists from JSON too

    def map_tuples(self, fn: Callable[[int, int], ExprTuple]) -> Expression:
        """Rewrite every term through its tuple form, re-validating the output."""
        return Expression.from_tuples(fn(count, sides) for count, sides in self.to_tuples())


class RepeatedParts(Sequence[int]):
    """``count`` copies of one face value, without materialising them.

    Used for one-sided dice, whose count may be far larger than memory.
    """

    __slots__ = ("_face", "_count")

    def __init__(self, face: int, count: int) -> None:
        self._face = face
        self._count = count

    def __len__(self) -> int:
        return self._count

    @overload
    def __getitem__(self, index: int) -> int: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[int]: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return RepeatedParts(self._face, len(range(*index.indices(self._count))))
        if not -self._count <= index < self._count:
            raise IndexError("part index out of range")
        return self._face

    def __iter__(self) -> Iterator[int]:
        for _ in range(self._count):
            yield self._face

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RepeatedParts):
            return len(self) == len(other) and (not self._count or self._face == other._face)
        if isinstance(other, Sequence) and not isinstance(other, str):
            return len(self) == len(other) and all(x == self._face for x in other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._face, self._count))

    def __repr__(self) -> str:
        return f"RepeatedParts(face={self._face}, count={self._count})"


@dataclass(frozen=True)
class RolledDie:
    total: int
    parts: Sequence[int]
    sign: Sign = Sign.POSITIVE

    def __neg__(self) -> RolledDie:
        return replace(self, total=-self.total, sign=-self.sign)

    @property
    def value(self) -> int:
        return self.total


@dataclass(frozen=True)
class ConstantValue:
    value: int

    def __neg__(self) -> ConstantValue:
        return ConstantValue(value=-self.value)

    @property
    def parts(self) -> tuple[int]:
        return (self.value,)

    @property
    def sign(self) -> Sign:
        return Sign.POSITIVE if self.value >= 0 else Sign.NEGATIVE


EvaluatedTerm: TypeAlias = RolledDie | ConstantValue
