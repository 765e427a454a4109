"""Exact line/point orientation predicates."""

from __future__ import annotations

import abc
import enum
import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional, Tuple

from .arithmetic import PythonIntArithmetic
from .validate import PreconditionError, normalize_point

Point = Tuple[int, int]


class Orientation(enum.Enum):
    LEFT = 1
    ON = 0
    RIGHT = -1

    @classmethod
    def from_sign(cls, value: int) -> "Orientation":
        if value > 0:
            return cls.LEFT
        if value < 0:
            return cls.RIGHT
        return cls.ON


@dataclass(frozen=True)
class StraightLine:
    """Oriented straight line through two distinct lattice points."""

    first: Point
    second: Point

    def __post_init__(self) -> None:
        first = normalize_point(self.first)
        second = normalize_point(self.second)
        if first == second:
            raise PreconditionError(f"degenerate line: both points are {first}")
        object.__setattr__(self, "first", first)
        object.__setattr__(self, "second", second)

    @property
    def direction(self) -> Tuple[int, int]:
        return self.second[0] - self.first[0], self.second[1] - self.first[1]

    def equation(self) -> Tuple[int, int, int]:
        """Return the primitive ``(a, b, c)`` with ``a*x + b*y = c`` on the line.

        ``a*x + b*y - c`` is positive exactly on the left of the line.
        """

        dx, dy = self.direction
        a, b = -dy, dx
        c = a * self.first[0] + b * self.first[1]
        g = math.gcd(a, b)
        return a // g, b // g, c // g

    def slope(self) -> Optional[Fraction]:
        dx, dy = self.direction
        if dx == 0:
            return None
        return Fraction(dy, dx)

    def intercept(self) -> Optional[Fraction]:
        slope = self.slope()
        if slope is None:
            return None
        return self.first[1] - slope * self.first[0]

    def contains(self, point: Point) -> bool:
        a, b, c = self.equation()
        x, y = normalize_point(point)
        return a * x + b * y == c

    def reversed(self) -> "StraightLine":
        return StraightLine(self.second, self.first)

    def __str__(self) -> str:
        a, b, c = self.equation()
        return f"{a}*x + {b}*y = {c}"


class ExactPredicate(abc.ABC):
    """Orientation test used by the preimage engine.

    Implementations must decide signs exactly; the engine's feasibility
    decisions are only as good as these answers.
    """

    @abc.abstractmethod
    def sign(self, a: Point, b: Point, c: Point) -> int:
        """Return -1, 0 or 1: the sign of ``cross(b - a, c - a)``."""

    def normalize(self, point: object) -> Point:
        return normalize_point(point)  # type: ignore[return-value]

    def orientation(self, line: StraightLine, point: Point) -> Orientation:
        return Orientation.from_sign(self.sign(line.first, line.second, point))


class IntegerPredicate(ExactPredicate):
    def __init__(self, arithmetic: Optional[PythonIntArithmetic] = None) -> None:
        self.arithmetic = arithmetic or PythonIntArithmetic()

    def normalize(self, point: object) -> Point:
        x, y = normalize_point(point)
        return self.arithmetic.coerce(x), self.arithmetic.coerce(y)

    def sign(self, a: Point, b: Point, c: Point) -> int:
        det = self.arithmetic.determinant(a, b, c)
        return (det > 0) - (det < 0)

    def __repr__(self) -> str:
        return f"IntegerPredicate({self.arithmetic!r})"


_DEFAULT_PREDICATE = IntegerPredicate()


def orientation_sign(
    a: Point, b: Point, c: Point, arithmetic: Optional[PythonIntArithmetic] = None
) -> int:
    if a == b:
        raise PreconditionError(f"degenerate line: both points are {a}")
    predicate = _DEFAULT_PREDICATE if arithmetic is None else IntegerPredicate(arithmetic)
    return predicate.sign(a, b, c)


def orientation(
    line: StraightLine, point: Point, arithmetic: Optional[PythonIntArithmetic] = None
) -> Orientation:
    """Return on which side of ``line`` the lattice ``point`` lies."""

    return Orientation.from_sign(
        orientation_sign(line.first, line.second, normalize_point(point), arithmetic)  # type: ignore[arg-type]
    )


__all__ = [
    "ExactPredicate",
    "IntegerPredicate",
    "Orientation",
    "StraightLine",
    "orientation",
    "orientation_sign",
]
