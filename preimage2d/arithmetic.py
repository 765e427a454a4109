"""Exact integer arithmetic strategies for the orientation predicate."""

from __future__ import annotations

from typing import Dict, Tuple

import numpy as np

Point = Tuple[int, int]


class ArithmeticOverflowError(OverflowError):
    """Raised when a determinant does not fit the selected machine integer."""


class PythonIntArithmetic:
    """Unbounded Python integers; never overflows."""

    name = "int"

    def coerce(self, value: int) -> int:
        return int(value)

    def determinant(self, a: Point, b: Point, c: Point) -> int:
        # cross(b - a, c - a)
        return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])

    def __repr__(self) -> str:
        return "PythonIntArithmetic()"


class Int64Arithmetic(PythonIntArithmetic):
    """Native 64-bit integers: inputs and every intermediate must fit ``int64``.

    The products are evaluated exactly and then range-checked, so an input
    that a C implementation would silently wrap raises
    :class:`ArithmeticOverflowError` instead.
    """

    name = "int64"
    _info = np.iinfo(np.int64)

    def _check(self, value: int, what: str) -> int:
        if value < self._info.min or value > self._info.max:
            raise ArithmeticOverflowError(f"{what} {value} overflows int64")
        return value

    def coerce(self, value: int) -> int:
        return int(np.int64(self._check(int(value), "coordinate")))

    def determinant(self, a: Point, b: Point, c: Point) -> int:
        dx1 = self._check(b[0] - a[0], "difference")
        dy1 = self._check(b[1] - a[1], "difference")
        dx2 = self._check(c[0] - a[0], "difference")
        dy2 = self._check(c[1] - a[1], "difference")
        lhs = self._check(dx1 * dy2, "product")
        rhs = self._check(dy1 * dx2, "product")
        return self._check(lhs - rhs, "determinant")

    def __repr__(self) -> str:
        return "Int64Arithmetic()"


_STRATEGIES: Dict[str, PythonIntArithmetic] = {
    PythonIntArithmetic.name: PythonIntArithmetic(),
    Int64Arithmetic.name: Int64Arithmetic(),
}


def get_arithmetic(name: str) -> PythonIntArithmetic:
    try:
        return _STRATEGIES[name]
    except KeyError as exc:
        known = ", ".join(sorted(_STRATEGIES))
        raise ValueError(f"unknown arithmetic '{name}' (expected one of: {known})") from exc


__all__ = [
    "ArithmeticOverflowError",
    "Int64Arithmetic",
    "PythonIntArithmetic",
    "get_arithmetic",
]
