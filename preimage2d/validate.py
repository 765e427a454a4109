import numbers
from typing import Sequence, Tuple

Point = Tuple[int, int]


class PreconditionError(ValueError):
    pass


def _coordinate(value: object, index: int) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise PreconditionError(f'coordinate {index} must be an integer, got {value!r}')
    return int(value)


def normalize_point(value: object, dimension: int = 2) -> Tuple[int, ...]:
    """Return ``value`` as a tuple of Python ints of length ``dimension``."""
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence) and not hasattr(value, '__len__'):
        raise PreconditionError(f'expected a lattice point, got {value!r}')
    coords = tuple(value)  # type: ignore[arg-type]
    if len(coords) != dimension:
        raise PreconditionError(f'expected {dimension} coordinates, got {len(coords)}')
    return tuple(_coordinate(c, i) for i, c in enumerate(coords))


def validate_pair(inner: object, outer: object) -> Tuple[Point, Point]:
    p = normalize_point(inner)
    q = normalize_point(outer)
    if p == q:
        raise PreconditionError(f'degenerate constraint pair: inner and outer are both {p}')
    return p, q  # type: ignore[return-value]
