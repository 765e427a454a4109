"""Metric adjacencies over the integer lattice.

Two points are adjacent when their infinity-norm distance is at most 1 and
their 1-norm distance is at most ``max_norm1``.  In 2D this gives the 4-
(``max_norm1=1``) and 8-adjacency (``max_norm1=2``); in 3D the 6-, 18- and
26-adjacencies.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Sequence, Tuple

from .validate import PreconditionError, normalize_point

LatticePoint = Tuple[int, ...]
PointPredicate = Callable[[LatticePoint], bool]


@dataclass(frozen=True)
class MetricAdjacency:
    max_norm1: int
    dimension: int = 2

    def __post_init__(self) -> None:
        if self.dimension < 1:
            raise PreconditionError(f"dimension must be positive, got {self.dimension}")
        if not 1 <= self.max_norm1 <= self.dimension:
            raise PreconditionError(
                f"max_norm1 must lie in [1, {self.dimension}], got {self.max_norm1}"
            )

    def _point(self, value: Sequence[int]) -> LatticePoint:
        return normalize_point(value, self.dimension)

    def is_adjacent_to(self, p1: Sequence[int], p2: Sequence[int]) -> bool:
        a = self._point(p1)
        b = self._point(p2)
        diffs = [abs(x - y) for x, y in zip(a, b)]
        return max(diffs) <= 1 and sum(diffs) <= self.max_norm1

    def is_properly_adjacent_to(self, p1: Sequence[int], p2: Sequence[int]) -> bool:
        return self._point(p1) != self._point(p2) and self.is_adjacent_to(p1, p2)

    def offsets(self) -> Iterator[LatticePoint]:
        for offset in itertools.product((-1, 0, 1), repeat=self.dimension):
            if sum(abs(c) for c in offset) <= self.max_norm1:
                yield offset

    def neighborhood(
        self, p: Sequence[int], predicate: Optional[PointPredicate] = None
    ) -> Iterator[LatticePoint]:
        """Yield ``p`` and its neighbours (filtered by ``predicate``)."""

        center = self._point(p)
        for offset in self.offsets():
            q = tuple(c + o for c, o in zip(center, offset))
            if predicate is None or predicate(q):
                yield q

    def proper_neighborhood(
        self, p: Sequence[int], predicate: Optional[PointPredicate] = None
    ) -> Iterator[LatticePoint]:
        center = self._point(p)
        for q in self.neighborhood(center, predicate):
            if q != center:
                yield q

    def is_valid(self) -> bool:
        return 1 <= self.max_norm1 <= self.dimension

    def __str__(self) -> str:
        return f"MetricAdjacency(max_norm1={self.max_norm1}, dimension={self.dimension})"


FOUR_ADJACENCY = MetricAdjacency(1)
EIGHT_ADJACENCY = MetricAdjacency(2)


__all__ = ["EIGHT_ADJACENCY", "FOUR_ADJACENCY", "MetricAdjacency"]
