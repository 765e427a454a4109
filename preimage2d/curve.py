"""4-connected lattice curves and the pixel pairs straddling their edges."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, Tuple, Union

import numpy as np

from .adjacency import FOUR_ADJACENCY
from .logging_utils import apply_debug_logging
from .validate import PreconditionError, normalize_point

logger = logging.getLogger(__name__)

Point = Tuple[int, int]
Pair = Tuple[Point, Point]

FREEMAN_STEPS = {
    "0": (1, 0),
    "1": (0, 1),
    "2": (-1, 0),
    "3": (0, -1),
}


def _side_pixel(corner: Point, normal: Tuple[int, int]) -> Point:
    # pixel (i, j) covers [i, i+1] x [j, j+1]
    return corner[0] + min(normal[0], 0), corner[1] + min(normal[1], 0)


class GridCurve:
    """Sequence of lattice vertices joined by unit horizontal/vertical edges.

    The curve is closed when its last vertex repeats the first one.  Each
    edge is straddled by two pixels: :meth:`incident_points` yields the one
    on the right of the direction of travel as the inner point and the one
    on the left as the outer point.
    """

    def __init__(self, points: Iterable[Sequence[int]]) -> None:
        vertices: List[Point] = [normalize_point(p) for p in points]  # type: ignore[misc]
        if not vertices:
            raise PreconditionError("a grid curve needs at least one vertex")
        for idx, (v, w) in enumerate(zip(vertices, vertices[1:])):
            if not FOUR_ADJACENCY.is_properly_adjacent_to(v, w):
                raise PreconditionError(
                    f"vertices {idx} {v} and {idx + 1} {w} are not 4-adjacent"
                )
        # retracing an edge swaps the inner and outer pixels of that edge
        for idx, (u, w) in enumerate(zip(vertices, vertices[2:])):
            if u == w:
                raise PreconditionError(
                    f"edge {idx + 1} retraces edge {idx} back to vertex {u}"
                )
        self._points = tuple(vertices)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "GridCurve":
        """Load whitespace separated ``x y`` rows (``#`` starts a comment)."""

        data = np.loadtxt(path, dtype=np.int64, comments="#", ndmin=2)
        if data.size == 0:
            raise PreconditionError(f"{path}: no vertices found")
        if data.shape[1] != 2:
            raise PreconditionError(f"{path}: expected 2 columns, got {data.shape[1]}")
        logger.info("Loaded %d vertices from %s", data.shape[0], path)
        return cls(data)

    @classmethod
    def from_freeman_chain(cls, start: Sequence[int], code: str) -> "GridCurve":
        x, y = normalize_point(start)
        vertices = [(x, y)]
        for idx, symbol in enumerate(code.strip()):
            try:
                dx, dy = FREEMAN_STEPS[symbol]
            except KeyError as exc:
                raise PreconditionError(f"invalid Freeman code {symbol!r} at index {idx}") from exc
            x, y = x + dx, y + dy
            vertices.append((x, y))
        return cls(vertices)

    @property
    def points(self) -> Tuple[Point, ...]:
        return self._points

    @property
    def closed(self) -> bool:
        return len(self._points) > 1 and self._points[0] == self._points[-1]

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridCurve):
            return NotImplemented
        return self._points == other._points

    def __repr__(self) -> str:
        return f"GridCurve({len(self._points)} vertices, closed={self.closed})"

    def steps(self) -> Iterator[Tuple[int, int]]:
        for v, w in zip(self._points, self._points[1:]):
            yield w[0] - v[0], w[1] - v[1]

    def incident_points(self) -> Iterator[Pair]:
        for v, w in zip(self._points, self._points[1:]):
            dx, dy = w[0] - v[0], w[1] - v[1]
            corner = (min(v[0], w[0]), min(v[1], w[1]))
            inner = _side_pixel(corner, (dy, -dx))
            outer = _side_pixel(corner, (-dy, dx))
            yield inner, outer

    def reversed(self) -> "GridCurve":
        return GridCurve(self._points[::-1])

    def to_array(self) -> np.ndarray:
        return np.asarray(self._points, dtype=np.int64).reshape(-1, 2)


def incident_pairs(curve: GridCurve) -> List[Pair]:
    return list(curve.incident_points())


apply_debug_logging(globals(), logger=logger, wrap_methods=False)


__all__ = ["FREEMAN_STEPS", "GridCurve", "incident_pairs"]
