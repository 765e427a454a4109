"""Incremental preimage of a sequence of (inner, outer) lattice point pairs.

The preimage is the set of oriented straight lines that leave every inner
point on their right (or on them) and every outer point on their left (or on
them), the lines being oriented along the direction in which the pairs are
read.  It is stored as two convex chains, ordered from the back of the
recognized sequence to its front:

* the inner chain: hull vertices of the inner points facing the outer ones;
* the outer chain: hull vertices of the outer points facing the inner ones.

Two critical lines bound the region:

* ``upper`` joins the back end of the inner chain to the front end of the
  outer chain;
* ``lower`` joins the back end of the outer chain to the front end of the
  inner chain.

Extending at the back is the mirror image of extending at the front: the
chains are read from the other end and the inner/outer roles swap, so a
single routine (:meth:`Preimage._extend`) serves both ends.  Every point
enters and leaves a chain at most once, which keeps an extension amortized
constant time.
"""

from __future__ import annotations

import copy
import logging
from collections import deque
from functools import partial
from typing import Callable, Deque, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from .config import PreimageConfig, get_preimage_config
from .logging_utils import apply_debug_logging
from .predicates import ExactPredicate, StraightLine
from .validate import PreconditionError, validate_pair

logger = logging.getLogger(__name__)

Point = Tuple[int, int]
Chain = Deque[Point]
Journal = List[Callable[[], object]]


class Extent(NamedTuple):
    back: int
    front: int


class _End:
    """Index and deque-operation mapping for one end of the chains."""

    def __init__(self, name: str, front: bool) -> None:
        self.name = name
        self.front = front
        if front:
            self.near, self.near_prev, self.far, self.far_next = -1, -2, 0, 1
        else:
            self.near, self.near_prev, self.far, self.far_next = 0, 1, -1, -2

    def push_near(self, chain: Chain, point: Point, journal: Journal) -> None:
        if self.front:
            chain.append(point)
            journal.append(chain.pop)
        else:
            chain.appendleft(point)
            journal.append(chain.popleft)

    def pop_near(self, chain: Chain, journal: Journal) -> Point:
        if self.front:
            point = chain.pop()
            journal.append(partial(chain.append, point))
        else:
            point = chain.popleft()
            journal.append(partial(chain.appendleft, point))
        return point

    def pop_far(self, chain: Chain, journal: Journal) -> Point:
        if self.front:
            point = chain.popleft()
            journal.append(partial(chain.appendleft, point))
        else:
            point = chain.pop()
            journal.append(partial(chain.append, point))
        return point

    def __repr__(self) -> str:
        return f"<end {self.name}>"


_FRONT = _End("front", front=True)
_BACK = _End("back", front=False)

# own-chain turn sign for the inner role; the outer role uses the opposite
_INNER_TURN = 1
_OUTER_TURN = -1


def _rollback(journal: Journal) -> None:
    for undo in reversed(journal):
        undo()
    journal.clear()


class Preimage:
    """Preimage of straight lines crossing a growing sequence of point pairs.

    >>> engine = Preimage((0, 0), (0, 1))
    >>> engine.add_front((1, 0), (1, 1))
    True
    >>> engine.add_front((2, 0), (2, 1))
    True
    >>> engine.size
    3
    """

    def __init__(
        self,
        inner: Sequence[int],
        outer: Sequence[int],
        *,
        predicate: Optional[ExactPredicate] = None,
        config: Optional[PreimageConfig] = None,
    ) -> None:
        self._config = copy.deepcopy(config) if config is not None else get_preimage_config()
        self._predicate = predicate if predicate is not None else self._config.make_predicate()
        p, q = self._normalize_pair(inner, outer)
        self._inner: Chain = deque([p])
        self._outer: Chain = deque([q])
        # every point absorbed so far, by role
        self._inner_points = {p}
        self._outer_points = {q}
        self._back = 0
        self._front = 0
        logger.debug("Preimage started from inner=%s outer=%s", p, q)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def inner_hull(self) -> Tuple[Point, ...]:
        return tuple(self._inner)

    @property
    def outer_hull(self) -> Tuple[Point, ...]:
        return tuple(self._outer)

    @property
    def extent(self) -> Extent:
        """Pairs absorbed at each end since construction."""
        return Extent(self._back, self._front)

    @property
    def size(self) -> int:
        return self._back + self._front + 1

    def leaning_points(self) -> Tuple[Tuple[Point, ...], Tuple[Point, ...]]:
        return self.inner_hull, self.outer_hull

    def critical_lines(self) -> Tuple[StraightLine, StraightLine]:
        """Return ``(upper, lower)``, the two extreme lines of the region."""
        upper = StraightLine(self._inner[0], self._outer[-1])
        lower = StraightLine(self._outer[0], self._inner[-1])
        return upper, lower

    def separating_line(self) -> StraightLine:
        """Return one line of the preimage: the ``upper`` critical line."""
        return StraightLine(self._inner[0], self._outer[-1])

    def snapshot(self) -> Tuple[Tuple[Point, ...], Tuple[Point, ...], Extent]:
        return self.inner_hull, self.outer_hull, self.extent

    def is_valid(self) -> bool:
        """Check the chains and critical lines against each other."""

        if not getattr(self, "_inner", None) or not getattr(self, "_outer", None):
            return False
        if self._back < 0 or self._front < 0:
            return False
        sign = self._predicate.sign
        inner = list(self._inner)
        outer = list(self._outer)
        for u, v, w in zip(inner, inner[1:], inner[2:]):
            if sign(u, v, w) >= 0:
                return False
        for u, v, w in zip(outer, outer[1:], outer[2:]):
            if sign(u, v, w) <= 0:
                return False
        for a, b in ((inner[0], outer[-1]), (outer[0], inner[-1])):
            if a == b:
                return False
            if any(sign(a, b, p) > 0 for p in inner):
                return False
            if any(sign(a, b, q) < 0 for q in outer):
                return False
        return True

    # ------------------------------------------------------------------
    # Extension
    # ------------------------------------------------------------------

    def add_front(self, inner: Sequence[int], outer: Sequence[int]) -> bool:
        """Try to absorb a pair following the current front end."""
        return self._add(inner, outer, _FRONT)

    def add_back(self, inner: Sequence[int], outer: Sequence[int]) -> bool:
        """Try to absorb a pair preceding the current back end."""
        return self._add(inner, outer, _BACK)

    def _add(self, inner: Sequence[int], outer: Sequence[int], end: _End) -> bool:
        if "_inner" not in self.__dict__:
            raise PreconditionError("preimage extended before construction")
        p, q = self._normalize_pair(inner, outer)
        if p in self._outer_points or q in self._inner_points:
            shared = p if p in self._outer_points else q
            raise PreconditionError(
                f"lattice point {shared} is used both as an inner and an outer point"
            )
        if end.front:
            accepted = self._extend(p, q, self._inner, self._outer, end)
        else:
            accepted = self._extend(q, p, self._outer, self._inner, end)
        if not accepted:
            logger.debug("Rejected %s pair inner=%s outer=%s", end.name, p, q)
            return False
        self._inner_points.add(p)
        self._outer_points.add(q)
        if end.front:
            self._front += 1
        else:
            self._back += 1
        logger.debug(
            "Accepted %s pair inner=%s outer=%s; chains inner=%d outer=%d",
            end.name,
            p,
            q,
            len(self._inner),
            len(self._outer),
        )
        return True

    def _extend(self, a: Point, b: Point, chain_a: Chain, chain_b: Chain, end: _End) -> bool:
        # chain_a/a play the inner role and chain_b/b the outer role as seen
        # while walking towards ``end``.
        sign = self._predicate.sign
        upper = (chain_a[end.far], chain_b[end.near])
        lower = (chain_b[end.far], chain_a[end.near])
        if sign(upper[0], upper[1], a) > 0 or sign(lower[0], lower[1], b) < 0:
            return False

        journal: Journal = []
        self._absorb(a, chain_a, chain_b, _INNER_TURN, end, journal)
        lower = (chain_b[end.far], chain_a[end.near])
        if sign(lower[0], lower[1], b) < 0:
            _rollback(journal)
            return False

        self._absorb(b, chain_b, chain_a, _OUTER_TURN, end, journal)
        upper = (chain_a[end.far], chain_b[end.near])
        lower = (chain_b[end.far], chain_a[end.near])
        if (
            sign(upper[0], upper[1], a) > 0
            or sign(lower[0], lower[1], a) > 0
            or sign(upper[0], upper[1], b) < 0
            or sign(lower[0], lower[1], b) < 0
        ):
            _rollback(journal)
            return False

        if self._config.check_invariants and not self.is_valid():
            _rollback(journal)
            raise RuntimeError(f"preimage invariants violated while extending at the {end.name}")
        return True

    def _absorb(
        self,
        point: Point,
        own: Chain,
        other: Chain,
        turn: int,
        end: _End,
        journal: Journal,
    ) -> None:
        """Insert ``point`` into ``own`` if it tightens or touches the region.

        ``turn`` is +1 when ``own`` plays the inner role and -1 for the outer
        role; multiplying a determinant by it maps both roles onto the inner
        case.
        """

        sign = self._predicate.sign
        anchor = other[end.far]
        support = own[end.near]
        side = turn * sign(anchor, support, point)
        if side < 0:
            return
        if side == 0:
            if point == support or not _extends(anchor, support, point):
                return
        else:
            # the critical line now pivots on ``point``; move its far support
            while len(other) > 1 and turn * sign(other[end.far], point, other[end.far_next]) < 0:
                end.pop_far(other, journal)
        while len(own) > 1 and turn * sign(own[end.near_prev], own[end.near], point) >= 0:
            end.pop_near(own, journal)
        end.push_near(own, point, journal)

    def _normalize_pair(self, inner: Sequence[int], outer: Sequence[int]) -> Tuple[Point, Point]:
        p, q = validate_pair(inner, outer)
        return self._predicate.normalize(p), self._predicate.normalize(q)

    def __repr__(self) -> str:
        return (
            f"Preimage(inner={list(self._inner)}, outer={list(self._outer)}, "
            f"extent={tuple(self.extent)})"
        )


def _extends(anchor: Point, support: Point, point: Point) -> bool:
    """Return whether collinear ``point`` lies beyond ``support`` seen from ``anchor``."""
    dx, dy = support[0] - anchor[0], support[1] - anchor[1]
    return (point[0] - support[0]) * dx + (point[1] - support[1]) * dy > 0


def longest_straight_run(
    pairs: Sequence[Tuple[Sequence[int], Sequence[int]]],
    *,
    start: int = 0,
    backward: bool = False,
    predicate: Optional[ExactPredicate] = None,
    config: Optional[PreimageConfig] = None,
) -> Preimage:
    """Recognize the maximal straight run of ``pairs`` starting at ``start``.

    Pairs are absorbed one by one (after ``start`` with :meth:`Preimage.add_front`,
    or before it with :meth:`Preimage.add_back` when ``backward`` is set) until
    the first rejection.
    """

    if not pairs:
        raise PreconditionError("no constraint pairs to recognize")
    if not 0 <= start < len(pairs):
        raise PreconditionError(f"start index {start} outside of [0, {len(pairs)})")

    inner, outer = pairs[start]
    preimage = Preimage(inner, outer, predicate=predicate, config=config)
    indices: Iterable[int] = range(start - 1, -1, -1) if backward else range(start + 1, len(pairs))
    extend = preimage.add_back if backward else preimage.add_front
    for index in indices:
        inner, outer = pairs[index]
        if not extend(inner, outer):
            logger.info("Straight run from pair %d stops before pair %d", start, index)
            break
    logger.info("Recognized %d pair(s) starting at pair %d", preimage.size, start)
    return preimage


apply_debug_logging(globals(), logger=logger, wrap_methods=False)


__all__ = ["Extent", "Preimage", "longest_straight_run"]
