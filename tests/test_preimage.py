import random
from itertools import permutations

import pytest

from preimage2d import (
    IntegerPredicate,
    Preimage,
    PreconditionError,
    StraightLine,
    longest_straight_run,
    orientation_sign,
)


def staircase(ys, x0=0):
    """Vertical (inner, outer) pairs, one per column starting at ``x0``."""
    return [((x0 + i, y), (x0 + i, y + 1)) for i, y in enumerate(ys)]


def digital_line(a, b, mu, n):
    return staircase([(a * x + mu) // b for x in range(n)])


def admits(first, second, pairs):
    """Whether the oriented line first->second separates ``pairs`` (closed)."""
    return all(
        orientation_sign(first, second, p) <= 0 and orientation_sign(first, second, q) >= 0
        for p, q in pairs
    )


def brute_force_feasible(pairs):
    # a non-empty preimage always contains a line through two of the points
    points = sorted({pt for pair in pairs for pt in pair})
    return any(admits(u, v, pairs) for u, v in permutations(points, 2))


def max_feasible_prefix(pairs):
    count = 1
    while count < len(pairs) and brute_force_feasible(pairs[: count + 1]):
        count += 1
    return count


def build_front(pairs):
    engine = Preimage(*pairs[0])
    for inner, outer in pairs[1:]:
        assert engine.add_front(inner, outer)
    return engine


STEP_PAIRS = [((0, 0), (0, 1)), ((1, 0), (1, 1)), ((2, 0), (2, 1))]


def test_construction_starts_with_one_point_per_hull():
    engine = Preimage((0, 0), (0, 1))

    assert engine.inner_hull == ((0, 0),)
    assert engine.outer_hull == ((0, 1),)
    assert engine.size == 1
    assert tuple(engine.extent) == (0, 0)
    assert engine.is_valid()
    line = engine.separating_line()
    assert line.contains((0, 0)) and line.contains((0, 1))


def test_construction_with_identical_points_is_a_precondition_violation():
    with pytest.raises(PreconditionError):
        Preimage((3, 4), (3, 4))


def test_extension_before_construction_is_a_precondition_violation():
    engine = Preimage.__new__(Preimage)

    with pytest.raises(PreconditionError):
        engine.add_front((0, 0), (0, 1))
    assert not engine.is_valid()


def test_degenerate_pair_on_extension_leaves_state_unchanged():
    engine = build_front(STEP_PAIRS)
    before = engine.snapshot()

    with pytest.raises(PreconditionError):
        engine.add_front((3, 0), (3, 0))
    assert engine.snapshot() == before


def test_horizontal_run_keeps_extreme_leaning_points():
    engine = build_front(STEP_PAIRS)

    assert engine.inner_hull == ((0, 0), (2, 0))
    assert engine.outer_hull == ((0, 1), (2, 1))
    upper, lower = engine.critical_lines()
    assert upper == StraightLine((0, 0), (2, 1))
    assert lower == StraightLine((0, 1), (2, 0))
    assert engine.size == 3
    assert engine.is_valid()


def test_one_row_step_after_a_flat_run_is_still_straight():
    engine = build_front(STEP_PAIRS)

    assert engine.add_front((3, 1), (3, 2))
    assert engine.size == 4
    assert engine.is_valid()
    # y = x / 3 crosses every pair
    assert admits((0, 0), (3, 1), STEP_PAIRS + [((3, 1), (3, 2))])
    assert engine.inner_hull == ((0, 0), (3, 1))
    assert engine.outer_hull == ((0, 1), (2, 1))


def test_two_row_step_ends_the_run_after_three_pairs():
    pairs = STEP_PAIRS + [((3, 2), (3, 3))]
    engine = build_front(STEP_PAIRS)

    assert not engine.add_front((3, 2), (3, 3))
    assert engine.size == 3
    assert engine.extent.front == 2
    assert not brute_force_feasible(pairs)
    assert longest_straight_run(pairs).size == 3


def test_failed_extension_does_not_mutate_state():
    engine = build_front(STEP_PAIRS)
    before = engine.snapshot()
    line_before = engine.separating_line()

    assert not engine.add_front((3, 2), (3, 3))
    assert not engine.add_back((-1, 2), (-1, 3))

    assert engine.snapshot() == before
    assert engine.separating_line() == line_before


def test_rejection_after_partial_update_is_rolled_back():
    engine = build_front(STEP_PAIRS[:2])
    before = engine.snapshot()

    # each point alone fits the region, together they do not
    assert not engine.add_front((2, 2), (3, -1))

    assert engine.snapshot() == before
    assert engine.is_valid()
    assert engine.add_front((2, 0), (2, 1))
    assert engine.snapshot() == build_front(STEP_PAIRS).snapshot()


def test_duplicate_pair_does_not_shrink_the_region():
    engine = build_front(digital_line(3, 8, 2, 10))
    hulls = engine.leaning_points()
    lines = engine.critical_lines()
    last = digital_line(3, 8, 2, 10)[-1]

    assert engine.add_front(*last)
    assert engine.leaning_points() == hulls
    assert engine.critical_lines() == lines


def test_back_extension_mirrors_front_extension():
    forward = build_front(STEP_PAIRS)
    backward = Preimage(*STEP_PAIRS[-1])
    for inner, outer in reversed(STEP_PAIRS[:-1]):
        assert backward.add_back(inner, outer)

    assert backward.inner_hull == forward.inner_hull
    assert backward.outer_hull == forward.outer_hull
    assert tuple(backward.extent) == (2, 0)
    assert backward.is_valid()


def test_interleaved_ends_give_the_same_region():
    pairs = digital_line(5, 13, 4, 21)
    middle = len(pairs) // 2
    fronts = pairs[middle + 1 :]
    backs = list(reversed(pairs[:middle]))

    interleaved = Preimage(*pairs[middle])
    for idx in range(max(len(fronts), len(backs))):
        if idx < len(fronts):
            assert interleaved.add_front(*fronts[idx])
        if idx < len(backs):
            assert interleaved.add_back(*backs[idx])

    sequential = Preimage(*pairs[middle])
    for pair in fronts:
        assert sequential.add_front(*pair)
    for pair in backs:
        assert sequential.add_back(*pair)

    assert interleaved.is_valid() and sequential.is_valid()
    assert [line.equation() for line in interleaved.critical_lines()] == [
        line.equation() for line in sequential.critical_lines()
    ]
    assert interleaved.size == sequential.size == len(pairs)


def test_region_only_shrinks():
    pairs = digital_line(2, 7, 3, 15)
    engine = Preimage(*pairs[0])
    for count, pair in enumerate(pairs[1:], start=2):
        previous = engine.critical_lines()
        assert engine.add_front(*pair)
        for line in engine.critical_lines():
            assert admits(line.first, line.second, pairs[:count])
        for line in previous:
            still_valid = admits(line.first, line.second, [pair])
            assert still_valid == admits(line.first, line.second, pairs[:count])


@pytest.mark.parametrize('seed', range(25))
def test_longest_run_matches_brute_force_on_random_staircases(seed):
    rng = random.Random(seed)
    ys = [0]
    for _ in range(11):
        ys.append(ys[-1] + rng.choice([-1, 0, 0, 1, 1, 2]))
    pairs = staircase(ys, x0=rng.randint(-5, 5))

    forward = longest_straight_run(pairs)
    assert forward.size == max_feasible_prefix(pairs)
    assert forward.is_valid()
    line = forward.separating_line()
    assert admits(line.first, line.second, pairs[: forward.size])

    suffix = list(reversed(pairs))
    backward = longest_straight_run(pairs, start=len(pairs) - 1, backward=True)
    expected = 1
    while expected < len(pairs) and brute_force_feasible(suffix[: expected + 1]):
        expected += 1
    assert backward.size == expected
    assert backward.is_valid()


@pytest.mark.parametrize('a, b, mu', [(0, 1, 0), (1, 1, 0), (1, 3, 1), (3, 8, 5), (7, 9, 2), (-2, 5, 0)])
def test_digital_lines_are_recognized_entirely(a, b, mu):
    pairs = digital_line(a, b, mu, 30)

    engine = longest_straight_run(pairs, config=None)

    assert engine.size == len(pairs)
    assert engine.is_valid()
    upper, lower = engine.critical_lines()
    assert admits(upper.first, upper.second, pairs)
    assert admits(lower.first, lower.second, pairs)


def test_longest_run_validates_its_arguments():
    with pytest.raises(PreconditionError):
        longest_straight_run([])
    with pytest.raises(PreconditionError):
        longest_straight_run(STEP_PAIRS, start=3)


class RecordingPredicate(IntegerPredicate):
    def __init__(self):
        super().__init__()
        self.calls = []

    def sign(self, a, b, c):
        self.calls.append((a, b, c))
        return super().sign(a, b, c)


def test_engine_uses_the_injected_predicate():
    predicate = RecordingPredicate()
    engine = Preimage((0, 0), (0, 1), predicate=predicate)

    assert engine.add_front((1, 0), (1, 1))
    assert predicate.calls
    assert all(len(call) == 3 for call in predicate.calls)


@pytest.mark.parametrize(
    'first, second',
    [
        (((0, 2), (0, 3)), ((0, 3), (0, 2))),
        (((0, 3), (1, 3)), ((1, 3), (0, 3))),
        (((0, 0), (0, 1)), ((1, 0), (0, 0))),
        (((0, 0), (0, 1)), ((0, 1), (1, 2))),
    ],
)
def test_point_used_as_inner_and_outer_is_a_precondition_violation(first, second):
    for extend in ('add_front', 'add_back'):
        engine = Preimage(*first)
        before = engine.snapshot()

        with pytest.raises(PreconditionError) as exc:
            getattr(engine, extend)(*second)

        assert 'both as an inner and an outer point' in str(exc.value)
        assert engine.snapshot() == before
        assert engine.is_valid()


def test_role_conflict_with_an_absorbed_redundant_point_is_detected():
    # (1, 0) is absorbed as an inner point without becoming a chain vertex
    engine = build_front(STEP_PAIRS)
    assert (1, 0) not in engine.inner_hull

    with pytest.raises(PreconditionError):
        engine.add_front((3, 0), (1, 0))
    assert engine.size == 3


def test_rejected_pair_does_not_register_its_points():
    engine = build_front(STEP_PAIRS)

    assert not engine.add_front((3, 2), (3, 3))
    # (3, 2) was never absorbed, so it may still serve as an outer point
    assert engine.add_front((3, 0), (3, 2))
    assert engine.size == 4
