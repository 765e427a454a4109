import numpy as np
import pytest

from preimage2d import GridCurve, PreconditionError, incident_pairs, longest_straight_run


def test_horizontal_curve_pairs_straddle_each_edge():
    curve = GridCurve.from_freeman_chain((0, 1), '000')

    assert curve.points == ((0, 1), (1, 1), (2, 1), (3, 1))
    assert list(curve.incident_points()) == [
        ((0, 0), (0, 1)),
        ((1, 0), (1, 1)),
        ((2, 0), (2, 1)),
    ]
    assert not curve.closed


def test_vertical_step_puts_inner_pixel_on_the_right():
    curve = GridCurve.from_freeman_chain((0, 0), '1')

    assert list(curve.incident_points()) == [((0, 0), (-1, 0))]


def test_counterclockwise_square_surrounds_its_outer_pixel():
    curve = GridCurve.from_freeman_chain((0, 0), '0123')

    assert curve.closed
    pairs = incident_pairs(curve)
    assert [outer for _, outer in pairs] == [(0, 0)] * 4
    assert [inner for inner, _ in pairs] == [(0, -1), (1, 0), (0, 1), (-1, 0)]


def test_reversed_curve_swaps_inner_and_outer():
    curve = GridCurve.from_freeman_chain((0, 1), '0010')
    forward = incident_pairs(curve)

    backward = incident_pairs(curve.reversed())

    assert backward == [(outer, inner) for inner, outer in reversed(forward)]


def test_steps_and_array_view():
    curve = GridCurve.from_freeman_chain((2, 2), '0123')

    assert list(curve.steps()) == [(1, 0), (0, 1), (-1, 0), (0, -1)]
    array = curve.to_array()
    assert array.shape == (5, 2)
    assert array.dtype == np.int64


def test_non_adjacent_vertices_are_rejected():
    with pytest.raises(PreconditionError) as exc:
        GridCurve([(0, 0), (1, 1)])
    assert 'not 4-adjacent' in str(exc.value)
    with pytest.raises(PreconditionError):
        GridCurve([])


def test_invalid_freeman_code():
    with pytest.raises(PreconditionError) as exc:
        GridCurve.from_freeman_chain((0, 0), '01x')
    assert "'x'" in str(exc.value)


def test_from_file_reads_vertex_rows(tmp_path):
    path = tmp_path / 'curve.dat'
    path.write_text('# a flat curve\n0 1\n1 1\n2 1\n3 1\n', encoding='utf-8')

    curve = GridCurve.from_file(path)

    assert len(curve) == 4
    assert list(curve) == [(0, 1), (1, 1), (2, 1), (3, 1)]


def test_from_file_requires_two_columns(tmp_path):
    path = tmp_path / 'curve.dat'
    path.write_text('0 1 2\n1 1 2\n', encoding='utf-8')

    with pytest.raises(PreconditionError):
        GridCurve.from_file(path)


def test_curve_with_a_single_step_stays_straight():
    curve = GridCurve.from_freeman_chain((0, 1), '0001000')

    preimage = longest_straight_run(incident_pairs(curve))

    assert preimage.size == 7
    assert preimage.is_valid()
    assert preimage.inner_hull == ((0, 0), (3, 1), (5, 1))
    assert preimage.outer_hull == ((0, 1), (2, 1), (5, 2))


def test_two_consecutive_steps_end_the_run():
    curve = GridCurve.from_freeman_chain((0, 1), '00011000')

    preimage = longest_straight_run(incident_pairs(curve))

    assert preimage.size == 4


@pytest.mark.parametrize('code', ['021', '0013', '2200', '10311'])
def test_retraced_edges_are_rejected(code):
    with pytest.raises(PreconditionError) as exc:
        GridCurve.from_freeman_chain((0, 3), code)
    assert 'retraces' in str(exc.value)


def test_retraced_edge_in_vertex_list_is_rejected():
    with pytest.raises(PreconditionError):
        GridCurve([(0, 0), (1, 0), (0, 0)])
