import numpy as np
import pytest

from block_probe import rotate_direction
from block_probe.vectors import GridCell, Point3, add, cell_of, distance, normalize, scale, to_point


def test_no_offsets_only_normalizes():
    d = rotate_direction((0.0, 0.0, 5.0))
    assert np.allclose(d, [0.0, 0.0, 1.0])


def test_positive_yaw_turns_right():
    # facing +Z in a Y-up right-handed frame, the right hand points to -X
    d = rotate_direction((0.0, 0.0, 1.0), yaw_offset=90.0)
    assert np.allclose(d, [-1.0, 0.0, 0.0], atol=1e-12)

    d = rotate_direction((0.0, 0.0, 1.0), yaw_offset=-90.0)
    assert np.allclose(d, [1.0, 0.0, 0.0], atol=1e-12)


def test_positive_pitch_turns_up():
    d = rotate_direction((0.0, 0.0, 1.0), pitch_offset=90.0)
    assert np.allclose(d, [0.0, 1.0, 0.0], atol=1e-12)

    d = rotate_direction((1.0, 0.0, 0.0), pitch_offset=45.0)
    h = np.sqrt(0.5)
    assert np.allclose(d, [h, h, 0.0], atol=1e-12)


def test_pitch_is_relative_to_yawed_heading():
    # yaw to -X first, then pitching up must stay in the X/Y plane
    d = rotate_direction((0.0, 0.0, 1.0), yaw_offset=90.0, pitch_offset=30.0)
    assert d[2] == pytest.approx(0.0, abs=1e-12)
    assert d[0] == pytest.approx(-np.cos(np.radians(30.0)))
    assert d[1] == pytest.approx(np.sin(np.radians(30.0)))
    assert np.linalg.norm(d) == pytest.approx(1.0)


def test_zero_direction_stays_zero():
    d = rotate_direction((0.0, 0.0, 0.0), yaw_offset=45.0, pitch_offset=10.0)
    assert np.array_equal(d, np.zeros(3))


def test_vector_helpers():
    assert np.allclose(normalize((3.0, 0.0, 4.0)), [0.6, 0.0, 0.8])
    assert np.array_equal(normalize((0, 0, 0)), np.zeros(3))
    assert np.allclose(add((1, 2, 3), (0.5, 0.5, 0.5)), [1.5, 2.5, 3.5])
    assert np.allclose(scale((1, -2, 0), 2.5), [2.5, -5.0, 0.0])
    assert distance((0, 0, 0), (3, 4, 0)) == pytest.approx(5.0)


def test_cell_of_floors_negative_coordinates():
    assert cell_of((-0.5, 0.0, 2.999)) == GridCell(-1, 0, 2)
    assert cell_of(Point3(1.0, -1.0, -1.0001)) == (1, -1, -2)


def test_to_point_accepts_host_shapes():
    class Loc:
        x, y, z = 1, 2, 3

    assert to_point(Loc()) == Point3(1.0, 2.0, 3.0)
    assert to_point({"x": 1, "y": 2, "z": 3}) == Point3(1.0, 2.0, 3.0)
    assert to_point(np.array([1, 2, 3])) == Point3(1.0, 2.0, 3.0)
