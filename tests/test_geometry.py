import math

import pytest

from mandalagen.geometry import IDENTITY, Path, Transform, arc_steps


def approx_points(a, b):
    assert len(a) == len(b)
    for (ax, ay), (bx, by) in zip(a, b):
        assert ax == pytest.approx(bx, abs=1e-9)
        assert ay == pytest.approx(by, abs=1e-9)


def test_identity_leaves_points_alone():
    pts = [(1.0, 2.0), (-3.0, 4.5)]
    approx_points(IDENTITY.apply(pts), pts)


def test_rotation_then_translation():
    t = Transform.at(10, 20, math.pi / 2)
    approx_points(t.apply([(1, 0)]), [(10, 21)])


def test_nested_rotation_composes():
    outer = Transform.at(5, 5, math.pi / 4)
    inner = outer.then_rotate(math.pi / 4)
    approx_points(inner.apply([(2, 0)]), [(5, 7)])
    assert (inner.tx, inner.ty) == (5, 5)


def test_compose_matches_sequential_application():
    outer = Transform.at(3, -2, 0.7)
    inner = Transform.at(1, 4, -1.3)
    p = [(2.5, -1.0)]
    approx_points(outer.compose(inner).apply(p), outer.apply(inner.apply(p)))


def test_wedge_starts_and_ends_at_center():
    w = Path.wedge((0, 0), 10, 0, math.pi / 2)
    assert w.closed
    assert w.points[0] == (0.0, 0.0)
    assert w.points[1] == pytest.approx((10.0, 0.0))
    assert w.points[-1][0] == pytest.approx(0.0, abs=1e-9)
    assert w.points[-1][1] == pytest.approx(10.0)


def test_counter_clockwise_arc_goes_the_other_way():
    p = Path().move_to((0, 0)).arc_to((0, 0), 10, 0, math.pi / 2, clockwise=False)
    # sweeps through negative angles (up in screen space) first
    assert p.points[2][1] < 0


def test_circle_points_lie_on_circle():
    c = Path.circle((4, 4), 25)
    assert c.closed
    for x, y in c.points:
        assert math.hypot(x - 4, y - 4) == pytest.approx(25)


def test_arc_steps_grow_with_radius():
    assert arc_steps(200, math.pi) > arc_steps(10, math.pi) >= 1


def test_transformed_returns_new_path():
    p = Path.polygon([(0, 0), (1, 0), (0, 1)])
    q = p.transformed(Transform.at(5, 5))
    assert p.points[0] == (0.0, 0.0)
    assert q.points[0] == (5.0, 5.0)
    assert q.closed


def test_bounds():
    assert Path.rectangle(1, 2, 3, 4).bounds() == (1, 2, 4, 6)
    with pytest.raises(ValueError):
        Path().bounds()
