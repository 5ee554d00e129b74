import pytest

from polymesh.polygon import Polygon
from polymesh.queries import (
    box_select,
    hit_move_handle,
    hit_rotate_handle,
    hit_scale_handle,
    is_hovering,
    nearest_edge_projection,
    nearest_vertex,
    point_in_rectangle,
)


def test_nearest_vertex():
    points = Polygon().key_points
    assert nearest_vertex(points, (0.4, -0.3)) == 1
    assert nearest_vertex(points, (0.0, 0.0)) == 0
    assert nearest_vertex([], (0.0, 0.0)) is None


def test_nearest_edge_straight():
    hit = nearest_edge_projection(Polygon(), (0.6, 0.1))
    assert hit.edge == 0
    assert hit.point == pytest.approx((0.5, 0.1))
    assert hit.distance == pytest.approx(0.1)


def test_nearest_edge_prefers_closest():
    hit = nearest_edge_projection(Polygon(), (0.1, -0.45))
    assert hit.edge == 1
    assert hit.point == pytest.approx((0.1, -0.5))


def test_nearest_edge_outside_every_span():
    assert nearest_edge_projection(Polygon(), (2.0, 2.0)) is None


def test_nearest_edge_follows_curve():
    poly = Polygon()
    poly.set_curve_point(0, (0.8, 0.0))
    hit = nearest_edge_projection(poly, (0.9, 0.0))
    assert hit.edge == 0
    assert hit.point == pytest.approx((0.8, 0.0))
    assert hit.distance == pytest.approx(0.1)


def test_nearest_edge_skips_zero_length_edges():
    poly = Polygon()
    poly.extrude_edge(0)
    hit = nearest_edge_projection(poly, (0.6, 0.1))
    assert hit is not None
    assert hit.edge != 0 and hit.edge != 2
    assert hit.distance == pytest.approx(0.1)


def test_point_in_rectangle_is_inclusive():
    assert point_in_rectangle((1.0, 0.0), (0.0, 0.0), (1.0, 1.0))
    assert not point_in_rectangle((1.01, 0.0), (0.0, 0.0), (1.0, 1.0))


def test_box_select_any_corner_order():
    points = Polygon().key_points
    assert box_select(points, (1.0, 0.0), (-1.0, -1.0)) == [1, 2]
    assert box_select(points, (-1.0, -1.0), (1.0, 0.0)) == [1, 2]


def test_hover_and_handles():
    assert is_hovering((0.0, 0.0), (0.1, 0.0), 0.12)
    assert not is_hovering((0.0, 0.0), (0.12, 0.0), 0.12)
    assert hit_move_handle((0.0, 0.0), (0.0, 0.15), 0.2)
    assert hit_scale_handle((0.0, 0.0), (0.29, 0.0), 0.3)


@pytest.mark.parametrize("d, expected", [(0.3, True), (0.37, True), (0.2, False), (0.38, False)])
def test_rotate_ring(d, expected):
    assert hit_rotate_handle((0.0, 0.0), (d, 0.0), 0.3) is expected
