import pytest

from polymesh.curve import bezier_point, reconstruct_control, v2_lerp, v2_norm


def test_bezier_endpoints_and_midpoint():
    a, c, b = (0.0, 0.0), (1.0, 2.0), (2.0, 0.0)
    assert bezier_point(a, c, b, 0.0) == a
    assert bezier_point(a, c, b, 1.0) == b
    assert bezier_point(a, c, b, 0.5) == pytest.approx((1.0, 1.0))


def test_reconstructed_curve_passes_through_centered_bulge():
    start, end, bulge = (0.0, 0.0), (2.0, 0.0), (1.0, 1.0)
    control = reconstruct_control(start, end, bulge)
    assert control == pytest.approx((1.0, 2.0))
    assert bezier_point(start, control, end, 0.5) == pytest.approx(bulge)


def test_reconstruct_control_off_center_bulge():
    control = reconstruct_control((0.0, 0.0), (2.0, 0.0), (0.5, 1.0))
    assert control == pytest.approx((0.5, 2.0))


def test_reconstruct_control_on_the_line_is_the_bulge():
    control = reconstruct_control((0.0, 0.0), (0.0, 4.0), (0.0, 3.0))
    assert control == pytest.approx((0.0, 3.0))


def test_reconstruct_control_zero_length_edge_keeps_bulge():
    assert reconstruct_control((1.0, 1.0), (1.0, 1.0), (3.0, 4.0)) == (3.0, 4.0)


def test_vector_helpers():
    assert v2_norm((0.0, 0.0)) == (0.0, 0.0)
    assert v2_norm((3.0, 4.0)) == pytest.approx((0.6, 0.8))
    assert v2_lerp((0.0, 0.0), (2.0, -2.0), 0.5) == (1.0, -1.0)
