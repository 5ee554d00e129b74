import pytest

from polymesh.polygon import Polygon
from polymesh.selection import SnapSettings
from polymesh.session import DragMode, DragSession, SessionClosedError, begin_drag


def test_apply_does_not_accumulate():
    session = begin_drag(Polygon(), DragMode.MOVE, (0.0, 0.0), selection={0})
    for step in range(1, 11):
        session.apply((0.1 * step, 0.0))
    assert session.current.key_points[0] == pytest.approx((1.5, 0.5))
    session.apply((0.1, 0.0))
    assert session.current.key_points[0] == pytest.approx((0.6, 0.5))


def test_snapped_drag_lands_on_grid():
    snap = SnapSettings(enabled=True, global_snap=True, unit=0.5)
    session = begin_drag(Polygon(), DragMode.KEY_POINT, (0.5, 0.5), index=0)
    session.apply_cursor((0.93, 0.61), snap)
    assert session.commit().key_points[0] == (1.0, 0.5)


def test_commit_and_cancel_close_the_session():
    poly = Polygon()
    session = begin_drag(poly, DragMode.MOVE, (0.0, 0.0), selection=range(4))
    session.apply((1.0, 1.0))
    result = session.commit()
    assert result.key_points[0] == (1.5, 1.5)
    with pytest.raises(SessionClosedError):
        session.apply((0.0, 0.0))
    with pytest.raises(SessionClosedError):
        session.cancel()

    session = begin_drag(poly, DragMode.MOVE, (0.0, 0.0), selection=range(4))
    session.apply((1.0, 1.0))
    assert session.cancel() == poly


def test_context_manager_cancels_open_session():
    poly = Polygon()
    with begin_drag(poly, DragMode.SCALE, (0.0, 0.0), selection=range(4)) as session:
        session.apply((1.0, 1.0))
    assert session.closed
    assert session.current == poly


def test_baseline_is_a_snapshot():
    poly = Polygon()
    session = begin_drag(poly, DragMode.MOVE, (0.0, 0.0), selection={1})
    poly.move_key_point(1, (5.0, 5.0))
    assert session.apply((0.0, 0.0)).key_points[1] == (0.5, -0.5)


@pytest.mark.parametrize("mode, selection, index", [
    (DragMode.MOVE, (), None),
    (DragMode.ROTATE, {7}, None),
    (DragMode.KEY_POINT, (), None),
    (DragMode.CURVE_POINT, (), 4),
])
def test_invalid_sessions_rejected(mode, selection, index):
    with pytest.raises(ValueError):
        DragSession(Polygon(), mode, (0.0, 0.0), selection, index)


def test_rotate_drag():
    session = begin_drag(Polygon(), DragMode.ROTATE, (1.0, 0.0), selection=range(4))
    assert session.center == pytest.approx((0.0, 0.0))
    out = session.apply((-1.0, 1.0))
    assert out.key_points[0] == pytest.approx((-0.5, 0.5))


def test_scale_drag_uniform():
    session = begin_drag(Polygon(), DragMode.SCALE, (0.0, 0.0), selection=range(4))
    out = session.apply((1.0, 0.2), uniform=True)
    assert out.key_points[0] == pytest.approx((1.0, 1.0))


def test_curve_point_drag():
    session = begin_drag(Polygon(), DragMode.CURVE_POINT, (0.5, 0.0), index=0)
    out = session.apply_cursor((0.8, 0.0))
    assert out.is_curve[0]
    assert out.curve_points[0] == pytest.approx((0.8, 0.0))
    assert session.moved


def test_cursor_hints():
    assert DragMode.ROTATE.cursor == "rotate"
    assert DragMode.SCALE.cursor == "scale"
    assert DragMode.EXTRUDE.cursor == "move"
    assert DragMode.KEY_POINT.cursor == "move"
