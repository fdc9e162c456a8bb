"""SnapGrid（設定値・吸着・描画・スタイル参照）のテスト群。"""

from __future__ import annotations

import dataclasses

import numpy as np
import pytest

from snapgrid import (
    DEFAULT_POINT_COLOR,
    DEFAULT_STROKE_COLOR,
    LatticeKind,
    RecordingSink,
    SnapGrid,
    Stroke,
    Viewport,
    snap_position,
)
from snapgrid.core.draw import CircleSink
from snapgrid.core.snap import SQRT3_HALF


def test_default_grid_values() -> None:
    g = SnapGrid()
    assert g.spacing == 25.0
    assert g.lattice_kind is LatticeKind.SQUARE
    assert g.visible is False
    assert g.point_color is None
    assert g.point_radius == 3.0


def test_constructors_select_lattice_kind() -> None:
    assert SnapGrid.square(10.0).lattice_kind is LatticeKind.SQUARE
    assert SnapGrid.hex_pointy(10.0).lattice_kind is LatticeKind.HEX_POINTY
    assert SnapGrid.hex_flat(10.0).lattice_kind is LatticeKind.HEX_FLAT
    assert SnapGrid.hex_flat(12.0) == SnapGrid(
        spacing=12.0, lattice_kind=LatticeKind.HEX_FLAT
    )


def test_with_methods_return_modified_copies() -> None:
    base = SnapGrid.square(10.0)
    g = base.with_visible(True).with_color((255, 0, 0, 255)).with_point_radius(5.0)

    assert g.visible is True
    assert g.point_color == (255, 0, 0, 255)
    assert g.point_radius == 5.0
    assert base == SnapGrid.square(10.0)


def test_grid_is_frozen() -> None:
    g = SnapGrid()
    with pytest.raises(dataclasses.FrozenInstanceError):
        g.spacing = 1.0  # type: ignore[misc]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("square", LatticeKind.SQUARE),
        ("hex-pointy", LatticeKind.HEX_POINTY),
        ("HEX_FLAT", LatticeKind.HEX_FLAT),
        (LatticeKind.HEX_FLAT, LatticeKind.HEX_FLAT),
    ],
)
def test_lattice_kind_parse(text, expected) -> None:
    assert LatticeKind.parse(text) is expected


def test_lattice_kind_parse_rejects_unknown_name() -> None:
    with pytest.raises(ValueError):
        LatticeKind.parse("triangle")


def test_snap_dispatches_by_lattice_kind() -> None:
    vert = 10.0 * SQRT3_HALF
    assert SnapGrid.square(25.0).snap((12.5, 0.0)) == (25.0, 0.0)

    x, y = SnapGrid.hex_pointy(10.0).snap((4.0, vert - 0.3))
    assert x == 5.0
    assert y == pytest.approx(vert)

    x, y = SnapGrid.hex_flat(10.0).snap((vert - 0.3, 0.1))
    assert x == pytest.approx(vert)
    assert y == 5.0


def test_snap_works_while_hidden() -> None:
    """吸着と表示は独立しており、visible=False でも吸着する。"""
    g = SnapGrid.square(10.0)
    assert g.visible is False
    assert g.snap((14.0, 16.0)) == (10.0, 20.0)


def test_snap_accepts_numpy_point() -> None:
    assert SnapGrid.square(10.0).snap(np.array([14.0, 16.0])) == (10.0, 20.0)


def test_snap_position_passes_through_without_grid() -> None:
    assert snap_position(None, (1, 2.5)) == (1.0, 2.5)
    assert snap_position(SnapGrid.square(10.0), (14.0, 16.0)) == (10.0, 20.0)


def test_draw_is_noop_when_hidden() -> None:
    sink = RecordingSink()
    n = SnapGrid.hex_pointy(10.0).draw(Viewport(0.0, 0.0, 100.0, 100.0), sink)

    assert n == 0
    assert sink.commands == []


def test_draw_emits_one_circle_per_vertex() -> None:
    g = SnapGrid.square(25.0).with_visible(True)
    vp = Viewport(0.0, 0.0, 50.0, 50.0)
    sink = RecordingSink()

    n = g.draw(vp, sink)

    expected = g.visible_vertices(vp).tolist()
    assert n == len(expected) == 9
    assert [list(c.center) for c in sink.commands] == expected
    assert {c.radius for c in sink.commands} == {3.0}
    assert {c.color for c in sink.commands} == {DEFAULT_POINT_COLOR}


def test_draw_uses_custom_color_and_radius() -> None:
    g = (
        SnapGrid.hex_flat(10.0)
        .with_visible(True)
        .with_color((10, 20, 30, 40))
        .with_point_radius(1.5)
    )
    sink = RecordingSink()
    g.draw(Viewport(0.0, 0.0, 20.0, 20.0), sink)

    assert len(sink.commands) == 8
    assert all(c.color == (10, 20, 30, 40) for c in sink.commands)
    assert all(c.radius == 1.5 for c in sink.commands)


def test_recording_sink_is_circle_sink() -> None:
    assert isinstance(RecordingSink(), CircleSink)


def test_visible_vertices_ignore_visibility_flag() -> None:
    vp = Viewport(0.0, 0.0, 20.0, 20.0)
    hidden = SnapGrid.hex_pointy(10.0)
    shown = hidden.with_visible(True)
    np.testing.assert_array_equal(hidden.visible_vertices(vp), shown.visible_vertices(vp))


def test_default_styles() -> None:
    g = SnapGrid()
    assert g.stroke() == Stroke(width=1.0, color=DEFAULT_STROKE_COLOR)
    assert g.point_color_or_default() == DEFAULT_POINT_COLOR
    # 点は線より不透明。
    assert DEFAULT_POINT_COLOR[3] > DEFAULT_STROKE_COLOR[3]


def test_custom_color_applies_to_stroke_and_points() -> None:
    g = SnapGrid().with_color((1, 2, 3, 4))
    assert g.stroke() == Stroke(width=1.0, color=(1, 2, 3, 4))
    assert g.point_color_or_default() == (1, 2, 3, 4)
