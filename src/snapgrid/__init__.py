"""snapgrid: 2D キャンバス用のスナップグリッド（正方格子 / 六角格子）。"""

from __future__ import annotations

from snapgrid.core.draw import CircleCommand, CircleSink, RecordingSink
from snapgrid.core.snap_grid import LatticeKind, SnapGrid, snap_position
from snapgrid.core.style import (
    DEFAULT_POINT_COLOR,
    DEFAULT_STROKE_COLOR,
    RGBA255,
    Stroke,
)
from snapgrid.core.viewport import Viewport

__all__ = [
    "CircleCommand",
    "CircleSink",
    "DEFAULT_POINT_COLOR",
    "DEFAULT_STROKE_COLOR",
    "LatticeKind",
    "RGBA255",
    "RecordingSink",
    "SnapGrid",
    "Stroke",
    "Viewport",
    "snap_position",
]
