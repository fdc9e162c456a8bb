"""
どこで: `src/snapgrid/core/snap_grid.py`。スナップグリッドの設定値と振る舞い。
何を: 格子の種類・間隔・表示設定を持つ不変値 `SnapGrid` を定義し、吸着/列挙/描画/スタイル参照を束ねる。
なぜ: ホスト側のキャンバスが 1 つの値を差し替えるだけでグリッドの挙動と見た目を切り替えられるようにするため。
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum

import numpy as np

from snapgrid.core.draw import CircleSink
from snapgrid.core.snap import snap_hex_flat, snap_hex_pointy, snap_square
from snapgrid.core.style import (
    DEFAULT_POINT_COLOR,
    DEFAULT_STROKE_COLOR,
    RGBA255,
    Stroke,
)
from snapgrid.core.vertices import (
    hex_flat_vertices,
    hex_pointy_vertices,
    square_vertices,
)
from snapgrid.core.viewport import Viewport

_DEFAULT_SPACING = 25.0
_DEFAULT_POINT_RADIUS = 3.0
_STROKE_WIDTH = 1.0


class LatticeKind(str, Enum):
    """格子の種類。値は永続化/設定ファイルでの表記を兼ねる。"""

    SQUARE = "square"
    # 頂点が上下を向く六角形。行が x 方向にずれる。
    HEX_POINTY = "hex_pointy"
    # 辺が上下にある六角形。列が y 方向にずれる。
    HEX_FLAT = "hex_flat"

    @classmethod
    def parse(cls, value: object) -> LatticeKind:
        """名前（大小文字・`-` 区切りを許容）から LatticeKind を返す。

        Raises
        ------
        ValueError
            未知の名前が指定された場合。
        """

        if isinstance(value, LatticeKind):
            return value
        text = str(value).strip().lower().replace("-", "_")
        try:
            return cls(text)
        except ValueError:
            names = ", ".join(k.value for k in cls)
            raise ValueError(
                f"未知の lattice_kind です: got={value!r}（{names} のいずれか）"
            ) from None


@dataclass(frozen=True, slots=True)
class SnapGrid:
    """スナップグリッドの設定値。

    Parameters
    ----------
    spacing : float
        格子の基本間隔。正の値であることは呼び出し側の責務（ここでは検証しない）。
    lattice_kind : LatticeKind
        吸着/列挙に使う格子の種類。
    visible : bool
        格子点を描画するかどうか。吸着は visible と無関係に機能する。
    point_color : RGBA255 or None
        格子点/補助線の色。None の場合は既定の半透明グレーを使う。
    point_radius : float
        格子点インジケータの半径。spacing とは独立。

    Notes
    -----
    不変値として扱う。設定の変更は `with_*()` が返すコピーで行う。
    """

    spacing: float = _DEFAULT_SPACING
    lattice_kind: LatticeKind = LatticeKind.SQUARE
    visible: bool = False
    point_color: RGBA255 | None = None
    point_radius: float = _DEFAULT_POINT_RADIUS

    @classmethod
    def square(cls, spacing: float) -> SnapGrid:
        """正方格子のグリッドを作る。"""
        return cls(spacing=float(spacing), lattice_kind=LatticeKind.SQUARE)

    @classmethod
    def hex_pointy(cls, spacing: float) -> SnapGrid:
        """pointy-top 六角格子のグリッドを作る。"""
        return cls(spacing=float(spacing), lattice_kind=LatticeKind.HEX_POINTY)

    @classmethod
    def hex_flat(cls, spacing: float) -> SnapGrid:
        """flat-top 六角格子のグリッドを作る。"""
        return cls(spacing=float(spacing), lattice_kind=LatticeKind.HEX_FLAT)

    def with_visible(self, visible: bool) -> SnapGrid:
        return replace(self, visible=bool(visible))

    def with_color(self, color: RGBA255 | None) -> SnapGrid:
        return replace(self, point_color=color)

    def with_point_radius(self, radius: float) -> SnapGrid:
        return replace(self, point_radius=float(radius))

    def snap(self, point: Sequence[float]) -> tuple[float, float]:
        """点を最も近い格子点（六角格子では 2 段階近似）へ吸着して返す。

        Parameters
        ----------
        point : Sequence[float]
            `(x, y)`。

        Returns
        -------
        tuple[float, float]
            吸着後の `(x, y)`。
        """

        x = float(point[0])
        y = float(point[1])
        kind = self.lattice_kind
        if kind is LatticeKind.SQUARE:
            return snap_square(x, y, self.spacing)
        if kind is LatticeKind.HEX_POINTY:
            return snap_hex_pointy(x, y, self.spacing)
        if kind is LatticeKind.HEX_FLAT:
            return snap_hex_flat(x, y, self.spacing)
        raise AssertionError(f"unknown lattice_kind: {kind!r}")

    def visible_vertices(self, viewport: Viewport) -> np.ndarray:
        """viewport 内に描くべき格子点を shape (N, 2) の float64 配列で返す。

        Notes
        -----
        - `visible` フラグは見ない（描画の可否は `draw()` 側で判定する）。
        - 正方格子はバウンディングボックスのみ、六角格子は矩形への包含で絞り込む。
        - 同一の grid/viewport に対しては常に同じ順序・同じ値を返す。
        """

        kind = self.lattice_kind
        if kind is LatticeKind.SQUARE:
            return square_vertices(viewport, self.spacing)
        if kind is LatticeKind.HEX_POINTY:
            return hex_pointy_vertices(viewport, self.spacing)
        if kind is LatticeKind.HEX_FLAT:
            return hex_flat_vertices(viewport, self.spacing)
        raise AssertionError(f"unknown lattice_kind: {kind!r}")

    def draw(self, viewport: Viewport, sink: CircleSink) -> int:
        """viewport 内の格子点を sink へ塗りつぶし円として描く。

        Returns
        -------
        int
            発行した描画命令の数。`visible=False` の場合は 0。
        """

        if not self.visible:
            return 0

        color = self.point_color_or_default()
        radius = float(self.point_radius)
        points = self.visible_vertices(viewport)
        for x, y in points.tolist():
            sink.draw_filled_circle((x, y), radius, color)
        return int(points.shape[0])

    def stroke(self) -> Stroke:
        """補助線を描く場合の線スタイルを返す。"""

        color = self.point_color if self.point_color is not None else DEFAULT_STROKE_COLOR
        return Stroke(width=_STROKE_WIDTH, color=color)

    def point_color_or_default(self) -> RGBA255:
        """格子点の描画色を返す。"""

        return self.point_color if self.point_color is not None else DEFAULT_POINT_COLOR


def snap_position(grid: SnapGrid | None, point: Sequence[float]) -> tuple[float, float]:
    """grid があれば吸着し、無ければ点をそのまま `(x, y)` で返す。

    キャンバス設定でグリッド吸着を無効化（None）している場合の分岐をまとめたもの。
    """

    if grid is None:
        return float(point[0]), float(point[1])
    return grid.snap(point)


__all__ = ["LatticeKind", "SnapGrid", "snap_position"]
