# どこで: `src/snapgrid/core/viewport.py`。
# 何を: 格子点列挙の範囲となる軸平行矩形 `Viewport` を定義する。
# なぜ: 列挙・描画・SVG 出力で同じ矩形表現と包含判定を共有するため。

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class Viewport:
    """キャンバス上で現在見えている軸平行矩形。

    Parameters
    ----------
    min_x, min_y : float
        左上（最小側）の座標。
    max_x, max_y : float
        右下（最大側）の座標。

    Notes
    -----
    min <= max は呼び出し側の責務とし、ここでは検証しない。
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_min_max(
        cls, min_pos: Sequence[float], max_pos: Sequence[float]
    ) -> Viewport:
        """2 点 (min, max) から Viewport を作る。"""

        return cls(
            min_x=float(min_pos[0]),
            min_y=float(min_pos[1]),
            max_x=float(max_pos[0]),
            max_y=float(max_pos[1]),
        )

    @property
    def width(self) -> float:
        return float(self.max_x - self.min_x)

    @property
    def height(self) -> float:
        return float(self.max_y - self.min_y)

    def contains(self, point: Sequence[float]) -> bool:
        """点が矩形（閉区間）に含まれるなら True を返す。"""

        x = float(point[0])
        y = float(point[1])
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def contains_mask(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """`contains()` の配列版。xs/ys と同じ shape の bool 配列を返す。"""

        return (
            (xs >= self.min_x)
            & (xs <= self.max_x)
            & (ys >= self.min_y)
            & (ys <= self.max_y)
        )


__all__ = ["Viewport"]
