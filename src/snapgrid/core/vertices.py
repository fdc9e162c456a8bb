"""
どこで: `src/snapgrid/core/vertices.py`。可視範囲内の格子点列挙。
何を: Viewport と spacing から、描画すべき格子点を shape (N, 2) の配列として返す。
なぜ: 無限格子を矩形で有界化し、毎フレームの描画に必要な点だけを決定的な順序で得るため。

Notes
-----
- 正方格子は整数バウンディングボックス（floor/ceil）の直積をそのまま返し、矩形で切り取らない。
  そのため最大 1 セル分だけ矩形外の点を含み得る（描画側でクリップされる前提）。
- 六角格子は行/列のずれによる欠けを避けるため範囲を各方向 1 つ広げ、
  そのうえで矩形（閉区間）に含まれる点だけを残す。
- 並び順は「外側ループ → 内側ループ」の行優先/列優先で固定し、同一入力なら同一出力になる。
"""

from __future__ import annotations

import math

import numpy as np

from snapgrid.core.snap import SQRT3_HALF
from snapgrid.core.viewport import Viewport


def _index_range(lo: float, hi: float, step: float, *, pad: int) -> np.ndarray:
    """`floor(lo/step) - pad ..= ceil(hi/step) + pad` の整数列を返す。"""

    start = int(math.floor(float(lo) / step)) - int(pad)
    stop = int(math.ceil(float(hi) / step)) + int(pad)
    if stop < start:
        return np.empty((0,), dtype=np.int64)
    return np.arange(start, stop + 1, dtype=np.int64)


def _odd_offset(indices: np.ndarray, offset: float) -> np.ndarray:
    """奇数番号（絶対値で判定）の要素に offset、偶数番号に 0 を割り当てた配列を返す。"""

    return np.where(np.abs(indices) % 2 == 1, float(offset), 0.0)


def _cross(outer: np.ndarray, inner: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """outer を外側ループ、inner を内側ループとした直積を 1 次元に展開して返す。"""

    return np.repeat(outer, inner.size), np.tile(inner, outer.size)


def _empty_points() -> np.ndarray:
    return np.zeros((0, 2), dtype=np.float64)


def square_vertices(viewport: Viewport, spacing: float) -> np.ndarray:
    """正方格子の列挙。列（x）を外側、行（y）を内側に走査する。"""

    s = float(spacing)
    cols = _index_range(viewport.min_x, viewport.max_x, s, pad=0)
    rows = _index_range(viewport.min_y, viewport.max_y, s, pad=0)
    if cols.size == 0 or rows.size == 0:
        return _empty_points()

    xi, yi = _cross(cols, rows)
    return np.stack([xi * s, yi * s], axis=1).astype(np.float64, copy=False)


def hex_pointy_vertices(viewport: Viewport, spacing: float) -> np.ndarray:
    """pointy-top 六角格子の列挙。行を外側、列を内側に走査し、矩形内の点だけを残す。"""

    horiz = float(spacing)
    vert = horiz * SQRT3_HALF

    rows = _index_range(viewport.min_y, viewport.max_y, vert, pad=1)
    cols = _index_range(viewport.min_x, viewport.max_x, horiz, pad=1)
    if rows.size == 0 or cols.size == 0:
        return _empty_points()

    ri, ci = _cross(rows, cols)
    ys = ri * vert
    xs = ci * horiz + _odd_offset(ri, horiz / 2.0)

    mask = viewport.contains_mask(xs, ys)
    return np.stack([xs[mask], ys[mask]], axis=1).astype(np.float64, copy=False)


def hex_flat_vertices(viewport: Viewport, spacing: float) -> np.ndarray:
    """flat-top 六角格子の列挙。列を外側、行を内側に走査し、矩形内の点だけを残す。"""

    vert = float(spacing)
    horiz = vert * SQRT3_HALF

    cols = _index_range(viewport.min_x, viewport.max_x, horiz, pad=1)
    rows = _index_range(viewport.min_y, viewport.max_y, vert, pad=1)
    if cols.size == 0 or rows.size == 0:
        return _empty_points()

    ci, ri = _cross(cols, rows)
    xs = ci * horiz
    ys = ri * vert + _odd_offset(ci, vert / 2.0)

    mask = viewport.contains_mask(xs, ys)
    return np.stack([xs[mask], ys[mask]], axis=1).astype(np.float64, copy=False)


__all__ = [
    "hex_flat_vertices",
    "hex_pointy_vertices",
    "square_vertices",
]
