"""
どこで: `src/snapgrid/core/snap.py`。格子への吸着（snap）の実体計算。
何を: 正方格子 / pointy-top 六角格子 / flat-top 六角格子の各々について、任意点を格子点へ丸める。
なぜ: ノード配置やドラッグ中の座標を、見た目のグリッドと一致する位置へ安価かつ決定的に揃えるため。

Notes
-----
六角格子の吸着は「行（flat-top では列）を先に y（x）だけで決め、その行内で列を決める」
2 段階の近似であり、真のユークリッド最近傍ではない。行境界付近では最近傍でない点へ
吸着し得る。
"""

from __future__ import annotations

import math

# sqrt(3)/2。六角格子の行（列）間隔の係数。
SQRT3_HALF = math.sqrt(3.0) / 2.0


def round_half_away(value: float) -> float:
    """最も近い整数へ丸める。ちょうど .5 は 0 から遠い側へ丸める。

    Notes
    -----
    組み込みの `round()` は偶数丸め（banker's rounding）なので使わない。
    `value - trunc(value)` は浮動小数で厳密に表現できるため、境界判定に誤差は入らない。
    非有限値は伝播せず例外になる（inf は OverflowError、NaN は ValueError）。
    """

    v = float(value)
    t = float(math.trunc(v))
    if abs(v - t) >= 0.5:
        t += math.copysign(1.0, v)
    return t


def is_odd_index(index: float) -> bool:
    """符号付きの行/列番号が奇数なら True を返す（負の番号も絶対値で判定する）。"""

    return abs(int(index)) % 2 == 1


def snap_square(x: float, y: float, spacing: float) -> tuple[float, float]:
    """正方格子へ吸着する。各座標を独立に spacing の倍数へ丸める。"""

    s = float(spacing)
    return (
        round_half_away(float(x) / s) * s,
        round_half_away(float(y) / s) * s,
    )


def snap_hex_pointy(x: float, y: float, spacing: float) -> tuple[float, float]:
    """pointy-top 六角格子へ吸着する。

    行間隔は `spacing * sqrt(3)/2`、奇数行は x 方向に `spacing/2` ずれる。
    先に y から行を決め、その行のずれを差し引いて列を丸める。
    """

    horiz = float(spacing)
    vert = horiz * SQRT3_HALF

    row = round_half_away(float(y) / vert)
    snapped_y = row * vert

    x_offset = horiz / 2.0 if is_odd_index(row) else 0.0
    snapped_x = round_half_away((float(x) - x_offset) / horiz) * horiz + x_offset
    return snapped_x, snapped_y


def snap_hex_flat(x: float, y: float, spacing: float) -> tuple[float, float]:
    """flat-top 六角格子へ吸着する。

    pointy-top の x/y を入れ替えた形。列間隔は `spacing * sqrt(3)/2`、
    奇数列は y 方向に `spacing/2` ずれる。
    """

    vert = float(spacing)
    horiz = vert * SQRT3_HALF

    col = round_half_away(float(x) / horiz)
    snapped_x = col * horiz

    y_offset = vert / 2.0 if is_odd_index(col) else 0.0
    snapped_y = round_half_away((float(y) - y_offset) / vert) * vert + y_offset
    return snapped_x, snapped_y


__all__ = [
    "SQRT3_HALF",
    "is_odd_index",
    "round_half_away",
    "snap_hex_flat",
    "snap_hex_pointy",
    "snap_square",
]
