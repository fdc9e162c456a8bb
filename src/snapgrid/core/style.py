"""
どこで: `src/snapgrid/core/style.py`。
何を: グリッド描画用の色（RGBA255）と線スタイル `Stroke`、および既定色を定義する。
なぜ: 描画シンクへ渡す見た目の情報を、幾何計算から切り離して 1 箇所に集約するため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

RGBA255 = tuple[int, int, int, int]
"""非乗算（unmultiplied）の RGBA 色。各成分は 0..255 の int。"""

# 補助線用の既定色。点より薄くする。
DEFAULT_STROKE_COLOR: RGBA255 = (128, 128, 128, 80)
# 格子点用の既定色。
DEFAULT_POINT_COLOR: RGBA255 = (128, 128, 128, 120)


@dataclass(frozen=True, slots=True)
class Stroke:
    """線幅と色の組。

    Parameters
    ----------
    width : float
        線幅（キャンバス単位）。
    color : RGBA255
        線色。
    """

    width: float
    color: RGBA255


def coerce_rgba255(value: Any) -> RGBA255:
    """任意値を RGBA255 として解釈して返す。

    Parameters
    ----------
    value : Any
        長さ 3 または 4 の数値シーケンス。長さ 3 の場合 alpha は 255 とみなす。

    Returns
    -------
    RGBA255
        0..255 にクランプした int 4 要素タプル。

    Raises
    ------
    ValueError
        シーケンスとして解釈できない、長さが不正、または数値でない場合。
    """

    if isinstance(value, (str, bytes)):
        raise ValueError(f"color は [r, g, b, a] の配列である必要がある: got={value!r}")
    try:
        seq = list(value)
    except Exception as exc:
        raise ValueError(
            f"color は [r, g, b, a] の配列である必要がある: got={value!r}"
        ) from exc
    if len(seq) == 3:
        seq.append(255)
    if len(seq) != 4:
        raise ValueError(f"color は長さ 3 または 4 である必要がある: got={value!r}")

    out: list[int] = []
    for c in seq:
        # bool は int の subclass だが色成分としては受け付けない。
        if isinstance(c, bool):
            raise ValueError(f"color の成分は数値である必要がある: got={value!r}")
        try:
            v = int(round(float(c)))
        except Exception as exc:
            raise ValueError(f"color の成分は数値である必要がある: got={value!r}") from exc
        out.append(min(max(v, 0), 255))
    return (out[0], out[1], out[2], out[3])


def rgba255_to_hex_and_alpha(color: RGBA255) -> tuple[str, float]:
    """RGBA255 を `("#rrggbb", alpha01)` に分解して返す。"""

    r, g, b, a = color
    return f"#{int(r):02x}{int(g):02x}{int(b):02x}", float(a) / 255.0


__all__ = [
    "DEFAULT_POINT_COLOR",
    "DEFAULT_STROKE_COLOR",
    "RGBA255",
    "Stroke",
    "coerce_rgba255",
    "rgba255_to_hex_and_alpha",
]
