"""
どこで: `src/snapgrid/export/svg.py`。
何を: 格子点を SVG の `<circle>` として書き出す描画シンクと保存関数を提供する。
なぜ: 対話キャンバス無しでもグリッドの見た目を確認・共有できるようにするため。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from snapgrid.core.runtime_config import runtime_config
from snapgrid.core.snap_grid import SnapGrid
from snapgrid.core.style import RGBA255, rgba255_to_hex_and_alpha
from snapgrid.core.viewport import Viewport

_logger = logging.getLogger(__name__)

# `export_svg(background=...)` 省略時の目印。None（背景なし）と区別する。
_FROM_CONFIG: Any = object()


def _fmt_float(value: float, *, decimals: int) -> str:
    """小数を固定桁の文字列にして返す。

    Notes
    -----
    出力の決定性を優先して常に固定桁でフォーマットし、
    `-0.000` のような表現だけを `0.000` に正規化する。
    """

    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-0") and float(text) == 0.0:
        return text[1:]
    return text


class SvgCircleSink:
    """`draw_filled_circle()` を `<circle>` 要素として蓄積する描画シンク。"""

    def __init__(self, *, decimals: int = 3) -> None:
        if int(decimals) < 0:
            raise ValueError(f"decimals は 0 以上である必要がある: got={decimals}")
        self.decimals = int(decimals)
        self.elements: list[str] = []

    def draw_filled_circle(
        self, center: tuple[float, float], radius: float, color: RGBA255
    ) -> None:
        d = self.decimals
        fill, opacity = rgba255_to_hex_and_alpha(color)
        self.elements.append(
            f'<circle cx="{_fmt_float(center[0], decimals=d)}"'
            f' cy="{_fmt_float(center[1], decimals=d)}"'
            f' r="{_fmt_float(radius, decimals=d)}"'
            f' fill="{fill}" fill-opacity="{_fmt_float(opacity, decimals=3)}"/>'
        )

    def to_svg(self, viewport: Viewport, *, background: RGBA255 | None = None) -> str:
        """蓄積した要素を、viewport を viewBox とする SVG 文書にして返す。"""

        d = self.decimals
        w = _fmt_float(viewport.width, decimals=d)
        h = _fmt_float(viewport.height, decimals=d)
        view_box = " ".join(
            [
                _fmt_float(viewport.min_x, decimals=d),
                _fmt_float(viewport.min_y, decimals=d),
                w,
                h,
            ]
        )
        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" viewBox="{view_box}">',
        ]
        if background is not None:
            fill, opacity = rgba255_to_hex_and_alpha(background)
            lines.append(
                f'<rect x="{_fmt_float(viewport.min_x, decimals=d)}"'
                f' y="{_fmt_float(viewport.min_y, decimals=d)}"'
                f' width="{w}" height="{h}"'
                f' fill="{fill}" fill-opacity="{_fmt_float(opacity, decimals=3)}"/>'
            )
        lines.extend(self.elements)
        lines.append("</svg>")
        return "\n".join(lines) + "\n"


def export_svg(
    grid: SnapGrid,
    viewport: Viewport,
    path: str | Path,
    *,
    decimals: int | None = None,
    background: RGBA255 | None = _FROM_CONFIG,
) -> Path:
    """grid の格子点を SVG として保存する。

    Parameters
    ----------
    grid : SnapGrid
        描画するグリッド。`visible=False` の場合は格子点の無い SVG になる。
    viewport : Viewport
        列挙範囲。SVG の viewBox にもなる。
    path : str or Path
        出力先パス。親ディレクトリが無ければ作る。
    decimals : int or None, optional
        座標の小数点以下桁数。None の場合は `export.svg.decimals` を使う。
    background : RGBA255 or None, optional
        背景色。None の場合は背景なし。省略時は `export.svg.background` を使う。

    Returns
    -------
    Path
        書き出したパス。
    """

    cfg = runtime_config().svg
    d = cfg.decimals if decimals is None else int(decimals)
    bg = cfg.background if background is _FROM_CONFIG else background

    sink = SvgCircleSink(decimals=d)
    count = grid.draw(viewport, sink)
    if not grid.visible:
        _logger.info("grid が非表示のため格子点を描画しません: %s", path)

    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(sink.to_svg(viewport, background=bg), encoding="utf-8")
    _logger.debug("SVG を書き出しました: path=%s points=%d", out, count)
    return out


__all__ = ["SvgCircleSink", "export_svg"]
