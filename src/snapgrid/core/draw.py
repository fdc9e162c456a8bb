# どこで: `src/snapgrid/core/draw.py`。
# 何を: 格子点を描く描画シンクのインターフェイス `CircleSink` と、記録用シンクを定義する。
# なぜ: 描画バックエンドに依存せず、SnapGrid が「塗りつぶし円を描け」という命令だけを発行できるようにするため。

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from snapgrid.core.style import RGBA255


@runtime_checkable
class CircleSink(Protocol):
    """塗りつぶし円を描ける描画先。"""

    def draw_filled_circle(
        self, center: tuple[float, float], radius: float, color: RGBA255
    ) -> None: ...


@dataclass(frozen=True, slots=True)
class CircleCommand:
    """`draw_filled_circle()` 1 回分の呼び出し内容。"""

    center: tuple[float, float]
    radius: float
    color: RGBA255


@dataclass(slots=True)
class RecordingSink:
    """受け取った描画命令を順に保持するだけのシンク。

    Notes
    -----
    実描画を伴わないため、ヘッドレス環境での検証や描画命令の後段変換に使う。
    """

    commands: list[CircleCommand] = field(default_factory=list)

    def draw_filled_circle(
        self, center: tuple[float, float], radius: float, color: RGBA255
    ) -> None:
        self.commands.append(
            CircleCommand(
                center=(float(center[0]), float(center[1])),
                radius=float(radius),
                color=color,
            )
        )

    def clear(self) -> None:
        self.commands.clear()


__all__ = ["CircleCommand", "CircleSink", "RecordingSink"]
