# どこで: `src/snapgrid/core/codec.py`。
# 何を: SnapGrid の JSON encode/decode を提供する。
# なぜ: 永続化仕様を SnapGrid 本体から分離し、スキーマ変更の影響範囲を局所化するため。

"""SnapGrid の永続化用 JSON codec。

読み方（入口）
---------------
- `encode_snap_grid()` / `dumps_snap_grid()`: 保存側（grid -> dict/JSON）
- `decode_snap_grid()` / `loads_snap_grid()`: 復元側（dict/JSON -> grid）

Notes
-----
- decode は古い/部分的/手編集された JSON を想定し、不正なフィールドは既定値に戻して続行する。
  例外で落とすのは「payload が dict ではない」ケースに限定する。
- `visible` と `point_color` は表示上の一時状態とみなせるため、
  `include_transient=False` で保存対象から外せる。
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any

from snapgrid.core.snap_grid import LatticeKind, SnapGrid
from snapgrid.core.style import coerce_rgba255

_logger = logging.getLogger(__name__)

_DEFAULT = SnapGrid()


def encode_snap_grid(grid: SnapGrid, *, include_transient: bool = True) -> dict[str, Any]:
    """SnapGrid を JSON 化可能な dict に変換して返す。

    Parameters
    ----------
    grid : SnapGrid
        保存対象。
    include_transient : bool, optional
        False の場合、`visible` と `point_color` を含めない。
    """

    out: dict[str, Any] = {
        "spacing": float(grid.spacing),
        "lattice_kind": LatticeKind(grid.lattice_kind).value,
        "point_radius": float(grid.point_radius),
    }
    if include_transient:
        out["visible"] = bool(grid.visible)
        # tuple は JSON で list になるので、最初から list で持つ。
        out["point_color"] = list(grid.point_color) if grid.point_color is not None else None
    return out


def dumps_snap_grid(grid: SnapGrid, *, include_transient: bool = True) -> str:
    """SnapGrid を JSON 文字列へ変換して返す。"""

    return json.dumps(encode_snap_grid(grid, include_transient=include_transient))


def _decode_float(
    obj: dict[str, Any],
    key: str,
    default: float,
    *,
    allow_zero: bool,
) -> float:
    """数値フィールドを読む。非有限・負（allow_zero=False なら 0 も）は既定値に戻す。"""

    if key not in obj:
        return default
    raw = obj[key]
    # bool は int の subclass だが、数値フィールドとしては受け付けない。
    if isinstance(raw, bool):
        _logger.warning("snap grid の %s が不正なため既定値を使います: %r", key, raw)
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        _logger.warning("snap grid の %s が不正なため既定値を使います: %r", key, raw)
        return default
    if not math.isfinite(value) or value < 0.0 or (value == 0.0 and not allow_zero):
        _logger.warning("snap grid の %s が範囲外のため既定値を使います: %r", key, raw)
        return default
    return value


def decode_snap_grid(obj: object) -> SnapGrid:
    """JSON 由来の dict から SnapGrid を復元して返す。

    Parameters
    ----------
    obj : object
        `json.loads()` の結果（dict）を想定する。

    Returns
    -------
    SnapGrid
        復元されたグリッド。欠けている/不正なフィールドは既定値になる。

    Raises
    ------
    TypeError
        obj が dict でない場合。
    """

    if not isinstance(obj, dict):
        raise TypeError("SnapGrid payload must be a dict")

    # 幾何コアは検証しないため、0 除算や NaN 伝播の元になる値はここで既定値に戻す。
    spacing = _decode_float(obj, "spacing", _DEFAULT.spacing, allow_zero=False)
    point_radius = _decode_float(
        obj, "point_radius", _DEFAULT.point_radius, allow_zero=True
    )

    lattice_kind = _DEFAULT.lattice_kind
    if "lattice_kind" in obj:
        try:
            lattice_kind = LatticeKind.parse(obj["lattice_kind"])
        except ValueError:
            _logger.warning(
                "snap grid の lattice_kind が不正なため既定値を使います: %r",
                obj["lattice_kind"],
            )

    visible = _DEFAULT.visible
    raw_visible = obj.get("visible")
    if isinstance(raw_visible, bool):
        visible = raw_visible
    elif raw_visible is not None:
        _logger.warning("snap grid の visible が不正なため既定値を使います: %r", raw_visible)

    point_color = _DEFAULT.point_color
    raw_color = obj.get("point_color")
    if raw_color is not None:
        try:
            point_color = coerce_rgba255(raw_color)
        except ValueError:
            _logger.warning(
                "snap grid の point_color が不正なため既定値を使います: %r", raw_color
            )

    return SnapGrid(
        spacing=spacing,
        lattice_kind=lattice_kind,
        visible=visible,
        point_color=point_color,
        point_radius=point_radius,
    )


def loads_snap_grid(payload: str) -> SnapGrid:
    """JSON 文字列から SnapGrid を復元して返す。

    `json.loads()` の結果を `decode_snap_grid()` に渡す薄いラッパ。
    """

    return decode_snap_grid(json.loads(payload))


__all__ = [
    "decode_snap_grid",
    "dumps_snap_grid",
    "encode_snap_grid",
    "loads_snap_grid",
]
