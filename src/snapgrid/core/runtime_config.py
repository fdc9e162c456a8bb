# どこで: `src/snapgrid/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: ホスト側がグリッドの既定値や出力設定をコード変更なしに差し替えられるようにするため。

"""実行時設定（`config.yaml`）の探索・ロード・キャッシュを担当する。

このモジュールは、以下を提供する:

- `config.yaml` を「同梱デフォルト → ユーザー設定（任意）」の順に適用して `RuntimeConfig` を構築
- 探索パス（CWD / HOME）と、明示指定（`set_config_path()`）の両方に対応
- 1 回ロードした結果をプロセス内でキャッシュ（設定を切り替える場合は `set_config_path()` で破棄）

入出力 / 副作用
----------------
- 入力: 同梱 `snapgrid/resource/default_config.yaml`、任意でユーザーの `config.yaml`
- 出力: `RuntimeConfig`（不変データ）
- 副作用: ファイル読み取り、YAML パース、モジュールグローバルへのキャッシュ保存

実装メモ
--------
- ユーザー設定の適用は `dict.update()`（トップレベルの浅い上書き）で行う。
  ネストした mapping は「部分的にマージ」されず「丸ごと置換」される。
- 幾何コア（`SnapGrid`）は spacing 等を検証しないため、設定値の妥当性検証はこの層で行う。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

from snapgrid.core.snap_grid import LatticeKind, SnapGrid
from snapgrid.core.style import RGBA255, coerce_rgba255

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SvgExportConfig:
    """SVG 出力設定（`config.yaml` の `export.svg`）。"""

    decimals: int
    background: RGBA255 | None


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """snapgrid の実行時設定。

    Attributes
    ----------
    config_path:
        実際に採用されたユーザー設定ファイルのパス。
        ユーザー設定が無い場合は None（同梱デフォルトのみで動作）。
    snap_grid:
        既定のスナップグリッド。
    svg:
        SVG 出力設定。
    """

    config_path: Path | None
    snap_grid: SnapGrid
    svg: SvgExportConfig


# `set_config_path()` で指定される「明示 config」のパス。
_EXPLICIT_CONFIG_PATH: Path | None = None
# `runtime_config()` のプロセス内キャッシュ。設定を切り替える場合は破棄する。
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Parameters
    ----------
    path:
        `config.yaml` のパス。None の場合は明示指定を解除する。

    Notes
    -----
    設定が変わるため、`runtime_config()` のキャッシュを破棄する。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    _CONFIG_CACHE = None
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        return
    _EXPLICIT_CONFIG_PATH = Path(str(path)).expanduser()


def _default_config_candidates() -> tuple[Path, ...]:
    """既定の `config.yaml` 探索候補を返す。

    探索順（先勝ち）:
    - `./.snapgrid/config.yaml`
    - `~/.config/snapgrid/config.yaml`
    """

    return (
        Path.cwd() / ".snapgrid" / "config.yaml",
        Path.home() / ".config" / "snapgrid" / "config.yaml",
    )


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    """任意値を mapping として解釈し、dict に正規化して返す。"""

    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_float(value: Any, *, key: str) -> float | None:
    """任意値を float として解釈して返す。"""

    if value is None:
        return None
    if isinstance(value, bool):
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}")
    try:
        return float(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _as_int(value: Any, *, key: str) -> int | None:
    """任意値を int として解釈して返す。"""

    if value is None:
        return None
    if isinstance(value, bool):
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}")
    try:
        return int(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}") from exc


def _as_bool(value: Any, *, key: str) -> bool | None:
    """任意値を bool として解釈して返す。"""

    if value is None:
        return None
    if isinstance(value, bool):
        return bool(value)
    if isinstance(value, int) and int(value) in (0, 1):
        return bool(int(value))
    raise RuntimeError(f"{key} は bool である必要があります: got={value!r}")


def _as_optional_color(value: Any, *, key: str) -> RGBA255 | None:
    """任意値を「None なら None / それ以外は RGBA255」へ変換する。"""

    if value is None:
        return None
    try:
        return coerce_rgba255(value)
    except ValueError as exc:
        raise RuntimeError(f"{key} は [r, g, b, a] の配列である必要があります: got={value!r}") from exc


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    """YAML テキストを読み、トップレベル mapping を dict として返す。

    Parameters
    ----------
    text:
        YAML 本文。
    source:
        エラーメッセージ用の識別子（パス等）。
    """

    import yaml

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")

    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    """UTF-8 の YAML ファイルを読み、dict を返す。"""

    text = path.read_text(encoding="utf-8")
    return _load_yaml_text(text, source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。

    パッケージ配布（wheel/sdist）でも動作するように `importlib.resources` を使う。
    """

    try:
        blob = (
            resources.files("snapgrid")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except OSError as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="snapgrid/resource/default_config.yaml")


def _parse_snap_grid(section: dict[str, Any]) -> SnapGrid:
    """`snap_grid:` セクションを SnapGrid に変換する。"""

    required = ("spacing", "lattice_kind", "visible", "point_color", "point_radius")
    missing = [k for k in required if k not in section]
    if missing:
        raise RuntimeError(
            "snap_grid が未設定、または必須キーが不足しています"
            "（config.yaml はトップレベル浅い上書きのため、snap_grid: を上書きする場合は"
            " 全キーを含めてください）"
            f": missing={missing}"
        )

    spacing = _as_float(section.get("spacing"), key="snap_grid.spacing")
    if spacing is None:
        raise RuntimeError("snap_grid.spacing が未設定です")
    if spacing <= 0.0:
        raise ValueError(f"snap_grid.spacing は正の値である必要があります: got={spacing}")

    try:
        lattice_kind = LatticeKind.parse(section.get("lattice_kind"))
    except ValueError as exc:
        raise RuntimeError(f"snap_grid.lattice_kind が不正です: {exc}") from exc

    visible = _as_bool(section.get("visible"), key="snap_grid.visible")
    if visible is None:
        visible = False

    point_color = _as_optional_color(section.get("point_color"), key="snap_grid.point_color")

    point_radius = _as_float(section.get("point_radius"), key="snap_grid.point_radius")
    if point_radius is None:
        raise RuntimeError("snap_grid.point_radius が未設定です")
    if point_radius < 0.0:
        raise ValueError(
            f"snap_grid.point_radius は 0 以上である必要があります: got={point_radius}"
        )

    return SnapGrid(
        spacing=float(spacing),
        lattice_kind=lattice_kind,
        visible=bool(visible),
        point_color=point_color,
        point_radius=float(point_radius),
    )


def _parse_svg(section: dict[str, Any]) -> SvgExportConfig:
    """`export.svg:` セクションを SvgExportConfig に変換する。"""

    decimals = _as_int(section.get("decimals"), key="export.svg.decimals")
    if decimals is None:
        raise RuntimeError(
            "export.svg.decimals が未設定です（同梱 default_config.yaml を確認してください）"
        )
    if decimals < 0:
        raise ValueError(f"export.svg.decimals は 0 以上である必要があります: got={decimals}")

    background = _as_optional_color(section.get("background"), key="export.svg.background")
    return SvgExportConfig(decimals=int(decimals), background=background)


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    読み込み元の優先順位（後勝ち）:
    1) 同梱 `snapgrid/resource/default_config.yaml`
    2) 探索で見つかった `config.yaml`（任意）
    3) `set_config_path()` で明示指定された `config.yaml`（任意）
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        _logger.debug("config.yaml を適用します: %s", discovered_path)
        payload.update(_load_yaml_config(discovered_path))
    if explicit_path is not None:
        _logger.debug("明示指定の config.yaml を適用します: %s", explicit_path)
        payload.update(_load_yaml_config(explicit_path))

    version = payload.get("version")
    if version is None:
        raise RuntimeError(
            "config.yaml の version が未設定です（同梱 default_config.yaml を確認してください）"
        )
    try:
        version_i = int(version)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の version は整数である必要があります: got={version!r}") from exc
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    snap_grid = _parse_snap_grid(_as_mapping(payload.get("snap_grid"), key="snap_grid"))

    export = _as_mapping(payload.get("export"), key="export")
    svg = _parse_svg(_as_mapping(export.get("svg"), key="export.svg"))

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        snap_grid=snap_grid,
        svg=svg,
    )
    _CONFIG_CACHE = cfg
    return cfg


__all__ = [
    "RuntimeConfig",
    "SvgExportConfig",
    "runtime_config",
    "set_config_path",
]
