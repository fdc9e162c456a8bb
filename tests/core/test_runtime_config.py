"""core.runtime_config（config.yaml の探索・ロード・キャッシュ）のテスト。"""

from __future__ import annotations

from pathlib import Path

import pytest

from snapgrid.core.runtime_config import runtime_config, set_config_path
from snapgrid.core.snap_grid import LatticeKind, SnapGrid


@pytest.fixture(autouse=True)
def _isolate_runtime_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # 開発者の ~/.config や CWD の config.yaml を拾わないようにする。
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    set_config_path(None)
    yield
    set_config_path(None)


_SNAP_GRID_HEX_FLAT = """\
version: 1
snap_grid:
  spacing: 10
  lattice_kind: hex-flat
  visible: true
  point_color: [255, 0, 0, 128]
  point_radius: 2.5
"""


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_packaged_defaults_match_snap_grid_defaults() -> None:
    cfg = runtime_config()

    assert cfg.config_path is None
    assert cfg.snap_grid == SnapGrid()
    assert cfg.svg.decimals == 3
    assert cfg.svg.background is None


def test_runtime_config_is_cached_until_path_changes(tmp_path: Path) -> None:
    first = runtime_config()
    assert runtime_config() is first

    path = _write(tmp_path / "cfg.yaml", _SNAP_GRID_HEX_FLAT)
    set_config_path(path)
    second = runtime_config()
    assert second is not first
    assert second.config_path == path


def test_explicit_config_overrides_snap_grid(tmp_path: Path) -> None:
    set_config_path(_write(tmp_path / "cfg.yaml", _SNAP_GRID_HEX_FLAT))
    g = runtime_config().snap_grid

    assert g == SnapGrid(
        spacing=10.0,
        lattice_kind=LatticeKind.HEX_FLAT,
        visible=True,
        point_color=(255, 0, 0, 128),
        point_radius=2.5,
    )
    # export は上書きしていないので同梱デフォルトのまま。
    assert runtime_config().svg.decimals == 3


def test_config_in_cwd_is_discovered() -> None:
    path = _write(Path.cwd() / ".snapgrid" / "config.yaml", _SNAP_GRID_HEX_FLAT)
    cfg = runtime_config()

    assert cfg.config_path == path
    assert cfg.snap_grid.lattice_kind is LatticeKind.HEX_FLAT


def test_config_in_home_is_discovered() -> None:
    path = _write(Path.home() / ".config" / "snapgrid" / "config.yaml", _SNAP_GRID_HEX_FLAT)
    assert runtime_config().config_path == path


def test_missing_explicit_config_raises(tmp_path: Path) -> None:
    set_config_path(tmp_path / "nope.yaml")
    with pytest.raises(FileNotFoundError):
        runtime_config()


def test_non_positive_spacing_is_rejected(tmp_path: Path) -> None:
    text = _SNAP_GRID_HEX_FLAT.replace("spacing: 10", "spacing: 0")
    set_config_path(_write(tmp_path / "cfg.yaml", text))
    with pytest.raises(ValueError, match="spacing"):
        runtime_config()


def test_unknown_lattice_kind_is_rejected(tmp_path: Path) -> None:
    text = _SNAP_GRID_HEX_FLAT.replace("hex-flat", "triangle")
    set_config_path(_write(tmp_path / "cfg.yaml", text))
    with pytest.raises(RuntimeError, match="lattice_kind"):
        runtime_config()


def test_partial_snap_grid_section_is_rejected(tmp_path: Path) -> None:
    """トップレベル浅い上書きなので、snap_grid は全キーを書く必要がある。"""
    set_config_path(
        _write(tmp_path / "cfg.yaml", "version: 1\nsnap_grid:\n  spacing: 5\n")
    )
    with pytest.raises(RuntimeError, match="missing"):
        runtime_config()


def test_unsupported_version_is_rejected(tmp_path: Path) -> None:
    set_config_path(_write(tmp_path / "cfg.yaml", "version: 2\n"))
    with pytest.raises(RuntimeError, match="version"):
        runtime_config()


def test_svg_section_overrides(tmp_path: Path) -> None:
    set_config_path(
        _write(
            tmp_path / "cfg.yaml",
            "export:\n  svg:\n    decimals: 1\n    background: [255, 255, 255]\n",
        )
    )
    svg = runtime_config().svg
    assert svg.decimals == 1
    assert svg.background == (255, 255, 255, 255)


def test_non_mapping_yaml_is_rejected(tmp_path: Path) -> None:
    set_config_path(_write(tmp_path / "cfg.yaml", "- 1\n- 2\n"))
    with pytest.raises(RuntimeError, match="mapping"):
        runtime_config()
