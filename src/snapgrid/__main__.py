# どこで: `src/snapgrid/__main__.py`。
# 何を: `python -m snapgrid ...` の CLI エントリポイントを提供する。
# なぜ: 吸着結果や格子点列挙を、ホストアプリ無しで手早く確認できるようにするため。

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from snapgrid.core.runtime_config import runtime_config, set_config_path
from snapgrid.core.snap_grid import LatticeKind, SnapGrid
from snapgrid.core.viewport import Viewport

_logger = logging.getLogger(__name__)


def _lattice_kind_arg(text: str) -> LatticeKind:
    try:
        return LatticeKind.parse(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _positive_float_arg(text: str) -> float:
    try:
        value = float(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"数値である必要があります: got={text!r}") from exc
    if not value > 0.0:
        raise argparse.ArgumentTypeError(f"正の値である必要があります: got={text!r}")
    return value


def _add_grid_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--kind",
        type=_lattice_kind_arg,
        default=None,
        help="格子の種類（square / hex_pointy / hex_flat）。省略時は config の値",
    )
    p.add_argument(
        "--spacing",
        type=_positive_float_arg,
        default=None,
        help="格子間隔（正の値）。省略時は config の値",
    )


def _add_viewport_args(p: argparse.ArgumentParser) -> None:
    for name in ("min_x", "min_y", "max_x", "max_y"):
        p.add_argument(name, type=float)


def _resolve_grid(args: argparse.Namespace) -> SnapGrid:
    """config の既定グリッドに CLI 引数の上書きを適用して返す。"""

    grid = runtime_config().snap_grid
    if args.kind is not None:
        grid = replace(grid, lattice_kind=args.kind)
    if args.spacing is not None:
        grid = replace(grid, spacing=float(args.spacing))
    return grid


def _viewport(args: argparse.Namespace) -> Viewport:
    return Viewport(
        min_x=args.min_x, min_y=args.min_y, max_x=args.max_x, max_y=args.max_y
    )


def _fmt_point(x: float, y: float) -> str:
    return f"{x:.6g} {y:.6g}"


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="python -m snapgrid")
    p.add_argument("--config", default=None, help="config.yaml のパス")
    p.add_argument("-v", "--verbose", action="store_true", help="DEBUG ログを出す")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_snap = sub.add_parser("snap", help="点を格子点へ吸着した結果を表示する")
    p_snap.add_argument("x", type=float)
    p_snap.add_argument("y", type=float)
    _add_grid_args(p_snap)

    p_vertices = sub.add_parser("vertices", help="矩形内の格子点を 1 行 1 点で表示する")
    _add_viewport_args(p_vertices)
    _add_grid_args(p_vertices)

    p_svg = sub.add_parser("svg", help="矩形内の格子点を SVG に書き出す")
    p_svg.add_argument("out")
    _add_viewport_args(p_svg)
    _add_grid_args(p_svg)

    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.config is not None:
        set_config_path(args.config)

    grid = _resolve_grid(args)
    _logger.debug("grid: %r", grid)

    if args.cmd == "snap":
        x, y = grid.snap((args.x, args.y))
        print(_fmt_point(x, y))
        return 0

    if args.cmd == "vertices":
        for x, y in grid.visible_vertices(_viewport(args)).tolist():
            print(_fmt_point(x, y))
        return 0

    if args.cmd == "svg":
        from snapgrid.export.svg import export_svg

        out = export_svg(grid.with_visible(True), _viewport(args), args.out)
        print(str(out))
        return 0

    raise AssertionError(f"unknown cmd: {args.cmd!r}")


if __name__ == "__main__":
    raise SystemExit(main())
