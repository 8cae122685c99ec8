from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from scenekit.core.errors import ChartValidationError
from scenekit.core.grammar import ChartKind
from scenekit.core.hashing import scene_fingerprint
from scenekit.core.scene import Scene
from scenekit.core.serde import scene_from_json, scene_to_json
from scenekit.engine import render_scene, validate_query
from scenekit.io import EngineSettings, IoError, read_options, read_query, write_scene
from scenekit.logging_config import setup_logging

_KINDS = [k.value for k in ChartKind]


def _add_input_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--kind", type=str, required=True, choices=_KINDS, help="Chart kind.")
    p.add_argument(
        "--data", type=str, required=True, help="Query result (.json) or flat table (.csv/.parquet)."
    )
    p.add_argument(
        "--dimensions", type=str, default=None, help="Comma-separated dimension columns (flat tables)."
    )
    p.add_argument(
        "--measures", type=str, default=None, help="Comma-separated measure columns (flat tables)."
    )
    p.add_argument("--config", type=str, default=None, help="Settings TOML (default: search cwd).")
    p.add_argument("-v", "--verbose", action="count", default=0, help="-v for INFO, -vv for DEBUG.")
    p.add_argument("--log-file", type=str, default=None, help="Also write log records to this file.")


def _setup(args: argparse.Namespace) -> EngineSettings:
    settings = EngineSettings.load(args.config)
    level = settings.log_level
    if args.verbose >= 2:
        level = "DEBUG"
    elif args.verbose == 1:
        level = "INFO"
    setup_logging(level, args.log_file)
    return settings


def _fail(message: str, code: int) -> int:
    print(message, file=sys.stderr)
    return code


def _cmd_render(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="render", description="Render a query result to a scene.")
    _add_input_args(p)
    p.add_argument("--options", type=str, default=None, help="Chart options (.toml or .json).")
    p.add_argument("--width", type=float, default=None, help="Surface width in px.")
    p.add_argument("--height", type=float, default=None, help="Surface height in px.")
    p.add_argument(
        "--precision", type=int, default=None, help="Decimal places kept in the scene JSON."
    )
    p.add_argument("--out", type=str, default="", help="Scene JSON path (default: stdout).")
    p.add_argument("--html", type=str, default="", help="Also write an Altair HTML preview here.")
    args = p.parse_args(argv)

    try:
        settings = _setup(args)
        query = read_query(args.data, args.dimensions, args.measures)
        options: dict[str, Any] = read_options(args.options) if args.options else {}
        scene = render_scene(
            args.kind,
            query,
            options,
            width=args.width if args.width is not None else settings.width,
            height=args.height if args.height is not None else settings.height,
        )
    except (IoError, ValueError) as e:
        # OptionsError and negative surface sizes are both ValueErrors
        return _fail(f"[ERROR] {e}", 2)

    precision = args.precision if args.precision is not None else settings.coordinate_precision
    if args.out:
        try:
            out = write_scene(scene, Path(args.out), precision=precision)
        except IoError as e:
            return _fail(f"[ERROR] {e}", 2)
        print(f"[INFO] Wrote scene to {out}")
        print(f"[INFO] Fingerprint {scene_fingerprint(scene)}")
    else:
        print(scene_to_json(scene, precision=precision))

    if args.html:
        # altair loads only when a preview is requested
        from scenekit.viz import save_html, scene_to_chart

        html = save_html(scene_to_chart(scene), args.html)
        if args.out:
            print(f"[INFO] Wrote preview to {html}")

    if not scene.ok:
        return _fail(scene.error or "", 1)
    return 0


def _cmd_validate(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="validate", description="Check a query's shape for a chart kind.")
    _add_input_args(p)
    args = p.parse_args(argv)

    try:
        _setup(args)
        query = read_query(args.data, args.dimensions, args.measures)
        data = validate_query(args.kind, query)
    except IoError as e:
        return _fail(f"[ERROR] {e}", 2)
    except ChartValidationError as e:
        return _fail(f"[{e.kind.value}] {e.message}", 1)

    print(
        f"[INFO] OK: {data.kind.value} dims={len(data.dimensions)} "
        f"measures={len(data.measures)} rows={len(data.rows)}"
    )
    return 0


def _cmd_fingerprint(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="fingerprint", description="Print the SHA-256 of a scene file.")
    p.add_argument("--scene", type=str, required=True, help="Scene JSON path.")
    args = p.parse_args(argv)

    try:
        scene: Scene = scene_from_json(Path(args.scene).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        return _fail(f"[ERROR] cannot load scene {args.scene}: {e}", 2)
    print(scene_fingerprint(scene))
    return 0


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="scenekit", description="Chart scene rendering CLI.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("render")
    sub.add_parser("validate")
    sub.add_parser("fingerprint")
    return p


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        build_argparser().print_help()
        return
    cmd, rest = argv[0], argv[1:]
    if cmd == "render":
        code = _cmd_render(rest)
    elif cmd == "validate":
        code = _cmd_validate(rest)
    elif cmd == "fingerprint":
        code = _cmd_fingerprint(rest)
    else:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        code = 2
    raise SystemExit(code)


if __name__ == "__main__":
    main()
