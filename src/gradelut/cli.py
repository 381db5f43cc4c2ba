from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Any

from gradelut.config import AppConfig, load_config
from gradelut.loader import init_from_path, init_identity
from gradelut.parse import SUPPORTED_FORMATS, format_for_path
from gradelut.types import DEFAULT_IDENTITY_SIZE, Lut3DContext
from gradelut.utils.logging_utils import configure_logging


logger = logging.getLogger(__name__)


def _add_source_args(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("path", nargs="?", default=None, help="LUT file (identity when omitted)")
    cmd.add_argument("--format", choices=SUPPORTED_FORMATS, default=None, help="Override format detection")
    cmd.add_argument("--config", default=None, help="Path to YAML config")
    cmd.add_argument("--log-level", default=None, help="Override config log level")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gradelut")
    sub = parser.add_subparsers(dest="command", required=True)

    info = sub.add_parser("info", help="Load a 3D LUT and summarize it")
    _add_source_args(info)
    info.add_argument("--json", action="store_true", help="Emit machine-readable JSON")

    dump = sub.add_parser("dump", help="Print stored RGB triples in storage order")
    _add_source_args(dump)
    dump.add_argument("--limit", type=int, default=None, help="Print at most this many entries")

    identity = sub.add_parser("identity", help="Build an identity 3D LUT and summarize it")
    identity.add_argument("--size", type=int, default=DEFAULT_IDENTITY_SIZE, help="Grid size per axis")
    identity.add_argument("--json", action="store_true", help="Emit machine-readable JSON")

    return parser


def _resolve_config(args: argparse.Namespace) -> AppConfig:
    config = load_config(args.config) if args.config else AppConfig()
    if args.path is not None:
        config.lut.path = Path(args.path).expanduser().resolve()
    if args.format is not None:
        config.lut.format = args.format
    if args.log_level is not None:
        config.log_level = args.log_level
    return config


def _load(args: argparse.Namespace) -> tuple[Lut3DContext, str, str | None]:
    config = _resolve_config(args)
    configure_logging(config.log_level, config.log_file)

    ctx = Lut3DContext()
    init_from_path(ctx, config.lut.path, fmt=config.lut.format)
    if config.lut.path is None:
        return ctx, "identity", None
    fmt = config.lut.format or format_for_path(config.lut.path)
    return ctx, fmt, str(config.lut.path)


def summarize(ctx: Lut3DContext, fmt: str, source: str | None) -> dict[str, Any]:
    assert ctx.lut is not None
    payload: dict[str, Any] = {
        "source": source,
        "format": fmt,
        "size": ctx.size,
        "entries": int(ctx.lut.shape[0]),
        "scale": [float(v) for v in ctx.scale],
        "min": [float(v) for v in ctx.lut.min(axis=0)],
        "max": [float(v) for v in ctx.lut.max(axis=0)],
        "prelut": None,
    }
    if ctx.prelut.present:
        payload["prelut"] = {
            "size": ctx.prelut.size,
            "min": [float(v) for v in ctx.prelut.min],
            "max": [float(v) for v in ctx.prelut.max],
        }
    return payload


def _print_summary(payload: dict[str, Any]) -> None:
    print(f"Source: {payload['source'] or '<identity>'}")
    print(f"Format: {payload['format']}")
    print(f"Size: {payload['size']} ({payload['entries']} entries)")
    print("Scale: " + " ".join(f"{v:.6g}" for v in payload["scale"]))
    print("Range: " + " ".join(f"[{lo:.6g}, {hi:.6g}]" for lo, hi in zip(payload["min"], payload["max"])))
    prelut = payload["prelut"]
    if prelut is None:
        print("Prelut: none")
    else:
        domains = " ".join(f"[{lo:.6g}, {hi:.6g}]" for lo, hi in zip(prelut["min"], prelut["max"]))
        print(f"Prelut: {prelut['size']} samples, domains {domains}")


def _cmd_info(args: argparse.Namespace) -> int:
    ctx, fmt, source = _load(args)
    payload = summarize(ctx, fmt, source)
    if args.json:
        print(json.dumps(payload, indent=2))
        return 0
    _print_summary(payload)
    return 0


def _cmd_dump(args: argparse.Namespace) -> int:
    ctx, _, _ = _load(args)
    assert ctx.lut is not None
    rows = ctx.lut if args.limit is None else ctx.lut[: max(args.limit, 0)]
    for r, g, b in rows:
        print(f"{r:.6f} {g:.6f} {b:.6f}")
    return 0


def _cmd_identity(args: argparse.Namespace) -> int:
    configure_logging("WARNING")
    ctx = Lut3DContext()
    init_identity(ctx, args.size)
    payload = summarize(ctx, "identity", None)
    if args.json:
        print(json.dumps(payload, indent=2))
        return 0
    _print_summary(payload)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "info":
            return _cmd_info(args)
        if args.command == "dump":
            return _cmd_dump(args)
        if args.command == "identity":
            return _cmd_identity(args)

        parser.error(f"unknown command: {args.command}")
        return 2
    except Exception as exc:
        logger.exception("fatal error")
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
