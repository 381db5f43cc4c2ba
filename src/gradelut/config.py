from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from gradelut.parse import SUPPORTED_FORMATS


@dataclass
class LutConfig:
    path: Path | None = None
    format: str | None = None


@dataclass
class AppConfig:
    lut: LutConfig = field(default_factory=LutConfig)
    log_level: str = "INFO"
    log_file: Path | None = None


def _expand_path(value: str | None, base: Path) -> Path | None:
    if value in (None, ""):
        return None
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = (base / path).resolve()
    return path


def _format_tag(value: Any) -> str | None:
    if value in (None, ""):
        return None
    tag = str(value).lower().lstrip(".")
    if tag not in SUPPORTED_FORMATS:
        raise ValueError(f"lut.format must be one of {', '.join(SUPPORTED_FORMATS)}, got {value!r}")
    return tag


def load_config(path: str | Path) -> AppConfig:
    try:
        import yaml  # type: ignore
    except Exception as exc:
        raise RuntimeError("PyYAML is required for config loading. Install with: pip install PyYAML") from exc

    cfg_path = Path(path).expanduser().resolve()
    with cfg_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"config root must be a mapping: {cfg_path}")

    base = cfg_path.parent
    lut_raw = raw.get("lut") or {}

    return AppConfig(
        lut=LutConfig(
            path=_expand_path(lut_raw.get("path"), base),
            format=_format_tag(lut_raw.get("format")),
        ),
        log_level=str(raw.get("log_level", "INFO")),
        log_file=_expand_path(raw.get("log_file"), base),
    )
