from __future__ import annotations

from pathlib import Path

from gradelut.errors import UnrecognizedFormatError

from .base import LutParser
from .cinespace import parse_cinespace
from .cube import parse_cube
from .dat import parse_dat
from .m3d import parse_m3d
from .threedl import parse_3dl


PARSERS: dict[str, LutParser] = {
    "dat": parse_dat,
    "3dl": parse_3dl,
    "cube": parse_cube,
    "m3d": parse_m3d,
    "csp": parse_cinespace,
}

SUPPORTED_FORMATS = tuple(PARSERS)


def get_parser(fmt: str) -> LutParser:
    parser = PARSERS.get(fmt.lower())
    if parser is None:
        raise UnrecognizedFormatError(f"Unrecognized '.{fmt}' LUT type")
    return parser


def format_for_path(path: str | Path) -> str:
    """Format tag from the text after the last ``.`` of the file name, lower-cased.

    A bare dotfile name such as ``.cube`` counts as having that extension.
    """
    name = Path(path).name
    _, dot, ext = name.rpartition(".")
    if not dot or not ext:
        raise UnrecognizedFormatError(f"Unable to guess the format from the extension of {path}")
    fmt = ext.lower()
    if fmt not in PARSERS:
        raise UnrecognizedFormatError(f"Unrecognized '.{ext}' file type")
    return fmt
