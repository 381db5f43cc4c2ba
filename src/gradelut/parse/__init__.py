from .base import LutParser
from .reader import LineReader
from .registry import PARSERS, SUPPORTED_FORMATS, format_for_path, get_parser

__all__ = [
    "LutParser",
    "LineReader",
    "PARSERS",
    "SUPPORTED_FORMATS",
    "format_for_path",
    "get_parser",
]
