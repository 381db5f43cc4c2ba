from __future__ import annotations

from enum import Enum
import logging

import numpy as np

from gradelut.errors import MalformedDataError
from gradelut.layout import file_order_indices, index_blue_major
from gradelut.lut3d import allocate
from gradelut.types import Lut3DContext

from .base import domain_scale
from .reader import LineReader, is_skip_line, parse_c_int, require_floats, scan_floats


logger = logging.getLogger(__name__)

_SIZE_KEYWORD = "LUT_3D_SIZE"


class CubeLine(Enum):
    DOMAIN_MIN = "domain_min"
    DOMAIN_MAX = "domain_max"
    TITLE = "title"
    SKIP = "skip"
    DATA = "data"


def classify_line(line: str) -> CubeLine:
    if line.startswith("DOMAIN_"):
        if line.startswith("MIN ", 7):
            return CubeLine.DOMAIN_MIN
        if line.startswith("MAX ", 7):
            return CubeLine.DOMAIN_MAX
        raise MalformedDataError(f"unknown DOMAIN_ directive: {line.strip()!r}")
    if line.startswith("TITLE"):
        return CubeLine.TITLE
    if is_skip_line(line):
        return CubeLine.SKIP
    return CubeLine.DATA


def _update_domain(target: np.ndarray, line: str) -> None:
    # Only the components present on the line are replaced.
    values = scan_floats(line[len("DOMAIN_MIN"):], 3)
    target[: len(values)] = values


class _Domain:
    def __init__(self) -> None:
        self.min = np.zeros(3, dtype=np.float32)
        self.max = np.ones(3, dtype=np.float32)

    def consume(self, kind: CubeLine, line: str) -> bool:
        if kind is CubeLine.DOMAIN_MIN:
            _update_domain(self.min, line)
        elif kind is CubeLine.DOMAIN_MAX:
            _update_domain(self.max, line)
        else:
            return False
        logger.debug("cube: domain min %s max %s", self.min.tolist(), self.max.tolist())
        return True


def _next_data_line(reader: LineReader, domain: _Domain) -> str:
    while True:
        line = reader.next_line(skip_comments=False)
        kind = classify_line(line)
        if kind is CubeLine.DATA:
            return line
        domain.consume(kind, line)


def parse_cube(ctx: Lut3DContext, reader: LineReader) -> None:
    """Iridas/Resolve ``.cube``.

    Header lines are scanned until ``LUT_3D_SIZE``; domain directives may
    precede it or appear anywhere among the data lines. A file without a
    size directive leaves ``ctx`` empty.
    """
    domain = _Domain()

    for line in reader:
        if line.startswith(_SIZE_KEYWORD):
            size = parse_c_int(line[len(_SIZE_KEYWORD) + 1:])
            logger.debug("cube: LUT_3D_SIZE %d", size)

            allocate(ctx, size)
            assert ctx.lut is not None
            for dst in file_order_indices(size, index_blue_major):
                ctx.lut[dst] = require_floats(_next_data_line(reader, domain), 3)
            break

        if line.startswith(("DOMAIN_MIN ", "DOMAIN_MAX ")):
            domain.consume(classify_line(line), line)

    ctx.scale = domain_scale(domain.min, domain.max)
