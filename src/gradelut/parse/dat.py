from __future__ import annotations

import logging

from gradelut.layout import file_order_indices, index_red_major
from gradelut.lut3d import allocate
from gradelut.types import Lut3DContext

from .reader import LineReader, parse_c_int, require_floats


logger = logging.getLogger(__name__)

DEFAULT_DAT_SIZE = 33
_SIZE_DIRECTIVE = "3DLUTSIZE "


def parse_dat(ctx: Lut3DContext, reader: LineReader) -> None:
    """DaVinci style ``.dat``: an optional ``3DLUTSIZE`` line then one RGB triple per line."""
    size = DEFAULT_DAT_SIZE

    line = reader.next_line()
    if line.startswith(_SIZE_DIRECTIVE):
        size = parse_c_int(line[len(_SIZE_DIRECTIVE):])
        logger.debug("dat: 3DLUTSIZE %d", size)
        line = reader.next_line()

    allocate(ctx, size)
    assert ctx.lut is not None

    for n, dst in enumerate(file_order_indices(size, index_red_major)):
        if n:
            line = reader.next_line()
        ctx.lut[dst] = require_floats(line, 3)
