from __future__ import annotations

from gradelut.layout import file_order_indices, index_red_major
from gradelut.lut3d import allocate
from gradelut.types import Lut3DContext

from .reader import LineReader, require_ints


THREEDL_SIZE = 17
# 12-bit integer code values.
THREEDL_SCALE = 16 * 16 * 16


def parse_3dl(ctx: Lut3DContext, reader: LineReader) -> None:
    # TODO: 3dl files also come with 33/65 point grids and 10 or 16-bit
    # output depth; the header ramp could be used to detect both.
    allocate(ctx, THREEDL_SIZE)
    assert ctx.lut is not None

    # First line is the input ramp of the shaper, not a grid point.
    reader.next_line()
    for dst in file_order_indices(THREEDL_SIZE, index_red_major):
        r, g, b = require_ints(reader.next_line(), 3)
        ctx.lut[dst] = (r / THREEDL_SCALE, g / THREEDL_SCALE, b / THREEDL_SCALE)
