from __future__ import annotations

import logging

import numpy as np

from gradelut.errors import MalformedDataError
from gradelut.layout import file_order_indices, index_red_major
from gradelut.lut3d import allocate
from gradelut.types import MAX_LEVEL, Lut3DContext

from .reader import LineReader, parse_c_int, require_floats


logger = logging.getLogger(__name__)

_CHANNEL_LETTERS = {"r": 0, "g": 1, "b": 2}


def parse_channel_order(text: str) -> tuple[int, int, int]:
    """Column index for red, green and blue from a ``values`` directive.

    Only the first letter of each word counts; unknown letters keep the
    default position.
    """
    order = [0, 1, 2]
    for slot, word in enumerate(text.split()[:3]):
        column = _CHANNEL_LETTERS.get(word[0])
        if column is not None:
            order[slot] = column
    return (order[0], order[1], order[2])


def cube_size_for_entries(count: int) -> int:
    size = 1
    while size * size * size < count:
        size += 1
    return size


def parse_m3d(ctx: Lut3DContext, reader: LineReader) -> None:
    """Pandora ``.m3d``: ``in``/``out`` entry counts and a ``values`` column order."""
    n_in = -1
    n_out = -1
    rgb_map = (0, 1, 2)

    for line in reader:
        if line.startswith("in"):
            n_in = parse_c_int(line[2:])
        elif line.startswith("out"):
            n_out = parse_c_int(line[3:])
        elif line.startswith("values"):
            rgb_map = parse_channel_order(line[6:])
            break

    if n_in == -1 or n_out == -1:
        raise MalformedDataError("in and out must be defined")
    limit = MAX_LEVEL * MAX_LEVEL * MAX_LEVEL
    if n_in < 2 or n_out < 2 or n_in > limit or n_out > limit:
        raise MalformedDataError(f"invalid in ({n_in}) or out ({n_out})")

    size = cube_size_for_entries(n_in)
    logger.debug("m3d: in=%d out=%d size=%d order=%s", n_in, n_out, size, rgb_map)

    allocate(ctx, size)
    assert ctx.lut is not None

    scale = np.float32(1.0 / (n_out - 1))
    columns = list(rgb_map)
    for dst in file_order_indices(size, index_red_major):
        val = np.asarray(require_floats(reader.next_line(skip_comments=False), 3), dtype=np.float32)
        ctx.lut[dst] = val[columns] * scale
