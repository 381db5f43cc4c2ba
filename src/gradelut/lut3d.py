from __future__ import annotations

import logging

import numpy as np

from .errors import AllocationError, SizeOutOfRangeError
from .layout import file_order_indices, index_red_major
from .types import DEFAULT_IDENTITY_SIZE, MAX_LEVEL, PRELUT_SIZE, Lut3DContext, PreLut


logger = logging.getLogger(__name__)


def release(ctx: Lut3DContext) -> None:
    """Drop the cube and prelut buffers. Safe to call any number of times."""
    ctx.lut = None
    ctx.size = 0
    ctx.size2 = 0
    ctx.scale = np.ones(3, dtype=np.float32)
    ctx.prelut = PreLut()


def allocate(ctx: Lut3DContext, size: int, want_prelut: bool = False) -> None:
    if size < 2 or size > MAX_LEVEL:
        raise SizeOutOfRangeError(f"Too large or invalid 3D LUT size: {size}")

    ctx.lut = None
    ctx.prelut = PreLut()
    channels: list[np.ndarray | None] = [None, None, None]
    try:
        lut = np.zeros((size * size * size, 3), dtype=np.float32)
        if want_prelut:
            channels = [np.zeros(PRELUT_SIZE, dtype=np.float32) for _ in range(3)]
    except MemoryError as exc:
        release(ctx)
        raise AllocationError(f"cannot allocate 3D LUT of size {size}") from exc

    ctx.lut = lut
    if want_prelut:
        ctx.prelut = PreLut(size=PRELUT_SIZE, lut=channels)
    ctx.size = size
    ctx.size2 = size * size


def set_identity(ctx: Lut3DContext, size: int = DEFAULT_IDENTITY_SIZE) -> None:
    """Fill ``ctx`` with a pass-through cube: (k, j, i) maps to red, green, blue."""
    allocate(ctx, size, want_prelut=False)

    c = 1.0 / (size - 1)
    axis = np.arange(size, dtype=np.float32) * np.float32(c)
    k, j, i = np.meshgrid(axis, axis, axis, indexing="ij")
    assert ctx.lut is not None
    ctx.lut[file_order_indices(size, index_red_major)] = np.stack(
        [k.ravel(), j.ravel(), i.ravel()], axis=-1
    )
    logger.debug("identity 3D LUT of size %d", size)
