from __future__ import annotations

from typing import Callable, TypeVar

import numpy as np


IndexT = TypeVar("IndexT", int, np.ndarray)
FlatIndex = Callable[[int, IndexT, IndexT, IndexT], IndexT]


def index_red_major(size: int, i: IndexT, j: IndexT, k: IndexT) -> IndexT:
    """Flat index for files whose outer loop walks red (DAT, 3DL, M3D)."""
    return k * size * size + j * size + i


def index_blue_major(size: int, i: IndexT, j: IndexT, k: IndexT) -> IndexT:
    """Flat index for files whose outer loop walks blue (CUBE, CSP)."""
    return i * size * size + j * size + k


def file_order_indices(size: int, flat_index: FlatIndex) -> np.ndarray:
    """Destination index of every grid line, in the order a file lists them.

    Files iterate ``k`` outermost, then ``j``, then ``i``.
    """
    axis = np.arange(size, dtype=np.int64)
    k, j, i = np.meshgrid(axis, axis, axis, indexing="ij")
    return np.asarray(flat_index(size, i.ravel(), j.ravel(), k.ravel()), dtype=np.int64)
