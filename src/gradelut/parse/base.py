from __future__ import annotations

from typing import Protocol, Sequence

import numpy as np

from gradelut.types import Lut3DContext

from .reader import LineReader


class LutParser(Protocol):
    def __call__(self, ctx: Lut3DContext, reader: LineReader) -> None:
        ...


def domain_scale(domain_min: Sequence[float] | np.ndarray, domain_max: Sequence[float] | np.ndarray) -> np.ndarray:
    """Per-channel ``clip(1 / (max - min), 0, 1)`` in float32.

    An empty domain divides by zero and yields 1.0, an inverted one yields 0.
    """
    lo = np.asarray(domain_min, dtype=np.float32)
    hi = np.asarray(domain_max, dtype=np.float32)
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        scale = np.float32(1.0) / (hi - lo)
    return np.clip(np.nan_to_num(scale, nan=0.0), 0.0, 1.0).astype(np.float32)
