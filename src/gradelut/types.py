from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


# 3D LUTs rarely go past 64 levels (a 512x512 Hald CLUT), 256 is the hard cap.
MAX_LEVEL = 256
PRELUT_SIZE = 65536
DEFAULT_IDENTITY_SIZE = 32


def _unit_scale() -> np.ndarray:
    return np.ones(3, dtype=np.float32)


@dataclass
class PreLut:
    """Per-channel 1D curve applied before the cube lookup.

    ``size`` is ``PRELUT_SIZE`` when the three channel tables are allocated
    and 0 otherwise.
    """

    size: int = 0
    min: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=np.float32))
    max: np.ndarray = field(default_factory=lambda: np.ones(3, dtype=np.float32))
    scale: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=np.float32))
    lut: list[np.ndarray | None] = field(default_factory=lambda: [None, None, None])

    @property
    def present(self) -> bool:
        return self.size > 0 and all(ch is not None for ch in self.lut)


@dataclass
class Lut3DContext:
    """Owner of a loaded 3D LUT: flat cube, scale vector and optional prelut.

    ``lut`` holds ``size**3`` RGB rows of float32. Consumers treat all fields
    as read-only once initialization has returned.
    """

    lut: np.ndarray | None = None
    size: int = 0
    size2: int = 0
    scale: np.ndarray = field(default_factory=_unit_scale)
    prelut: PreLut = field(default_factory=PreLut)

    @property
    def is_empty(self) -> bool:
        return self.size == 0 or self.lut is None

    def grid(self) -> np.ndarray:
        """View the flat table as ``[r, g, b, channel]`` grid coordinates."""
        if self.lut is None:
            raise ValueError("3D LUT is not initialized")
        return self.lut.reshape((self.size, self.size, self.size, 3))
