from __future__ import annotations

from typing import Sequence

import numpy as np

from .types import PRELUT_SIZE


_F32 = np.finfo(np.float32)


def sanitize(values: np.ndarray) -> np.ndarray:
    """Map NaN to 0 and infinities to the largest finite float32 of the same sign."""
    return np.nan_to_num(
        np.asarray(values, dtype=np.float32),
        nan=0.0,
        posinf=float(_F32.max),
        neginf=float(_F32.min),
    )


def nearest_sample_index(data: Sequence[float] | np.ndarray, x: float, low: int = 0, hi: int | None = None) -> int:
    """Greatest index in ``[low, hi]`` whose sample does not exceed ``x``.

    Out-of-range ``x`` clamps to ``low`` or ``hi``. Inside the range the
    interval is bisected until adjacent, so an exact hit on ``data[hi]``
    resolves to ``hi - 1``.
    """
    if hi is None:
        hi = len(data) - 1
    if x < data[low]:
        return low
    if x > data[hi]:
        return hi

    while True:
        assert data[low] <= x <= data[hi]
        assert hi - low > 0
        if hi - low == 1:
            return low
        mid = (low + hi) // 2
        if x < data[mid]:
            hi = mid
        else:
            low = mid


def _bisect_indices(inputs: np.ndarray, x: np.ndarray) -> np.ndarray:
    # Vector form of nearest_sample_index for in-range x.
    last = len(inputs) - 1
    idx = np.searchsorted(inputs, x, side="right") - 1
    return np.clip(idx, 0, last - 1)


def sample_curve(
    inputs: Sequence[float] | np.ndarray,
    outputs: Sequence[float] | np.ndarray,
    lo: float,
    hi: float,
    size: int = PRELUT_SIZE,
) -> np.ndarray:
    """Resample a monotonic curve onto ``size`` evenly spaced points of ``[lo, hi]``.

    The fractional term of the interpolation is ``x - inputs[idx]`` in input
    units, not normalized by the segment width; consumers rely on that exact
    behaviour. Points below the first input sample take ``outputs[0]``, points
    above the last take ``outputs[-1]``.
    """
    xin = np.asarray(inputs, dtype=np.float32)
    yout = np.asarray(outputs, dtype=np.float32)
    assert xin.shape == yout.shape and xin.ndim == 1
    assert len(xin) >= 2, "curve needs at least two points"

    mix = np.arange(size, dtype=np.float32) / np.float32(size - 1)
    lo32 = np.float32(lo)
    with np.errstate(over="ignore", invalid="ignore"):
        x = lo32 + (np.float32(hi) - lo32) * mix

        idx = _bisect_indices(xin, x)
        a = yout[idx]
        b = yout[idx + 1]
        frac = np.where(x < xin[0], np.float32(0.0), x - xin[idx])
        out = a + (b - a) * frac

    out = np.where(x > xin[-1], yout[-1], out)
    return sanitize(out)
