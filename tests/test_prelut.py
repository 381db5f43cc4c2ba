from __future__ import annotations

import numpy as np
import pytest

from gradelut.prelut import nearest_sample_index, sample_curve, sanitize
from gradelut.types import PRELUT_SIZE


def test_nearest_sample_index_clamps_and_bisects() -> None:
    data = [0.0, 1.0, 2.0, 4.0]
    assert nearest_sample_index(data, -1.0) == 0
    assert nearest_sample_index(data, 9.0) == 3
    assert nearest_sample_index(data, 0.0) == 0
    assert nearest_sample_index(data, 1.5) == 1
    assert nearest_sample_index(data, 3.9) == 2
    assert nearest_sample_index(data, 4.0) == 2


def test_nearest_sample_index_with_repeated_samples() -> None:
    assert nearest_sample_index([0.0, 1.0, 1.0, 1.0], 1.0) == 2
    assert nearest_sample_index([0.0, 1.0, 1.0, 2.0], 1.0) == 2


def test_sample_curve_reproduces_curve_midpoint() -> None:
    out = sample_curve([0.0, 1.0, 2.0], [0.0, 10.0, 20.0], 0.0, 2.0)
    assert out.shape == (PRELUT_SIZE,)
    assert out.dtype == np.float32

    mid = int(round(1.0 / 2.0 * (PRELUT_SIZE - 1)))
    assert out[mid] == pytest.approx(10.0, abs=1e-3)
    assert out[0] == pytest.approx(0.0)
    assert out[-1] == pytest.approx(20.0)


def test_sample_curve_clamps_outside_curve_bounds() -> None:
    out = sample_curve([0.0, 1.0, 2.0], [0.0, 10.0, 20.0], -1.0, 3.0, size=9)
    assert out[0] == pytest.approx(0.0)
    assert out[1] == pytest.approx(0.0)
    assert out[-1] == pytest.approx(20.0)
    assert out[-2] == pytest.approx(20.0)
    assert out[4] == pytest.approx(10.0)


def test_sample_curve_fraction_is_in_input_units() -> None:
    # 0.5 into a segment of width 2 interpolates by 0.5, not 0.25.
    out = sample_curve([0.0, 2.0, 4.0], [0.0, 1.0, 2.0], 0.0, 4.0, size=9)
    assert out[1] == pytest.approx(0.5)


def test_sample_curve_needs_two_points() -> None:
    with pytest.raises(AssertionError):
        sample_curve([1.0], [1.0], 0.0, 1.0, size=4)


def test_sanitize_replaces_non_finite_values() -> None:
    f32 = np.finfo(np.float32)
    out = sanitize(np.array([np.nan, np.inf, -np.inf, 0.5], dtype=np.float32))
    assert out[0] == 0.0
    assert out[1] == f32.max
    assert out[2] == f32.min
    assert out[3] == np.float32(0.5)
