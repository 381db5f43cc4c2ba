from __future__ import annotations

import numpy as np
import pytest

from gradelut.errors import MalformedDataError
from gradelut.parse.m3d import cube_size_for_entries, parse_channel_order, parse_m3d
from gradelut.parse.reader import LineReader
from gradelut.types import Lut3DContext


ROWS = ["0 0 0", "255 0 0", "0 255 0", "255 255 0", "0 0 255", "255 0 255", "0 255 255", "255 255 255"]


def _parse(text: str) -> Lut3DContext:
    ctx = Lut3DContext()
    parse_m3d(ctx, LineReader(text))
    return ctx


def test_cube_size_for_entries() -> None:
    assert cube_size_for_entries(8) == 2
    assert cube_size_for_entries(9) == 3
    assert cube_size_for_entries(4913) == 17


def test_parse_channel_order() -> None:
    assert parse_channel_order(" r g b") == (0, 1, 2)
    assert parse_channel_order(" b g r") == (2, 1, 0)
    assert parse_channel_order(" blue red green") == (2, 0, 1)
    assert parse_channel_order(" x g r") == (0, 1, 0)
    assert parse_channel_order("") == (0, 1, 2)


def test_m3d_scales_by_out_range() -> None:
    ctx = _parse("in 8\nout 256\nvalues r g b\n" + "\n".join(ROWS) + "\n")
    assert ctx.size == 2
    assert np.allclose(ctx.lut[1], [1.0, 0.0, 0.0])
    assert np.allclose(ctx.lut[7], [1.0, 1.0, 1.0])
    assert np.array_equal(ctx.scale, np.ones(3, dtype=np.float32))


def test_m3d_reorders_columns() -> None:
    rows = ["0 0 0"] * 7 + ["10 20 30"]
    ctx = _parse("in 8\nout 31\nvalues b g r\n" + "\n".join(rows) + "\n")
    assert np.allclose(ctx.lut[7], [1.0, 20 / 30, 10 / 30])


def test_m3d_requires_in_and_out() -> None:
    with pytest.raises(MalformedDataError):
        _parse("in 8\nvalues r g b\n" + "\n".join(ROWS) + "\n")


@pytest.mark.parametrize("header", ["in 1\nout 256\n", "in 8\nout 1\n", "in 16777217\nout 256\n"])
def test_m3d_rejects_invalid_counts(header: str) -> None:
    with pytest.raises(MalformedDataError):
        _parse(header + "values r g b\n" + "\n".join(ROWS) + "\n")


def test_m3d_blank_line_in_data_is_malformed() -> None:
    rows = ROWS[:4] + [""] + ROWS[4:]
    with pytest.raises(MalformedDataError):
        _parse("in 8\nout 256\nvalues r g b\n" + "\n".join(rows) + "\n")


def test_m3d_two_values_on_a_line_is_malformed() -> None:
    rows = ROWS[:2] + ["255 0"] + ROWS[3:]
    with pytest.raises(MalformedDataError):
        _parse("in 8\nout 256\nvalues r g b\n" + "\n".join(rows) + "\n")
