from __future__ import annotations

from dataclasses import dataclass, field
import logging

import numpy as np

from gradelut.errors import (
    DuplicateCurveError,
    MalformedDataError,
    NonMonotonicCurveError,
    SignatureMismatchError,
    SizeMismatchAcrossChannelsError,
    UnsupportedVariantError,
)
from gradelut.layout import file_order_indices, index_blue_major
from gradelut.lut3d import allocate
from gradelut.prelut import sample_curve
from gradelut.types import PRELUT_SIZE, Lut3DContext

from .base import domain_scale
from .reader import LineReader, parse_c_int, require_floats, require_ints


logger = logging.getLogger(__name__)

CSP_SIGNATURE = "CSPLUTV100"
CSP_KIND_3D = "3D"


@dataclass
class _Channel:
    in_min: float = 0.0
    in_max: float = 1.0
    out_min: float = 0.0
    out_max: float = 1.0
    curve_in: np.ndarray | None = None
    curve_out: np.ndarray | None = None

    @property
    def has_curve(self) -> bool:
        return self.curve_in is not None


@dataclass
class _Header:
    channels: list[_Channel] = field(default_factory=lambda: [_Channel(), _Channel(), _Channel()])

    @property
    def wants_prelut(self) -> bool:
        return all(ch.has_curve for ch in self.channels)

    def out_span(self) -> np.ndarray:
        return np.array([ch.out_max - ch.out_min for ch in self.channels], dtype=np.float32)


def _check_signature(reader: LineReader) -> None:
    if not reader.next_line().startswith(CSP_SIGNATURE):
        raise SignatureMismatchError("Not cineSpace LUT format")
    if not reader.next_line().startswith(CSP_KIND_3D):
        raise SignatureMismatchError("Not 3D LUT format")


def _first_data_line(reader: LineReader) -> str:
    inside_metadata = False
    while True:
        line = reader.next_line()
        if line.startswith("BEGIN METADATA"):
            inside_metadata = True
        elif line.startswith("END METADATA"):
            inside_metadata = False
        elif not inside_metadata:
            return line


def _read_curve(reader: LineReader, channel: _Channel, npoints: int) -> None:
    if npoints > PRELUT_SIZE:
        raise MalformedDataError("Prelut size too large.")
    if channel.has_curve:
        raise DuplicateCurveError("Invalid file has multiple preluts.")

    curve_in = np.empty(npoints, dtype=np.float32)
    for j in range(npoints):
        v = np.float32(reader.next_float())
        if j > 0 and v < curve_in[j - 1]:
            raise NonMonotonicCurveError("Invalid file, non increasing prelut.")
        curve_in[j] = v

    curve_out = np.empty(npoints, dtype=np.float32)
    for j in range(npoints):
        curve_out[j] = reader.next_float()

    channel.curve_in = curve_in
    channel.curve_out = curve_out
    channel.in_min = float(np.min(curve_in))
    channel.in_max = float(np.max(curve_in))
    channel.out_min = float(np.min(curve_out))
    channel.out_max = float(np.max(curve_out))


def _read_domain(reader: LineReader, channel: _Channel) -> None:
    channel.in_min, channel.in_max = require_floats(reader.next_line(), 2)
    channel.out_min, channel.out_max = require_floats(reader.next_line(), 2)


def _read_header(reader: LineReader) -> tuple[_Header, int]:
    header = _Header()
    line = _first_data_line(reader)

    for c, channel in enumerate(header.channels):
        npoints = parse_c_int(line)
        if npoints > 2:
            _read_curve(reader, channel, npoints)
        elif npoints == 2:
            _read_domain(reader, channel)
        else:
            raise UnsupportedVariantError(f"Unsupported number of pre-lut points: {npoints}")
        logger.debug(
            "csp: channel %d points=%d in=[%g, %g] out=[%g, %g]",
            c, npoints, channel.in_min, channel.in_max, channel.out_min, channel.out_max,
        )
        line = reader.next_line()

    size_r, size_g, size_b = require_ints(line, 3)
    if size_r != size_g or size_r != size_b:
        raise SizeMismatchAcrossChannelsError(f"Unsupported size combination: {size_r}x{size_g}x{size_b}.")
    return header, size_r


def _build_prelut(ctx: Lut3DContext, header: _Header) -> None:
    prelut = ctx.prelut
    for c, channel in enumerate(header.channels):
        assert channel.curve_in is not None and channel.curve_out is not None
        prelut.min[c] = channel.in_min
        prelut.max[c] = channel.in_max
        with np.errstate(divide="ignore", over="ignore"):
            prelut.scale[c] = (np.float32(1.0) / np.float32(channel.in_max - channel.in_min)) * (prelut.size - 1)
        prelut.lut[c] = sample_curve(
            channel.curve_in, channel.curve_out, channel.in_min, channel.in_max, size=prelut.size,
        )


def parse_cinespace(ctx: Lut3DContext, reader: LineReader) -> None:
    """cineSpace ``.csp`` 3D LUT with optional per-channel shaper curves.

    Each channel declares either a two point input/output domain or an
    N point curve. When all three carry curves they are resampled into the
    prelut and the scale vector stays at one; otherwise the input domains
    set the scale.
    """
    _check_signature(reader)
    header, size = _read_header(reader)
    wants_prelut = header.wants_prelut

    allocate(ctx, size, want_prelut=wants_prelut)
    assert ctx.lut is not None

    span = header.out_span()
    for dst in file_order_indices(size, index_blue_major):
        values = np.asarray(require_floats(reader.next_line(), 3), dtype=np.float32)
        ctx.lut[dst] = values * span

    if wants_prelut:
        _build_prelut(ctx, header)
        ctx.scale = np.ones(3, dtype=np.float32)
    else:
        ctx.scale = domain_scale(
            [ch.in_min for ch in header.channels],
            [ch.in_max for ch in header.channels],
        )
