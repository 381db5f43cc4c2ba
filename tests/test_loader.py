from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from gradelut.errors import (
    EmptyResultError,
    MalformedDataError,
    SourceUnavailableError,
    UnrecognizedFormatError,
)
from gradelut.loader import init_from_path, init_from_source, init_identity, load_lut
from gradelut.types import Lut3DContext


DAT_2 = "3DLUTSIZE 2\n0 0 0\n1 0 0\n0 1 0\n1 1 0\n0 0 1\n1 0 1\n0 1 1\n1 1 1\n"
CUBE_2 = "LUT_3D_SIZE 2\nDOMAIN_MIN 0 0 0\nDOMAIN_MAX 2 2 2\n" + "\n".join(["0.5 0.5 0.5"] * 8) + "\n"

# A line with two values for each format, in the position of a grid line.
MALFORMED = {
    "dat": "3DLUTSIZE 2\n0 0\n",
    "cube": "LUT_3D_SIZE 2\n0 0\n",
    "3dl": "0 64 128\n0 0\n",
    "m3d": "in 8\nout 256\nvalues r g b\n0 0\n",
    "csp": "CSPLUTV100\n3D\n2\n0 1\n0 1\n2\n0 1\n0 1\n2\n0 1\n0 1\n2 2 2\n0 0\n",
}


def test_empty_source_builds_identity() -> None:
    for source in (None, "", b""):
        ctx = Lut3DContext()
        init_from_source(ctx, "cube", source)
        assert ctx.size == 32
        assert np.allclose(ctx.grid()[31, 0, 0], [1.0, 0.0, 0.0])


def test_format_tag_is_case_insensitive() -> None:
    ctx = Lut3DContext()
    init_from_source(ctx, "DaT", DAT_2)
    assert ctx.size == 2


def test_source_bytes_are_decoded() -> None:
    ctx = Lut3DContext()
    init_from_source(ctx, "cube", CUBE_2.encode("utf-8"))
    assert np.allclose(ctx.scale, [0.5, 0.5, 0.5])


@pytest.mark.parametrize("fmt", sorted(MALFORMED))
def test_two_values_on_a_grid_line_is_malformed_for_every_format(fmt: str) -> None:
    ctx = Lut3DContext()
    with pytest.raises(MalformedDataError):
        init_from_source(ctx, fmt, MALFORMED[fmt])
    assert ctx.is_empty


def test_unknown_format_tag() -> None:
    with pytest.raises(UnrecognizedFormatError):
        init_from_source(Lut3DContext(), "png", "0 0 0\n")
    with pytest.raises(UnrecognizedFormatError):
        init_from_source(Lut3DContext(), None, "0 0 0\n")


def test_cube_without_size_is_empty_result() -> None:
    ctx = Lut3DContext()
    with pytest.raises(EmptyResultError):
        init_from_source(ctx, "cube", "TITLE only\n")
    assert ctx.is_empty


def test_reinit_replaces_previous_table() -> None:
    ctx = Lut3DContext()
    init_identity(ctx, 8)
    init_from_source(ctx, "dat", DAT_2)
    assert ctx.size == 2
    assert ctx.lut is not None
    assert ctx.lut.shape == (8, 3)
    assert np.array_equal(ctx.lut[7], [1, 1, 1])

    init_from_source(ctx, "cube", CUBE_2)
    assert np.allclose(ctx.scale, [0.5, 0.5, 0.5])
    init_identity(ctx, 4)
    assert ctx.size == 4
    assert ctx.lut.shape == (64, 3)
    assert np.array_equal(ctx.scale, np.ones(3, dtype=np.float32))


def test_failed_init_leaves_context_released() -> None:
    ctx = Lut3DContext()
    init_from_source(ctx, "dat", DAT_2)
    with pytest.raises(MalformedDataError):
        init_from_source(ctx, "dat", "3DLUTSIZE 2\n0 0 0\n")
    assert ctx.is_empty
    assert ctx.lut is None
    init_from_source(ctx, "dat", DAT_2)
    assert ctx.size == 2


def test_init_from_path_uses_extension(tmp_path: Path) -> None:
    path = tmp_path / "look.CUBE"
    path.write_text(CUBE_2, encoding="utf-8")
    ctx = Lut3DContext()
    init_from_path(ctx, path)
    assert ctx.size == 2
    assert np.allclose(ctx.scale, [0.5, 0.5, 0.5])


def test_init_from_path_explicit_format_overrides_extension(tmp_path: Path) -> None:
    path = tmp_path / "look.txt"
    path.write_text(DAT_2, encoding="utf-8")
    ctx = load_lut(path, fmt="dat")
    assert ctx.size == 2


def test_init_from_path_unknown_extension(tmp_path: Path) -> None:
    for name in ("look.lut", "look", "look."):
        path = tmp_path / name
        path.write_text(DAT_2, encoding="utf-8")
        with pytest.raises(UnrecognizedFormatError):
            init_from_path(Lut3DContext(), path)


def test_init_from_path_bare_dotfile_name_is_its_extension(tmp_path: Path) -> None:
    path = tmp_path / ".cube"
    path.write_text(CUBE_2, encoding="utf-8")
    ctx = Lut3DContext()
    init_from_path(ctx, path)
    assert ctx.size == 2


def test_init_from_path_missing_file(tmp_path: Path) -> None:
    ctx = Lut3DContext()
    with pytest.raises(SourceUnavailableError):
        init_from_path(ctx, tmp_path / "missing.cube")
    assert ctx.is_empty


def test_init_from_path_none_builds_identity() -> None:
    ctx = load_lut(None)
    assert ctx.size == 32
