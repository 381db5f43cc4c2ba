from __future__ import annotations

import logging
from pathlib import Path

from .errors import EmptyResultError, SourceUnavailableError, UnrecognizedFormatError
from .lut3d import release, set_identity
from .parse import LineReader, format_for_path, get_parser
from .types import DEFAULT_IDENTITY_SIZE, Lut3DContext


logger = logging.getLogger(__name__)


def _decode(source: str | bytes) -> str:
    if isinstance(source, bytes):
        return source.decode("utf-8", errors="replace")
    return source


def _run_parser(ctx: Lut3DContext, fmt: str, text: str, origin: str) -> None:
    parser = get_parser(fmt)
    try:
        parser(ctx, LineReader(text))
        if ctx.is_empty:
            raise EmptyResultError("3D LUT is empty")
    except Exception:
        release(ctx)
        raise
    logger.info(
        "loaded %s LUT from %s: size=%d scale=%s prelut=%s",
        fmt.lower(), origin, ctx.size, ctx.scale.tolist(), ctx.prelut.present,
    )


def init_identity(ctx: Lut3DContext, size: int = DEFAULT_IDENTITY_SIZE) -> None:
    release(ctx)
    try:
        set_identity(ctx, size)
    except Exception:
        release(ctx)
        raise


def init_from_source(ctx: Lut3DContext, fmt: str | None, source: str | bytes | None) -> None:
    """Load ``ctx`` from in-memory LUT text; no text yields the identity."""
    release(ctx)
    if not source:
        logger.debug("no LUT source, using identity")
        init_identity(ctx)
        return
    if fmt is None:
        raise UnrecognizedFormatError("a format tag is required when loading from source text")
    _run_parser(ctx, fmt, _decode(source), origin="<source>")


def init_from_path(ctx: Lut3DContext, path: str | Path | None, fmt: str | None = None) -> None:
    """Load ``ctx`` from a file; the extension picks the format unless ``fmt`` is given."""
    release(ctx)
    if path is None:
        logger.debug("no LUT file, using identity")
        init_identity(ctx)
        return

    lut_path = Path(path)
    try:
        text = lut_path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise SourceUnavailableError(f"{lut_path}: {exc.strerror or exc}") from exc

    _run_parser(ctx, fmt or format_for_path(lut_path), text, origin=str(lut_path))


def load_lut(path: str | Path | None, fmt: str | None = None) -> Lut3DContext:
    ctx = Lut3DContext()
    init_from_path(ctx, path, fmt=fmt)
    return ctx
