from .errors import (
    AllocationError,
    DuplicateCurveError,
    EmptyResultError,
    LutError,
    MalformedDataError,
    NonMonotonicCurveError,
    SignatureMismatchError,
    SizeMismatchAcrossChannelsError,
    SizeOutOfRangeError,
    SourceUnavailableError,
    UnrecognizedFormatError,
    UnsupportedVariantError,
)
from .loader import init_from_path, init_from_source, init_identity, load_lut
from .lut3d import allocate, release, set_identity
from .parse import SUPPORTED_FORMATS
from .prelut import sample_curve
from .types import DEFAULT_IDENTITY_SIZE, MAX_LEVEL, PRELUT_SIZE, Lut3DContext, PreLut

__all__ = [
    "AllocationError",
    "DuplicateCurveError",
    "EmptyResultError",
    "LutError",
    "MalformedDataError",
    "NonMonotonicCurveError",
    "SignatureMismatchError",
    "SizeMismatchAcrossChannelsError",
    "SizeOutOfRangeError",
    "SourceUnavailableError",
    "UnrecognizedFormatError",
    "UnsupportedVariantError",
    "init_from_path",
    "init_from_source",
    "init_identity",
    "load_lut",
    "allocate",
    "release",
    "set_identity",
    "SUPPORTED_FORMATS",
    "sample_curve",
    "DEFAULT_IDENTITY_SIZE",
    "MAX_LEVEL",
    "PRELUT_SIZE",
    "Lut3DContext",
    "PreLut",
]
