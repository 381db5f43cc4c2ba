from __future__ import annotations


class LutError(RuntimeError):
    pass


class SizeOutOfRangeError(LutError, ValueError):
    pass


class AllocationError(LutError):
    pass


class MalformedDataError(LutError):
    pass


class NonMonotonicCurveError(MalformedDataError):
    pass


class DuplicateCurveError(MalformedDataError):
    pass


class EmptyResultError(MalformedDataError):
    pass


class SignatureMismatchError(LutError):
    pass


class UnsupportedVariantError(LutError):
    """Recognized input that describes a combination this loader does not implement."""


class SizeMismatchAcrossChannelsError(UnsupportedVariantError):
    pass


class UnrecognizedFormatError(LutError):
    pass


class SourceUnavailableError(LutError):
    pass
