"""Codec error kinds."""


class CodecError(ValueError):
    """Base class for every error raised by a codec."""


class EmptyInputError(CodecError):
    """Nothing to encode or decode."""


class CorruptStreamError(CodecError):
    """Artifact is truncated or structurally invalid."""


class BadCodeError(CodecError):
    """LZW code that is neither known nor the next assignable code."""


class UnsupportedValueError(CodecError):
    """Symbol outside the range a codec can represent."""
