class CodecError(Exception):
    """Base class for every failure raised by the codec."""
    kind = "codec_error"


class InvalidArgumentError(CodecError, ValueError):
    """The caller supplied inputs that cannot be decoded at all."""
    kind = "invalid_argument"


class DataCorruptionError(CodecError):
    """The packed bits and the code table do not agree."""
    kind = "data_corruption"


class InternalConsistencyError(CodecError, RuntimeError):
    """The encoder met a symbol missing from its own code table."""
    kind = "internal_consistency"
