from .bitbuffer import BitBuffer
from .compression import CompressedPayload, Compressor, compress, decompress
from .errors import CodecError, DataCorruptionError, InternalConsistencyError, InvalidArgumentError
