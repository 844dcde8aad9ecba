from typing import Dict, Iterable, NamedTuple

from bitarray import bitarray
from loguru import logger

from .bitbuffer import BitBuffer
from .errors import DataCorruptionError, InternalConsistencyError, InvalidArgumentError
from .huffman import build_code_table
from .wire import WireTable, parse_table, serialize_table


class CompressedPayload(NamedTuple):
    data: bytes
    count: int
    table: WireTable


class Compressor:
    # Huffman codec for whole byte strings. Compress and decompress are
    # independent: the decoder only needs the payload triple.

    def compress(self, data: bytes) -> CompressedPayload:
        """
        Compresses data with a Huffman code built from its own frequencies.

        Parameters:
        data (bytes): The bytes to compress, possibly empty.

        Returns:
        CompressedPayload: packed bytes, number of symbols encoded and the
            code table in wire form.
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("Input data must be bytes.")
        data = bytes(data)
        codes = build_code_table(data)
        encoded = self._encode(data, codes)
        packed, bit_length = encoded.to_bytes()

        logger.debug(
            f"[Codec] Compressed {len(data)} bytes into {bit_length} bits "
            f"({len(packed)} bytes), {len(codes)} distinct symbols"
        )
        return CompressedPayload(packed, len(data), serialize_table(codes))

    def decompress(self, data: bytes, count: int, table: Iterable) -> bytes:
        """
        Decodes count symbols from packed data using a wire code table.

        Parameters:
        data (bytes): The packed bytes produced by compress.
        count (int): The number of symbols to recover.
        table (iterable): The (symbol, path) pairs produced by compress.

        Returns:
        bytes: The original input.

        Raises:
        InvalidArgumentError: negative count, malformed table, or an empty
            table with a non-zero count.
        DataCorruptionError: the bits cannot be decoded into count symbols.
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("Input compressed data must be bytes.")
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise InvalidArgumentError(f"symbol count must be a non-negative integer, got {count!r}")
        if count == 0:
            return b""
        codes = parse_table(table)
        if not codes:
            raise InvalidArgumentError(f"empty code table cannot decode {count} symbols")

        bits = BitBuffer.from_bytes(data)
        decoded = self._decode(bits, count, codes)
        logger.debug(f"[Codec] Decompressed {len(bits)} bits into {len(decoded)} bytes")
        return decoded

    def _encode(self, data: bytes, codes: Dict[int, bitarray]) -> BitBuffer:
        encoded = BitBuffer()
        if not data:
            return encoded
        try:
            encoded.encode(codes, data)
        except (KeyError, ValueError) as e:
            raise InternalConsistencyError(f"input symbol missing from its own code table: {e}") from e
        return encoded

    def _decode(self, bits: BitBuffer, count: int, codes: Dict[int, bitarray]) -> bytes:
        reverse_table = {path.to01(): symbol for symbol, path in codes.items()}
        longest = max(len(path) for path in codes.values())

        decoded = bytearray()
        buffer = ""
        for bit in bits.to01():
            buffer += bit
            symbol = reverse_table.get(buffer)
            if symbol is not None:
                decoded.append(symbol)
                buffer = ""
                if len(decoded) == count:
                    return bytes(decoded)
            elif len(buffer) >= longest:
                raise DataCorruptionError(
                    f"bit pattern {buffer} matches no table entry after {len(decoded)} symbols"
                )

        raise DataCorruptionError(
            f"bits exhausted after {len(decoded)} of {count} symbols"
        )


_default = Compressor()


def compress(data: bytes) -> CompressedPayload:
    return _default.compress(data)


def decompress(data: bytes, count: int, table: Iterable) -> bytes:
    return _default.decompress(data, count, table)
