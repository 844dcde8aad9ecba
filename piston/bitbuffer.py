from typing import Iterable, Iterator, Optional, Tuple

from bitarray import bitarray

from .errors import InvalidArgumentError


class BitBuffer:
    """
    An append-only sequence of bits backed by a big-endian bitarray.

    The packed form pads the last byte with zeros, so the logical bit
    length always has to travel next to the bytes.
    """

    def __init__(self, bits: Optional[Iterable] = None) -> None:
        self._bits = bitarray(endian="big")
        if bits is not None:
            self.extend(bits)

    def append(self, bit) -> None:
        """
        Appends a single bit.

        Parameters:
        bit (bool | int): The bit to add, anything truthy counts as 1.
        """
        self._bits.append(bool(bit))

    def extend(self, bits) -> None:
        """
        Appends a sequence of bits.

        Parameters:
        bits (bitarray | str | Iterable): A bitarray, a string of '0'/'1', or
            any iterable of booleans / ints.
        """
        if isinstance(bits, (bitarray, str)):
            self._bits.extend(bits)
        else:
            self._bits.extend(bool(bit) for bit in bits)

    def encode(self, codes, symbols) -> None:
        """
        Appends the prefix code path of every symbol.

        Parameters:
        codes (dict): symbol -> bitarray path.
        symbols (Iterable): The symbols to encode.

        Raises:
        ValueError: a symbol has no path in codes.
        """
        self._bits.encode(codes, symbols)

    def to_bytes(self) -> Tuple[bytes, int]:
        """
        Packs the buffer into bytes.

        Returns:
        tuple: (packed bytes, logical bit length)
        """
        return self._bits.tobytes(), len(self._bits)

    @classmethod
    def from_bytes(cls, data: bytes, bit_length: Optional[int] = None) -> "BitBuffer":
        """
        Rebuilds a buffer from packed bytes.

        Parameters:
        data (bytes): The packed bytes.
        bit_length (int, optional): Number of meaningful bits. Defaults to
            every bit of data, padding included.

        Returns:
        BitBuffer: The unpacked buffer.
        """
        buffer = cls()
        buffer._bits.frombytes(bytes(data))
        if bit_length is not None:
            if bit_length < 0 or bit_length > len(buffer._bits):
                raise InvalidArgumentError(
                    f"bit length {bit_length} does not fit in {len(data)} bytes"
                )
            del buffer._bits[bit_length:]
        return buffer

    def to01(self) -> str:
        return self._bits.to01()

    def __len__(self) -> int:
        return len(self._bits)

    def __iter__(self) -> Iterator[int]:
        return iter(self._bits)

    def __eq__(self, other) -> bool:
        if not isinstance(other, BitBuffer):
            return NotImplemented
        return self._bits == other._bits

    def __repr__(self) -> str:
        return f"BitBuffer('{self._bits.to01()}')"
