"""
Wire form of a code table.

Only the (symbol, path) pairs travel next to the packed data; the tree that
produced them is never serialized. Paths are written as strings of '0'/'1'
and the pairs are ordered by symbol.
"""

from typing import Dict, Iterable, List, Tuple

from bitarray import bitarray, frozenbitarray

from .errors import InvalidArgumentError
from .huffman import is_prefix_free

WireTable = List[Tuple[int, str]]


def serialize_table(codes: Dict[int, bitarray]) -> WireTable:
    """
    Converts a code table to its wire form.

    Parameters:
    codes (dict): symbol -> path.

    Returns:
    list: (symbol, path string) pairs sorted by symbol.
    """
    return [(symbol, codes[symbol].to01()) for symbol in sorted(codes)]


def _parse_path(symbol: int, path) -> frozenbitarray:
    if isinstance(path, str):
        if not path or set(path) - {"0", "1"}:
            raise InvalidArgumentError(f"invalid path {path!r} for symbol {symbol}")
        return frozenbitarray(path, endian="big")
    if isinstance(path, (bytes, bytearray)):
        raise InvalidArgumentError(f"invalid path {path!r} for symbol {symbol}")
    try:
        bits = list(path)
    except TypeError:
        raise InvalidArgumentError(f"invalid path {path!r} for symbol {symbol}") from None
    # bool is an int, anything else must be exactly 0 or 1
    if not all(isinstance(bit, int) and bit in (0, 1) for bit in bits):
        raise InvalidArgumentError(f"invalid path {path!r} for symbol {symbol}")
    try:
        bits = frozenbitarray(bits, endian="big")
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"invalid path {path!r} for symbol {symbol}") from None
    if not bits:
        raise InvalidArgumentError(f"empty path for symbol {symbol}")
    return bits


def parse_table(pairs: Iterable) -> Dict[int, frozenbitarray]:
    """
    Parses and validates a wire table.

    Parameters:
    pairs (iterable): (symbol, path) pairs. A path is a string of '0'/'1' or
        a sequence of bits.

    Returns:
    dict: symbol -> frozenbitarray path.

    Raises:
    InvalidArgumentError: out-of-range or duplicate symbols, empty or
        malformed paths, or paths that are not prefix-free.
    """
    codes = {}
    for pair in pairs:
        try:
            symbol, path = pair
        except (TypeError, ValueError):
            raise InvalidArgumentError(f"malformed table entry: {pair!r}") from None
        if isinstance(symbol, bool) or not isinstance(symbol, int) or not 0 <= symbol <= 255:
            raise InvalidArgumentError(f"symbol out of range: {symbol!r}")
        if symbol in codes:
            raise InvalidArgumentError(f"duplicate symbol in table: {symbol}")
        codes[symbol] = _parse_path(symbol, path)

    if not is_prefix_free(codes):
        raise InvalidArgumentError("table paths are not prefix-free")
    return codes


def table_to_json(table: WireTable) -> List[dict]:
    return [{"symbol": symbol, "path": path} for symbol, path in table]


def table_from_json(entries) -> WireTable:
    """Reads the JSON list of {"symbol", "path"} objects sent over HTTP."""
    if not isinstance(entries, list):
        raise InvalidArgumentError("table must be an array")
    table = []
    for entry in entries:
        if not isinstance(entry, dict) or "symbol" not in entry or "path" not in entry:
            raise InvalidArgumentError(f"malformed table entry: {entry!r}")
        table.append((entry["symbol"], entry["path"]))
    return table
