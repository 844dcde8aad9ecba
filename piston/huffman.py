from heapq import heapify, heappush, heappop
from collections import Counter
from typing import Dict, Optional, Union

from bitarray import bitarray, frozenbitarray

# The lone symbol of a one-symbol alphabet still costs one bit per occurrence.
SINGLE_SYMBOL_PATH = frozenbitarray("0", endian="big")


class Leaf:
    __slots__ = ("symbol", "frequency")

    def __init__(self, symbol: int, frequency: int) -> None:
        self.symbol = symbol
        self.frequency = frequency

    def __repr__(self) -> str:
        return f"(Leaf {self.frequency} {self.symbol})"


class Internal:
    __slots__ = ("frequency", "left", "right")

    def __init__(self, left: "Node", right: "Node") -> None:
        self.frequency = left.frequency + right.frequency
        self.left = left
        self.right = right

    def __repr__(self) -> str:
        return f"(Internal {self.frequency} {self.left!r} {self.right!r})"


Node = Union[Leaf, Internal]


def frequency_table(data: bytes) -> Counter:
    """
    Counts how often every byte value occurs in data.

    Parameters:
    data (bytes): The input bytes, possibly empty.

    Returns:
    Counter: symbol -> count, only for symbols that occur.
    """
    return Counter(data)


def build_tree(freqs: Dict[int, int]) -> Optional[Node]:
    """
    Builds a Huffman tree by repeatedly merging the two lightest nodes.

    Heap entries are ordered by (frequency, sequence). Leaves are numbered in
    ascending symbol order and every merged node takes the next number, which
    makes ties resolve the same way on every run. The first node popped
    becomes the left child.

    Parameters:
    freqs (dict): symbol -> positive count.

    Returns:
    Leaf | Internal | None: The root, or None for an empty table.
    """
    heap = [
        (weight, sequence, Leaf(symbol, weight))
        for sequence, (symbol, weight) in enumerate(sorted(freqs.items()))
    ]
    if not heap:
        return None
    heapify(heap)
    sequence = len(heap)
    while len(heap) > 1:
        _, _, low = heappop(heap)
        _, _, high = heappop(heap)
        merged = Internal(low, high)
        heappush(heap, (merged.frequency, sequence, merged))
        sequence += 1
    return heap[0][2]


def generate_codes(root: Optional[Node]) -> Dict[int, frozenbitarray]:
    """
    Derives the code table from a tree, 0 for left and 1 for right.

    Parameters:
    root (Leaf | Internal | None): The tree root.

    Returns:
    dict: symbol -> frozenbitarray path. Empty when root is None.
    """
    codes = {}
    if root is None:
        return codes
    if isinstance(root, Leaf):
        codes[root.symbol] = SINGLE_SYMBOL_PATH
        return codes

    stack = [(root, bitarray(endian="big"))]
    while stack:
        node, path = stack.pop()
        if isinstance(node, Leaf):
            codes[node.symbol] = frozenbitarray(path)
            continue
        left_path = path.copy()
        left_path.append(False)
        right_path = path
        right_path.append(True)
        stack.append((node.right, right_path))
        stack.append((node.left, left_path))
    return codes


def build_code_table(data: bytes) -> Dict[int, frozenbitarray]:
    """Frequency table -> tree -> code table for one input."""
    return generate_codes(build_tree(frequency_table(data)))


def is_prefix_free(codes: Dict[int, bitarray]) -> bool:
    """
    Checks that no path in codes is a prefix of another.

    Sorted lexicographically, a path that prefixes any other path also
    prefixes its immediate successor.
    """
    paths = sorted(path.to01() for path in codes.values())
    for shorter, longer in zip(paths, paths[1:]):
        if longer.startswith(shorter):
            return False
    return True
