import random

import pytest

from piston.huffman import (
	SINGLE_SYMBOL_PATH,
	Internal,
	Leaf,
	build_code_table,
	build_tree,
	frequency_table,
	generate_codes,
	is_prefix_free,
)


def _walk(node):
	yield node
	if isinstance(node, Internal):
		yield from _walk(node.left)
		yield from _walk(node.right)


def test_frequency_table_counts_each_byte():
	assert frequency_table(b"aaab") == {ord("a"): 3, ord("b"): 1}


def test_frequency_table_of_empty_input_is_empty():
	assert frequency_table(b"") == {}


def test_empty_table_has_no_tree():
	assert build_tree({}) is None
	assert generate_codes(None) == {}


def test_single_symbol_tree_is_a_leaf():
	root = build_tree({65: 100})
	assert isinstance(root, Leaf)
	assert root.symbol == 65
	assert generate_codes(root) == {65: SINGLE_SYMBOL_PATH}
	assert SINGLE_SYMBOL_PATH.to01() == "0"


@pytest.mark.parametrize("data", [
	b"aaab",
	b"abracadabra",
	bytes(range(256)),
	bytes(random.Random(7).getrandbits(8) for _ in range(2000)),
])
def test_tree_shape_invariants(data):
	freqs = frequency_table(data)
	root = build_tree(freqs)
	nodes = list(_walk(root))
	leaves = [node for node in nodes if isinstance(node, Leaf)]
	internals = [node for node in nodes if isinstance(node, Internal)]

	assert sorted(leaf.symbol for leaf in leaves) == sorted(freqs)
	assert len(internals) == len(freqs) - 1
	for node in internals:
		assert node.frequency == node.left.frequency + node.right.frequency
	assert root.frequency == len(data)


def test_literal_two_symbol_table():
	codes = build_code_table(b"aaab")
	assert set(codes) == {ord("a"), ord("b")}
	assert len(codes[ord("a")]) == 1
	assert len(codes[ord("b")]) == 1
	assert codes[ord("a")] != codes[ord("b")]


def test_ties_resolve_by_symbol_value():
	codes = build_code_table(b"dcba")
	assert {chr(s): p.to01() for s, p in codes.items()} == {
		"a": "00", "b": "01", "c": "10", "d": "11",
	}


def test_lighter_symbols_get_longer_paths():
	codes = build_code_table(b"a" * 50 + b"b" * 20 + b"c" * 5 + b"d")
	assert len(codes[ord("a")]) == 1
	assert len(codes[ord("d")]) >= len(codes[ord("c")]) >= len(codes[ord("b")])


def test_code_table_is_reproducible():
	data = bytes(random.Random(3).getrandbits(4) for _ in range(500))
	assert build_code_table(data) == build_code_table(data)


@pytest.mark.parametrize("seed", range(5))
def test_generated_codes_are_prefix_free(seed):
	rng = random.Random(seed)
	data = bytes(rng.choice(b"abcdefghij") for _ in range(rng.randint(2, 400)))
	codes = build_code_table(data)
	assert is_prefix_free(codes)
	paths = [p.to01() for p in codes.values()]
	for i, a in enumerate(paths):
		for j, b in enumerate(paths):
			if i != j:
				assert not b.startswith(a)


def test_is_prefix_free_detects_prefixes():
	from bitarray import bitarray

	assert not is_prefix_free({1: bitarray("0"), 2: bitarray("01")})
	assert not is_prefix_free({1: bitarray("10"), 2: bitarray("10")})
	assert is_prefix_free({1: bitarray("0"), 2: bitarray("10"), 3: bitarray("11")})
