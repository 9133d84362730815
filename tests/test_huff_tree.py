from collections import Counter

import pytest
from dahuffman import HuffmanCodec

from src.encoding_schemes.huff_tree import (
    ALPH_SIZE,
    PSEUDO_EOF,
    Code,
    HuffNode,
    build_huffman_tree,
    count_frequencies,
    iter_leaves,
    make_code_table,
)
from src.utils.bitio import BitReader


def _freqs(data: bytes):
    return count_frequencies(BitReader.from_bytes(data))


def _assert_prefix_free(codes):
    bitstrings = [c.bits for c in codes.values()]
    for i, a in enumerate(bitstrings):
        for j, b in enumerate(bitstrings):
            if i != j:
                assert not b.startswith(a), f"{a!r} is a prefix of {b!r}"


def test_count_frequencies_forces_eof():
    freqs = _freqs(b"AAB")
    assert len(freqs) == ALPH_SIZE + 1
    assert freqs[65] == 2
    assert freqs[66] == 1
    assert freqs[PSEUDO_EOF] == 1
    assert sum(freqs) == 4


def test_count_frequencies_empty_input():
    freqs = _freqs(b"")
    assert freqs[PSEUDO_EOF] == 1
    assert sum(freqs) == 1


def test_count_frequencies_matches_counter():
    data = b"the quick brown fox jumps over the lazy dog" * 3
    freqs = _freqs(data)
    for symbol, n in Counter(data).items():
        assert freqs[symbol] == n


def test_example_codes_follow_fifo_tie_break():
    root = build_huffman_tree(_freqs(b"AAB"))
    codes = make_code_table(root)

    # 66 and EOF (both weight 1) merge first; 65 (weight 2, queued before the
    # merged node) is popped first and becomes the left child of the root
    assert codes == {65: Code(1, 0b0), 66: Code(2, 0b10), PSEUDO_EOF: Code(2, 0b11)}
    assert root.weight == 4
    assert root.left == HuffNode(65)


def test_single_leaf_tree_for_empty_input():
    root = build_huffman_tree(_freqs(b""))
    assert root.is_leaf
    assert root.value == PSEUDO_EOF
    assert make_code_table(root) == {PSEUDO_EOF: Code(0, 0)}
    assert Code(0, 0).bits == ""


def test_no_nonzero_weight_is_an_error():
    with pytest.raises(ValueError):
        build_huffman_tree([0] * (ALPH_SIZE + 1))


@pytest.mark.parametrize(
    "data",
    [b"", b"x", b"AAB", b"abracadabra", bytes(range(256)), b"\x01\x02" * 40 + b"\x03"],
)
def test_codes_prefix_free_and_cover_leaves(data):
    freqs = _freqs(data)
    root = build_huffman_tree(freqs)
    codes = make_code_table(root)

    assert PSEUDO_EOF in codes
    assert set(codes) == {s for s, f in enumerate(freqs) if f}
    assert [leaf.value for leaf in iter_leaves(root)] == list(codes)
    _assert_prefix_free(codes)


def test_internal_weights_are_sums():
    root = build_huffman_tree(_freqs(b"she sells sea shells"))

    def check(node):
        if node.is_leaf:
            return node.weight
        assert node.left is not None and node.right is not None
        assert node.weight == check(node.left) + check(node.right)
        return node.weight

    assert check(root) == len(b"she sells sea shells") + 1


def test_tie_break_is_reproducible():
    freqs = [1] * (ALPH_SIZE + 1)
    first = make_code_table(build_huffman_tree(freqs))
    second = make_code_table(build_huffman_tree(list(freqs)))
    assert first == second


@pytest.mark.parametrize(
    "data",
    [b"AAB", b"abracadabra", b"hello huffman storage!", bytes(range(200)) + b"z" * 300],
)
def test_total_length_matches_dahuffman(data):
    freqs = _freqs(data)
    codes = make_code_table(build_huffman_tree(freqs))
    ours = sum(freqs[s] * code.length for s, code in codes.items())

    # dahuffman appends its own EOF symbol with weight 1, same as PSEUDO_EOF
    weights = {s: f for s, f in enumerate(freqs[:PSEUDO_EOF]) if f}
    table = HuffmanCodec.from_frequencies(weights).get_code_table()
    theirs = sum(weights.get(s, 1) * bits for s, (bits, _) in table.items())

    assert ours == theirs


def test_code_bits_rendering():
    assert Code(3, 0b010).bits == "010"
    assert Code(5, 1).bits == "00001"
