"""
Preorder bit encoding of a Huffman tree.

    internal node -> 0, left subtree, right subtree
    leaf          -> 1, symbol as a 9-bit unsigned value

The encoding is self-delimiting, so no node count or length prefix is
written.
"""

from typing import Optional

from src.encoding_schemes.errors import MalformedTreeError
from src.encoding_schemes.huff_tree import (
    ALPH_SIZE,
    LEAF_VALUE_BITS,
    PSEUDO_EOF,
    HuffNode,
    iter_leaves,
)
from src.utils.bitio import END_OF_STREAM, BitReader, BitWriter
from src.utils.debug import DebugLog

# a tree over ALPH_SIZE + 1 distinct leaves can't be deeper than this
MAX_TREE_DEPTH = ALPH_SIZE


def write_tree(root: HuffNode, writer: BitWriter, log: Optional[DebugLog] = None) -> None:
    if root.is_leaf:
        if log is not None:
            log.high(f"wrote leaf {root.value}")
        writer.write_bits(1, 1)
        writer.write_bits(LEAF_VALUE_BITS, root.value)
        return
    writer.write_bits(1, 0)
    write_tree(root.left, writer, log)
    write_tree(root.right, writer, log)


def read_tree(reader: BitReader) -> HuffNode:
    """
    Rebuild a tree written by write_tree().

    Raises MalformedTreeError when the bits run out mid-tree, a leaf value
    is not a symbol, a symbol appears twice, or PSEUDO_EOF is missing.
    """
    root = _read_node(reader, 0)

    seen = set()
    for leaf in iter_leaves(root):
        if leaf.value in seen:
            raise MalformedTreeError(f"bad input, leaf {leaf.value} appears twice")
        seen.add(leaf.value)
    if PSEUDO_EOF not in seen:
        raise MalformedTreeError("bad input, tree has no PSEUDO_EOF leaf")
    return root


def _read_node(reader: BitReader, depth: int) -> HuffNode:
    if depth > MAX_TREE_DEPTH:
        raise MalformedTreeError(f"bad input, tree deeper than {MAX_TREE_DEPTH}")

    bit = reader.read_bits(1)
    if bit == END_OF_STREAM:
        raise MalformedTreeError("bad input, tree ends early")

    if bit == 0:
        left = _read_node(reader, depth + 1)
        right = _read_node(reader, depth + 1)
        return HuffNode(0, 0, left, right)

    value = reader.read_bits(LEAF_VALUE_BITS)
    if value == END_OF_STREAM:
        raise MalformedTreeError("bad input, leaf value cut off")
    if value > PSEUDO_EOF:
        raise MalformedTreeError(f"bad input, leaf value {value} out of range")
    return HuffNode(value)
