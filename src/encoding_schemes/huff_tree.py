"""
Huffman tree model: frequency counting, tree construction and code tables.

Symbols are ints in [0, 256]; 0..255 are literal bytes and 256 is
PSEUDO_EOF, which is always given a frequency of one so every stream can be
terminated.

Ties between equal weights are broken first-in-first-out: leaves are
queued in ascending symbol order and every merged node is queued behind
everything already waiting. The first node popped becomes the left child.
"""

import heapq
from dataclasses import dataclass, field
from itertools import count
from typing import Dict, List, NamedTuple, Optional, Sequence

from src.utils.bitio import END_OF_STREAM, BitReader
from src.utils.bits_bytes_utils import int_to_bitstring
from src.utils.debug import DebugLog

BITS_PER_WORD = 8
ALPH_SIZE = 1 << BITS_PER_WORD
PSEUDO_EOF = ALPH_SIZE
# leaf payload width: one extra bit so PSEUDO_EOF fits
LEAF_VALUE_BITS = BITS_PER_WORD + 1


@dataclass(eq=True)
class HuffNode:
    """
    Leaf (no children, `value` is the symbol) or internal node (two children).

    `weight` only matters while the tree is built and is left out of
    equality, so a deserialized tree compares equal to the one written.
    """
    value: int = 0
    weight: int = field(default=0, compare=False)
    left: Optional["HuffNode"] = None
    right: Optional["HuffNode"] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


class Code(NamedTuple):
    """Root-to-leaf path as (bit length, value), first step in the MSB."""
    length: int
    value: int

    @property
    def bits(self) -> str:
        return int_to_bitstring(self.value, self.length)


def count_frequencies(reader: BitReader, log: Optional[DebugLog] = None) -> List[int]:
    """
    Read 8-bit symbols until end of stream and count them.

    Index PSEUDO_EOF is forced to 1. The reader is left at end of stream.
    """
    freqs = [0] * (ALPH_SIZE + 1)
    freqs[PSEUDO_EOF] = 1

    while True:
        value = reader.read_bits(BITS_PER_WORD)
        if value == END_OF_STREAM:
            break
        freqs[value] += 1

    if log is not None and log.verbose:
        log.high("frequencies:")
        for symbol, weight in enumerate(freqs):
            if weight:
                log.high(f"{symbol}\t{weight}")
    return freqs


def build_huffman_tree(freqs: Sequence[int], log: Optional[DebugLog] = None) -> HuffNode:
    heap = []
    order = count()
    for symbol, weight in enumerate(freqs):
        if weight > 0:
            heap.append((weight, next(order), HuffNode(symbol, weight)))
    if not heap:
        raise ValueError("frequency table has no non-zero entry")
    heapq.heapify(heap)

    if log is not None:
        log.high(f"huffman tree: queue created with {len(heap)} nodes")

    while len(heap) > 1:
        w_left, _, left = heapq.heappop(heap)
        w_right, _, right = heapq.heappop(heap)
        weight = w_left + w_right
        heapq.heappush(heap, (weight, next(order), HuffNode(0, weight, left, right)))

    return heap[0][2]


def make_code_table(root: HuffNode, log: Optional[DebugLog] = None) -> Dict[int, Code]:
    """
    Map every leaf symbol to its path from `root` (left = 0, right = 1).

    A root that is itself a leaf gets the empty code.
    """
    codes: Dict[int, Code] = {}

    def walk(node: HuffNode, length: int, value: int) -> None:
        if node.is_leaf:
            codes[node.value] = Code(length, value)
            if log is not None:
                log.high(f"encoding of {node.value} is {codes[node.value].bits}")
            return
        walk(node.left, length + 1, value << 1)
        walk(node.right, length + 1, (value << 1) | 1)

    walk(root, 0, 0)
    return codes


def iter_leaves(root: HuffNode):
    """Yield leaf nodes left to right."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_leaf:
            yield node
        else:
            stack.append(node.right)
            stack.append(node.left)
