"""
Huffman compression with the coding tree stored in the stream header.

Stream layout:
    32-bit magic HUFF_TREE | preorder tree | codes of every byte | code of
    PSEUDO_EOF | zero padding to a byte boundary
"""

import io
from typing import Dict, Optional

from src.encoding_schemes.errors import BadHeaderError, TruncatedStreamError
from src.encoding_schemes.huff_tree import (
    BITS_PER_WORD,
    PSEUDO_EOF,
    Code,
    HuffNode,
    build_huffman_tree,
    count_frequencies,
    make_code_table,
)
from src.encoding_schemes.tree_codec import read_tree, write_tree
from src.utils.bitio import END_OF_STREAM, BitReader, BitWriter
from src.utils.debug import DebugLog

BITS_PER_INT = 32
HUFF_NUMBER = 0xFACE8200
HUFF_TREE = HUFF_NUMBER | 1


class HuffProcessor:
    """
    Compresses and decompresses bit streams.

    `debug_level` (or an explicit `log`) only controls diagnostics on
    stderr; the compressed bytes are the same at every level.
    """

    def __init__(self, debug_level: int = 0, log: Optional[DebugLog] = None):
        self.log = log if log is not None else DebugLog(debug_level)

    def compress(self, reader: BitReader, writer: BitWriter) -> None:
        """
        Compress everything `reader` yields into `writer`.

        The input is read twice (counting pass, then encoding pass) so the
        reader must support reset(). `writer` is closed on return.
        """
        try:
            freqs = count_frequencies(reader, self.log)
            root = build_huffman_tree(freqs, self.log)
            codings = make_code_table(root, self.log)

            writer.write_bits(BITS_PER_INT, HUFF_TREE)
            write_tree(root, writer, self.log)

            reader.reset()
            self._write_compressed_bits(codings, reader, writer)
        finally:
            writer.close()
        self.log.low(f"compress: read {reader.bits_read} bits, wrote {writer.bits_written} bits")

    def decompress(self, reader: BitReader, writer: BitWriter) -> None:
        """
        Decode a stream produced by compress() into `writer`.

        Raises BadHeaderError, MalformedTreeError or TruncatedStreamError.
        `writer` is closed on every path; whatever it received before an
        error is incomplete and up to the caller to discard.
        """
        try:
            bits = reader.read_bits(BITS_PER_INT)
            if bits != HUFF_TREE:
                raise BadHeaderError(f"illegal header starts with {bits}")

            root = read_tree(reader)
            self._read_compressed_bits(root, reader, writer)
        finally:
            writer.close()
        self.log.low(f"decompress: read {reader.bits_read} bits, wrote {writer.bits_written} bits")

    def _write_compressed_bits(self, codings: Dict[int, Code], reader: BitReader, writer: BitWriter) -> None:
        verbose = self.log.verbose
        while True:
            value = reader.read_bits(BITS_PER_WORD)
            if value == END_OF_STREAM:
                break
            code = codings[value]
            writer.write_bits(code.length, code.value)
            if verbose:
                self.log.high(f"wrote {code.bits} from {value}")

        code = codings[PSEUDO_EOF]
        writer.write_bits(code.length, code.value)
        self.log.high("wrote PSEUDO_EOF")

    def _read_compressed_bits(self, root: HuffNode, reader: BitReader, writer: BitWriter) -> None:
        if root.is_leaf:
            # empty input: read_tree() guarantees this lone leaf is PSEUDO_EOF,
            # whose code is zero bits long
            return

        current = root
        while True:
            bit = reader.read_bits(1)
            if bit == END_OF_STREAM:
                raise TruncatedStreamError("bad input, no PSEUDO_EOF")

            current = current.left if bit == 0 else current.right
            if current.is_leaf:
                if current.value == PSEUDO_EOF:
                    break
                writer.write_bits(BITS_PER_WORD, current.value)
                current = root


def huffman_encode(data: bytes, debug_level: int = 0) -> bytes:
    """
    Compress raw bytes in memory.

    """
    out = io.BytesIO()
    HuffProcessor(debug_level).compress(BitReader.from_bytes(data), BitWriter(out))
    return out.getvalue()


def huffman_decode(blob: bytes, debug_level: int = 0) -> bytes:
    """
    Decompress bytes produced by huffman_encode().

    """
    out = io.BytesIO()
    HuffProcessor(debug_level).decompress(BitReader.from_bytes(blob), BitWriter(out))
    return out.getvalue()
