"""
Errors raised while decoding a Huffman tree-framed stream.

All of them are fatal for the current operation; nothing is retried.
"""


class HuffError(ValueError):
    """Base class for every decoding failure."""


class BadHeaderError(HuffError):
    """The stream does not start with the expected magic number."""


class MalformedTreeError(HuffError):
    """The serialized tree is truncated or internally inconsistent."""


class TruncatedStreamError(HuffError):
    """The payload ran out of bits before PSEUDO_EOF was decoded."""
