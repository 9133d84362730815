"""Utility helpers shared across pipeline components."""

from src.utils.file_utils import (
    add_suffix_to_top_level,
    compressed_path,
    restored_path,
    suffix_filename,
)
from src.utils.bits_bytes_utils import bitstring_to_bytes, bytes_to_bitstring, int_to_bitstring
from src.utils.bitio import END_OF_STREAM, BitReader, BitWriter
from src.utils.debug import DEBUG_HIGH, DEBUG_LOW, DebugLog, debug_level_from_env

__all__ = [
    "add_suffix_to_top_level",
    "compressed_path",
    "restored_path",
    "suffix_filename",
    "bitstring_to_bytes",
    "bytes_to_bitstring",
    "int_to_bitstring",
    "END_OF_STREAM",
    "BitReader",
    "BitWriter",
    "DEBUG_HIGH",
    "DEBUG_LOW",
    "DebugLog",
    "debug_level_from_env",
]
