from dataclasses import dataclass


@dataclass
class CompressionConfig:
    """
    Configuration for the file-level compress/decompress pipeline.
    """
    # 0 = silent, 1 = per-file bit totals, 4 = per-symbol trace (see src.utils.debug)
    debug_level: int = 0
    compressed_suffix: str = ".hf"
    decoded_suffix: str = "_decoded"
    # batch runs: decompress right after compressing and compare bytes
    verify_roundtrip: bool = True
    # keep whatever a failed decompression managed to write
    keep_partial_output: bool = False
