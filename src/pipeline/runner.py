from pathlib import Path
from typing import Optional, Tuple

from src.encoding_schemes.errors import HuffError
from src.encoding_schemes.huffman import HuffProcessor, huffman_decode, huffman_encode
from src.pipeline.config import CompressionConfig
from src.utils.bitio import BitReader, BitWriter
from src.utils.file_utils import compressed_path, restored_path


def compress_file(
    in_path: Path,
    out_path: Optional[Path] = None,
    cfg: Optional[CompressionConfig] = None,
) -> Path:
    """
    Compress one file. Defaults to writing `<in_path><compressed_suffix>`.
    Returns the output path.
    """
    if cfg is None:
        cfg = CompressionConfig()

    in_path = Path(in_path)
    out_path = Path(out_path) if out_path is not None else compressed_path(in_path, cfg.compressed_suffix)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    with in_path.open("rb") as fin, out_path.open("wb") as fout, BitWriter(fout) as writer:
        HuffProcessor(cfg.debug_level).compress(BitReader(fin), writer)
    return out_path


def decompress_file(
    in_path: Path,
    out_path: Optional[Path] = None,
    cfg: Optional[CompressionConfig] = None,
) -> Path:
    """
    Decompress one file. Defaults to stripping the compressed suffix and
    adding `decoded_suffix` before the extension (a.txt.hf -> a_decoded.txt).

    On a decoding error the partial output is removed (unless
    cfg.keep_partial_output) and the error is re-raised.
    """
    if cfg is None:
        cfg = CompressionConfig()

    in_path = Path(in_path)
    if out_path is None:
        out_path = restored_path(in_path, cfg.compressed_suffix, cfg.decoded_suffix)
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with in_path.open("rb") as fin, out_path.open("wb") as fout, BitWriter(fout) as writer:
            HuffProcessor(cfg.debug_level).decompress(BitReader(fin), writer)
    except HuffError:
        if not cfg.keep_partial_output:
            out_path.unlink(missing_ok=True)
        raise
    return out_path


def roundtrip_bytes(data: bytes, cfg: Optional[CompressionConfig] = None) -> Tuple[bytes, bytes]:
    """
    Compress then decompress `data` in memory.
    Returns (compressed, decoded).
    """
    debug_level = cfg.debug_level if cfg is not None else 0
    compressed = huffman_encode(data, debug_level)
    decoded = huffman_decode(compressed, debug_level)
    return compressed, decoded
