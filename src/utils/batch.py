import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from src.encoding_schemes.errors import HuffError
from src.pipeline.config import CompressionConfig
from src.pipeline.runner import compress_file, decompress_file
from src.utils.file_utils import add_suffix_to_top_level, compressed_path, suffix_filename


@dataclass
class BatchRecord:
    """
    Outcome of one file in a batch run.

    - ok: compressed (and, when verifying, decoded back to identical bytes)
    - error: message of the exception that stopped this file, if any
    """
    input_path: Path
    compressed_path: Optional[Path]
    decoded_path: Optional[Path]
    original_size: int
    compressed_size: int
    ok: bool
    error: str = ""


def batch_output_paths(rel_path: Path, output_root: Path, cfg: CompressionConfig) -> Tuple[Path, Path]:
    """
    Where a batch run writes the compressed and decoded copies of `rel_path`.

    Example (rel_path 'corpus/a/b.txt'):
        out_compressed/corpus_compressed/a/b.txt.hf
        out_decoded/corpus_decoded/a/b_decoded.txt
    """
    rel_root = rel_path.parent
    name = Path(rel_path.name)

    compressed = (
        output_root
        / "out_compressed"
        / add_suffix_to_top_level(rel_root, "_compressed")
        / compressed_path(name, cfg.compressed_suffix).name
    )
    decoded = (
        output_root
        / "out_decoded"
        / add_suffix_to_top_level(rel_root, "_decoded")
        / suffix_filename(name, cfg.decoded_suffix).name
    )
    return compressed, decoded


def run_batch_on_folder(
    input_root: Path,
    output_root: Path,
    cfg: CompressionConfig | None = None,
) -> List[BatchRecord]:
    if cfg is None:
        cfg = CompressionConfig()

    input_root = Path(input_root).resolve()
    output_root = Path(output_root).resolve()

    records: List[BatchRecord] = []
    for root, dirs, files in os.walk(input_root):
        dirs.sort()
        root_path = Path(root)
        # never recurse into our own output when it lives under the input
        if root_path == output_root or output_root in root_path.parents:
            continue

        for filename in sorted(files):
            in_path = root_path / filename
            print("Processing:", in_path)
            records.append(process_file(in_path, in_path.relative_to(input_root), output_root, cfg))

    failed = sum(1 for r in records if not r.ok)
    print(f"Processed: {len(records)}, Failed: {failed}")
    return records


def process_file(
    in_path: Path,
    rel_path: Path,
    output_root: Path,
    cfg: CompressionConfig,
) -> BatchRecord:
    original_size = in_path.stat().st_size
    compressed_out, decoded_out = batch_output_paths(rel_path, output_root, cfg)

    record = BatchRecord(
        input_path=rel_path,
        compressed_path=None,
        decoded_path=None,
        original_size=original_size,
        compressed_size=0,
        ok=False,
    )

    try:
        compress_file(in_path, compressed_out, cfg)
        record.compressed_path = compressed_out
        record.compressed_size = compressed_out.stat().st_size

        if cfg.verify_roundtrip:
            decompress_file(compressed_out, decoded_out, cfg)
            record.decoded_path = decoded_out
            if decoded_out.read_bytes() != in_path.read_bytes():
                record.error = "decoded bytes differ from input"
                return record
    except (HuffError, OSError) as exc:
        record.error = f"{type(exc).__name__}: {exc}"
        print(f"Error {in_path}: {record.error}")
        return record

    record.ok = True
    return record
