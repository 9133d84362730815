"""
Command line entry point.

    huffproc compress FILE [-o OUT]
    huffproc decompress FILE [-o OUT]
    huffproc batch INPUT_ROOT OUTPUT_ROOT [--no-verify]
    huffproc report INPUT_ROOT OUTPUT_ROOT [--report-dir DIR] [--formats csv,json]

--debug N sets the diagnostic level (default: $HUFF_DEBUG, else 0).
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from src.encoding_schemes.errors import HuffError
from src.pipeline.config import CompressionConfig
from src.pipeline.runner import compress_file, decompress_file
from src.utils.debug import debug_level_from_env


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="huffproc",
        description="Huffman compressor with the coding tree stored in the stream.",
    )
    parser.add_argument(
        "--debug",
        type=int,
        default=None,
        help="Diagnostic level: 1 = totals, 4 = per-symbol trace (default: $HUFF_DEBUG).",
    )
    parser.add_argument("--suffix", default=".hf", help="Compressed file extension (default: .hf).")
    sub = parser.add_subparsers(dest="command", required=True)

    p_comp = sub.add_parser("compress", help="Compress a single file.")
    p_comp.add_argument("input", type=Path)
    p_comp.add_argument("-o", "--output", type=Path, default=None)

    p_decomp = sub.add_parser("decompress", help="Decompress a single file.")
    p_decomp.add_argument("input", type=Path)
    p_decomp.add_argument("-o", "--output", type=Path, default=None)
    p_decomp.add_argument(
        "--keep-partial",
        action="store_true",
        help="Keep the partially written output when decoding fails.",
    )

    p_batch = sub.add_parser("batch", help="Compress (and verify) every file under a folder.")
    p_batch.add_argument("input_root", type=Path)
    p_batch.add_argument("output_root", type=Path)
    p_batch.add_argument("--no-verify", action="store_true", help="Skip the decode-and-compare step.")

    p_report = sub.add_parser("report", help="Summarize a batch output folder as CSV/JSON.")
    p_report.add_argument("input_root", type=Path)
    p_report.add_argument("output_root", type=Path)
    p_report.add_argument("--report-dir", type=Path, default=None)
    p_report.add_argument("--formats", default="csv,json")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    cfg = CompressionConfig(
        debug_level=args.debug if args.debug is not None else debug_level_from_env(),
        compressed_suffix=args.suffix,
    )

    try:
        if args.command == "compress":
            out = compress_file(args.input, args.output, cfg)
            print(f"Compressed {args.input} -> {out}")
        elif args.command == "decompress":
            cfg.keep_partial_output = args.keep_partial
            out = decompress_file(args.input, args.output, cfg)
            print(f"Decompressed {args.input} -> {out}")
        elif args.command == "batch":
            from src.utils.batch import run_batch_on_folder

            cfg.verify_roundtrip = not args.no_verify
            records = run_batch_on_folder(args.input_root, args.output_root, cfg)
            if any(not r.ok for r in records):
                return 2
        elif args.command == "report":
            from src.reporting.report import generate_report

            report_dir = args.report_dir or args.output_root / "report"
            formats = [fmt.strip() for fmt in args.formats.split(",") if fmt.strip()]
            generate_report(args.input_root, args.output_root, report_dir, formats=formats, cfg=cfg)
            print(f"Report written to {report_dir}")
    except HuffError as exc:
        print(f"Error: {type(exc).__name__}: {exc}", file=sys.stderr)
        return 1
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
