import json
from pathlib import Path

from src.pipeline import CompressionConfig, run_batch_on_folder
from src.reporting.report import REPORT_COLUMNS, generate_report
from src.utils.batch import batch_output_paths


def _make_corpus(root: Path) -> dict:
    files = {
        Path("corpus/readme.txt"): b"hello huffman " * 40,
        Path("corpus/nested/empty.bin"): b"",
        Path("corpus/nested/bytes.bin"): bytes(range(256)) * 2,
        Path("top.txt"): b"aaaaaaaaaab",
    }
    for rel, data in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    return files


def test_batch_output_paths():
    cfg = CompressionConfig()
    compressed, decoded = batch_output_paths(Path("corpus/a/b.txt"), Path("/out"), cfg)
    assert compressed == Path("/out/out_compressed/corpus_compressed/a/b.txt.hf")
    assert decoded == Path("/out/out_decoded/corpus_decoded/a/b_decoded.txt")


def test_batch_roundtrips_every_file(tmp_path):
    input_root = tmp_path / "in"
    output_root = tmp_path / "out"
    files = _make_corpus(input_root)

    records = run_batch_on_folder(input_root, output_root, CompressionConfig())

    assert len(records) == len(files)
    assert all(r.ok for r in records), [r.error for r in records if not r.ok]
    for record in records:
        original = files[record.input_path]
        assert record.original_size == len(original)
        assert record.decoded_path.read_bytes() == original
        assert record.compressed_path.stat().st_size == record.compressed_size


def test_batch_without_verify_skips_decoding(tmp_path):
    input_root = tmp_path / "in"
    _make_corpus(input_root)

    records = run_batch_on_folder(input_root, tmp_path / "out", CompressionConfig(verify_roundtrip=False))

    assert all(r.ok and r.decoded_path is None for r in records)
    assert not (tmp_path / "out" / "out_decoded").exists()


def test_batch_ignores_output_inside_input(tmp_path):
    input_root = tmp_path / "in"
    files = _make_corpus(input_root)

    run_batch_on_folder(input_root, input_root / "out", CompressionConfig())
    records = run_batch_on_folder(input_root, input_root / "out", CompressionConfig())

    assert len(records) == len(files)


def test_report_after_batch(tmp_path):
    input_root = tmp_path / "in"
    output_root = tmp_path / "out"
    files = _make_corpus(input_root)
    run_batch_on_folder(input_root, output_root)

    report = generate_report(input_root, output_root, output_root / "report")

    summary = report["summary"]
    assert summary["total_files"] == len(files)
    assert summary["success_count"] == len(files)
    assert summary["success_rate"] == 1.0
    assert summary["total_original_bytes"] == sum(len(d) for d in files.values())

    rows = {row["input_path"]: row for row in report["files"]}
    readme = rows[str(Path("corpus/readme.txt"))]
    assert readme["status"] == "ok"
    assert readme["compression_ratio"] < 1.0
    assert readme["baseline_size_bytes"] < readme["compressed_size_bytes"]
    assert readme["byte_errors"] == 0

    empty = rows[str(Path("corpus/nested/empty.bin"))]
    assert empty["baseline_size_bytes"] is None
    assert empty["compressed_size_bytes"] == 6

    csv_lines = (output_root / "report" / "report.csv").read_text(encoding="utf-8").splitlines()
    assert csv_lines[0].split(",") == REPORT_COLUMNS
    assert len(csv_lines) == len(files) + 1
    payload = json.loads((output_root / "report" / "report.json").read_text(encoding="utf-8"))
    assert payload["summary"]["total_files"] == len(files)


def test_report_flags_missing_outputs(tmp_path):
    input_root = tmp_path / "in"
    (input_root).mkdir()
    (input_root / "lonely.txt").write_bytes(b"never compressed")

    report = generate_report(input_root, tmp_path / "out", tmp_path / "report", formats=("json",))

    row = report["files"][0]
    assert row["status"] == "missing_compressed"
    assert row["success"] is False
    assert not (tmp_path / "report" / "report.csv").exists()
