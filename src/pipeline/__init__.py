from src.pipeline.config import CompressionConfig
from src.pipeline.runner import compress_file, decompress_file, roundtrip_bytes


def run_batch_on_folder(*args, **kwargs):
    # Lazy import so importing `src.pipeline` doesn't pull in the batch/report
    # machinery unless a batch run is actually requested.
    from src.utils.batch import run_batch_on_folder as _run_batch_on_folder

    return _run_batch_on_folder(*args, **kwargs)


__all__ = [
    "CompressionConfig",
    "compress_file",
    "decompress_file",
    "roundtrip_bytes",
    "run_batch_on_folder",
]
