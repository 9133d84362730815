"""
Diagnostic output for the compressor and decompressor.

The level comes from the caller (CLI flag / config) or the HUFF_DEBUG
environment variable. Messages go to stderr and never touch the
compressed stream.
"""

import os
import sys
from typing import Optional, TextIO

DEBUG_LOW = 1
DEBUG_HIGH = 4

DEBUG_ENV_VAR = "HUFF_DEBUG"


def debug_level_from_env(default: int = 0) -> int:
    raw = os.environ.get(DEBUG_ENV_VAR, "").strip().lower()
    if not raw:
        return default
    if raw in {"true", "yes", "on"}:
        return DEBUG_LOW
    if raw in {"false", "no", "off"}:
        return 0
    try:
        return max(0, int(raw))
    except ValueError:
        return default


class DebugLog:
    """
    Leveled stderr printer injected into HuffProcessor.

    low() prints at DEBUG_LOW and above, high() only at DEBUG_HIGH.
    """

    def __init__(self, level: int = 0, stream: Optional[TextIO] = None, prefix: str = "[HUFF]"):
        self.level = level
        self.stream = stream
        self.prefix = prefix

    @property
    def verbose(self) -> bool:
        return self.level >= DEBUG_HIGH

    def log(self, threshold: int, msg: str) -> None:
        if self.level >= threshold:
            print(f"{self.prefix} {msg}", file=self.stream or sys.stderr)

    def low(self, msg: str) -> None:
        self.log(DEBUG_LOW, msg)

    def high(self, msg: str) -> None:
        self.log(DEBUG_HIGH, msg)
