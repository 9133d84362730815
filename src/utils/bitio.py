"""
Bit-level reader/writer over binary file objects.

Bits are packed most significant first inside each byte. Both classes work
with anything exposing read()/write() on bytes: io.BytesIO, files opened in
binary mode, etc. Neither closes the wrapped stream; the caller owns it.
"""

import io
from typing import BinaryIO, Optional

END_OF_STREAM = -1

_READ_CHUNK = 4096
_WRITE_FLUSH_AT = 4096


class BitReader:
    def __init__(self, stream: BinaryIO, chunk_size: int = _READ_CHUNK) -> None:
        self.stream = stream
        self.chunk_size = chunk_size
        self._start: Optional[int] = stream.tell() if stream.seekable() else None
        self._buf = b""
        self._pos = 0
        self.acc = 0
        self.bits = 0
        self.bits_read = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> "BitReader":
        return cls(io.BytesIO(data))

    def _next_byte(self) -> int:
        if self._pos >= len(self._buf):
            self._buf = self.stream.read(self.chunk_size)
            self._pos = 0
            if not self._buf:
                return END_OF_STREAM
        byte = self._buf[self._pos]
        self._pos += 1
        return byte

    def read_bits(self, n: int) -> int:
        """
        Return the next `n` bits as an unsigned int.

        Returns END_OF_STREAM when fewer than `n` bits are left; the bits
        that were still buffered are discarded in that case.
        """
        if n <= 0:
            return 0
        while self.bits < n:
            byte = self._next_byte()
            if byte == END_OF_STREAM:
                self.acc = 0
                self.bits = 0
                return END_OF_STREAM
            self.acc = (self.acc << 8) | byte
            self.bits += 8

        self.bits -= n
        value = (self.acc >> self.bits) & ((1 << n) - 1)
        self.acc &= (1 << self.bits) - 1
        self.bits_read += n
        return value

    def reset(self) -> None:
        """Rewind to where the reader started."""
        if self._start is None:
            raise io.UnsupportedOperation("BitReader: underlying stream is not seekable")
        self.stream.seek(self._start)
        self._buf = b""
        self._pos = 0
        self.acc = 0
        self.bits = 0
        self.bits_read = 0


class BitWriter:
    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream
        self.buf = bytearray()
        self.acc = 0
        self.bits = 0
        self.bits_written = 0
        self.closed = False

    def write_bits(self, n: int, value: int) -> None:
        """Write the low `n` bits of `value`. n == 0 writes nothing."""
        if self.closed:
            raise ValueError("write to a closed BitWriter")
        if n <= 0:
            return
        self.acc = (self.acc << n) | (value & ((1 << n) - 1))
        self.bits += n
        self.bits_written += n
        while self.bits >= 8:
            self.bits -= 8
            self.buf.append((self.acc >> self.bits) & 0xFF)
        self.acc &= (1 << self.bits) - 1
        if len(self.buf) >= _WRITE_FLUSH_AT:
            self._drain()

    def _drain(self) -> None:
        if self.buf:
            self.stream.write(bytes(self.buf))
            self.buf.clear()

    def close(self) -> None:
        """Zero-pad the trailing partial byte, write everything out, flush."""
        if self.closed:
            return
        if self.bits > 0:
            self.buf.append((self.acc << (8 - self.bits)) & 0xFF)
            self.acc = 0
            self.bits = 0
        self._drain()
        self.stream.flush()
        self.closed = True

    def __enter__(self) -> "BitWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
