"""Bit-level writing and reading over binary streams.

Bits are packed most significant first.  A flush writes whatever is held in
the buffer as one byte, so a partial byte is written right-aligned.
"""

from __future__ import annotations

from typing import BinaryIO


class BitWriter:
    """Collects bits and writes them to a binary stream a byte at a time."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._buffer = 0
        self._pending = 0

    @property
    def pending(self) -> int:
        """Number of bits waiting in the buffer."""
        return self._pending

    def write_bit(self, bit: int) -> None:
        """Append one bit (0 or 1); a full byte is written out at once."""
        if bit not in (0, 1):
            raise ValueError(f"bit must be 0 or 1, got {bit!r}")
        self._buffer = ((self._buffer << 1) | int(bit)) & 0xFF
        self._pending += 1
        if self._pending == 8:
            self.flush()

    def flush(self) -> None:
        """Write the buffer as one byte, even when it holds fewer than eight bits."""
        self._stream.write(bytes((self._buffer,)))
        self._buffer = 0
        self._pending = 0

    def close(self) -> None:
        """Write any pending bits."""
        if self._pending:
            self.flush()

    def __enter__(self) -> BitWriter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class BitReader:
    """Reads single bits and 8-bit characters from a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._buffer = 0
        self._remaining = 0

    def read_bit(self) -> int:
        """Return the next bit; raise EOFError at the end of the stream."""
        if self._remaining == 0:
            chunk = self._stream.read(1)
            if not chunk:
                raise EOFError("end of stream")
            self._buffer = chunk[0]
            self._remaining = 8
        self._remaining -= 1
        return (self._buffer >> self._remaining) & 1

    def read_char(self) -> int:
        """Return the next eight bits as a byte value."""
        value = 0
        for _ in range(8):
            value = (value << 1) | self.read_bit()
        return value