"""Arithmetic encoder over 32-bit wrapping integers.

The model counts every byte plus one end-of-file marker (byte 255).  Each
symbol narrows the interval with the raw cumulative counts, in unsigned
32-bit arithmetic; settled leading bits are written most significant first
and a trailing partial byte is dropped.
"""

from __future__ import annotations

import sys
from pathlib import Path

END_OF_FILE = 255
SYMBOLS = 256
MASK32 = 0xFFFFFFFF
HALF = 0x80000000


def _check_symbol(symbol: int) -> int:
    if not 0 <= symbol < SYMBOLS:
        raise ValueError(f"symbol out of range: {symbol}")
    return symbol


class ProbabilityModel:
    """Counts of each byte and their cumulative ranges."""

    def __init__(self) -> None:
        self.counts = [0] * SYMBOLS
        self.denominator = 0
        self._ranges: list[tuple[int, int, int]] = [(0, 0, 1)] * SYMBOLS
        self.update(END_OF_FILE)

    def update(self, symbol: int) -> None:
        """Count one occurrence of ``symbol``."""
        self.counts[_check_symbol(symbol)] += 1
        self.denominator += 1

    def build(self) -> None:
        """Compute each symbol's cumulative (low, high) range."""
        ranges = []
        high = 0
        for count in self.counts:
            low, high = high, high + count
            ranges.append((low, high, self.denominator))
        self._ranges = ranges

    def range_of(self, symbol: int) -> tuple[int, int, int]:
        """Return ``(low, high, denominator)`` for ``symbol`` as last built."""
        return self._ranges[_check_symbol(symbol)]


def encode(data: bytes) -> bytes:
    """Model ``data`` and encode it; return the whole bytes produced."""
    data = bytes(data)
    model = ProbabilityModel()
    for byte in data:
        model.update(byte)
    model.build()
    low, high = 0, MASK32
    bits: list[int] = []
    for byte in data:
        span = (high - low) & MASK32
        symbol_low, symbol_high, _ = model.range_of(byte)
        high = (low + span * symbol_high) & MASK32
        low = (low + span * symbol_low) & MASK32
        while True:
            if high < HALF:
                bits.append(0)
            elif low >= HALF:
                bits.append(1)
            else:
                break
            low = (low << 1) & MASK32
            high = ((high << 1) | 1) & MASK32
    whole = len(bits) - len(bits) % 8
    out = bytearray()
    for start in range(0, whole, 8):
        value = 0
        for bit in bits[start:start + 8]:
            value = (value << 1) | bit
        out.append(value)
    return bytes(out)


def main(argv: list[str] | None = None) -> int:
    """Encode the original file into the compressed file."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print("Invalid command.")
        print("Usage: arith32 <original_filename> <compressed_filename>")
        return 0
    print("Compression Started....")
    try:
        data = Path(args[0]).read_bytes()
        Path(args[1]).write_bytes(encode(data))
    except OSError as exc:
        print(f"{exc.filename}: {exc.strerror}", file=sys.stderr)
        return 1
    print("----------------------------------------------")
    print("Compression complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())