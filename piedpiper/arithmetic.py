"""Static arithmetic compression with 16-bit interval arithmetic.

The compressed file is the frequency header of
:class:`~piedpiper.arith_model.FrequencyTable` followed by the interval
bits; the final buffer is flushed as one byte.
"""

from __future__ import annotations

import os
import sys
from functools import partial
from pathlib import Path
from typing import Iterator

from piedpiper.arith_model import PRECISION, SYMBOLS, FrequencyTable
from piedpiper.bitio import BitReader, BitWriter

CHUNK_SIZE = 100 * 1024 * 1024
_MASK = (1 << PRECISION) - 1
_TOP = 1 << (PRECISION - 1)
_SECOND = 1 << (PRECISION - 2)


class IntervalCoder:
    """Narrows a [low, high] interval per symbol and emits settled bits."""

    def __init__(self, table: FrequencyTable, writer: BitWriter) -> None:
        self.table = table
        self.writer = writer
        self.low = 0
        self.high = _MASK
        self.underflow_bits = 0

    def encode_symbol(self, symbol: int) -> None:
        """Narrow the interval to ``symbol``'s range and write settled bits."""
        if not 0 <= symbol < SYMBOLS:
            raise ValueError(f"symbol out of range: {symbol}")
        low_count = self.table.lower[symbol]
        high_count = self.table.upper[symbol]
        if high_count == low_count:
            raise ValueError(f"symbol {symbol} has no probability in the table")
        total = self.table.total
        span = self.high - self.low + 1
        self.high = self.low + span * high_count // total - 1
        self.low = self.low + span * low_count // total
        self._settle()

    def _settle(self) -> None:
        while True:
            if (self.high ^ self.low) & _TOP == 0:
                bit = 1 if self.high & _TOP else 0
                self.writer.write_bit(bit)
                for _ in range(self.underflow_bits):
                    self.writer.write_bit(1 - bit)
                self.underflow_bits = 0
            elif self.low & _SECOND and not self.high & _SECOND:
                self.underflow_bits += 1
                self.low &= ~(_TOP | _SECOND)
                self.high |= _SECOND
            else:
                return
            self.low = (self.low << 1) & _MASK
            self.high = ((self.high << 1) | 1) & _MASK


def _chunks(path: Path) -> Iterator[bytes]:
    with path.open("rb") as reader:
        yield from iter(partial(reader.read, CHUNK_SIZE), b"")


def compress_file(source: str | os.PathLike, destination: str | os.PathLike) -> Path:
    """Compress ``source`` into ``destination``; return the destination path."""
    source_path, target = Path(source), Path(destination)
    table = FrequencyTable()
    for chunk in _chunks(source_path):
        for byte in chunk:
            table.add(byte)
    table.scale()
    with target.open("wb") as out:
        writer = BitWriter(out)
        table.write_header(writer)
        coder = IntervalCoder(table, writer)
        for chunk in _chunks(source_path):
            for byte in chunk:
                coder.encode_symbol(byte)
        writer.flush()
        writer.close()
    return target


def read_table(source: str | os.PathLike) -> FrequencyTable:
    """Read the frequency table stored at the start of a compressed file."""
    table = FrequencyTable()
    with open(source, "rb") as reader:
        table.read_header(BitReader(reader))
    return table


def compress_main(argv: list[str] | None = None) -> int:
    """Compress a file: arguments are the source and destination paths."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print("Error :: Invalid inputs.")
        return 1
    try:
        compress_file(args[0], args[1])
    except OSError as exc:
        print(f"{exc.filename}: {exc.strerror}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Error : {exc}", file=sys.stderr)
        return 1
    return 0


def decompress_main(argv: list[str] | None = None) -> int:
    """Read the frequency table of a compressed file and print its ranges."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print("Error :: Invalid inputs.")
        return 1
    try:
        Path(args[1]).touch(exist_ok=True)
        table = read_table(args[0])
    except OSError as exc:
        print(f"{exc.filename}: {exc.strerror}", file=sys.stderr)
        return 1
    except ValueError:
        print("Error: unexpected EOF", file=sys.stderr)
        return 1
    for symbol, (low, high) in enumerate(zip(table.lower, table.upper)):
        print(f"{symbol}\t{low}\t{high}")
    return 0


if __name__ == "__main__":
    sys.exit(compress_main())