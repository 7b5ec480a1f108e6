"""Static frequency model for the 16-bit arithmetic coder.

Counts are scaled so that their total fits in PRECISION - 2 bits.  The
header stores, for every symbol with a non-empty range, the symbol as eight
bits and its scaled count as PRECISION - 2 bits, least significant first;
a zero symbol with a zero count ends the table.
"""

from __future__ import annotations

from itertools import accumulate

from piedpiper.bitio import BitReader, BitWriter

PRECISION = 16
COUNT_BITS = PRECISION - 2
SYMBOLS = 256


def _check_symbol(symbol: int) -> int:
    if not 0 <= symbol < SYMBOLS:
        raise ValueError(f"symbol out of range: {symbol}")
    return symbol


def _write_symbol(writer: BitWriter, symbol: int) -> None:
    for shift in range(7, -1, -1):
        writer.write_bit((symbol >> shift) & 1)


def _write_count(writer: BitWriter, count: int) -> None:
    for shift in range(COUNT_BITS):
        writer.write_bit((count >> shift) & 1)


class FrequencyTable:
    """Symbol counts and their cumulative ranges."""

    def __init__(self) -> None:
        self.frequencies = [0] * SYMBOLS
        self.scaled = [0] * SYMBOLS
        self.lower = [0] * SYMBOLS
        self.upper = [0] * SYMBOLS
        self.total_size = 0

    @property
    def total(self) -> int:
        """Sum of the scaled counts: the upper bound of the last symbol."""
        return self.upper[-1]

    def add(self, symbol: int) -> None:
        """Count one occurrence of ``symbol``."""
        self.frequencies[_check_symbol(symbol)] += 1
        self.total_size += 1

    def scale(self) -> None:
        """Scale the counts down to fit the precision and rebuild the ranges."""
        factor = 1
        if self.total_size > 1 << COUNT_BITS:
            factor = self.total_size // (1 << COUNT_BITS) + 1
        self.scaled = [count // factor for count in self.frequencies]
        self.upper = list(accumulate(self.scaled))
        self.lower = [0, *self.upper[:-1]]

    def write_header(self, writer: BitWriter) -> None:
        """Write the scaled counts of the symbols in use, then the end marker."""
        for symbol, (low, high) in enumerate(zip(self.lower, self.upper)):
            count = high - low
            if count == 0:
                continue
            if count >= 1 << COUNT_BITS:
                raise ValueError(f"count {count} of symbol {symbol} does not fit the header")
            _write_symbol(writer, symbol)
            _write_count(writer, count)
        _write_symbol(writer, 0)
        _write_count(writer, 0)

    def read_header(self, reader: BitReader) -> None:
        """Replace the counts with those read from a header, then scale."""
        frequencies = [0] * SYMBOLS
        try:
            while True:
                symbol = reader.read_char()
                count = 0
                for shift in range(COUNT_BITS):
                    count |= reader.read_bit() << shift
                if count == 0:
                    break
                frequencies[symbol] = count
        except EOFError:
            raise ValueError("unexpected end of the frequency header") from None
        self.frequencies = frequencies
        self.total_size = sum(frequencies)
        self.scale()