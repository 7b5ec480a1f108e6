"""Pseudo-random byte stream driven by a rule-150 cellular automaton.

A password is spread over the first row of a grid.  Each following row is
the rule-150 evolution of the row above it, treating the row as one ring
of bits.  Bytes are read down the grid: the eight bits of a byte come from
the same bit position in eight consecutive rows.
"""

from __future__ import annotations

from itertools import cycle, islice

MULTIPLIER = 1092342049
INCREMENT = 133942323
RULE = 150
DEFAULT_CELL_BUDGET = 100 * 1024 * 1024 // 8


def _as_bytes(password: str | bytes) -> bytes:
    if isinstance(password, str):
        return password.encode("utf-8")
    return bytes(password)


def _evolve(value: int, bits: int) -> int:
    """Apply rule 150 (left XOR centre XOR right) to a ring of ``bits`` cells."""
    mask = (1 << bits) - 1
    from_left = ((value << 1) | (value >> (bits - 1))) & mask
    from_right = (value >> 1) | ((value & 1) << (bits - 1))
    return from_left ^ value ^ from_right


def seed_row(password: str | bytes, width: int) -> bytes:
    """Spread ``password`` over a row of ``width`` bytes, removing character bias."""
    key = _as_bytes(password)
    if not key:
        raise ValueError("password must not be empty")
    if width < 1:
        raise ValueError("row width must be positive")
    row = bytearray()
    previous = 0
    for byte in islice(cycle(key), width):
        previous = ((byte * MULTIPLIER + INCREMENT) & 0xFF) ^ previous
        row.append(previous)
    return bytes(row)


def evolve_row(row: bytes) -> bytes:
    """Return the next generation of ``row`` under rule 150."""
    if not row:
        raise ValueError("row must not be empty")
    value = int.from_bytes(row, "little")
    return _evolve(value, len(row) * 8).to_bytes(len(row), "little")


class CellularGenerator:
    """Byte generator reading a rule-150 grid seeded from a password."""

    def __init__(
        self,
        password: str | bytes,
        width: int | None = None,
        cell_budget: int = DEFAULT_CELL_BUDGET,
    ) -> None:
        key = _as_bytes(password)
        if not key:
            raise ValueError("password must not be empty")
        self.width = max(width or 0, len(key))
        self.depth = cell_budget // self.width
        if self.depth < 1:
            raise ValueError("cell budget is too small for the row width")
        self._bits = self.width * 8
        self._rows: list[int] = []
        self._column = 0
        self._bit = 0
        self._reseed(seed_row(key, self.width))

    def _reseed(self, row: bytes) -> None:
        self._rows = [int.from_bytes(row, "little")]
        self._column = 0
        self._bit = 0

    def _row(self, index: int) -> int:
        rows = self._rows
        while len(rows) <= index:
            rows.append(_evolve(rows[-1], self._bits))
        return rows[index]

    def next_byte(self) -> int:
        """Return the next byte of the stream."""
        value = 0
        for offset in range(8):
            value |= ((self._row(self._column + offset) >> self._bit) & 1) << offset
        self._column += 8
        if self._column >= self.depth:
            self._column = 0
            self._bit += 1
        if self._bit >= self._bits:
            last = self._row(self.depth).to_bytes(self.width, "little")
            seed = last.split(b"\0", 1)[0] or last
            self._reseed(seed_row(seed, self.width))
        return value

    def xor(self, data: bytes) -> bytes:
        """XOR ``data`` with the next ``len(data)`` bytes of the stream."""
        return bytes(byte ^ self.next_byte() for byte in data)