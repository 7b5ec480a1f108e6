"""Settings and helpers shared by the remote shell client and server.

Both ends mask every payload with the same cellular automaton key stream,
so each side keeps one generator per connection and masks exactly the bytes
it sends or receives, in order.
"""

from __future__ import annotations

from typing import Iterable, Protocol

from piedpiper.automaton import CellularGenerator

CLOSE = "exit"
MINLEN = 1024
OUTPUT_LIMIT = MINLEN * 5
ACK_SIZE = 100
PASSWORD = "password"
KEY_WIDTH = 12

_UNSENDABLE = frozenset((0x00, 0xAD))
_REPLACEMENT = ord("A")


class KeyStream(Protocol):
    """Anything that hands out key bytes one at a time."""

    def next_byte(self) -> int: ...


def trim(text: str) -> str:
    """Drop trailing spaces, tabs and newlines and leading spaces and tabs."""
    return text.rstrip(" \n\t").lstrip(" \t")


def mask(data: Iterable[int], generator: KeyStream) -> bytes:
    """XOR ``data`` with the key stream.

    A result byte of 0x00 or 0xAD cannot be sent and is replaced with 'A',
    so masking is not always reversible.
    """
    out = bytearray()
    for byte in bytes(data):
        value = byte ^ generator.next_byte()
        out.append(_REPLACEMENT if value in _UNSENDABLE else value)
    return bytes(out)


def make_generator() -> CellularGenerator:
    """A fresh key stream, the same on both ends of a connection."""
    return CellularGenerator(PASSWORD, KEY_WIDTH)