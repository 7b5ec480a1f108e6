"""Run-length encoding into (count, byte) pairs."""

from __future__ import annotations

from itertools import groupby

MAX_RUN = 254


def encode(data: bytes) -> bytes:
    """Encode ``data`` as pairs of run length and byte, runs capped at 254."""
    out = bytearray()
    for byte, group in groupby(bytes(data)):
        length = sum(1 for _ in group)
        while length > 0:
            run = min(length, MAX_RUN)
            out += bytes((run, byte))
            length -= run
    return bytes(out)