"""Burrows-Wheeler transform of files in blocks of 100000 bytes.

Each encoded block is stored as a 4-byte little-endian key (the row of the
original text among the sorted rotations) followed by the transformed block.
Bytes are ordered as signed characters.
"""

from __future__ import annotations

import errno
import os
import struct
import sys
from functools import partial
from itertools import pairwise
from pathlib import Path
from typing import Sequence

from piedpiper.ca_cipher import ENCRYPTED_TAG, output_path as _tagged_path

BLOCK_SIZE = 100_000
KEY = struct.Struct("<i")
USAGE = "Usage: bwt <filename>"


def _signed_order(byte: int) -> int:
    return byte ^ 0x80


def _dense_ranks(order: list[int], keys: Sequence) -> list[int]:
    ranks = [0] * len(order)
    for previous, current in pairwise(order):
        ranks[current] = ranks[previous] + (keys[current] != keys[previous])
    return ranks


def _rotation_order(block: bytes) -> list[int]:
    """Start positions of the cyclic rotations of ``block`` in sorted order."""
    n = len(block)
    keys: Sequence = [_signed_order(b) for b in block]
    order = sorted(range(n), key=keys.__getitem__)
    ranks = _dense_ranks(order, keys)
    shift = 1
    while shift < n and ranks[order[-1]] < n - 1:
        keys = [(ranks[i], ranks[(i + shift) % n]) for i in range(n)]
        order = sorted(range(n), key=keys.__getitem__)
        ranks = _dense_ranks(order, keys)
        shift *= 2
    return order


def encode(block: bytes) -> tuple[int, bytes]:
    """Transform ``block``; return the key and the last column of the rotations."""
    block = bytes(block)
    n = len(block)
    if n == 0:
        return 0, b""
    order = _rotation_order(block)
    key = order.index(0)
    return key, bytes(block[(start - 1) % n] for start in order)


def decode(key: int, block: bytes) -> bytes:
    """Invert :func:`encode` given its key and transformed block."""
    block = bytes(block)
    n = len(block)
    if n == 0:
        return b""
    if not 0 <= key < n:
        raise ValueError(f"key {key} out of range for a block of {n} bytes")
    order = sorted(range(n), key=lambda i: _signed_order(block[i]))
    out = bytearray()
    row = key
    for _ in range(n):
        row = order[row]
        out.append(block[row])
    return bytes(out)


def _is_encoded(name: str) -> bool:
    dot = name.rfind(".")
    start = dot - len(ENCRYPTED_TAG)
    return dot >= 0 and start >= 0 and name[start:dot] == ENCRYPTED_TAG


def output_path(path: str | os.PathLike) -> str:
    """Name of the file written for ``path`` (``_encrypted``/``_decrypted`` tags)."""
    return _tagged_path(path)


def transform_file(path: str | os.PathLike) -> Path:
    """Encode a file, or decode one whose name carries the encrypted tag."""
    source = Path(path)
    if source.is_dir():
        raise IsADirectoryError(errno.EISDIR, "please provide file", str(source))
    decoding = _is_encoded(os.fspath(source))
    target = Path(output_path(source))
    with source.open("rb") as reader, target.open("wb") as writer:
        if decoding:
            while header := reader.read(KEY.size):
                if len(header) < KEY.size:
                    raise ValueError("truncated block header")
                (key,) = KEY.unpack(header)
                writer.write(decode(key, reader.read(BLOCK_SIZE)))
        else:
            for chunk in iter(partial(reader.read, BLOCK_SIZE), b""):
                key, transformed = encode(chunk)
                writer.write(KEY.pack(key) + transformed)
    return target


def main(argv: list[str] | None = None) -> int:
    """Command entry point; returns the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print(USAGE, file=sys.stderr)
        return 1
    try:
        transform_file(args[0])
    except IsADirectoryError:
        print("ERROR: please provide file", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"{exc.filename}: {exc.strerror}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())