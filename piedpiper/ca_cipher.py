"""Password-protect a file by XOR with the cellular automaton stream."""

from __future__ import annotations

import errno
import os
import re
import sys
from functools import partial
from pathlib import Path

from piedpiper.automaton import CellularGenerator

CHUNK_SIZE = 1_000_000
ENCRYPTED_TAG = "_encrypted"
DECRYPTED_TAG = "_decrypted"
USAGE = "Usage: ca_cipher <filename> [PASSWORD] (x-width of stream)"


def output_path(path: str | os.PathLike) -> str:
    """Name of the file written for ``path``.

    ``name_encrypted.ext`` becomes ``name_decrypted.ext``; any other name
    gets ``_encrypted`` inserted before its extension.
    """
    name = os.fspath(path)
    dot = name.rfind(".")
    if dot < 0:
        return name + ENCRYPTED_TAG
    start = dot - len(ENCRYPTED_TAG)
    if start >= 0 and name[start:dot] == ENCRYPTED_TAG:
        return name[:start] + DECRYPTED_TAG + name[dot:]
    return name[:dot] + ENCRYPTED_TAG + name[dot:]


def transform_file(
    path: str | os.PathLike, password: str | bytes, width: int | None = None
) -> Path:
    """Encrypt or decrypt ``path``; return the path of the file written."""
    source = Path(path)
    if source.is_dir():
        raise IsADirectoryError(errno.EISDIR, "please provide file", str(source))
    generator = CellularGenerator(password, width)
    target = Path(output_path(source))
    with source.open("rb") as reader, target.open("wb") as writer:
        for chunk in iter(partial(reader.read, CHUNK_SIZE), b""):
            writer.write(generator.xor(chunk))
    return target


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def main(argv: list[str] | None = None) -> int:
    """Command entry point; returns the exit status."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) not in (2, 3):
        print(USAGE, file=sys.stderr)
        return 1
    filename, password = args[0], args[1]
    width = _atoi(args[2]) if len(args) == 3 else None
    try:
        transform_file(filename, password, width)
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