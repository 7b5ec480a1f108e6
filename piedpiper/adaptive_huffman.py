"""Adaptive Huffman coding (FGK style) with a one-byte padding header.

The compressed stream starts with one byte holding the number of padding
bits in the last byte (0 when the payload ends on a byte boundary).  Each
input byte is coded by its path in the current tree, or, the first time it
is seen, by the path to the not-yet-transmitted (NYT) leaf followed by the
eight bits of the byte.  Encoder and decoder update identical trees.
"""

from __future__ import annotations

import os
import sys
import time
from dataclasses import dataclass
from pathlib import Path

SYMBOLS = 256
TOP_NUMBER = 512
USAGE = "Usage: {prog} -c | -d filename"


@dataclass(eq=False)
class _Node:
    symbol: int = 0
    weight: int = 0
    number: int = 0
    parent: _Node | None = None
    left: _Node | None = None
    right: _Node | None = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


def _check_symbol(symbol: int) -> int:
    if not 0 <= symbol < SYMBOLS:
        raise ValueError(f"symbol out of range: {symbol}")
    return symbol


def _path_to(node: _Node) -> str:
    steps = []
    while node.parent is not None:
        steps.append("0" if node.parent.left is node else "1")
        node = node.parent
    return "".join(reversed(steps))


class AdaptiveTree:
    """The code tree shared by encoder and decoder."""

    def __init__(self) -> None:
        self.root: _Node | None = None
        self._nyt: _Node | None = None
        self._leaves: dict[int, _Node] = {}
        self._dirty = False

    def knows(self, symbol: int) -> bool:
        """Whether ``symbol`` already has a leaf in the tree."""
        return _check_symbol(symbol) in self._leaves

    def symbol_code(self, symbol: int) -> str:
        """Bit string ('0'/'1') of the path to the leaf of a known symbol."""
        if not self.knows(symbol):
            raise KeyError(symbol)
        return _path_to(self._leaves[symbol])

    def nyt_code(self) -> str:
        """Bit string of the path to the NYT leaf; empty for an empty tree."""
        if self._nyt is None:
            return ""
        return _path_to(self._nyt)

    def update(self, symbol: int) -> None:
        """Count one more occurrence of ``symbol`` and rebalance the tree."""
        symbol = _check_symbol(symbol)
        leaf = self._leaves.get(symbol)
        if leaf is not None:
            node = leaf
            self._promote(node)
            node.weight += 1
        else:
            new_nyt = _Node()
            new_leaf = _Node(symbol=symbol, weight=1)
            joined = _Node(weight=1, left=new_nyt, right=new_leaf)
            new_nyt.parent = joined
            new_leaf.parent = joined
            if self.root is None:
                self.root = joined
            else:
                old = self._nyt
                assert old is not None and old.parent is not None
                joined.parent = old.parent
                old.parent.left = joined
            self._nyt = new_nyt
            self._leaves[symbol] = new_leaf
            self._dirty = True
            self._renumber()
            node = joined
            node.weight = new_nyt.weight + new_leaf.weight
        while node.parent is not None:
            node = node.parent
            if node.parent is not None:
                self._promote(node)
            node.weight = node.left.weight + node.right.weight
            self._renumber()
        self.root = node

    def _renumber(self) -> None:
        """Number nodes top to bottom, right to left, from 511 downwards."""
        if not self._dirty or self.root is None:
            return
        ordered: list[tuple[int, _Node]] = []
        stack = [(0, self.root)]
        while stack:
            depth, node = stack.pop()
            ordered.append((depth, node))
            if node.left is not None:
                stack.append((depth + 1, node.left))
            if node.right is not None:
                stack.append((depth + 1, node.right))
        ordered.sort(key=lambda item: item[0])
        for number, (_, node) in enumerate(ordered):
            node.number = TOP_NUMBER - 1 - number
        self._dirty = False

    def _find_block_leader(self, node: _Node) -> tuple[_Node, str] | None:
        """Scan the tree for a node of equal weight and higher number."""
        assert node.parent is not None and self.root is not None
        weight, best, excluded = node.weight, node.number, node.parent.number
        found = None
        stack = [self.root]
        while stack:
            current = stack.pop()
            if (
                current.parent is not None
                and current.weight == weight
                and current.number > best
                and current.number != excluded
            ):
                best = current.number
                side = "left" if current.parent.left is current else "right"
                found = (current.parent, side)
            if current.right is not None:
                stack.append(current.right)
            if current.left is not None:
                stack.append(current.left)
        return found

    def _promote(self, node: _Node) -> None:
        parent = node.parent
        assert parent is not None
        side = "left" if parent.left is node else "right"
        target = self._find_block_leader(node)
        if target is None:
            return
        other_parent, other_side = target
        mine = getattr(parent, side)
        theirs = getattr(other_parent, other_side)
        setattr(parent, side, theirs)
        setattr(other_parent, other_side, mine)
        theirs.parent = parent
        mine.parent = other_parent
        self._dirty = True


def compress(data: bytes) -> bytes:
    """Compress ``data``; the result starts with the padding byte."""
    tree = AdaptiveTree()
    parts = []
    for byte in bytes(data):
        if tree.knows(byte):
            parts.append(tree.symbol_code(byte))
        else:
            parts.append(tree.nyt_code() + format(byte, "08b"))
        tree.update(byte)
    bits = "".join(parts)
    padding = -len(bits) % 8
    bits += "0" * padding
    payload = int(bits, 2).to_bytes(len(bits) // 8, "big") if bits else b""
    return bytes((padding,)) + payload


def decompress(data: bytes) -> bytes:
    """Restore the bytes compressed by :func:`compress`."""
    data = bytes(data)
    if not data:
        return b""
    offset = data[0]
    bits = "".join(format(byte, "08b") for byte in data[1:])
    position = 0
    out = bytearray()
    tree = AdaptiveTree()
    while len(bits) - position > offset:
        node = tree.root
        if node is not None:
            while not node.is_leaf and len(bits) - position > offset:
                node = node.left if bits[position] == "0" else node.right
                position += 1
            if not node.is_leaf:
                break
        if node is None or node.weight == 0:
            if len(bits) - position < 8:
                raise ValueError("compressed stream is truncated")
            symbol = int(bits[position:position + 8], 2)
            position += 8
        else:
            symbol = node.symbol
        out.append(symbol)
        tree.update(symbol)
    return bytes(out)


def _output_name(path: str, suffix: str) -> str:
    return path.split(".", 1)[0] + suffix


def main(argv: list[str] | None = None) -> int:
    """Compress (-c) or decompress (-d) a file; returns the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    prog = "adaptive_huffman"
    if len(args) != 2 or args[0] not in ("-c", "-d"):
        print(USAGE.format(prog=prog))
        return 1
    flag, name = args
    start = int(time.time())
    try:
        data = Path(name).read_bytes()
    except OSError as exc:
        print(f"{name}: {exc.strerror}", file=sys.stderr)
        return 1
    if flag == "-c":
        target, result = _output_name(os.fspath(name), ".ah"), compress(data)
    else:
        try:
            result = decompress(data)
        except ValueError as exc:
            print(f"{name}: {exc}", file=sys.stderr)
            return 1
        target = _output_name(os.fspath(name), ".restore")
    try:
        Path(target).write_bytes(result)
    except OSError as exc:
        print(f"{target}: {exc.strerror}", file=sys.stderr)
        return 1
    elapsed = int(time.time()) - start
    print(f"\nExecution time: +/- {elapsed}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())