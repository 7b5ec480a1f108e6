"""Static Huffman coding: frequency tree, code table and decoding trie."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence

SYMBOLS = 256


@dataclass(eq=False)
class HuffmanNode:
    """A node of the Huffman tree; leaves carry a symbol."""

    symbol: int | None
    frequency: int
    left: HuffmanNode | None = None
    right: HuffmanNode | None = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


class MinHeap:
    """Binary min-heap of nodes ordered by frequency."""

    def __init__(self) -> None:
        self._items: list[HuffmanNode] = []

    def __len__(self) -> int:
        return len(self._items)

    def push(self, node: HuffmanNode) -> None:
        """Insert ``node`` and restore the heap order upwards."""
        items = self._items
        items.append(node)
        index = len(items) - 1
        while index > 0:
            parent = (index - 1) // 2
            if items[index].frequency < items[parent].frequency:
                items[index], items[parent] = items[parent], items[index]
                index = parent
            else:
                break

    def pop(self) -> HuffmanNode:
        """Remove and return the node with the smallest frequency."""
        items = self._items
        if not items:
            raise IndexError("pop from an empty heap")
        top = items[0]
        last = items.pop()
        if items:
            items[0] = last
            self._sift_down(0)
        return top

    def _sift_down(self, index: int) -> None:
        items = self._items
        size = len(items)
        while True:
            left_index = 2 * index + 1
            if left_index >= size:
                return
            right_index = left_index + 1
            current = items[index].frequency
            left = items[left_index].frequency
            if right_index >= size:
                target = left_index if left < current else None
            else:
                right = items[right_index].frequency
                if left < current and right < current:
                    target = left_index if left < right else right_index
                elif left < current:
                    target = left_index
                elif right < current:
                    target = right_index
                else:
                    target = None
            if target is None:
                return
            items[index], items[target] = items[target], items[index]
            index = target


def build_tree(frequencies: Mapping[int, int] | Sequence[int]) -> HuffmanNode | None:
    """Build the Huffman tree for symbol frequencies; None if all are zero."""
    if isinstance(frequencies, Mapping):
        items = frequencies.items()
    else:
        items = enumerate(frequencies)
    heap = MinHeap()
    for symbol, count in sorted(items):
        if not 0 <= symbol < SYMBOLS:
            raise ValueError(f"symbol out of range: {symbol}")
        if count > 0:
            heap.push(HuffmanNode(symbol, count))
    if not heap:
        return None
    while len(heap) > 1:
        smallest = heap.pop()
        next_smallest = heap.pop()
        heap.push(
            HuffmanNode(
                None,
                smallest.frequency + next_smallest.frequency,
                smallest,
                next_smallest,
            )
        )
    return heap.pop()


def form_codes(tree: HuffmanNode | None) -> dict[int, str]:
    """Map each leaf symbol to its bit string, '0' for left and '1' for right.

    A tree made of a single leaf gives that symbol the code '0'.
    """
    if tree is None:
        return {}
    if tree.is_leaf:
        return {tree.symbol: "0"}
    codes: dict[int, str] = {}
    stack: list[tuple[HuffmanNode, str]] = [(tree, "")]
    while stack:
        node, code = stack.pop()
        if node.is_leaf:
            codes[node.symbol] = code
            continue
        if node.right is not None:
            stack.append((node.right, code + "1"))
        if node.left is not None:
            stack.append((node.left, code + "0"))
    return dict(sorted(codes.items()))


@dataclass(eq=False)
class _TrieNode:
    symbol: int | None = None
    children: list[_TrieNode | None] = field(default_factory=lambda: [None, None])


class CodeTrie:
    """Binary trie of codes used to turn bits back into symbols."""

    def __init__(self) -> None:
        self._root = _TrieNode()

    def insert(self, symbol: int, code: str) -> None:
        """Add the code for ``symbol``."""
        if not 0 <= symbol < SYMBOLS:
            raise ValueError(f"symbol out of range: {symbol}")
        node = self._root
        for bit in code:
            if bit not in "01":
                raise ValueError(f"invalid bit in code: {bit!r}")
            index = int(bit)
            child = node.children[index]
            if child is None:
                child = _TrieNode()
                node.children[index] = child
            node = child
        node.symbol = symbol

    def decode_bits(self, bits: Iterable[int | str]) -> bytes:
        """Decode a sequence of bits; an unfinished trailing code is dropped."""
        out = bytearray()
        node = self._root
        for bit in bits:
            child = node.children[int(bit)]
            if child is None:
                raise ValueError("bit sequence matches no code")
            if child.symbol is not None:
                out.append(child.symbol)
                node = self._root
            else:
                node = child
        return bytes(out)