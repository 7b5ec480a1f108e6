import pytest

from piedpiper.huffman import (
    CodeTrie,
    HuffmanNode,
    MinHeap,
    build_tree,
    form_codes,
)


def test_heap_pops_in_frequency_order():
    heap = MinHeap()
    for freq in [7, 3, 9, 1, 4, 4, 8]:
        heap.push(HuffmanNode(freq, freq))
    popped = [heap.pop().frequency for _ in range(len(heap))]
    assert popped == sorted(popped)
    assert len(heap) == 0


def test_pop_from_empty_heap_raises():
    with pytest.raises(IndexError):
        MinHeap().pop()


def test_build_tree_root_frequency_is_total():
    freqs = {10: 4, 20: 6, 30: 1, 40: 9}
    tree = build_tree(freqs)
    assert tree.frequency == sum(freqs.values())


def test_build_tree_accepts_sequence():
    freqs = [0] * 256
    freqs[ord("x")] = 3
    freqs[ord("y")] = 2
    tree = build_tree(freqs)
    assert tree.frequency == 5
    assert set(form_codes(tree)) == {ord("x"), ord("y")}


def test_build_tree_empty_is_none():
    assert build_tree({}) is None
    assert form_codes(None) == {}


def test_build_tree_rejects_bad_symbol():
    with pytest.raises(ValueError):
        build_tree({300: 1})


def test_worked_example_codes():
    tree = build_tree({ord("a"): 5, ord("b"): 2, ord("c"): 1})
    assert form_codes(tree) == {ord("c"): "00", ord("b"): "01", ord("a"): "1"}


def test_single_symbol_gets_one_bit():
    codes = form_codes(build_tree({65: 10}))
    assert len(codes[65]) == 1


def test_codes_are_prefix_free_and_favour_frequent():
    freqs = {i: (i * 37) % 50 + 1 for i in range(40)}
    codes = form_codes(build_tree(freqs))
    assert set(codes) == set(freqs)
    values = list(codes.values())
    for a in values:
        for b in values:
            if a is not b:
                assert not b.startswith(a)
    for x in freqs:
        for y in freqs:
            if freqs[x] > freqs[y]:
                assert len(codes[x]) <= len(codes[y])


def test_trie_decodes_encoded_bits():
    data = b"mississippi river"
    freqs = {}
    for byte in data:
        freqs[byte] = freqs.get(byte, 0) + 1
    codes = form_codes(build_tree(freqs))
    trie = CodeTrie()
    for symbol, code in codes.items():
        trie.insert(symbol, code)
    bits = "".join(codes[b] for b in data)
    assert trie.decode_bits(bits) == data
    assert trie.decode_bits([int(b) for b in bits]) == data


def test_trie_rejects_unknown_path():
    trie = CodeTrie()
    trie.insert(1, "00")
    with pytest.raises(ValueError):
        trie.decode_bits("1")


def test_trie_rejects_bad_code():
    with pytest.raises(ValueError):
        CodeTrie().insert(1, "0x")