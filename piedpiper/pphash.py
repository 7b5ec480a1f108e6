"""Two 512-bit hashes built on a SHA-512-like round structure.

``sha512_variant`` mixes with modular addition; ``automaton_hash`` mixes
with the rule-30 cellular automaton.  Both use the same message schedule
and state rotation.
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import Callable, Sequence

MASK64 = (1 << 64) - 1
BLOCK_BYTES = 1024
ROUNDS = 80

INITIAL_STATE = (
    0x6A09E667F3BCC908, 0xBB67AE8584CAA73B, 0x3C6EF372FE94F82B, 0xA54FF53A5F1D36F1,
    0x510E527FADE682D1, 0x9B05688C2B3E6C1F, 0x1F83D9ABFB41BD6B, 0x5BE0CD19137E2179,
)

ROUND_CONSTANTS = (
    0x428A2F98D728AE22, 0x7137449123EF65CD, 0xB5C0FBCFEC4D3B2F, 0xE9B5DBA58189DBBC, 0x3956C25BF348B538,
    0x59F111F1B605D019, 0x923F82A4AF194F9B, 0xAB1C5ED5DA6D8118, 0xD807AA98A3030242, 0x12835B0145706FBE,
    0x243185BE4EE4B28C, 0x550C7DC3D5FFB4E2, 0x72BE5D74F27B896F, 0x80DEB1FE3B1696B1, 0x9BDC06A725C71235,
    0xC19BF174CF692694, 0xE49B69C19EF14AD2, 0xEFBE4786384F25E3, 0x0FC19DC68B8CD5B5, 0x240CA1CC77AC9C65,
    0x2DE92C6F592B0275, 0x4A7484AA6EA6E483, 0x5CB0A9DCBD41FBD4, 0x76F988DA831153B5, 0x983E5152EE66DFAB,
    0xA831C66D2DB43210, 0xB00327C898FB213F, 0xBF597FC7BEEF0EE4, 0xC6E00BF33DA88FC2, 0xD5A79147930AA725,
    0x06CA6351E003826F, 0x142929670A0E6E70, 0x27B70A8546D22FFC, 0x2E1B21385C26C926, 0x4D2C6DFC5AC42AED,
    0x53380D139D95B3DF, 0x650A73548BAF63DE, 0x766A0ABB3C77B2A8, 0x81C2C92E47EDAEE6, 0x92722C851482353B,
    0xA2BFE8A14CF10364, 0xA81A664BBC423001, 0xC24B8B70D0F89791, 0xC76C51A30654BE30, 0xD192E819D6EF5218,
    0xD69906245565A910, 0xF40E35855771202A, 0x106AA07032BBD1B8, 0x19A4C116B8D2D0C8, 0x1E376C085141AB53,
    0x2748774CDF8EEB99, 0x34B0BCB5E19B48A8, 0x391C0CB3C5C95A63, 0x4ED8AA4AE3418ACB, 0x5B9CCA4F7763E373,
    0x682E6FF3D6B2B8A3, 0x748F82EE5DEFB2FC, 0x78A5636F43172F60, 0x84C87814A1F0AB72, 0x8CC702081A6439EC,
    0x90BEFFFA23631E28, 0xA4506CEBDE82BDE9, 0xBEF9A3F7B2C67915, 0xC67178F2E372532B, 0xCA273ECEEA26619C,
    0xD186B8C721C0C207, 0xEADA7DD6CDE0EB1E, 0xF57D4F7FEE6ED178, 0x06F067AA72176FBA, 0x0A637DC5A2C898A6,
    0x113F9804BEF90DAE, 0x1B710B35131C471B, 0x28DB77F523047D84, 0x32CAAB7B40C72493, 0x3C9EBE0A15C9BEBC,
    0x431D67C49C100D4C, 0x4CC5D4BECB3E42B6, 0x597F299CFC657E2A, 0x5FCB6FAB3AD6FAEC, 0x6C44198C4A475817,
)


def _as_bytes(text: str | bytes) -> bytes:
    if isinstance(text, str):
        return text.encode("utf-8")
    return bytes(text)


def _add(a: int, b: int) -> int:
    """Wrapping 64-bit addition, then reduced modulo 2**64 - 1."""
    return ((a + b) & MASK64) % MASK64


def rotate_right(value: int, bits: int) -> int:
    """Rotate a 64-bit word right by ``bits`` (1..63)."""
    value &= MASK64
    return ((value >> bits) | (value << (64 - bits))) & MASK64


def majority(a: int, b: int, c: int) -> int:
    return (a & b) ^ (b & c) ^ (c & a)


def choose(a: int, b: int, c: int) -> int:
    """Bits of ``b`` where ``a`` is set, bits of ``c`` elsewhere."""
    return ((a & b) ^ (~a & c)) & MASK64


def rule30(a: int, b: int, c: int) -> int:
    """One rule-30 step per bit, with ``a`` as left, ``b`` centre, ``c`` right."""
    return (a ^ (b | c)) & MASK64


def _sigma0(value: int) -> int:
    return rotate_right(value, 28) ^ rotate_right(value, 34) ^ rotate_right(value, 39)


def _sigma1(value: int) -> int:
    return rotate_right(value, 14) ^ rotate_right(value, 18) ^ rotate_right(value, 41)


def _signed_byte(byte: int) -> int:
    # bytes from the command line are sign-extended before being merged
    return byte | 0xFFFFFFFFFFFFFF00 if byte & 0x80 else byte


def message_schedule(text: str | bytes) -> list[int]:
    """Build the 80-word schedule for ``text`` (at most 1024 bytes)."""
    data = _as_bytes(text)
    if len(data) > BLOCK_BYTES:
        raise ValueError(f"input longer than {BLOCK_BYTES} bytes")
    padded = data.ljust(BLOCK_BYTES, b"\0")
    words = []
    for start in range(0, ROUNDS * 8, 8):
        word = 0
        for byte in padded[start:start + 8]:
            word = ((word << 8) & MASK64) | _signed_byte(byte)
        words.append(word)
    words[15] = len(data)
    for i in range(16, ROUNDS - 1):
        earlier, recent = words[i - 15], words[i - 2]
        s0 = rotate_right(earlier, 1) ^ rotate_right(earlier, 8) ^ rotate_right(earlier, 7)
        s1 = rotate_right(recent, 19) ^ rotate_right(recent, 61) ^ rotate_right(recent, 6)
        words[i] = _add(_add(words[i - 16], s0), _add(words[i - 7], s1))
    return words


_Mixer = Callable[[Sequence[int], int, int], "tuple[int, int]"]


def _compress(text: str | bytes, mix: _Mixer) -> list[int]:
    state = list(INITIAL_STATE)
    for word, constant in zip(message_schedule(text), ROUND_CONSTANTS):
        _, _, _, a3, a4, a5, a6, _ = state
        head, fifth = mix(state, word, constant)
        state = [head, a3, a3, a3, fifth, a4, a5, a6]
    return [_add(value, initial) for value, initial in zip(state, INITIAL_STATE)]


def _additive_round(state: Sequence[int], word: int, constant: int) -> tuple[int, int]:
    a0, a1, a2, a3, a4, a5, a6, a7 = state
    mixer_1 = _add(majority(a0, a1, a2), _sigma0(a0))
    mixer_2 = _add(
        _add(choose(a4, a5, a6), _sigma1(a4)),
        _add(_add(a7, word), constant),
    )
    return _add(mixer_1, mixer_2), _add(mixer_2, a3)


def _automaton_round(state: Sequence[int], word: int, constant: int) -> tuple[int, int]:
    a0, a1, a2, a3, a4, a5, a6, a7 = state
    mixer_2 = rule30(choose(a4, a5, a6), _sigma1(a4), rule30(a7, word, constant))
    head = rule30(majority(a0, a1, a2), _sigma0(a0), mixer_2)
    return head, _add(mixer_2, a3)


def sha512_variant(text: str | bytes) -> list[int]:
    """Hash ``text`` with additive mixing; returns eight 64-bit words."""
    return _compress(text, _additive_round)


def automaton_hash(text: str | bytes) -> list[int]:
    """Hash ``text`` with rule-30 mixing; returns eight 64-bit words."""
    return _compress(text, _automaton_round)


def format_digest(words: Sequence[int]) -> str:
    """Concatenate the words in unpadded lower-case hex."""
    return "".join(f"{word:x}" for word in words)


def main(argv: list[str] | None = None) -> int:
    """Print the digest of the text given on the command line."""
    parser = argparse.ArgumentParser(prog="pphash", description="Hash a string.")
    parser.add_argument("text", help="text to hash (at most 1024 bytes)")
    parser.add_argument(
        "--automaton",
        action="store_true",
        help="mix with the rule-30 automaton instead of addition",
    )
    args = parser.parse_args(argv)
    digest = automaton_hash if args.automaton else sha512_variant
    try:
        words = digest(os.fsencode(args.text))
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(format_digest(words))
    return 0


if __name__ == "__main__":
    sys.exit(main())