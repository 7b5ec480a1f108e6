"""Compressed file format for static Huffman coding.

Layout, little-endian: an 8-byte count of payload bytes, a 4-byte count of
codes, a 4-byte count of padding bits in the last payload byte (1..8), then
for each code its symbol byte, its length byte and its '0'/'1' characters,
then the payload bits padded with zeros.
"""

from __future__ import annotations

import struct
import sys
from collections import Counter
from pathlib import Path

from piedpiper.huffman import CodeTrie, build_tree, form_codes

HEADER = struct.Struct("<qii")
HELP_HINT = "Use -h or --help flag for help."


def compress(data: bytes) -> bytes:
    """Compress ``data`` into the static Huffman file format."""
    data = bytes(data)
    codes = form_codes(build_tree(Counter(data)))
    bits = "".join(codes[byte] for byte in data)
    ignore = 8 - len(bits) % 8
    bits += "0" * ignore
    payload_size = len(bits) // 8
    out = bytearray(HEADER.pack(payload_size, len(codes), ignore))
    for symbol, code in codes.items():
        if len(code) > 255:
            raise ValueError("code too long for the file format")
        out += bytes((symbol, len(code))) + code.encode("ascii")
    out += int(bits, 2).to_bytes(payload_size, "big")
    return bytes(out)


def decompress(data: bytes) -> bytes:
    """Restore the bytes compressed by :func:`compress`."""
    data = bytes(data)
    if len(data) < HEADER.size:
        raise ValueError("compressed data is shorter than its header")
    payload_size, code_count, ignore = HEADER.unpack_from(data)
    if payload_size < 1 or code_count < 0 or not 0 <= ignore <= 8:
        raise ValueError("corrupt header")
    position = HEADER.size
    trie = CodeTrie()
    for _ in range(code_count):
        if position + 2 > len(data):
            raise ValueError("code table is truncated")
        symbol, length = data[position], data[position + 1]
        position += 2
        code = data[position:position + length]
        if len(code) != length:
            raise ValueError("code table is truncated")
        position += length
        trie.insert(symbol, code.decode("ascii", errors="replace"))
    payload = data[position:position + payload_size]
    if len(payload) != payload_size:
        raise ValueError("payload is truncated")
    bits = "".join(format(byte, "08b") for byte in payload)
    return trie.decode_bits(bits[:len(bits) - ignore])


def _check_arguments(args: list[str], usage: str) -> int | None:
    if not args:
        print(HELP_HINT)
        return 1
    if len(args) == 1:
        if args[0] in ("-h", "--help"):
            print("Compressor text files using static Huffman algorithm\n")
            print(usage)
            return 0
        print(HELP_HINT)
        return 1
    if len(args) > 2:
        print("Too many arguments! I don't know what to do..")
        print(HELP_HINT)
        return 1
    return None


def compress_main(argv: list[str] | None = None) -> int:
    """Compress the input file into the output file."""
    args = sys.argv[1:] if argv is None else list(argv)
    status = _check_arguments(
        args, "Usage: huffman-compress <path_to_input_file> <path_to_the_output_file>"
    )
    if status is not None:
        return status
    input_path, output_path = args
    print(f"Input file given: {input_path}")
    print("\nReading from input file...")
    try:
        data = Path(input_path).read_bytes()
    except OSError:
        print("Error: The input file could not be read.")
        return 1
    print("Input file successfully opened.")
    print("Generating codes...")
    result = compress(data)
    print("Writing out compressed file...")
    try:
        Path(output_path).write_bytes(result)
    except OSError:
        print("The program was not able to open the output file...")
        return 1
    print("Successfully compressed!")
    print(f"Output File: {output_path}")
    print("Good Bye.")
    return 0


def decompress_main(argv: list[str] | None = None) -> int:
    """Decompress the input file into the output file."""
    args = sys.argv[1:] if argv is None else list(argv)
    status = _check_arguments(
        args,
        "Usage: huffman-decompress <path_to_compressed_file> <path_to_the_output_file>",
    )
    if status is not None:
        return status
    input_path, output_path = args
    try:
        data = Path(input_path).read_bytes()
    except OSError:
        print("Unable to open the input compressed file")
        return 1
    print(f"Input file given: {input_path}\n")
    print("Reading header from input file.")
    try:
        result = decompress(data)
    except ValueError as exc:
        print(f"Error: {exc}")
        return 1
    print("Writing out to output file...")
    try:
        Path(output_path).write_bytes(result)
    except OSError:
        print("There was error in creating an output file at given path.")
        return 1
    print("File succesfully decompressed!")
    print(f"Output file: {output_path}")
    print("Good Bye")
    return 0


if __name__ == "__main__":
    sys.exit(compress_main())