# piedpiper

A collection of small compression, hashing and masking tools, usable both as
a Python library and from the command line. They are meant for study and
experiment. None of the ciphers or hashes here should protect real secrets.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## What is inside

| Module | Purpose |
| --- | --- |
| `piedpiper.automaton` | Pseudo-random byte stream from a rule-150 cellular automaton seeded by a password (`CellularGenerator`, `seed_row`, `evolve_row`) |
| `piedpiper.ca_cipher` | XOR file cipher on top of that stream |
| `piedpiper.rle` | Run-length encoding into (count, byte) pairs (`encode`) |
| `piedpiper.pphash` | A SHA-512-style hash (`sha512_variant`) and a rule-30 automaton variant of it (`automaton_hash`) |
| `piedpiper.adaptive_huffman` | Adaptive Huffman coding (`AdaptiveTree`, `compress`, `decompress`) |
| `piedpiper.huffman`, `piedpiper.huffman_files` | Static Huffman coding (`build_tree`, `form_codes`, `CodeTrie`) and its file format |
| `piedpiper.bwt` | Burrows–Wheeler transform in blocks of 100000 bytes |
| `piedpiper.bitio` | `BitWriter` and `BitReader` over binary streams |
| `piedpiper.arith_model`, `piedpiper.arithmetic` | Static arithmetic compression with a 16-bit frequency model |
| `piedpiper.arith32` | 32-bit arithmetic encoder |
| `piedpiper.shell_common`, `piedpiper.shell_client`, `piedpiper.shell_server` | A toy remote shell whose traffic is masked with the automaton stream |

## Library use

```python
from piedpiper import adaptive_huffman, bwt, huffman_files, pphash, rle
from piedpiper.automaton import CellularGenerator

packed = adaptive_huffman.compress(b"abracadabra")
assert adaptive_huffman.decompress(packed) == b"abracadabra"

packed = huffman_files.compress(b"mississippi")
assert huffman_files.decompress(packed) == b"mississippi"

key, transformed = bwt.encode(b"banana")
assert bwt.decode(key, transformed) == b"banana"

runs = rle.encode(b"aaabcc")  # b"\x03a\x01b\x02c"

digest = pphash.format_digest(pphash.sha512_variant("some text"))

password = "password"
stream = CellularGenerator(password, len(password), 1024)
masked = stream.xor(b"hello")
```

XOR with a fresh generator built from the same password, width and cell
budget restores the data.

## Command line

### Cellular-automaton file cipher

```
piedpiper-ca-cipher notes.txt password
piedpiper-ca-cipher notes.txt password 32
```

Writes `notes_encrypted.txt`. Running the command on a file whose name ends
in `_encrypted` (before the extension) with the same password writes the
`_decrypted` counterpart. The optional third argument sets the width of the
automaton row.

### Hash

```
piedpiper-hash "some text"
piedpiper-hash --automaton "some text"
```

Prints the digest as eight 64-bit words in lower-case hex, concatenated
without padding. `--automaton` uses the rule-30 mixing. Input is limited to
1024 bytes.

### Adaptive Huffman

```
piedpiper-adaptive-huffman -c report.txt
piedpiper-adaptive-huffman -d report.ah
```

`-c` writes `report.ah`; `-d` writes `report.restore`. The output name is the
input name up to its first dot, plus the new suffix.

### Static Huffman

```
piedpiper-huffman-compress input.txt input.huf
piedpiper-huffman-decompress input.huf restored.txt
piedpiper-huffman-compress --help
```

### Burrows–Wheeler transform

```
piedpiper-bwt data.txt
piedpiper-bwt data_encrypted.txt
```

The first writes `data_encrypted.txt`, the second restores it as
`data_decrypted.txt`.

### Arithmetic coding

```
piedpiper-arith-compress input.txt output.bin
piedpiper-arith-decompress output.bin restored.txt
piedpiper-arith32 input.txt output.bin
```

`piedpiper-arith-compress` writes the frequency header followed by the coded
bits. `piedpiper-arith-decompress` reads the frequency header of a compressed
file and prints each symbol's range as `symbol low high`; it creates the
output file but leaves it empty. `piedpiper-arith32` writes the output of the
32-bit encoder.

### Remote shell

```
piedpiper-shell-server
piedpiper-shell-server --host 127.0.0.1 --port 8000
piedpiper-shell-client 127.0.0.1 8000
```

The server listens on port 8000 by default and runs each received command
through the system shell, sending back at most 5120 bytes of its output;
each client is served in its own thread. The client asks for a name, then
reads commands at a prompt; `exit` closes the session. Traffic is only
masked with a fixed-password automaton stream, so run this on trusted
machines only.

## What the package does not do

- There is no block cipher such as AES; the only encryption is the XOR
  masking with the cellular-automaton stream.
- Arithmetic-coded files cannot be turned back into the original data:
  `piedpiper-arith-decompress` only reads and prints the frequency table,
  and `piedpiper.arith32` has an encoder but no decoder.
- Masking in the remote shell replaces bytes that come out as 0x00 or 0xAD
  with `A`, so it is not always reversible.