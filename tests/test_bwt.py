import random

import pytest

from piedpiper.bwt import BLOCK_SIZE, decode, encode, main, output_path, transform_file


def test_banana_worked_example():
    assert encode(b"banana") == (3, b"nnbaaa")
    assert decode(3, b"nnbaaa") == b"banana"


@pytest.mark.parametrize(
    "block",
    [
        b"x",
        b"abab",
        b"baba",
        b"aaaaaa",
        b"mississippi",
        bytes(range(256)),
        b"\xff\x80\x00\x7f" * 5,
    ],
)
def test_round_trip(block):
    key, transformed = encode(block)
    assert 0 <= key < len(block)
    assert sorted(transformed) == sorted(block)
    assert decode(key, transformed) == block


def test_empty_block():
    assert encode(b"") == (0, b"")
    assert decode(0, b"") == b""


def test_decode_rejects_bad_key():
    with pytest.raises(ValueError):
        decode(5, b"abc")


def test_output_path_names():
    assert output_path("data.txt") == "data_encrypted.txt"
    assert output_path("data_encrypted.txt") == "data_decrypted.txt"


def test_file_round_trip_multiple_blocks(tmp_path):
    data = random.Random(7).randbytes(BLOCK_SIZE + 1234)
    source = tmp_path / "data.bin"
    source.write_bytes(data)
    encoded = transform_file(source)
    assert encoded == tmp_path / "data_encrypted.bin"
    assert len(encoded.read_bytes()) == len(data) + 2 * 4
    decoded = transform_file(encoded)
    assert decoded == tmp_path / "data_decrypted.bin"
    assert decoded.read_bytes() == data


def test_truncated_encoded_file(tmp_path):
    broken = tmp_path / "x_encrypted.bin"
    broken.write_bytes(b"\x01\x00")
    with pytest.raises(ValueError):
        transform_file(broken)


def test_directory_rejected(tmp_path):
    with pytest.raises(IsADirectoryError):
        transform_file(tmp_path)
    assert main([str(tmp_path)]) == 1


def test_main_usage():
    assert main([]) == 1


def test_main_round_trip(tmp_path):
    source = tmp_path / "note.txt"
    source.write_bytes(b"to be or not to be")
    assert main([str(source)]) == 0
    assert main([str(tmp_path / "note_encrypted.txt")]) == 0
    assert (tmp_path / "note_decrypted.txt").read_bytes() == b"to be or not to be"