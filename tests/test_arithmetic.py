import io

import pytest

from piedpiper.arith_model import FrequencyTable
from piedpiper.arithmetic import (
    IntervalCoder,
    compress_file,
    compress_main,
    decompress_main,
    read_table,
)
from piedpiper.bitio import BitWriter


def _table(data):
    table = FrequencyTable()
    for byte in data:
        table.add(byte)
    table.scale()
    return table


def test_interval_stays_valid():
    data = b"abracadabra, \xfe\x80 arithmetic coding"
    coder = IntervalCoder(_table(data), BitWriter(io.BytesIO()))
    for byte in data:
        coder.encode_symbol(byte)
        assert 0 <= coder.low <= coder.high < 1 << 16


def test_single_symbol_keeps_full_interval():
    stream = io.BytesIO()
    coder = IntervalCoder(_table(b"aaaa"), BitWriter(stream))
    for byte in b"aaaa":
        coder.encode_symbol(byte)
    assert coder.low == 0
    assert coder.high == (1 << 16) - 1
    assert stream.getvalue() == b""


def test_symbol_without_probability_raises():
    coder = IntervalCoder(_table(b"aaa"), BitWriter(io.BytesIO()))
    with pytest.raises(ValueError):
        coder.encode_symbol(ord("b"))
    with pytest.raises(ValueError):
        coder.encode_symbol(300)


def test_compressed_file_carries_its_table(tmp_path):
    data = b"mississippi river banks" * 20
    source = tmp_path / "plain.txt"
    source.write_bytes(data)
    target = compress_file(source, tmp_path / "packed.bin")
    restored = read_table(target)
    expected = _table(data)
    assert restored.scaled == expected.scaled
    assert restored.upper == expected.upper


def test_compression_is_deterministic(tmp_path):
    source = tmp_path / "plain.txt"
    source.write_bytes(bytes(range(256)) * 3)
    first = compress_file(source, tmp_path / "one.bin").read_bytes()
    second = compress_file(source, tmp_path / "two.bin").read_bytes()
    assert first == second
    assert len(first) > 0


def test_empty_file_has_empty_table(tmp_path):
    source = tmp_path / "empty.txt"
    source.write_bytes(b"")
    table = read_table(compress_file(source, tmp_path / "empty.bin"))
    assert table.total == 0


def test_truncated_file_raises(tmp_path):
    source = tmp_path / "plain.txt"
    source.write_bytes(b"abcdefgh")
    target = compress_file(source, tmp_path / "packed.bin")
    target.write_bytes(target.read_bytes()[:2])
    with pytest.raises(ValueError):
        read_table(target)


def test_compress_main_rejects_wrong_arguments(capsys):
    assert compress_main(["only-one"]) == 1
    assert "Error :: Invalid inputs." in capsys.readouterr().out


def test_compress_main_writes_output(tmp_path):
    source = tmp_path / "plain.txt"
    source.write_bytes(b"some text to pack")
    target = tmp_path / "packed.bin"
    assert compress_main([str(source), str(target)]) == 0
    assert read_table(target).total == len(b"some text to pack")


def test_decompress_main_prints_ranges(tmp_path, capsys):
    source = tmp_path / "plain.txt"
    source.write_bytes(b"banana")
    packed = compress_file(source, tmp_path / "packed.bin")
    assert decompress_main([str(packed), str(tmp_path / "out.txt")]) == 0
    lines = capsys.readouterr().out.splitlines()
    table = read_table(packed)
    symbol = ord("n")
    assert f"{symbol}\t{table.lower[symbol]}\t{table.upper[symbol]}" in lines
    assert len(lines) == 256