import pytest

from piedpiper.arith32 import END_OF_FILE, ProbabilityModel, encode, main


def test_fresh_model_reserves_end_of_file():
    model = ProbabilityModel()
    model.build()
    assert model.range_of(END_OF_FILE) == (0, 1, 1)
    assert model.denominator == 1


def test_ranges_before_build_are_empty():
    assert ProbabilityModel().range_of(ord("A")) == (0, 0, 1)


def test_update_widens_symbol_range():
    model = ProbabilityModel()
    model.update(ord("A"))
    model.update(ord("A"))
    model.build()
    low, high, denominator = model.range_of(ord("A"))
    assert high - low == 2
    assert denominator == model.denominator


def test_ranges_are_contiguous_and_cover_denominator():
    model = ProbabilityModel()
    for byte in b"hello, world \x00\x80":
        model.update(byte)
    model.build()
    previous_high = 0
    for symbol in range(256):
        low, high, denominator = model.range_of(symbol)
        assert low == previous_high
        assert denominator == model.denominator
        previous_high = high
    assert previous_high == model.denominator


def test_out_of_range_symbol_is_rejected():
    model = ProbabilityModel()
    with pytest.raises(ValueError):
        model.update(256)
    with pytest.raises(ValueError):
        model.range_of(-1)


def test_encoding_empty_input_gives_nothing():
    assert encode(b"") == b""


def test_encoding_emits_at_most_32_bits_per_symbol():
    data = b"arithmetic coding with wrapping arithmetic \xff\x01" * 4
    result = encode(data)
    assert len(result) <= 4 * len(data)
    assert encode(data) == result


def test_main_rejects_wrong_arguments(capsys):
    assert main(["only-one"]) == 0
    assert "Invalid command." in capsys.readouterr().out


def test_main_writes_encoding(tmp_path, capsys):
    data = b"pack this text, please"
    source = tmp_path / "plain.txt"
    source.write_bytes(data)
    target = tmp_path / "packed.bin"
    assert main([str(source), str(target)]) == 0
    assert target.read_bytes() == encode(data)
    assert "Compression complete" in capsys.readouterr().out