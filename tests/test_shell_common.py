from piedpiper.shell_common import KEY_WIDTH, make_generator, mask, trim


class _Fixed:
    def __init__(self, value):
        self.value = value

    def next_byte(self):
        return self.value


class _Sequence:
    def __init__(self, values):
        self._values = iter(values)

    def next_byte(self):
        return next(self._values)


def test_trim_strips_trailing_whitespace_and_newline():
    assert trim("  ls -l \n") == "ls -l"


def test_trim_strips_tabs():
    assert trim("\t\techo\t") == "echo"


def test_trim_keeps_leading_newline():
    assert trim("\nabc ") == "\nabc"


def test_trim_of_blank_is_empty():
    assert trim(" \t \n") == ""


def test_mask_with_zero_key_is_identity():
    assert mask(b"ab", _Fixed(0)) == b"ab"


def test_mask_replaces_zero_result():
    assert mask(b"\x20", _Fixed(0x20)) == b"A"


def test_mask_replaces_0xad_result():
    assert mask(b"\x00", _Fixed(0xAD)) == b"A"


def test_mask_xors_bytes():
    assert mask(b"\x01", _Fixed(0x03)) == b"\x02"


def test_mask_round_trip_with_same_keys():
    keys = [1, 2, 3, 4, 5]
    assert mask(mask(b"hello", _Sequence(keys)), _Sequence(keys)) == b"hello"


def test_mask_consumes_one_key_byte_per_data_byte():
    masked = make_generator()
    plain = make_generator()
    mask(b"abc", masked)
    plain.xor(b"abc")
    assert masked.next_byte() == plain.next_byte()


def test_generator_xor_round_trips():
    data = bytes(range(64))
    assert bytes(make_generator().xor(make_generator().xor(data))) == data


def test_generator_width():
    assert make_generator().width == KEY_WIDTH