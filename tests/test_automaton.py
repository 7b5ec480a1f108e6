import pytest

from piedpiper.automaton import CellularGenerator, evolve_row, seed_row


def test_seed_row_has_requested_width():
    assert len(seed_row(b"password", 20)) == 20


def test_seed_row_prefix_is_stable():
    assert seed_row(b"password", 16)[:8] == seed_row(b"password", 8)


def test_seed_row_first_byte_depends_on_first_character():
    assert seed_row(b"password", 4)[0] == seed_row(b"placeholder", 4)[0]


def test_seed_row_chain_structure():
    row = seed_row(b"password", 8)
    # characters 2 and 3 are both "s", so their contributions match
    assert row[2] ^ row[1] == row[3] ^ row[2]


def test_seed_row_rejects_empty_password():
    with pytest.raises(ValueError):
        seed_row(b"", 4)


def test_evolve_single_cell_ring():
    assert evolve_row(b"\x01") == b"\x83"


def test_evolve_zero_row_stays_zero():
    assert evolve_row(bytes(5)) == bytes(5)


def test_evolve_is_linear():
    first = b"\x12\x34\x56"
    second = b"\xf0\x0f\xaa"
    combined = bytes(a ^ b for a, b in zip(first, second))
    expected = bytes(
        a ^ b for a, b in zip(evolve_row(first), evolve_row(second))
    )
    assert evolve_row(combined) == expected


def test_evolve_commutes_with_byte_rotation():
    row = b"\x01\x80\x7e\x33"
    evolved = evolve_row(row)
    assert evolve_row(row[1:] + row[:1]) == evolved[1:] + evolved[:1]


def test_first_byte_reads_bit_zero_of_first_rows():
    password = b"password"
    rows = [seed_row(password, len(password))]
    for _ in range(7):
        rows.append(evolve_row(rows[-1]))
    value = CellularGenerator(password).next_byte()
    for index, row in enumerate(rows):
        assert (value >> index) & 1 == row[0] & 1


def test_xor_round_trip():
    password = "password"
    data = bytes(range(256)) * 2
    encrypted = CellularGenerator(password).xor(data)
    assert len(encrypted) == len(data)
    assert CellularGenerator(password).xor(encrypted) == data


def test_stream_is_deterministic_across_reseed():
    first = CellularGenerator(b"secret", 1, cell_budget=16)
    second = CellularGenerator(b"secret", 1, cell_budget=16)
    stream = [first.next_byte() for _ in range(64)]
    assert stream == [second.next_byte() for _ in range(64)]
    assert all(0 <= value <= 255 for value in stream)


def test_width_is_at_least_password_length():
    generator = CellularGenerator(b"password", 3)
    assert generator.width == 8
    assert CellularGenerator(b"password", 20).width == 20


def test_different_passwords_give_different_streams():
    data = bytes(64)
    first = CellularGenerator(b"password").xor(data)
    second = CellularGenerator(b"secret").xor(data)
    assert len(first) == len(second) == 64
    assert first != second


def test_budget_too_small_is_rejected():
    with pytest.raises(ValueError):
        CellularGenerator(b"password", 8, cell_budget=4)


def test_empty_password_is_rejected():
    with pytest.raises(ValueError):
        CellularGenerator(b"")