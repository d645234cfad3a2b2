import pytest

from mipssim.registers import DISCARDED, REGISTER_NAMES, RegisterFile, binary_word


def test_fresh_registers_are_zero():
    regs = RegisterFile()
    assert [regs.read(i) for i in range(32)] == [0] * 32


def test_write_then_read_round_trip():
    regs = RegisterFile()
    assert regs.write(8, 42) == 42
    assert regs.read(8) == 42


def test_zero_register_is_immutable():
    regs = RegisterFile()
    assert regs.write(0, 5) == DISCARDED
    assert regs.read(0) == 0


@pytest.mark.parametrize("index", [-1, 32, 100])
def test_write_out_of_range_is_discarded(index):
    regs = RegisterFile()
    assert regs.write(index, 7) == DISCARDED


@pytest.mark.parametrize("index", [-1, 32])
def test_read_out_of_range_raises(index):
    regs = RegisterFile()
    with pytest.raises(IndexError, match="Register index out of range"):
        regs.read(index)


def test_values_wrap_to_signed_32_bits():
    regs = RegisterFile()
    assert regs.write(1, 2**31) == -(2**31)
    assert regs.read(1) == -(2**31)


def test_binary_word_patterns():
    assert binary_word(0) == "0" * 32
    assert binary_word(-1) == "1" * 32
    assert binary_word(5) == "0" * 29 + "101"


@pytest.mark.parametrize("value", [0, 1, 12345, 2**31 - 1])
def test_binary_word_round_trip(value):
    bits = binary_word(value)
    assert len(bits) == 32
    assert int(bits, 2) == value


def test_format_state_lists_every_register():
    regs = RegisterFile()
    regs.write(8, 3)
    lines = regs.format_state().splitlines()
    assert lines[0] == "Register File State:"
    assert len(lines) == 34
    assert [line.split()[0] for line in lines[2:]] == list(REGISTER_NAMES)
    t0_fields = lines[2 + 8].split()
    assert t0_fields[1] == "3"
    assert t0_fields[2] == binary_word(3)