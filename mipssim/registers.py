"""The 32-entry general-purpose register file."""

from __future__ import annotations

REGISTER_COUNT = 32

REGISTER_NAMES = (
    "zero", "at", "v0", "v1", "a0", "a1", "a2", "a3",
    "t0", "t1", "t2", "t3", "t4", "t5", "t6", "t7",
    "s0", "s1", "s2", "s3", "s4", "s5", "s6", "s7",
    "t8", "t9", "k0", "k1", "gp", "sp", "fp", "ra",
)

# Returned by RegisterFile.write when the write is discarded ($zero or out of range).
DISCARDED = -(2**31)

_WORD_MASK = 0xFFFFFFFF


def _to_signed32(value: int) -> int:
    return ((value + 2**31) % 2**32) - 2**31


def binary_word(value: int) -> str:
    """Return the 32-bit two's complement bit pattern of ``value``."""
    return format(value & _WORD_MASK, "032b")


class RegisterFile:
    """Thirty-two signed 32-bit registers; register 0 always reads zero."""

    def __init__(self) -> None:
        self._values = [0] * REGISTER_COUNT

    def read(self, reg_num: int) -> int:
        """Return the value held in register ``reg_num``."""
        if not 0 <= reg_num < REGISTER_COUNT:
            raise IndexError("Register index out of range (0-31)")
        return self._values[reg_num]

    def write(self, reg_num: int, value: int) -> int:
        """Store ``value`` and return it, or return DISCARDED for $zero or a bad index."""
        if not 0 < reg_num < REGISTER_COUNT:
            return DISCARDED
        stored = _to_signed32(value)
        self._values[reg_num] = stored
        return stored

    def format_state(self) -> str:
        """Return a table of every register's name, value and bit pattern."""
        lines = [
            "Register File State:",
            f"{'Name':<10}{'Value':<15}{'Binary Value':<15}",
        ]
        lines.extend(
            f"{name:<10}{value:<15}{binary_word(value):<15}"
            for name, value in zip(REGISTER_NAMES, self._values)
        )
        return "\n".join(lines) + "\n"