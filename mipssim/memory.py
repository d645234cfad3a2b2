"""Word-addressed data memory."""

from __future__ import annotations

from .registers import binary_word

DEFAULT_SIZE = 1024

_WORD_MASK = 0xFFFFFFFF


class Memory:
    """A fixed number of 32-bit words, all initially zero."""

    def __init__(self, size: int = DEFAULT_SIZE) -> None:
        if size < 0:
            raise ValueError("Memory size must not be negative")
        self._words = [0] * size

    def __len__(self) -> int:
        return len(self._words)

    def _in_bounds(self, address: int) -> bool:
        return 0 <= address < len(self._words)

    def load_word(self, address: int) -> int:
        """Return the signed word stored at ``address``."""
        if not self._in_bounds(address):
            raise IndexError("Memory read out of bounds")
        word = self._words[address]
        return word - 2**32 if word >= 2**31 else word

    def store_word(self, address: int, value: int) -> None:
        """Store the low 32 bits of ``value`` at ``address``."""
        if not self._in_bounds(address):
            raise IndexError("Memory write out of bounds")
        self._words[address] = value & _WORD_MASK

    def format_state(self) -> str:
        """Return a table of the non-zero locations."""
        lines = [
            "Memory State: (only non-zero locations)",
            f"{'Index':<15}{'Mem location':<15}{'Value':<15}{'Binary Value':<15}",
        ]
        lines.extend(
            f"{index:<15}{4 * index:<15}{word:<15}{binary_word(word):<15}"
            for index, word in enumerate(self._words)
            if word
        )
        return "\n".join(lines) + "\n"