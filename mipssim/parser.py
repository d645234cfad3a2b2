"""Assembly-source parser producing a flat list of instructions."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Iterable

from .registers import REGISTER_NAMES

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_REGISTER_NUMBERS = {name: number for number, name in enumerate(REGISTER_NAMES)}
_WHITESPACE = " \t\n\r\v\f"
_INT_PREFIX = re.compile(r"[+-]?\d+")

_R_TYPE = frozenset({"ADD", "SUB", "AND", "MUL", "OR", "SLL", "SRL"})


class ParseError(ValueError):
    """Raised for a malformed line of assembly."""


@dataclass(frozen=True)
class Instruction:
    """One parsed line: an instruction or a label."""

    opcode: str
    rs: int = 0
    rt: int = 0
    rd: int = 0
    immediate: int = 0
    address: int = 0
    is_label: bool = False

    def describe(self) -> str:
        """Return a multi-line human-readable summary."""
        return (
            f"{self.opcode}\n"
            f"RS: {self.rs} RT: {self.rt} RD: {self.rd}\n"
            f"Immediate: {self.immediate}\n"
            f"Address: {self.address}\n"
            f"Is Label?: {'yes' if self.is_label else 'no'}\n"
        )


class _Stream:
    """Whitespace-separated extraction with the fail-and-stay-failed semantics of a text stream."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self.failed = False

    def _skip_whitespace(self) -> None:
        while self._pos < len(self._text) and self._text[self._pos] in _WHITESPACE:
            self._pos += 1

    def word(self) -> str | None:
        if self.failed:
            return None
        self._skip_whitespace()
        if self._pos >= len(self._text):
            self.failed = True
            return None
        start = self._pos
        while self._pos < len(self._text) and self._text[self._pos] not in _WHITESPACE:
            self._pos += 1
        return self._text[start:self._pos]

    def integer(self, current: int = 0) -> int:
        if self.failed:
            return current
        self._skip_whitespace()
        match = _INT_PREFIX.match(self._text, self._pos)
        if match is None:
            self.failed = True
            return 0
        self._pos = match.end()
        value = int(match.group())
        if value > INT_MAX:
            self.failed = True
            return INT_MAX
        if value < INT_MIN:
            self.failed = True
            return INT_MIN
        return value


def _trim(text: str) -> str:
    return text.strip(" \t")


def _erase_all(text: str, char: str) -> str:
    # Each occurrence at position p removes p + 1 characters starting there.
    while char in text:
        pos = text.index(char)
        text = text[:pos] + text[2 * pos + 1:]
    return text


def _strip_comma(text: str) -> str:
    return text[:-1] if text.endswith(",") else text


def _leading_int(text: str) -> int:
    match = _INT_PREFIX.match(text.lstrip(_WHITESPACE))
    if match is None:
        raise ValueError(f"no integer in {text!r}")
    value = int(match.group())
    if not INT_MIN <= value <= INT_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def strip_comments(line: str) -> str:
    """Drop '#' and '//' comments and trim spaces and tabs."""
    cleaned = line.split("#", 1)[0]
    cleaned = cleaned.split("//", 1)[0]
    return _trim(cleaned)


def register_number(name: str) -> int:
    """Return the number of a register given as '$t0', 't0', '$8' or '8'."""
    text = _erase_all(name, "$")
    if text in _REGISTER_NUMBERS:
        return _REGISTER_NUMBERS[text]
    try:
        return _leading_int(text)
    except ValueError:
        raise ValueError(f"Given register is not a proper register: {text}") from None


class Parser:
    """Parses assembly and remembers the labels it has seen."""

    def __init__(self) -> None:
        self._labels: dict[str, int] = {}

    @property
    def labels(self) -> dict[str, int]:
        """A copy of the label table: upper-case name to instruction index."""
        return dict(self._labels)

    def parse_file(self, filename) -> list[Instruction]:
        """Parse the assembly file at ``filename``."""
        with open(filename, encoding="utf-8") as source:
            return self.parse_lines(source)

    def parse_lines(self, lines: Iterable[str]) -> list[Instruction]:
        """Parse lines of assembly, resolving jump and branch targets."""
        instructions: list[Instruction] = []
        jumps: list[tuple[int, str]] = []
        branches: list[tuple[int, str]] = []

        for raw in lines:
            cleaned = strip_comments(raw.rstrip("\n"))
            if not cleaned:
                continue
            index = len(instructions)
            stream = _Stream(cleaned)
            opcode = (stream.word() or "").upper()
            fields: dict[str, int] = {}

            if opcode == "ADDI":
                dest = stream.word()
                if dest is None:
                    raise ParseError(f"missing rt for ADDI in line: {cleaned}")
                src = stream.word() or ""
                fields["immediate"] = stream.integer()
                fields["rd"] = register_number(_strip_comma(dest))
                fields["rs"] = register_number(_strip_comma(src))

            elif opcode in _R_TYPE:
                operands = [stream.word() for _ in range(3)]
                if None in operands:
                    raise ParseError(f"missing registers for {opcode} in line: {cleaned}")
                rd, rs, rt = (register_number(_strip_comma(op)) for op in operands)
                fields.update(rd=rd, rs=rs, rt=rt)

            elif opcode in ("LW", "SW"):
                target, mem_operand = stream.word(), stream.word()
                if target is None or mem_operand is None:
                    raise ParseError(f"missing operands for {opcode} in line: {cleaned}")
                fields["rt"] = register_number(_strip_comma(target))
                left, right = mem_operand.find("("), mem_operand.find(")")
                if left < 0 or right < 0 or right <= left:
                    raise ParseError(f"malformed memory operand in line: {cleaned}")
                try:
                    fields["immediate"] = _leading_int(mem_operand[:left])
                except ValueError:
                    fields["immediate"] = 0
                fields["rs"] = register_number(mem_operand[left + 1:right])

            elif opcode == "BEQ":
                operands = [stream.word() for _ in range(3)]
                if None in operands:
                    raise ParseError(f"missing operands for BEQ in line: {cleaned}")
                first, second, label = operands
                fields["rs"] = register_number(_strip_comma(first))
                fields["rt"] = register_number(_strip_comma(second))
                branches.append((index, label))

            elif opcode == "J":
                label = stream.word()
                if label is None:
                    raise ParseError(f"missing operands for J in line: {cleaned}")
                jumps.append((index, label))

            elif opcode != "NOP":
                opcode = _erase_all(opcode, ":")
                fields["rd"] = stream.integer()
                fields["rs"] = stream.integer()
                fields["rt"] = stream.integer()
                fields["is_label"] = True
                self._labels.setdefault(opcode, index)

            instructions.append(Instruction(opcode, **fields))

        for index, label in (*jumps, *branches):
            instructions[index] = replace(instructions[index], rd=self.label_index(label))

        return instructions

    def label_index(self, label: str) -> int:
        """Return the instruction index of ``label`` (case-insensitive)."""
        try:
            return self._labels[label.upper()]
        except KeyError:
            raise ValueError(f"Invalid label: {label}") from None