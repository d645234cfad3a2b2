"""Command-line entry point: parse an assembly file and run it."""

from __future__ import annotations

import re
import sys
from typing import NamedTuple, Sequence, TextIO

from .alu import ALU
from .memory import Memory
from .parser import Instruction, Parser
from .pipeline import Pipeline
from .registers import RegisterFile

OUTPUT_FILENAME = "MIPS_Output.txt"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class MachineState(NamedTuple):
    """Register file and memory after a run."""

    registers: RegisterFile
    memory: Memory


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def run(
    instructions: Sequence[Instruction], debug: bool = False, out: TextIO | None = None
) -> MachineState:
    """Execute ``instructions`` and write the final register and memory state to ``out``."""
    out = sys.stdout if out is None else out
    registers = RegisterFile()
    memory = Memory()
    pipeline = Pipeline(registers, ALU(registers), memory, debug, out)

    pc = 0
    i = 0
    while i < len(instructions):
        pipeline.fetch(instructions[i], pc)
        pipeline.decode()
        if not pipeline.is_label():
            pipeline.execute()
            if pipeline.is_jump():
                if instructions[i].opcode == "J":
                    i = instructions[i].rd
                if instructions[i].opcode == "BEQ":
                    i = instructions[i].rd
            else:
                signals = pipeline.memory_access()
                pipeline.write_back()
                if debug:
                    out.write(pipeline.format_state() + "\n\n")
                    out.write(f"{signals}\n\n")
                    out.write(registers.format_state() + "\n")
                    out.write(memory.format_state() + "\n")
        i += 1

    out.write("\n")
    out.write(registers.format_state())
    out.write("\n")
    out.write(memory.format_state())
    return MachineState(registers, memory)


def main(argv: Sequence[str] | None = None) -> int:
    """Run ``filename debug`` from the command line; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        print("Usage: ")
        print("\tmipssim filename debug(true/false)")
        return 1

    filename, debug_flag = args
    debug = bool(_atoi(debug_flag))

    parser = Parser()
    try:
        instructions = parser.parse_file(filename)
    except OSError:
        print(f"Failed to open file: {filename}", file=sys.stderr)
        instructions = []
    except ValueError as error:
        print(f"Parser error: {error}", file=sys.stderr)
        return 1

    with open(OUTPUT_FILENAME, "w", encoding="utf-8"):
        try:
            run(instructions, debug, sys.stdout)
        except IndexError as error:
            print(f"Runtime error: {error}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())