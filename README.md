# mipssim

A small simulator for a subset of MIPS assembly. Each instruction is taken in
turn through fetch, decode, execute, memory access and write-back stages. When
the program ends, the simulator prints the register file (name, value and
32-bit pattern of every register) and the non-zero memory words.

## Assembly accepted

- R-type: `ADD`, `SUB`, `MUL`, `AND`, `OR`, `SLL`, `SRL` (`op rd, rs, rt`)
- Immediate: `ADDI rd, rs, imm`
- Memory: `LW rt, offset(base)`, `SW rt, offset(base)`
- Control flow: `BEQ rs, rt, label`, `J label`, `NOP`
- Labels: any other word on its own line, with or without a trailing `:`

Registers may be written as `$t0`, `t0`, `$8` or `8`. Comments start with `#`
or `//`. Opcodes and labels are case-insensitive; if a label appears twice,
the first one counts. A jump or a taken branch continues with the line after
the label.

Register `$zero` always reads 0; writes to it are discarded. Register values
are signed 32-bit and wrap on overflow. Memory holds 1024 words.

## Installation

```
pip install .
```

## Usage

```
mips-sim program.asm 0
```

The second argument is the debug flag, read as an integer: a non-zero value
turns debugging on, and anything that does not start with a number (such as
`true`) counts as 0. In debug mode the simulator also prints, for each
instruction that reaches write-back, the pipeline latches, the control
signals, the register file and memory.

The command also creates an empty file `MIPS_Output.txt` in the current
directory. It exits with status 1 on wrong arguments, on a malformed line or
unknown label, and on an out-of-range memory or register access. A file that
cannot be opened is reported and treated as an empty program.

An example program:

```
main:
    addi $t0, $zero, 5
    addi $t1, $zero, 7
    add  $t2, $t0, $t1
```

## Library use

```python
from mipssim.parser import Parser
from mipssim.cli import run

instructions = Parser().parse_lines(["addi $t0, $zero, 5"])
state = run(instructions, False, None)   # prints the final state to stdout
state.registers.read(8)                  # 5
```

`run(instructions, debug, out)` writes to `out` (standard output when `None`)
and returns a `MachineState` holding the `registers` and `memory`.

The building blocks are available on their own:

- `mipssim.registers`: `RegisterFile` (`read`, `write`, `format_state`) and
  `binary_word`
- `mipssim.memory`: `Memory` (`load_word`, `store_word`, `format_state`)
- `mipssim.alu`: `ALU` (`add`, `addi`, `sub`, `mul`, `and_`, `or_`, `sll`, `srl`)
- `mipssim.control`: `generate_signals` and `ControlSignals`
- `mipssim.parser`: `Parser` (`parse_file`, `parse_lines`, `label_index`,
  `labels`), `Instruction`, `strip_comments`, `register_number`, `ParseError`
- `mipssim.pipeline`: `Pipeline`

Malformed lines raise `ParseError`; unknown labels and registers raise
`ValueError`; out-of-range memory addresses and register reads raise
`IndexError`.

## What it does not do

The datapath is a simplified teaching model, not a full MIPS machine:

- Instructions run one at a time; there is no overlap between stages, no
  hazards and no forwarding.
- `BEQ` compares the register numbers written in the instruction, not the
  registers' contents, so it is taken only when both operands name the same
  register.
- `LW` and `SW` use the base register's number as the word address and ignore
  the offset. `SW` stores the number of its `rt` register, not its contents.
  `LW` writes the loaded word back to register 0, so it has no visible effect.
- The shift amount of `SLL` and `SRL` is the third operand taken as a number;
  `SRL` keeps the sign.
- There is no assembler output, no system calls and no I/O beyond printing the
  final state; `MIPS_Output.txt` is left empty.

## Running the tests

```
pip install .[test]
pytest
```