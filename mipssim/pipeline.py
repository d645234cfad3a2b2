"""Five-stage datapath: fetch, decode, execute, memory access and write-back."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Callable, TextIO

from .alu import ALU
from .control import ControlSignals, generate_signals
from .memory import Memory
from .parser import Instruction
from .registers import RegisterFile

_DECODABLE = frozenset(
    {"ADD", "ADDI", "SUB", "MUL", "AND", "OR", "SLL", "SRL", "LW", "SW", "BEQ", "J", "NOP"}
)


@dataclass
class _IfId:
    opcode: str = ""
    rs: int = 0
    rt: int = 0
    rd: int = 0
    immediate: int = 0
    address: int = 0
    is_label: bool = False
    pc: int = 0


@dataclass
class _IdEx:
    opcode: str = ""
    rs_val: int = 0
    rt_val: int = 0
    rd: int = 0
    immediate: int = 0
    signals: ControlSignals = field(default_factory=ControlSignals)


@dataclass
class _ExMem:
    alu_result: int = 0
    rt_val: int = 0
    rd: int = 0
    signals: ControlSignals = field(default_factory=ControlSignals)


@dataclass
class _MemWb:
    write_data: int = 0
    rd: int = 0
    signals: ControlSignals = field(default_factory=ControlSignals)


class Pipeline:
    """Moves one instruction at a time through the stage latches."""

    def __init__(
        self,
        registers: RegisterFile,
        alu: ALU,
        memory: Memory,
        debug: bool = False,
        out: TextIO | None = None,
    ) -> None:
        self._registers = registers
        self._alu = alu
        self._memory = memory
        self._debug = debug
        self._out = sys.stdout if out is None else out
        self._if_id = _IfId()
        self._id_ex = _IdEx()
        self._ex_mem = _ExMem()
        self._mem_wb = _MemWb()
        self._jump = False
        self._label = False
        self._register_ops: dict[str, Callable[[int, int, int], int]] = {
            "ADD": alu.add,
            "SUB": alu.sub,
            "MUL": alu.mul,
            "AND": alu.and_,
            "OR": alu.or_,
            "SLL": alu.sll,
            "SRL": alu.srl,
        }

    def _log(self, text: str) -> None:
        if self._debug:
            self._out.write(text + "\n")

    def fetch(self, instruction: Instruction, pc: int) -> None:
        """Latch ``instruction`` into the IF/ID register."""
        self._if_id = _IfId(
            opcode=instruction.opcode,
            rs=instruction.rs,
            rt=instruction.rt,
            rd=instruction.rd,
            immediate=instruction.immediate,
            address=instruction.address,
            is_label=instruction.is_label,
            pc=pc,
        )

    def decode(self) -> None:
        """Fill the ID/EX register and look up control signals; flag labels."""
        self._label = False
        if_id = self._if_id
        id_ex = self._id_ex
        id_ex.opcode = if_id.opcode.split(" ", 1)[0]
        id_ex.rs_val = if_id.rs
        id_ex.rt_val = if_id.rt
        id_ex.rd = if_id.rd
        id_ex.immediate = if_id.immediate

        if id_ex.opcode not in _DECODABLE:
            self._label = True
            return
        id_ex.signals = generate_signals(id_ex.opcode)
        self._log(f"Decoding instruction: {if_id.opcode}")

    def execute(self) -> None:
        """Run the ALU operation or resolve a jump or branch."""
        self._jump = False
        id_ex = self._id_ex
        ex_mem = self._ex_mem
        ex_mem.signals = id_ex.signals
        ex_mem.rd = id_ex.rd
        ex_mem.rt_val = id_ex.rt_val

        opcode = id_ex.opcode
        if opcode in self._register_ops:
            ex_mem.alu_result = self._register_ops[opcode](
                id_ex.rd, id_ex.rs_val, id_ex.rt_val
            )
            self._log(f"Executing {opcode}: {ex_mem.alu_result}")
        elif opcode == "ADDI":
            ex_mem.alu_result = self._alu.addi(id_ex.rd, id_ex.rs_val, id_ex.immediate)
            self._log(f"Executing ADDI: {ex_mem.alu_result}")
        elif opcode in ("LW", "SW"):
            ex_mem.alu_result = id_ex.rs_val
        elif opcode == "BEQ":
            self._jump = id_ex.rs_val == id_ex.rt_val
        elif opcode == "J":
            self._jump = True

    def memory_access(self) -> ControlSignals:
        """Read or write data memory and return the signals passed to write-back."""
        ex_mem = self._ex_mem
        mem_wb = self._mem_wb
        mem_wb.signals = ex_mem.signals
        if ex_mem.signals.mem_read:
            mem_wb.write_data = self._memory.load_word(ex_mem.alu_result)
        elif ex_mem.signals.mem_write:
            self._memory.store_word(ex_mem.alu_result, ex_mem.rt_val)
            mem_wb.write_data = 0
        else:
            mem_wb.write_data = ex_mem.alu_result
        mem_wb.rd = ex_mem.rd
        return mem_wb.signals

    def write_back(self) -> None:
        """Write the result to the register file when RegWrite is set."""
        mem_wb = self._mem_wb
        if mem_wb.signals.reg_write:
            self._registers.write(mem_wb.rd, mem_wb.write_data)
            self._log(f"WriteBack: Register {mem_wb.rd} = {mem_wb.write_data}")
        else:
            self._log("WriteBack: no register write")

    def format_state(self) -> str:
        """Return the contents of every stage latch."""
        if_id, id_ex, ex_mem, mem_wb = self._if_id, self._id_ex, self._ex_mem, self._mem_wb
        return (
            f'IF/ID: instr="{if_id.opcode}" pc={if_id.pc}\n'
            f"ID/EX: opcode={id_ex.opcode} rsVal={id_ex.rs_val} rtVal={id_ex.rt_val}"
            f" rd={id_ex.rd} imm={id_ex.immediate}\n"
            f"EX/MEM: aluResult={ex_mem.alu_result} rtVal={ex_mem.rt_val} rd={ex_mem.rd}\n"
            f"MEM/WB: writeData={mem_wb.write_data} rd={mem_wb.rd}\n"
        )

    def is_jump(self) -> bool:
        """Whether the last executed instruction transfers control."""
        return self._jump

    def is_label(self) -> bool:
        """Whether the last decoded instruction was a label."""
        return self._label