"""Control signals derived from an instruction's opcode."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ControlSignals:
    """Datapath control lines for one instruction."""

    reg_write: bool = False
    mem_read: bool = False
    mem_write: bool = False
    alu_src: bool = False
    mem_to_reg: bool = False
    alu_op: str = ""

    def __str__(self) -> str:
        return (
            f"RegWrite={int(self.reg_write)}"
            f", MemRead={int(self.mem_read)}"
            f", MemWrite={int(self.mem_write)}"
            f", ALUSrc={int(self.alu_src)}"
            f", MemToReg={int(self.mem_to_reg)}"
            f", ALUOp={self.alu_op}"
        )


_R_TYPE = ("ADD", "SUB", "MUL", "AND", "OR", "SLL", "SRL")

_SIGNALS: dict[str, ControlSignals] = {
    **{op: ControlSignals(reg_write=True, alu_op=op) for op in _R_TYPE},
    "ADDI": ControlSignals(reg_write=True, alu_src=True, alu_op="ADD"),
    "LW": ControlSignals(
        reg_write=True, mem_read=True, alu_src=True, mem_to_reg=True, alu_op="ADD"
    ),
    "SW": ControlSignals(mem_write=True, alu_src=True, alu_op="ADD"),
    "BEQ": ControlSignals(alu_op="SUB"),
    "J": ControlSignals(),
    "NOP": ControlSignals(),
}


def generate_signals(opcode: str) -> ControlSignals:
    """Return the control signals for ``opcode``; raise ValueError if it is unknown."""
    try:
        return _SIGNALS[opcode]
    except KeyError:
        raise ValueError(f"Unknown opcode: {opcode}") from None