"""Arithmetic and logic unit that operates directly on the register file."""

from __future__ import annotations

from .registers import RegisterFile


class ALU:
    """Each operation reads its sources, writes the destination and returns the write result."""

    def __init__(self, registers: RegisterFile) -> None:
        self._registers = registers

    def _store(self, dest: int, value: int) -> int:
        return self._registers.write(dest, value)

    def add(self, dest: int, src1: int, src2: int) -> int:
        """dest = src1 + src2"""
        regs = self._registers
        return self._store(dest, regs.read(src1) + regs.read(src2))

    def addi(self, dest: int, src: int, imm: int) -> int:
        """dest = src + imm"""
        return self._store(dest, self._registers.read(src) + imm)

    def sub(self, dest: int, src1: int, src2: int) -> int:
        """dest = src1 - src2"""
        regs = self._registers
        return self._store(dest, regs.read(src1) - regs.read(src2))

    def mul(self, dest: int, src1: int, src2: int) -> int:
        """dest = src1 * src2"""
        regs = self._registers
        return self._store(dest, regs.read(src1) * regs.read(src2))

    def and_(self, dest: int, src1: int, src2: int) -> int:
        """dest = src1 & src2"""
        regs = self._registers
        return self._store(dest, regs.read(src1) & regs.read(src2))

    def or_(self, dest: int, src1: int, src2: int) -> int:
        """dest = src1 | src2"""
        regs = self._registers
        return self._store(dest, regs.read(src1) | regs.read(src2))

    def sll(self, dest: int, src: int, shamt: int) -> int:
        """dest = src << shamt"""
        return self._store(dest, self._registers.read(src) << shamt)

    def srl(self, dest: int, src: int, shamt: int) -> int:
        """dest = src >> shamt (sign-preserving)"""
        return self._store(dest, self._registers.read(src) >> shamt)