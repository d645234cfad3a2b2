import io

import pytest

from mipssim.alu import ALU
from mipssim.control import generate_signals
from mipssim.memory import Memory
from mipssim.parser import Instruction, Parser
from mipssim.pipeline import Pipeline
from mipssim.registers import RegisterFile


def make(debug=False):
    registers = RegisterFile()
    memory = Memory()
    out = io.StringIO()
    pipeline = Pipeline(registers, ALU(registers), memory, debug, out)
    return pipeline, registers, memory, out


def step(pipeline, instruction, pc=0):
    pipeline.fetch(instruction, pc)
    pipeline.decode()
    pipeline.execute()
    signals = pipeline.memory_access()
    pipeline.write_back()
    return signals


def parse(*lines):
    return Parser().parse_lines(list(lines))


def test_addi_writes_register():
    pipeline, registers, _, _ = make()
    (instr,) = parse("addi $t0, $zero, 5")
    step(pipeline, instr)
    assert registers.read(8) == 5


def test_add_uses_register_contents():
    pipeline, registers, _, _ = make()
    for instr in parse("addi $t0, $zero, 5", "addi $t1, $zero, 7", "add $t2, $t0, $t1"):
        step(pipeline, instr)
    assert registers.read(10) == registers.read(8) + registers.read(9)


def test_memory_access_returns_signals_for_opcode():
    pipeline, _, _, _ = make()
    (instr,) = parse("sub $t0, $t1, $t2")
    signals = step(pipeline, instr)
    assert signals == generate_signals("SUB")


def test_write_to_zero_register_is_ignored():
    pipeline, registers, _, _ = make()
    step(pipeline, Instruction("ADDI", rs=0, rd=0, immediate=9))
    assert registers.read(0) == 0


def test_label_is_flagged_on_decode():
    pipeline, _, _, _ = make()
    instructions = parse("main:")
    pipeline.fetch(instructions[0], 0)
    pipeline.decode()
    assert pipeline.is_label() is True


def test_instruction_is_not_label():
    pipeline, _, _, _ = make()
    pipeline.fetch(Instruction("NOP"), 0)
    pipeline.decode()
    assert pipeline.is_label() is False


def test_jump_sets_flag():
    pipeline, _, _, _ = make()
    instructions = parse("j end", "end:")
    pipeline.fetch(instructions[0], 0)
    pipeline.decode()
    pipeline.execute()
    assert pipeline.is_jump() is True


def test_beq_same_operands_jumps():
    pipeline, _, _, _ = make()
    instructions = parse("beq $t0, $t0, done", "done:")
    pipeline.fetch(instructions[0], 0)
    pipeline.decode()
    pipeline.execute()
    assert pipeline.is_jump() is True


def test_beq_different_operands_does_not_jump():
    pipeline, _, _, _ = make()
    instructions = parse("beq $t0, $t1, done", "done:")
    pipeline.fetch(instructions[0], 0)
    pipeline.decode()
    pipeline.execute()
    assert pipeline.is_jump() is False


def test_store_word_uses_operand_numbers():
    pipeline, _, memory, _ = make()
    (instr,) = parse("sw $5, 0($7)")
    step(pipeline, instr)
    assert memory.load_word(7) == 5


def test_load_out_of_bounds_raises():
    pipeline, _, _, _ = make()
    pipeline.fetch(Instruction("LW", rs=5000, rt=4), 0)
    pipeline.decode()
    pipeline.execute()
    with pytest.raises(IndexError):
        pipeline.memory_access()


def test_debug_output_traces_stages():
    pipeline, _, _, out = make(debug=True)
    (instr,) = parse("addi $t0, $zero, 5")
    step(pipeline, instr)
    text = out.getvalue()
    assert "Decoding instruction: ADDI" in text
    assert "Executing ADDI: 5" in text
    assert "WriteBack: Register 8 = 5" in text


def test_debug_reports_no_register_write():
    pipeline, _, _, out = make(debug=True)
    step(pipeline, Instruction("NOP"))
    assert "WriteBack: no register write" in out.getvalue()


def test_quiet_pipeline_writes_nothing():
    pipeline, _, _, out = make()
    (instr,) = parse("addi $t0, $zero, 5")
    step(pipeline, instr)
    assert out.getvalue() == ""


def test_format_state_shows_latches():
    pipeline, _, _, _ = make()
    step(pipeline, Instruction("ADDI", rs=0, rd=8, immediate=3), pc=7)
    state = pipeline.format_state()
    lines = state.splitlines()
    assert lines[0] == 'IF/ID: instr="ADDI" pc=7'
    assert lines[1] == "ID/EX: opcode=ADDI rsVal=0 rtVal=0 rd=8 imm=3"
    assert lines[3] == "MEM/WB: writeData=3 rd=8"