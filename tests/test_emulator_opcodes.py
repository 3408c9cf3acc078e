"""
Opcode Table Unit Tests
=======================

Tests for the dispatch table:
- Instruction validation
- Registration and duplicate detection
- Contents of the default table
- ALU handler construction

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import pytest
from sm83_emu.emulator import (
    Instruction,
    OpcodeTable,
    build_default_table,
    R8_NAMES,
)


def _noop(cpu):
    pass


# =============================================================================
# Instruction Validation
# =============================================================================

class TestInstruction:
    """Test Instruction descriptor checks."""

    def test_opcode_range(self):
        with pytest.raises(ValueError, match="opcode out of range"):
            Instruction(0x100, "BAD", 4, _noop)
        with pytest.raises(ValueError, match="opcode out of range"):
            Instruction(-1, "BAD", 4, _noop)

    def test_cycles_positive(self):
        with pytest.raises(ValueError, match="cycles"):
            Instruction(0x01, "BAD", 0, _noop)


# =============================================================================
# Table Operations
# =============================================================================

class TestOpcodeTable:
    """Test registration and lookup."""

    def test_empty_table(self):
        table = OpcodeTable()
        assert len(table) == 0
        assert table.lookup(0x00) is None
        assert 0x00 not in table

    def test_register_and_lookup(self):
        table = OpcodeTable()
        instruction = Instruction(0x3C, "INC A", 4, _noop)
        table.register(instruction)
        assert table.lookup(0x3C) is instruction
        assert 0x3C in table
        assert table.implemented() == [0x3C]

    def test_duplicate_rejected(self):
        table = OpcodeTable()
        table.register(Instruction(0x00, "NOP", 4, _noop))
        with pytest.raises(ValueError, match="already registered as NOP"):
            table.register(Instruction(0x00, "OTHER", 4, _noop))

    def test_iteration(self):
        table = OpcodeTable()
        table.register_all([
            Instruction(0x10, "B", 4, _noop),
            Instruction(0x01, "A", 4, _noop),
        ])
        assert [i.mnemonic for i in table] == ["A", "B"]


# =============================================================================
# Default Table
# =============================================================================

class TestDefaultTable:
    """Test the shipped instruction set."""

    def test_implemented_set(self):
        table = build_default_table()
        assert table.implemented() == [0x00] + list(range(0x80, 0xA0))
        assert len(table) == 33

    def test_nop(self):
        nop = build_default_table().lookup(0x00)
        assert nop.mnemonic == "NOP"
        assert nop.cycles == 4

    @pytest.mark.parametrize("base,mnemonic", [
        (0x80, "ADD"),
        (0x88, "ADC"),
        (0x90, "SUB"),
        (0x98, "SBC"),
    ])
    def test_alu_groups(self, base, mnemonic):
        table = build_default_table()
        for operand, name in enumerate(R8_NAMES):
            instruction = table.lookup(base + operand)
            assert instruction.mnemonic == f"{mnemonic} A,{name}"
            assert instruction.cycles == (8 if name == "(HL)" else 4)

    def test_unimplemented_bytes(self):
        table = build_default_table()
        for opcode in (0x01, 0x7F, 0xA0, 0xCB, 0xFF):
            assert table.lookup(opcode) is None

    def test_tables_are_independent(self):
        """Extending one table does not change another."""
        first = build_default_table()
        second = build_default_table()
        first.register(Instruction(0xFF, "RST 38H", 16, _noop))
        assert 0xFF in first
        assert 0xFF not in second


# =============================================================================
# ALU Handler Construction
# =============================================================================

class TestAluHandlers:
    """ALU handlers call the operation they were built with."""

    def test_group_uses_given_operation(self):
        from sm83_emu.emulator import SM83, Memory
        from sm83_emu.emulator.opcodes import _alu_group

        calls = []

        def xor(cpu, a, b):
            calls.append((a, b))
            return a ^ b

        table = OpcodeTable()
        table.register_all(_alu_group(0xA8, "XOR", xor))
        memory = Memory()
        memory.write(0x0000, 0xA8)  # XOR A,B
        cpu = SM83(memory, table)
        cpu.regs.a = 0xF0
        cpu.regs.b = 0x3C
        cpu.step()

        assert calls == [(0xF0, 0x3C)]
        assert cpu.regs.a == 0xCC
        assert table.lookup(0xAE).mnemonic == "XOR A,(HL)"

    def test_operation_must_be_callable(self):
        """A bad operation fails when the group is built, not when run."""
        from sm83_emu.emulator.opcodes import _alu_group

        with pytest.raises(TypeError, match="XOR operation must be callable"):
            _alu_group(0xA8, "XOR", "xor8")
