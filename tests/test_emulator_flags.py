"""
Flag Model Unit Tests
=====================

Tests for the condition flags:
- Bit positions inside F
- Packing/unpacking between booleans and the F byte
- Synchronization with AF through the CPU

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import itertools

import pytest
from sm83_emu.emulator import SM83, Flags, FlagState, FLAG_MASK, Memory


ALL_COMBINATIONS = list(itertools.product([False, True], repeat=4))


@pytest.fixture
def cpu():
    """CPU on an empty 64KB memory."""
    return SM83(Memory())


# =============================================================================
# Bit Layout
# =============================================================================

class TestLayout:
    """Test flag bit positions."""

    def test_bit_positions(self):
        assert Flags.Z == 0x80
        assert Flags.N == 0x40
        assert Flags.H == 0x20
        assert Flags.C == 0x10

    def test_mask_is_high_nibble(self):
        assert FLAG_MASK == 0xF0


# =============================================================================
# FlagState Packing
# =============================================================================

class TestFlagState:
    """Test boolean <-> byte conversion."""

    def test_default_clear(self):
        assert FlagState().to_byte() == 0x00

    @pytest.mark.parametrize("z,n,h,c", ALL_COMBINATIONS)
    def test_to_byte(self, z, n, h, c):
        """Each boolean lands on its own bit, low nibble zero."""
        value = FlagState(z, n, h, c).to_byte()
        assert bool(value & 0x80) == z
        assert bool(value & 0x40) == n
        assert bool(value & 0x20) == h
        assert bool(value & 0x10) == c
        assert value & 0x0F == 0

    @pytest.mark.parametrize("z,n,h,c", ALL_COMBINATIONS)
    def test_round_trip(self, z, n, h, c):
        state = FlagState(z, n, h, c)
        assert FlagState.from_byte(state.to_byte()) == state

    def test_from_byte_ignores_low_nibble(self):
        assert FlagState.from_byte(0x0F) == FlagState()
        assert FlagState.from_byte(0xFF) == FlagState(True, True, True, True)

    def test_load_byte_in_place(self):
        state = FlagState(z=True)
        state.load_byte(0x30)
        assert state == FlagState(h=True, c=True)

    def test_str(self):
        assert str(FlagState(z=True, c=True)) == "Z--C"


# =============================================================================
# CPU Synchronization
# =============================================================================

class TestSync:
    """Test sync_to_register / sync_from_register."""

    @pytest.mark.parametrize("z,n,h,c", ALL_COMBINATIONS)
    def test_register_round_trip(self, cpu, z, n, h, c):
        """Booleans -> F -> booleans reproduces the originals."""
        cpu.flag_z, cpu.flag_n, cpu.flag_h, cpu.flag_c = z, n, h, c
        cpu.sync_to_register()
        assert cpu.regs.f & 0x0F == 0

        cpu.flag_z = cpu.flag_n = cpu.flag_h = cpu.flag_c = False
        cpu.sync_from_register()
        assert (cpu.flag_z, cpu.flag_n, cpu.flag_h, cpu.flag_c) == (z, n, h, c)

    def test_sync_to_register_preserves_a(self, cpu):
        cpu.regs.a = 0xAB
        cpu.flag_z = True
        cpu.flag_c = True
        cpu.sync_to_register()
        assert cpu.regs.af == 0xAB90

    def test_sync_to_register_clears_low_nibble(self, cpu):
        """Stray low bits written directly to F are cleared by a sync."""
        cpu.regs.f = 0x0F
        cpu.sync_to_register()
        assert cpu.regs.f == 0x00

    def test_sync_from_register(self, cpu):
        cpu.regs.af = 0x12A0
        cpu.sync_from_register()
        assert cpu.flag_z is True
        assert cpu.flag_n is False
        assert cpu.flag_h is True
        assert cpu.flag_c is False
        assert cpu.regs.a == 0x12

    def test_flag_properties_coerce_to_bool(self, cpu):
        cpu.flag_c = 1
        assert cpu.flag_c is True
        assert cpu.flags.c is True
