"""
Memory Bus Unit Tests
=====================

Tests for the flat memory bus:
- Size and initialization
- Byte and word access
- Bounds checking (fatal, never wrapped)
- Bulk loading

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import pytest
from sm83_emu import OutOfRangeAddressError
from sm83_emu.emulator import Memory


@pytest.fixture
def mem():
    return Memory()


# =============================================================================
# Construction
# =============================================================================

class TestConstruction:
    """Test memory allocation."""

    def test_default_size(self, mem):
        """Default store covers the full 16-bit address space."""
        assert mem.size == 0x10000
        assert len(mem) == 0x10000

    def test_initialized_to_zero(self, mem):
        assert mem.read(0x0000) == 0
        assert mem.read(0xFFFF) == 0

    def test_larger_size(self):
        mem = Memory(0x20000)
        mem.write(0x1FFFF, 0x42)
        assert mem.read(0x1FFFF) == 0x42

    def test_too_small_rejected(self):
        with pytest.raises(ValueError, match="at least"):
            Memory(0x8000)

    def test_initial_data(self):
        mem = Memory(data=bytes([0x80, 0x00, 0x90]))
        assert mem.read_bytes(0, 3) == bytes([0x80, 0x00, 0x90])


# =============================================================================
# Byte Access
# =============================================================================

class TestByteAccess:
    """Test read/write."""

    def test_read_write(self, mem):
        mem.write(0xC000, 0x42)
        assert mem.read(0xC000) == 0x42

    def test_write_masks_value(self, mem):
        mem.write(0x0010, 0x1FF)
        assert mem.read(0x0010) == 0xFF

    def test_last_address(self, mem):
        mem.write(0xFFFF, 0x55)
        assert mem.read(0xFFFF) == 0x55


# =============================================================================
# Bounds Checking
# =============================================================================

class TestBounds:
    """Out-of-range access is fatal and never wraps."""

    def test_read_past_end(self, mem):
        with pytest.raises(OutOfRangeAddressError) as exc_info:
            mem.read(0x10000)
        assert exc_info.value.address == 0x10000
        assert exc_info.value.size == 0x10000

    def test_write_past_end(self, mem):
        with pytest.raises(OutOfRangeAddressError):
            mem.write(0x10000, 0x01)
        # No wraparound to address 0
        assert mem.read(0x0000) == 0

    def test_negative_address(self, mem):
        with pytest.raises(OutOfRangeAddressError):
            mem.read(-1)
        with pytest.raises(OutOfRangeAddressError):
            mem.write(-1, 0)

    def test_word_straddling_end(self, mem):
        with pytest.raises(OutOfRangeAddressError):
            mem.write_word(0xFFFF, 0x1234)
        assert mem.read(0xFFFF) == 0
        with pytest.raises(OutOfRangeAddressError):
            mem.read_word(0xFFFF)

    def test_message(self, mem):
        with pytest.raises(OutOfRangeAddressError, match="out of range"):
            mem.read(0x12345)


# =============================================================================
# Words and Blocks
# =============================================================================

class TestBlocks:
    """Test word and bulk access."""

    def test_word_little_endian(self, mem):
        mem.write_word(0x0100, 0xBEEF)
        assert mem.read(0x0100) == 0xEF
        assert mem.read(0x0101) == 0xBE
        assert mem.read_word(0x0100) == 0xBEEF

    def test_load(self, mem):
        mem.load(0x0200, bytes([1, 2, 3, 4]))
        assert mem.read_bytes(0x0200, 4) == bytes([1, 2, 3, 4])

    def test_load_out_of_range_writes_nothing(self, mem):
        """A block that does not fit is rejected before any write."""
        with pytest.raises(OutOfRangeAddressError):
            mem.load(0xFFFE, bytes([0xAA, 0xBB, 0xCC]))
        assert mem.read(0xFFFE) == 0
        assert mem.read(0xFFFF) == 0

    def test_load_empty(self, mem):
        mem.load(0x0000, b"")
        assert mem.read(0x0000) == 0

    def test_read_bytes_zero_count(self, mem):
        assert mem.read_bytes(0x0000, 0) == b""

    def test_clear(self, mem):
        mem.load(0x0000, bytes([0xFF] * 16))
        mem.clear()
        assert mem.read_bytes(0x0000, 16) == bytes(16)
        assert mem.size == 0x10000
