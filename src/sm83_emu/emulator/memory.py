"""
Memory Bus for the SM83 Emulator
================================

Flat byte-addressable store backing the CPU.

Memory Map:
    $0000-$FFFF  Single flat array (no banking, no ROM/RAM/VRAM split)

Region-specific behaviour (ROM write protection, banking, memory-mapped
I/O) belongs to external collaborators layered in front of this class.

Every access is bounds-checked against the allocated store. An address
outside ``[0, size)`` raises OutOfRangeAddressError; nothing is wrapped.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import logging
from typing import Optional

from ..errors import OutOfRangeAddressError

logger = logging.getLogger(__name__)


class Memory:
    """
    Flat memory bus with read/write access by address.

    The store is allocated once at construction and never resized.

    Attributes:
        size: Number of addressable bytes

    Example:
        >>> mem = Memory()
        >>> mem.write(0x0000, 0x80)
        >>> mem.read(0x0000)
        128
    """

    # Full 16-bit address space
    MIN_SIZE = 0x10000

    def __init__(self, size: int = MIN_SIZE, data: Optional[bytes] = None):
        """
        Initialize memory.

        Args:
            size: Store size in bytes (at least 64KB)
            data: Optional initial image, copied to address 0

        Raises:
            ValueError: If size is below 64KB
            OutOfRangeAddressError: If data does not fit in the store
        """
        if size < self.MIN_SIZE:
            raise ValueError(
                f"memory size must be at least {self.MIN_SIZE:#x} bytes, got {size:#x}"
            )
        self._data = bytearray(size)
        if data:
            self.load(0x0000, data)

    @property
    def size(self) -> int:
        """Size of the backing store in bytes."""
        return len(self._data)

    def _check(self, address: int) -> None:
        if not 0 <= address < len(self._data):
            raise OutOfRangeAddressError(address, len(self._data))

    def read(self, address: int) -> int:
        """
        Read byte from memory.

        Args:
            address: Byte address

        Returns:
            Byte value at address

        Raises:
            OutOfRangeAddressError: If address is outside the store
        """
        self._check(address)
        return self._data[address]

    def write(self, address: int, value: int) -> None:
        """
        Write byte to memory.

        Args:
            address: Byte address
            value: Byte value (masked to 8 bits)

        Raises:
            OutOfRangeAddressError: If address is outside the store
        """
        self._check(address)
        self._data[address] = value & 0xFF

    def read_word(self, address: int) -> int:
        """Read 16-bit word (little-endian: low byte at address)."""
        lo = self.read(address)
        hi = self.read(address + 1)
        return (hi << 8) | lo

    def write_word(self, address: int, value: int) -> None:
        """Write 16-bit word (little-endian: low byte at address)."""
        # Check both bytes first so a failed write leaves memory untouched
        self._check(address)
        self._check(address + 1)
        self._data[address] = value & 0xFF
        self._data[address + 1] = (value >> 8) & 0xFF

    def read_bytes(self, address: int, count: int) -> bytes:
        """
        Read a block of bytes.

        Args:
            address: Starting address
            count: Number of bytes

        Returns:
            The bytes in ``[address, address + count)``
        """
        if count <= 0:
            return b""
        self._check(address)
        self._check(address + count - 1)
        return bytes(self._data[address:address + count])

    def load(self, address: int, data: bytes) -> None:
        """
        Copy a block of bytes into memory.

        The whole range is checked before any byte is written.

        Args:
            address: Starting address
            data: Bytes to copy

        Raises:
            OutOfRangeAddressError: If any byte would land outside the store
        """
        if not data:
            return
        self._check(address)
        self._check(address + len(data) - 1)
        self._data[address:address + len(data)] = data
        logger.debug(f"Loaded {len(data)} bytes at ${address:04X}")

    def clear(self) -> None:
        """Zero the whole store."""
        self._data[:] = bytes(len(self._data))

    def __len__(self) -> int:
        return len(self._data)
