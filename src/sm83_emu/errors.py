"""
SM83 Emulator Error Hierarchy
=============================

This module defines the exception hierarchy for the SM83 execution core.
All exceptions inherit from SM83Error, allowing callers to catch every
emulator-related error with a single except clause if desired.

Exception Hierarchy
-------------------
SM83Error (base)
└── EmulatorError (execution-related)
    ├── UnimplementedOpcodeError - fetched byte has no registered handler
    └── OutOfRangeAddressError - memory access outside the backing store

Both concrete errors are terminal for the current instruction stream. The
core never retries or masks them; a caller that wants skip-and-continue
behaviour (e.g. a disassembler) layers that policy on top.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""


# =============================================================================
# Base Exception Class
# =============================================================================

class SM83Error(Exception):
    """
    Base exception for all SM83 emulator errors.

    All exceptions in the package inherit from this class, allowing callers
    to catch every emulator error with a single except clause:

        try:
            cpu.step()
        except SM83Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Execution Exceptions
# =============================================================================

class EmulatorError(SM83Error):
    """Base exception for errors raised while executing instructions."""
    pass


class UnimplementedOpcodeError(EmulatorError):
    """
    Fetched opcode has no handler in the dispatch table.

    Raised by the CPU before any register or memory is touched, so the
    visible state is exactly what it was before the failed step. The
    address is the location the opcode was fetched from, i.e. the value
    of PC before the fetch increment.

    Attributes:
        opcode: The offending byte (0-255)
        address: Address the byte was fetched from (0-65535)
    """

    def __init__(self, opcode: int, address: int):
        self.opcode = opcode
        self.address = address
        super().__init__(f"unimplemented opcode ${opcode:02X} at ${address:04X}")


class OutOfRangeAddressError(EmulatorError):
    """
    Memory access outside the backing store.

    Indicates a programming or image error upstream. Addresses are never
    wrapped or clamped to make the access succeed.

    Attributes:
        address: The requested address
        size: Size of the backing store in bytes
    """

    def __init__(self, address: int, size: int):
        self.address = address
        self.size = size
        super().__init__(
            f"address {address:#06x} out of range for {size:#x}-byte memory"
        )
