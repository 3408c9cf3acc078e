"""
SM83 Emu - Execution Core for the SM83 (LR35902) CPU
====================================================

This package emulates the instruction-execution core of an 8-bit SM83
CPU: register file, condition flags, flat memory bus, and a table-driven
fetch-decode-execute loop.

Main Components
---------------
- **emulator**: CPU, registers, flags, memory and the Emulator orchestrator
- **errors**: Exception hierarchy (SM83Error and subclasses)

Quick Start
-----------
    >>> from sm83_emu import Emulator
    >>> emu = Emulator()
    >>> emu.inject_program(bytes([0x80]))
    >>> event = emu.step()

Loading images from storage, video, audio, input, interrupts and timers
are left to callers that drive step() and read the CPU state.
"""

__version__ = "0.1.0"
__author__ = "Hugo José Pinto & Contributors"

from .errors import (
    SM83Error,
    EmulatorError,
    UnimplementedOpcodeError,
    OutOfRangeAddressError,
)
from .emulator import Emulator, EmulatorConfig, SM83, Memory

__all__ = [
    "__version__",
    # Errors
    "SM83Error",
    "EmulatorError",
    "UnimplementedOpcodeError",
    "OutOfRangeAddressError",
    # Emulator
    "Emulator",
    "EmulatorConfig",
    "SM83",
    "Memory",
]
