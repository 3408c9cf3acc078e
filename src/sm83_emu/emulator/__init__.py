"""
SM83 Emulator
=============

Instruction-execution core for the SM83 (LR35902) 8-bit CPU.

This package provides:

- **SM83 CPU**: fetch-decode-execute loop with table-driven dispatch
- **Register File**: AF/BC/DE/HL pairs with aliased 8-bit halves, PC, SP
- **Flag Model**: Z/N/H/C booleans synchronized with the packed F byte
- **Memory Bus**: flat, bounds-checked 64KB store
- **Emulator**: loading, bounded runs, breakpoints, disassembly

Quick Start
-----------

Basic usage::

    >>> from sm83_emu.emulator import Emulator
    >>> emu = Emulator()
    >>> emu.inject_program(bytes([0x80]))   # ADD A,B
    >>> emu.cpu.regs.a = 0x0F
    >>> emu.cpu.regs.b = 0x01
    >>> event = emu.step()
    >>> emu.cpu.regs.a, emu.cpu.flag_h
    (16, True)

Module Structure
----------------

- `emulator.py`: Main Emulator class (high-level API)
- `cpu.py`: SM83 CPU implementation
- `opcodes.py`: Opcode dispatch table
- `registers.py`: Register file
- `flags.py`: Condition flags
- `memory.py`: Memory bus
- `config.py`: EmulatorConfig

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

# Main entry point
from .emulator import Emulator, StopEvent, StopReason
from .config import EmulatorConfig

# CPU components
from .cpu import SM83, BusProtocol, CPUState
from .registers import Registers, REGISTERS_8, REGISTERS_16
from .flags import Flags, FlagState, FLAG_MASK

# Dispatch
from .opcodes import (
    Instruction,
    OpcodeTable,
    build_default_table,
    DEFAULT_INSTRUCTIONS,
    R8_NAMES,
)

# Memory subsystem
from .memory import Memory

__all__ = [
    # Main API
    "Emulator",
    "EmulatorConfig",
    "StopEvent",
    "StopReason",

    # CPU
    "SM83",
    "BusProtocol",
    "CPUState",
    "Registers",
    "REGISTERS_8",
    "REGISTERS_16",
    "Flags",
    "FlagState",
    "FLAG_MASK",

    # Dispatch
    "Instruction",
    "OpcodeTable",
    "build_default_table",
    "DEFAULT_INSTRUCTIONS",
    "R8_NAMES",

    # Memory
    "Memory",
]
