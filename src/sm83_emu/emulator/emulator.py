"""
SM83 Emulator - Main Orchestrator
=================================

This module provides the `Emulator` class that wires a Memory bus to an
SM83 CPU and offers a high-level API for loading and running code.

The Emulator class:
- Builds memory and CPU from an EmulatorConfig
- Loads raw bytes into memory and sets the entry point
- Supports bounded execution (step, run, run_until_pc)
- Stops on PC breakpoints through the CPU's on_instruction hook
- Offers register and memory inspection plus a one-line disassembler

Example usage:
    >>> from sm83_emu.emulator import Emulator
    >>> emu = Emulator()
    >>> emu.inject_program(bytes([0x80, 0x00]), entry_point=0x0100)
    >>> emu.cpu.regs.b = 0x01
    >>> emu.run(max_steps=2).reason
    <StopReason.MAX_STEPS: 2>

Errors raised by the CPU are logged and propagated unchanged; the
emulator never skips past a failing instruction.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Optional, Set

from ..errors import SM83Error
from .config import EmulatorConfig
from .cpu import SM83, CPUState
from .memory import Memory

logger = logging.getLogger(__name__)


class StopReason(Enum):
    """Why step()/run() returned."""
    STEP = auto()           # Single step completed
    MAX_STEPS = auto()      # Instruction budget exhausted
    BREAKPOINT = auto()     # PC reached a breakpoint


@dataclass
class StopEvent:
    """
    Information about why execution stopped.

    Attributes:
        reason: Why execution stopped
        address: PC at the stop
        steps: Instructions executed by the call
    """
    reason: StopReason
    address: int
    steps: int = 0

    def __str__(self) -> str:
        match self.reason:
            case StopReason.BREAKPOINT:
                return f"Breakpoint at ${self.address:04X}"
            case StopReason.STEP:
                return f"Step at ${self.address:04X}"
            case _:
                return f"Maximum steps reached at ${self.address:04X}"


class Emulator:
    """
    SM83 emulator with a bounded run loop.

    Attributes:
        config: The EmulatorConfig used to initialize this instance
        memory: The memory bus
        cpu: The SM83 CPU instance (accessible for low-level control)

    Example:
        >>> emu = Emulator(EmulatorConfig(entry_point=0x0100))
        >>> emu.load_bytes(bytes([0x00, 0x00]), 0x0100)
        >>> emu.add_breakpoint(0x0101)
        >>> str(emu.run())
        'Breakpoint at $0101'
    """

    def __init__(self, config: Optional[EmulatorConfig] = None):
        self.config = config or EmulatorConfig()
        self.memory = Memory(self.config.memory_size)
        self.cpu = SM83(self.memory)
        self.cpu.reset(pc=self.config.entry_point, sp=self.config.stack_pointer)

        self._breakpoints: Set[int] = set()
        self._resume_pc: Optional[int] = None
        self._break_address: Optional[int] = None
        self.cpu.on_instruction = self._instruction_hook

    def _instruction_hook(self, pc: int, opcode: int) -> bool:
        """Return False to stop before the instruction at a breakpoint."""
        if pc == self._resume_pc:
            # Leaving the address we stopped at last time
            self._resume_pc = None
            return True
        self._resume_pc = None
        if pc in self._breakpoints:
            self._break_address = pc
            return False
        return True

    # =========================================================================
    # Program Loading
    # =========================================================================

    def load_bytes(self, data: bytes, address: int) -> None:
        """
        Load raw bytes directly into memory.

        Raises:
            OutOfRangeAddressError: If the block does not fit in memory
        """
        self.memory.load(address, data)

    def inject_program(self, code: bytes, entry_point: int = 0x0000) -> None:
        """
        Load machine code and set PC to its first byte.

        Example:
            >>> emu.inject_program(bytes([0x80]), entry_point=0x0100)
            >>> emu.cpu.regs.pc
            256
        """
        self.load_bytes(code, entry_point)
        self.cpu.regs.pc = entry_point

    # =========================================================================
    # Execution Control
    # =========================================================================

    def reset(self) -> None:
        """Reset the CPU to the configured entry point. Memory is kept."""
        self.cpu.reset(pc=self.config.entry_point, sp=self.config.stack_pointer)
        self._resume_pc = None
        self._break_address = None

    def step(self) -> StopEvent:
        """
        Execute a single instruction, ignoring breakpoints.

        Raises:
            SM83Error: If the instruction fails
        """
        try:
            self.cpu.step()
        except SM83Error as e:
            logger.error(f"Execution stopped: {e}")
            raise
        return StopEvent(StopReason.STEP, address=self.cpu.regs.pc, steps=1)

    def run(self, max_steps: Optional[int] = None) -> StopEvent:
        """
        Run until a breakpoint or the instruction budget is reached.

        A breakpoint at the PC the run starts from does not stop it, so
        calling run() again resumes after a breakpoint.

        Args:
            max_steps: Instruction budget (config.max_steps if None)

        Raises:
            SM83Error: If an instruction fails
        """
        budget = self.config.max_steps if max_steps is None else max_steps
        self._resume_pc = self.cpu.regs.pc
        self._break_address = None

        try:
            steps = self.cpu.execute(budget)
        except SM83Error as e:
            logger.error(f"Execution stopped: {e}")
            raise
        finally:
            self._resume_pc = None

        if self._break_address is not None:
            event = StopEvent(StopReason.BREAKPOINT, address=self._break_address, steps=steps)
        else:
            event = StopEvent(StopReason.MAX_STEPS, address=self.cpu.regs.pc, steps=steps)
        logger.debug(f"{event} after {steps} steps")
        return event

    def run_until_pc(self, address: int, max_steps: Optional[int] = None) -> bool:
        """
        Run until PC equals address.

        Returns:
            True if PC reached address within the budget
        """
        target = address & 0xFFFF
        budget = self.config.max_steps if max_steps is None else max_steps
        for _ in range(budget):
            if self.cpu.regs.pc == target:
                return True
            self.step()
        return self.cpu.regs.pc == target

    # =========================================================================
    # Breakpoints
    # =========================================================================

    def add_breakpoint(self, address: int) -> None:
        """Stop run() before the instruction at address."""
        self._breakpoints.add(address & 0xFFFF)

    def remove_breakpoint(self, address: int) -> None:
        self._breakpoints.discard(address & 0xFFFF)

    def clear_breakpoints(self) -> None:
        self._breakpoints.clear()

    def list_breakpoints(self) -> List[int]:
        return sorted(self._breakpoints)

    # =========================================================================
    # Inspection
    # =========================================================================

    def read_byte(self, address: int) -> int:
        return self.memory.read(address)

    def write_byte(self, address: int, value: int) -> None:
        self.memory.write(address, value)

    @property
    def registers(self) -> Dict[str, int | bool]:
        """
        Snapshot of all registers and flags.

        Returns:
            Dict of register names (a, f, ..., pc, sp) and flag_z/n/h/c
        """
        result: Dict[str, int | bool] = dict(self.cpu.regs.as_dict())
        result.update(
            flag_z=self.cpu.flag_z,
            flag_n=self.cpu.flag_n,
            flag_h=self.cpu.flag_h,
            flag_c=self.cpu.flag_c,
        )
        return result

    def snapshot(self) -> CPUState:
        return self.cpu.snapshot()

    def restore(self, state: CPUState) -> None:
        self.cpu.restore(state)

    def disassemble_at(self, address: int, count: int = 10) -> List[str]:
        """
        Disassemble instructions starting at address.

        Bytes without a handler are shown as ``DB $xx``.

        Returns:
            One line per instruction, e.g. ``$0100: 80        ADD A,B``
        """
        lines = []
        for offset in range(count):
            addr = (address + offset) & 0xFFFF
            opcode = self.memory.read(addr)
            instruction = self.cpu.table.lookup(opcode)
            text = instruction.mnemonic if instruction else f"DB ${opcode:02X}"
            lines.append(f"${addr:04X}: {opcode:02X}        {text}")
        return lines

    def __repr__(self) -> str:
        regs = self.cpu.regs
        return (
            f"Emulator(PC=${regs.pc:04X}, AF=${regs.af:04X}, BC=${regs.bc:04X}, "
            f"DE=${regs.de:04X}, HL=${regs.hl:04X}, SP=${regs.sp:04X}, "
            f"cycles={self.cpu.cycles})"
        )
