"""
SM83 CPU Emulator
=================

Fetch-decode-execute core for the SM83 (LR35902) 8-bit CPU.

Registers:
- A (accumulator) and F (flags), combined as AF
- B/C, D/E, H/L general-purpose pairs (BC, DE, HL)
- SP (stack pointer), PC (program counter)

Flags (high nibble of F): Z (zero), N (subtract), H (half-carry), C (carry)

Each step() reads the opcode at PC, looks it up in the CPU's OpcodeTable,
advances PC by one and runs the handler. An opcode without a handler
raises UnimplementedOpcodeError before anything is modified, and the CPU
stays halted on that fault until reset() or clear_fault().

Flag policy used by every 8-bit arithmetic instruction:

    ADD/ADC   Z = result & 0xFF == 0
              N = 0
              H = (dst & 0x0F) + (src & 0x0F) [+ carry] > 0x0F
              C = dst + src [+ carry] > 0xFF

    SUB/SBC   Z = result & 0xFF == 0
              N = 1
              H = (dst & 0x0F) < (src & 0x0F) [+ carry]
              C = dst < src [+ carry]

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol

from ..errors import SM83Error, UnimplementedOpcodeError
from .flags import FlagState
from .opcodes import OpcodeTable, build_default_table
from .registers import Registers

logger = logging.getLogger(__name__)


class BusProtocol(Protocol):
    """
    Protocol defining the memory bus interface.

    The CPU reads opcodes and operands and writes results through this.
    """
    def read(self, address: int) -> int:
        """Read byte from address."""
        ...

    def write(self, address: int, value: int) -> None:
        """Write byte to address."""
        ...


@dataclass
class CPUState:
    """
    Complete CPU state for snapshotting.

    Attributes:
        registers: Register file (AF, BC, DE, HL, PC, SP)
        flags: Boolean view of the condition flags
        cycles: Clock cycles executed since reset
        fault: Terminal error that halted the CPU, if any
    """
    registers: Registers = field(default_factory=Registers)
    flags: FlagState = field(default_factory=FlagState)
    cycles: int = 0
    fault: Optional[SM83Error] = None

    def copy(self) -> "CPUState":
        return CPUState(
            registers=self.registers.copy(),
            flags=dataclasses.replace(self.flags),
            cycles=self.cycles,
            fault=self.fault,
        )


class SM83:
    """
    SM83 CPU emulator.

    Not thread-safe: callers serialize step() per instance. Independent
    instances with their own memory may run on separate threads.

    Example:
        >>> mem = Memory()
        >>> mem.write(0x0000, 0x80)  # ADD A,B
        >>> cpu = SM83(mem)
        >>> cpu.regs.a = 0x10
        >>> cpu.regs.b = 0x20
        >>> cpu.step()
        >>> print(f"A=${cpu.regs.a:02X} PC=${cpu.regs.pc:04X}")
        A=$30 PC=$0001
    """

    def __init__(self, bus: BusProtocol, table: Optional[OpcodeTable] = None):
        """
        Initialize CPU with memory bus.

        Args:
            bus: Memory bus implementing BusProtocol
            table: Dispatch table (a fresh default table if omitted)
        """
        self.bus = bus
        self.table = table if table is not None else build_default_table()
        self.state = CPUState()

        # on_instruction(pc, opcode) -> bool: return False to stop execute()
        self.on_instruction: Optional[Callable[[int, int], bool]] = None

    @property
    def regs(self) -> Registers:
        """The register file."""
        return self.state.registers

    @property
    def flags(self) -> FlagState:
        """Boolean view of the condition flags."""
        return self.state.flags

    @property
    def cycles(self) -> int:
        """Clock cycles executed since reset."""
        return self.state.cycles

    @property
    def fault(self) -> Optional[SM83Error]:
        """Error that halted the CPU, or None while it can run."""
        return self.state.fault

    # ========================================
    # Flag Properties
    # ========================================

    @property
    def flag_z(self) -> bool:
        """Zero flag."""
        return self.state.flags.z

    @flag_z.setter
    def flag_z(self, value: bool) -> None:
        self.state.flags.z = bool(value)

    @property
    def flag_n(self) -> bool:
        """Subtract flag."""
        return self.state.flags.n

    @flag_n.setter
    def flag_n(self, value: bool) -> None:
        self.state.flags.n = bool(value)

    @property
    def flag_h(self) -> bool:
        """Half-carry flag."""
        return self.state.flags.h

    @flag_h.setter
    def flag_h(self, value: bool) -> None:
        self.state.flags.h = bool(value)

    @property
    def flag_c(self) -> bool:
        """Carry flag."""
        return self.state.flags.c

    @flag_c.setter
    def flag_c(self, value: bool) -> None:
        self.state.flags.c = bool(value)

    def sync_to_register(self) -> None:
        """Pack the boolean flags into F, leaving A untouched."""
        self.regs.f = self.state.flags.to_byte()

    def sync_from_register(self) -> None:
        """Unpack F into the boolean flags."""
        self.state.flags.load_byte(self.regs.f)

    # ========================================
    # Operand Access
    # ========================================

    def read_r8(self, index: int) -> int:
        """
        Read the 8-bit operand selected by an opcode's low three bits.

        Index 6 is (HL), the byte in memory addressed by HL.
        """
        regs = self.regs
        match index:
            case 0:
                return regs.b
            case 1:
                return regs.c
            case 2:
                return regs.d
            case 3:
                return regs.e
            case 4:
                return regs.h
            case 5:
                return regs.l
            case 6:
                return self.bus.read(regs.hl) & 0xFF
            case 7:
                return regs.a
            case _:
                raise ValueError(f"operand index must be 0-7, got {index}")

    # ========================================
    # ALU Operations
    # ========================================

    def add8(self, a: int, b: int) -> int:
        """Add 8-bit values, set Z,N,H,C flags."""
        result = a + b
        flags = self.state.flags
        flags.z = (result & 0xFF) == 0
        flags.n = False
        flags.h = (a & 0x0F) + (b & 0x0F) > 0x0F
        flags.c = result > 0xFF
        return result & 0xFF

    def adc8(self, a: int, b: int) -> int:
        """Add 8-bit values with carry, set Z,N,H,C flags."""
        flags = self.state.flags
        carry = 1 if flags.c else 0
        result = a + b + carry
        flags.z = (result & 0xFF) == 0
        flags.n = False
        flags.h = (a & 0x0F) + (b & 0x0F) + carry > 0x0F
        flags.c = result > 0xFF
        return result & 0xFF

    def sub8(self, a: int, b: int) -> int:
        """Subtract 8-bit values, set Z,N,H,C flags."""
        result = a - b
        flags = self.state.flags
        flags.z = (result & 0xFF) == 0
        flags.n = True
        flags.h = (a & 0x0F) < (b & 0x0F)
        flags.c = a < b
        return result & 0xFF

    def sbc8(self, a: int, b: int) -> int:
        """Subtract 8-bit values with carry (borrow), set Z,N,H,C flags."""
        flags = self.state.flags
        carry = 1 if flags.c else 0
        result = a - b - carry
        flags.z = (result & 0xFF) == 0
        flags.n = True
        flags.h = (a & 0x0F) < (b & 0x0F) + carry
        flags.c = a < b + carry
        return result & 0xFF

    # ========================================
    # Reset
    # ========================================

    def reset(self, pc: int = 0x0000, sp: int = 0x0000) -> None:
        """
        Reset CPU to power-on state.

        Clears all registers and flags, the cycle counter and any fault,
        then loads PC and SP.
        """
        self.state = CPUState(registers=Registers(pc=pc, sp=sp))
        logger.debug(f"CPU reset: PC=${self.regs.pc:04X} SP=${self.regs.sp:04X}")

    def clear_fault(self) -> None:
        """Forget the recorded fault so step() may run again."""
        self.state.fault = None

    # ========================================
    # Main Execution Loop
    # ========================================

    def step(self) -> None:
        """
        Execute exactly one instruction.

        If the handler raises, the CPU state (registers, flags, cycles) is
        restored to what it was before the step. SM83Error failures are
        recorded as the fault; anything else is re-raised without halting.

        Raises:
            UnimplementedOpcodeError: If the byte at PC has no handler, or
                the CPU is already halted on one
            OutOfRangeAddressError: If the instruction touches memory
                outside the bus
        """
        if self.state.fault is not None:
            raise self.state.fault

        pc = self.regs.pc
        try:
            opcode = self.bus.read(pc) & 0xFF
        except SM83Error as exc:
            self.state.fault = exc
            raise
        instruction = self.table.lookup(opcode)
        if instruction is None:
            fault = UnimplementedOpcodeError(opcode, pc)
            self.state.fault = fault
            logger.debug(str(fault))
            raise fault

        saved = self.state.copy()
        self.regs.pc = pc + 1
        try:
            instruction.handler(self)
        except Exception as exc:
            self.state = saved
            if isinstance(exc, SM83Error):
                self.state.fault = exc
            raise
        self.state.cycles += instruction.cycles

    def execute(self, max_steps: int) -> int:
        """
        Execute up to max_steps instructions.

        Execution stops early if on_instruction returns False; the
        instruction it was called for is not executed.

        Args:
            max_steps: Maximum number of instructions to execute

        Returns:
            Number of instructions executed
        """
        executed = 0
        while executed < max_steps:
            if self.on_instruction and self.state.fault is None:
                pc = self.regs.pc
                if not self.on_instruction(pc, self.bus.read(pc) & 0xFF):
                    break
            self.step()
            executed += 1
        return executed

    # ========================================
    # Snapshot Support
    # ========================================

    def snapshot(self) -> CPUState:
        """Return an independent copy of the CPU state."""
        return self.state.copy()

    def restore(self, state: CPUState) -> None:
        """Replace the CPU state with a copy of a snapshot."""
        self.state = state.copy()
