"""
SM83 Opcode Dispatch Table
==========================

Maps each opcode byte to an Instruction descriptor carrying its mnemonic,
cycle cost and handler. The CPU looks every fetched byte up here; a byte
with no entry is an unimplemented opcode.

Implemented set:
    $00        NOP
    $80-$87    ADD A,r
    $88-$8F    ADC A,r
    $90-$97    SUB A,r
    $98-$9F    SBC A,r

where the low three bits of the opcode select r from
B, C, D, E, H, L, (HL), A. Register operands cost 4 cycles, (HL) costs 8.

New opcodes are added by registering more Instructions. Each CPU owns its
own table, so extending one CPU does not affect another.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Final, Iterable, Iterator, List, Optional

if TYPE_CHECKING:
    from .cpu import SM83


# Operand encoding in the low three bits of register-operand opcodes
R8_NAMES: Final = ("B", "C", "D", "E", "H", "L", "(HL)", "A")
HL_INDIRECT: Final = 6


@dataclass(frozen=True)
class Instruction:
    """
    Metadata describing a single opcode.

    Attributes:
        opcode: Opcode byte (0-255)
        mnemonic: Assembly form, e.g. "ADD A,B"
        cycles: Clock cycles charged when the instruction executes
        handler: Callable performing the instruction on a CPU
    """
    opcode: int
    mnemonic: str
    cycles: int
    handler: Callable[["SM83"], None]

    def __post_init__(self) -> None:
        if not 0 <= self.opcode <= 0xFF:
            raise ValueError(f"opcode out of range: {self.opcode}")
        if self.cycles <= 0:
            raise ValueError("cycles must be positive")


class OpcodeTable:
    """
    256-entry instruction lookup table.

    Example:
        >>> table = build_default_table()
        >>> table.lookup(0x80).mnemonic
        'ADD A,B'
        >>> table.lookup(0xFF) is None
        True
    """

    _TABLE_SIZE: Final[int] = 0x100

    def __init__(self) -> None:
        self._table: List[Optional[Instruction]] = [None] * self._TABLE_SIZE

    def register(self, instruction: Instruction) -> None:
        """
        Add an instruction.

        Raises:
            ValueError: If the opcode is already registered
        """
        opcode = instruction.opcode
        existing = self._table[opcode]
        if existing is not None:
            raise ValueError(
                f"opcode {opcode:#04x} already registered as {existing.mnemonic}")
        self._table[opcode] = instruction

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def lookup(self, opcode: int) -> Optional[Instruction]:
        """Return the instruction for an opcode byte, or None if unimplemented."""
        return self._table[opcode & 0xFF]

    def implemented(self) -> List[int]:
        """Sorted list of opcodes that have a handler."""
        return [op for op, entry in enumerate(self._table) if entry is not None]

    def __contains__(self, opcode: int) -> bool:
        return self._table[opcode & 0xFF] is not None

    def __len__(self) -> int:
        return sum(1 for entry in self._table if entry is not None)

    def __iter__(self) -> Iterator[Instruction]:
        return (entry for entry in self._table if entry is not None)


# =============================================================================
# Handlers
# =============================================================================

def op_nop(cpu: "SM83") -> None:
    """NOP: nothing beyond the fetch."""


AluOperation = Callable[["SM83", int, int], int]


def _alu_handler(operation: AluOperation, operand: int) -> Callable[["SM83"], None]:
    """
    Build a handler for ``<operation> A,r``.

    ``operation`` calls one of the CPU's 8-bit ALU helpers with A and the
    operand. The operand is read before anything is written.
    """
    def handler(cpu: "SM83") -> None:
        value = cpu.read_r8(operand)
        cpu.regs.a = operation(cpu, cpu.regs.a, value)
        cpu.sync_to_register()

    return handler


def _alu_group(base: int, mnemonic: str, operation: AluOperation) -> List[Instruction]:
    if not callable(operation):
        raise TypeError(f"{mnemonic} operation must be callable, got {operation!r}")
    group = []
    for operand, name in enumerate(R8_NAMES):
        cycles = 8 if operand == HL_INDIRECT else 4
        group.append(Instruction(
            base + operand,
            f"{mnemonic} A,{name}",
            cycles,
            _alu_handler(operation, operand),
        ))
    return group


DEFAULT_INSTRUCTIONS: Final = (
    [Instruction(0x00, "NOP", 4, op_nop)]
    + _alu_group(0x80, "ADD", lambda cpu, a, b: cpu.add8(a, b))
    + _alu_group(0x88, "ADC", lambda cpu, a, b: cpu.adc8(a, b))
    + _alu_group(0x90, "SUB", lambda cpu, a, b: cpu.sub8(a, b))
    + _alu_group(0x98, "SBC", lambda cpu, a, b: cpu.sbc8(a, b))
)


def build_default_table() -> OpcodeTable:
    """Build a fresh table holding the implemented instruction set."""
    table = OpcodeTable()
    table.register_all(DEFAULT_INSTRUCTIONS)
    return table
