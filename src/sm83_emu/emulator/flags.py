"""
SM83 Condition Flags
====================

The SM83 keeps four condition flags in the high nibble of the F register
(the low byte of AF):

    7  6  5  4  3  2  1  0
    Z  N  H  C  0  0  0  0

Operation logic works on the boolean view (FlagState). The packed byte
in AF is what any code reading F directly sees. The CPU keeps the two in
step with sync_to_register() / sync_from_register().

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
from enum import IntFlag


class Flags(IntFlag):
    """
    Bit positions of the condition flags inside F.

    Bits 3-0 are unused and always zero when packed.
    """
    C = 0x10  # Carry/Borrow
    H = 0x20  # Half-carry (out of bit 3)
    N = 0x40  # Subtract
    Z = 0x80  # Zero


# All bits that carry flag information
FLAG_MASK = Flags.Z | Flags.N | Flags.H | Flags.C


@dataclass
class FlagState:
    """
    Boolean view of the condition flags.

    Attributes:
        z: Zero - result was zero
        n: Subtract - last operation was a subtraction
        h: Half-carry - carry out of (or borrow into) bit 4
        c: Carry - carry out of bit 7 (or borrow)
    """
    z: bool = False
    n: bool = False
    h: bool = False
    c: bool = False

    def to_byte(self) -> int:
        """Pack the booleans into an F byte with the low nibble zero."""
        value = 0
        if self.z:
            value |= Flags.Z
        if self.n:
            value |= Flags.N
        if self.h:
            value |= Flags.H
        if self.c:
            value |= Flags.C
        return int(value)

    @classmethod
    def from_byte(cls, value: int) -> "FlagState":
        """Unpack an F byte. Bits 3-0 are ignored."""
        return cls(
            z=bool(value & Flags.Z),
            n=bool(value & Flags.N),
            h=bool(value & Flags.H),
            c=bool(value & Flags.C),
        )

    def load_byte(self, value: int) -> None:
        """Overwrite these booleans in place from an F byte."""
        self.z = bool(value & Flags.Z)
        self.n = bool(value & Flags.N)
        self.h = bool(value & Flags.H)
        self.c = bool(value & Flags.C)

    def __str__(self) -> str:
        return "".join(
            letter if on else "-"
            for letter, on in (("Z", self.z), ("N", self.n), ("H", self.h), ("C", self.c))
        )
