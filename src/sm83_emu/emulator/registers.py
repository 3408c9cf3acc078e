"""
SM83 Register File
==================

Register layout:
    AF  A (accumulator, high byte) : F (flags, low byte)
    BC  B : C
    DE  D : E
    HL  H : L
    PC  program counter (16-bit)
    SP  stack pointer (16-bit)

Each pair is stored once as a 16-bit value. The 8-bit halves are derived
by mask and shift, and writing one half combines the new byte with the
untouched other half:

    high half: pair = (value << 8) | (pair & 0x00FF)
    low half:  pair = (pair & 0xFF00) | value

Every accessor masks its input, so all of them are total over ints.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from typing import Dict


REGISTERS_8 = ("a", "f", "b", "c", "d", "e", "h", "l")
REGISTERS_16 = ("af", "bc", "de", "hl", "pc", "sp")


class Registers:
    """
    SM83 register file.

    Example:
        >>> regs = Registers()
        >>> regs.af = 0x12F0
        >>> regs.a = 0x34
        >>> f"{regs.af:04X}"
        '34F0'
    """

    __slots__ = ("_af", "_bc", "_de", "_hl", "_pc", "_sp")

    def __init__(
        self,
        af: int = 0,
        bc: int = 0,
        de: int = 0,
        hl: int = 0,
        pc: int = 0,
        sp: int = 0,
    ):
        self._af = af & 0xFFFF
        self._bc = bc & 0xFFFF
        self._de = de & 0xFFFF
        self._hl = hl & 0xFFFF
        self._pc = pc & 0xFFFF
        self._sp = sp & 0xFFFF

    # ========================================
    # 16-bit Pairs
    # ========================================

    @property
    def af(self) -> int:
        """Accumulator and flags (A:F, 16-bit)."""
        return self._af

    @af.setter
    def af(self, value: int) -> None:
        self._af = value & 0xFFFF

    @property
    def bc(self) -> int:
        """BC pair (B:C, 16-bit)."""
        return self._bc

    @bc.setter
    def bc(self, value: int) -> None:
        self._bc = value & 0xFFFF

    @property
    def de(self) -> int:
        """DE pair (D:E, 16-bit)."""
        return self._de

    @de.setter
    def de(self, value: int) -> None:
        self._de = value & 0xFFFF

    @property
    def hl(self) -> int:
        """HL pair (H:L, 16-bit)."""
        return self._hl

    @hl.setter
    def hl(self, value: int) -> None:
        self._hl = value & 0xFFFF

    @property
    def pc(self) -> int:
        """Program counter (16-bit)."""
        return self._pc

    @pc.setter
    def pc(self, value: int) -> None:
        self._pc = value & 0xFFFF

    @property
    def sp(self) -> int:
        """Stack pointer (16-bit)."""
        return self._sp

    @sp.setter
    def sp(self, value: int) -> None:
        self._sp = value & 0xFFFF

    # ========================================
    # 8-bit Halves
    # ========================================

    @property
    def a(self) -> int:
        """Accumulator (high byte of AF)."""
        return self._af >> 8

    @a.setter
    def a(self, value: int) -> None:
        self._af = ((value & 0xFF) << 8) | (self._af & 0x00FF)

    @property
    def f(self) -> int:
        """Packed flags byte (low byte of AF)."""
        return self._af & 0xFF

    @f.setter
    def f(self, value: int) -> None:
        self._af = (self._af & 0xFF00) | (value & 0xFF)

    @property
    def b(self) -> int:
        return self._bc >> 8

    @b.setter
    def b(self, value: int) -> None:
        self._bc = ((value & 0xFF) << 8) | (self._bc & 0x00FF)

    @property
    def c(self) -> int:
        return self._bc & 0xFF

    @c.setter
    def c(self, value: int) -> None:
        self._bc = (self._bc & 0xFF00) | (value & 0xFF)

    @property
    def d(self) -> int:
        return self._de >> 8

    @d.setter
    def d(self, value: int) -> None:
        self._de = ((value & 0xFF) << 8) | (self._de & 0x00FF)

    @property
    def e(self) -> int:
        return self._de & 0xFF

    @e.setter
    def e(self, value: int) -> None:
        self._de = (self._de & 0xFF00) | (value & 0xFF)

    @property
    def h(self) -> int:
        return self._hl >> 8

    @h.setter
    def h(self, value: int) -> None:
        self._hl = ((value & 0xFF) << 8) | (self._hl & 0x00FF)

    @property
    def l(self) -> int:  # noqa: E743
        return self._hl & 0xFF

    @l.setter
    def l(self, value: int) -> None:  # noqa: E743
        self._hl = (self._hl & 0xFF00) | (value & 0xFF)

    # ========================================
    # Access by Name
    # ========================================

    def get(self, name: str) -> int:
        """
        Read a register by name ("a", "HL", ...).

        Raises:
            ValueError: If the name is not a register
        """
        key = name.lower()
        if key not in REGISTERS_8 and key not in REGISTERS_16:
            raise ValueError(
                f"Unknown register '{name}'. Valid registers: "
                f"{', '.join(REGISTERS_8 + REGISTERS_16)}"
            )
        return getattr(self, key)

    def set(self, name: str, value: int) -> None:
        """
        Write a register by name.

        Raises:
            ValueError: If the name is not a register
        """
        key = name.lower()
        if key not in REGISTERS_8 and key not in REGISTERS_16:
            raise ValueError(
                f"Unknown register '{name}'. Valid registers: "
                f"{', '.join(REGISTERS_8 + REGISTERS_16)}"
            )
        setattr(self, key, value)

    def as_dict(self) -> Dict[str, int]:
        """All named registers, 8-bit halves included."""
        return {name: getattr(self, name) for name in REGISTERS_8 + REGISTERS_16}

    def reset(self) -> None:
        """Zero every register."""
        self._af = self._bc = self._de = self._hl = self._pc = self._sp = 0

    def copy(self) -> "Registers":
        return Registers(self._af, self._bc, self._de, self._hl, self._pc, self._sp)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Registers):
            return NotImplemented
        return (
            self._af == other._af
            and self._bc == other._bc
            and self._de == other._de
            and self._hl == other._hl
            and self._pc == other._pc
            and self._sp == other._sp
        )

    def __repr__(self) -> str:
        return (
            f"Registers(af=${self._af:04X}, bc=${self._bc:04X}, de=${self._de:04X}, "
            f"hl=${self._hl:04X}, pc=${self._pc:04X}, sp=${self._sp:04X})"
        )
