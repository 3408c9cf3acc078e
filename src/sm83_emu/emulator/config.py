"""
Emulator Configuration
======================

Construction settings for the Emulator. Configuration can come from:
- Default values (defined here)
- Keyword arguments
- Environment variables (EmulatorConfig.from_env)

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import dataclasses
import logging
import os
from dataclasses import dataclass

from .memory import Memory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmulatorConfig:
    """
    Configuration for emulator initialization.

    Attributes:
        memory_size: Memory bus size in bytes (at least 64KB)
        entry_point: Initial PC
        stack_pointer: Initial SP
        max_steps: Default instruction budget for Emulator.run()

    Example:
        >>> config = EmulatorConfig(entry_point=0x0100)
        >>> config = EmulatorConfig.from_env()
    """
    memory_size: int = Memory.MIN_SIZE
    entry_point: int = 0x0000
    stack_pointer: int = 0x0000
    max_steps: int = 1_000_000

    def __post_init__(self) -> None:
        if self.memory_size < Memory.MIN_SIZE:
            raise ValueError(
                f"memory_size must be at least {Memory.MIN_SIZE:#x}, got {self.memory_size:#x}"
            )
        if not 0 <= self.entry_point <= 0xFFFF:
            raise ValueError(f"entry_point must be 16-bit, got {self.entry_point:#x}")
        if not 0 <= self.stack_pointer <= 0xFFFF:
            raise ValueError(f"stack_pointer must be 16-bit, got {self.stack_pointer:#x}")
        if self.max_steps <= 0:
            raise ValueError("max_steps must be positive")

    @classmethod
    def from_env(cls) -> "EmulatorConfig":
        """
        Create EmulatorConfig from environment variables.

        Environment variables (all optional, decimal or 0x-prefixed hex):
            SM83_MEMORY_SIZE: Memory size in bytes
            SM83_ENTRY_POINT: Initial PC
            SM83_STACK_POINTER: Initial SP
            SM83_MAX_STEPS: Default instruction budget

        Unparseable or out-of-range values are logged and ignored.

        Returns:
            EmulatorConfig with values from environment variables
        """
        config = cls()

        overrides = {
            "memory_size": "SM83_MEMORY_SIZE",
            "entry_point": "SM83_ENTRY_POINT",
            "stack_pointer": "SM83_STACK_POINTER",
            "max_steps": "SM83_MAX_STEPS",
        }
        for name, variable in overrides.items():
            if raw := os.environ.get(variable):
                try:
                    config = dataclasses.replace(config, **{name: int(raw, 0)})
                except ValueError as e:
                    logger.warning(f"Ignoring {variable}={raw!r}: {e}")

        return config
