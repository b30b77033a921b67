"""Deployment constants and the hardware address of the relay board.

These are fixed per installation. Edit the defaults here (or construct a
:class:`HardwareAddress` explicitly) rather than passing them at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass

from .protocol.registers import DEFAULT_CHIP, get_register_map

DEFAULT_BUS = 19  # list available buses with 'i2cdetect -l'
DEFAULT_DEVICE_ADDRESS = 0x20  # A0-A2 select 0x20-0x27

# Use a distinct lock file for every expander on the system
DEFAULT_LOCK_PATH = "/tmp/mcp23017relay.lock"
LOCK_TIMEOUT_S = 2.0

MIN_DEVICE_ADDRESS = 0x20
MAX_DEVICE_ADDRESS = 0x27


@dataclass(frozen=True)
class HardwareAddress:
    """Where the expander lives and which port registers drive the relays."""

    bus_id: int = DEFAULT_BUS
    device_address: int = DEFAULT_DEVICE_ADDRESS
    direction_register: int = get_register_map(DEFAULT_CHIP).direction
    output_latch_register: int = get_register_map(DEFAULT_CHIP).output_latch

    def __post_init__(self) -> None:
        if self.bus_id < 0:
            raise ValueError(f"Bus id must be >= 0, got {self.bus_id}")
        if not MIN_DEVICE_ADDRESS <= self.device_address <= MAX_DEVICE_ADDRESS:
            raise ValueError(
                f"Device address must be 0x{MIN_DEVICE_ADDRESS:02X}-"
                f"0x{MAX_DEVICE_ADDRESS:02X}, got 0x{self.device_address:02X}"
            )
        for name in ("direction_register", "output_latch_register"):
            offset = getattr(self, name)
            if not 0 <= offset <= 0xFF:
                raise ValueError(f"{name} must be 0x00-0xFF, got {offset}")

    @classmethod
    def for_chip(
        cls,
        chip: str = DEFAULT_CHIP,
        bus_id: int = DEFAULT_BUS,
        device_address: int = DEFAULT_DEVICE_ADDRESS,
    ) -> HardwareAddress:
        """Build an address using the register offsets of a chip layout."""
        registers = get_register_map(chip)
        return cls(
            bus_id=bus_id,
            device_address=device_address,
            direction_register=registers.direction,
            output_latch_register=registers.output_latch,
        )

    def to_dict(self) -> dict:
        return {
            "bus_id": self.bus_id,
            "device_address": f"0x{self.device_address:02X}",
            "direction_register": f"0x{self.direction_register:02X}",
            "output_latch_register": f"0x{self.output_latch_register:02X}",
        }


DEFAULT_ADDRESS = HardwareAddress()
