"""Relay bank model: the 8 relay states held in the output-latch byte.

Bit *i* of the byte is relay *i*, 1 meaning energized. The bank is always
decoded from a fresh register read and never stored between commands.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..protocol.bitmask import is_bit_set
from ..protocol.registers import ALL_OUTPUTS, RELAY_COUNT


@dataclass(frozen=True)
class RelayBank:
    """Snapshot of the output latch, optionally with the direction register."""

    value: int
    direction: int | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFF:
            raise ValueError(f"Relay bank value must be 0-255, got {self.value}")

    @property
    def relays(self) -> list[bool]:
        return [is_bit_set(self.value, i) for i in range(RELAY_COUNT)]

    @property
    def initialized(self) -> bool | None:
        """True if every pin is an output, None if the direction is unknown."""
        if self.direction is None:
            return None
        return self.direction == ALL_OUTPUTS

    def is_on(self, index: int) -> bool:
        return is_bit_set(self.value, index)

    def to_dict(self) -> dict:
        result = {
            "value": self.value,
            "value_hex": f"0x{self.value:02X}",
            "relays": {str(i): on for i, on in enumerate(self.relays)},
        }
        if self.direction is not None:
            result["direction_hex"] = f"0x{self.direction:02X}"
            result["initialized"] = self.initialized
        return result

    @classmethod
    def from_byte(cls, value: int, direction: int | None = None) -> RelayBank:
        return cls(value=value & 0xFF, direction=direction)
