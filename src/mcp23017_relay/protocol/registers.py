"""Register offsets and fixed byte values for the supported expanders.

The MCP23017 has two 8-bit ports; this package drives one of them at a
time. The MCP23008 has a single port::

    +-----------+-------+------+
    | Layout    | IODIR | OLAT |
    +-----------+-------+------+
    | mcp23017a | 0x00  | 0x14 |
    | mcp23017b | 0x01  | 0x15 |
    | mcp23008  | 0x00  | 0x0A |
    +-----------+-------+------+
"""

from __future__ import annotations

from dataclasses import dataclass

ALL_OUTPUTS = 0x00  # IODIR value: every pin is an output
ALL_ON = 0xFF
ALL_OFF = 0x00

RELAY_COUNT = 8


@dataclass(frozen=True)
class RegisterMap:
    """Direction and output-latch register offsets of one 8-bit port."""

    direction: int
    output_latch: int


# Mapping from layout names to register offsets
CHIP_REGISTERS: dict[str, RegisterMap] = {
    "mcp23017a": RegisterMap(direction=0x00, output_latch=0x14),
    "mcp23017b": RegisterMap(direction=0x01, output_latch=0x15),
    "mcp23008": RegisterMap(direction=0x00, output_latch=0x0A),
}

DEFAULT_CHIP = "mcp23017a"


def get_register_map(chip: str) -> RegisterMap:
    """Look up the register offsets for a chip layout.

    Raises:
        ValueError: If the layout is unknown.
    """
    if chip not in CHIP_REGISTERS:
        raise ValueError(
            f"Unknown chip '{chip}'. Valid: {list(CHIP_REGISTERS)}"
        )
    return CHIP_REGISTERS[chip]
