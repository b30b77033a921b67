"""Single-bit arithmetic on 8-bit register values.

These functions touch only the requested bit; every other bit of the
input value is carried through unchanged.
"""

from __future__ import annotations

from .registers import RELAY_COUNT


def _check(value: int, index: int) -> None:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"Register value must be 0-255, got {value}")
    if not 0 <= index < RELAY_COUNT:
        raise ValueError(f"Bit index must be 0-{RELAY_COUNT - 1}, got {index}")


def bit_mask(index: int) -> int:
    """Return the positive mask for ``index`` (e.g. 3 -> 0x08)."""
    if not 0 <= index < RELAY_COUNT:
        raise ValueError(f"Bit index must be 0-{RELAY_COUNT - 1}, got {index}")
    return 1 << index


def set_bit(value: int, index: int) -> int:
    """Return ``value`` with bit ``index`` set."""
    _check(value, index)
    return value | bit_mask(index)


def clear_bit(value: int, index: int) -> int:
    """Return ``value`` with bit ``index`` cleared."""
    _check(value, index)
    return value & ~bit_mask(index) & 0xFF


def apply_bit(value: int, index: int, on: bool) -> int:
    """Set or clear bit ``index`` depending on ``on``."""
    return set_bit(value, index) if on else clear_bit(value, index)


def is_bit_set(value: int, index: int) -> bool:
    """Return True if bit ``index`` of ``value`` is set."""
    _check(value, index)
    return bool(value & bit_mask(index))
