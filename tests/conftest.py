"""Shared fixtures: an in-memory expander standing in for the I2C bus."""

from __future__ import annotations

import pytest

from mcp23017_relay.config import HardwareAddress
from mcp23017_relay.errors import BusError

ADDRESS = HardwareAddress()
IODIR = ADDRESS.direction_register
OLAT = ADDRESS.output_latch_register


class FakeExpander:
    """Register file with the same read/write methods as I2CConnection.

    Powers up like the real chip: all pins inputs (IODIR 0xFF), latch 0x00.
    """

    def __init__(
        self,
        direction: int = 0xFF,
        latch: int = 0x00,
        fail_read: bool = False,
        fail_write: bool = False,
    ) -> None:
        self.registers = {IODIR: direction, OLAT: latch}
        self.reads: list[int] = []
        self.writes: list[tuple[int, int]] = []
        self.fail_read = fail_read
        self.fail_write = fail_write
        self.opened = 0

    def read_register(self, register: int) -> int:
        if self.fail_read:
            raise BusError(f"read of 0x{register:02X} failed")
        self.reads.append(register)
        return self.registers.get(register, 0)

    def write_register(self, register: int, value: int) -> None:
        if self.fail_write:
            raise BusError(f"write to 0x{register:02X} failed")
        self.writes.append((register, value))
        self.registers[register] = value

    def __enter__(self) -> FakeExpander:
        self.opened += 1
        return self

    def __exit__(self, *args: object) -> None:
        pass


@pytest.fixture
def expander() -> FakeExpander:
    return FakeExpander()


@pytest.fixture
def lock_path(tmp_path) -> str:
    return str(tmp_path / "relay.lock")


@pytest.fixture
def fake_bus(monkeypatch, expander):
    """Route run_command/read_relays to the fake expander instead of smbus2."""
    opened_with: list[HardwareAddress] = []

    def _connect(address):
        opened_with.append(address)
        return expander

    monkeypatch.setattr("mcp23017_relay.controller.I2CConnection", _connect)
    expander.opened_with = opened_with
    return expander
