"""Relay command execution against the expander registers.

:class:`RelayController` runs one command per invocation and moves through
``START -> VALIDATED -> EXECUTED``. The caller must hold the device lock for
the whole of :meth:`RelayController.execute`; :func:`run_command` does this
and is the entry point used by both the CLI and the tool server.

``init`` is destructive: it forces all pins to outputs and overwrites every
relay with one bulk value. Setting a single relay reads the latch fresh,
flips one bit and writes the byte back, so the other seven relays keep
their state.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Sequence

from .config import DEFAULT_ADDRESS, DEFAULT_LOCK_PATH, LOCK_TIMEOUT_S, HardwareAddress
from .errors import NotInitializedError
from .models.relay_bank import RelayBank
from .protocol.bitmask import apply_bit
from .protocol.commands import InitCommand, RelayCommand, SetRelayCommand, parse_command
from .protocol.registers import ALL_OFF, ALL_ON, ALL_OUTPUTS
from .transport.i2c_connection import I2CConnection
from .transport.lock import DeviceLock

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Progress of a single invocation."""

    START = "start"
    VALIDATED = "validated"
    EXECUTED = "executed"


class RelayController:
    """Executes relay commands through a register connection.

    ``connection`` needs ``read_register(offset) -> int`` and
    ``write_register(offset, value)``, e.g. an open :class:`I2CConnection`.
    """

    def __init__(self, connection, address: HardwareAddress = DEFAULT_ADDRESS) -> None:
        self._conn = connection
        self._address = address
        self.phase = Phase.START

    def execute(self, command: RelayCommand) -> RelayBank:
        """Run ``command`` and return the output latch value that was written.

        Raises:
            NotInitializedError: On a single-relay command when the pins are
                not all configured as outputs. Nothing is written.
            BusError: If a register access fails.
        """
        if isinstance(command, InitCommand):
            self.phase = Phase.VALIDATED
            bank = self._init(command)
        elif isinstance(command, SetRelayCommand):
            bank = self._set_relay(command)
        else:
            raise TypeError(f"Unsupported command: {command!r}")
        self.phase = Phase.EXECUTED
        return bank

    def _init(self, command: InitCommand) -> RelayBank:
        value = ALL_ON if command.state.is_on else ALL_OFF
        self._conn.write_register(self._address.direction_register, ALL_OUTPUTS)
        self._conn.write_register(self._address.output_latch_register, value)
        logger.info("Initialized outputs, all relays %s", command.state.value)
        return RelayBank.from_byte(value, direction=ALL_OUTPUTS)

    def _set_relay(self, command: SetRelayCommand) -> RelayBank:
        direction = self._conn.read_register(self._address.direction_register)
        if direction != ALL_OUTPUTS:
            raise NotInitializedError(
                f"Direction register is 0x{direction:02X}, not all outputs. "
                f"Run 'init on' or 'init off' first to initialize the outputs."
            )
        self.phase = Phase.VALIDATED

        current = self._conn.read_register(self._address.output_latch_register)
        new = apply_bit(current, command.index, command.state.is_on)
        self._conn.write_register(self._address.output_latch_register, new)
        logger.info(
            "Relay %d %s (latch 0x%02X -> 0x%02X)",
            command.index,
            command.state.value,
            current,
            new,
        )
        return RelayBank.from_byte(new, direction=direction)

    def read_bank(self) -> RelayBank:
        """Read the direction register and output latch without writing."""
        direction = self._conn.read_register(self._address.direction_register)
        value = self._conn.read_register(self._address.output_latch_register)
        return RelayBank.from_byte(value, direction=direction)


def run_command(
    tokens: Sequence[str],
    address: HardwareAddress = DEFAULT_ADDRESS,
    lock_path: str = DEFAULT_LOCK_PATH,
    timeout: float = LOCK_TIMEOUT_S,
) -> RelayBank:
    """Lock the device, parse ``tokens`` and execute the command.

    The lock is released on every exit path. Tokens are validated before
    the bus is opened, so a malformed command never touches the hardware.

    Raises:
        RelayError: Any of the error kinds in :mod:`mcp23017_relay.errors`.
    """
    with DeviceLock(lock_path, timeout=timeout):
        command = parse_command(tokens)
        with I2CConnection(address) as conn:
            return RelayController(conn, address).execute(command)


def read_relays(
    address: HardwareAddress = DEFAULT_ADDRESS,
    lock_path: str = DEFAULT_LOCK_PATH,
    timeout: float = LOCK_TIMEOUT_S,
) -> RelayBank:
    """Lock the device and read the current relay bank."""
    with DeviceLock(lock_path, timeout=timeout):
        with I2CConnection(address) as conn:
            return RelayController(conn, address).read_bank()
