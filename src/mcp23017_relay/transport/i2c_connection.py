"""I2C register access to the I/O expander via ``smbus2``.

Every register transaction is a single SMBus byte-data read or write.
Failures are reported as :class:`~mcp23017_relay.errors.BusError`; nothing
is retried.
"""

from __future__ import annotations

import logging

from smbus2 import SMBus

from ..config import HardwareAddress
from ..errors import BusError

logger = logging.getLogger(__name__)


class I2CConnection:
    """Reads and writes single registers on one expander.

    Usage::

        with I2CConnection(address) as conn:
            olat = conn.read_register(address.output_latch_register)
            conn.write_register(address.output_latch_register, olat | 0x01)
    """

    def __init__(self, address: HardwareAddress) -> None:
        self._address = address
        self._bus: SMBus | None = None

    @property
    def address(self) -> HardwareAddress:
        return self._address

    @property
    def connected(self) -> bool:
        return self._bus is not None

    def open(self) -> None:
        """Open ``/dev/i2c-<bus_id>``.

        Raises:
            BusError: If the bus device cannot be opened.
        """
        if self._bus is not None:
            return
        try:
            self._bus = SMBus(self._address.bus_id)
        except OSError as e:
            raise BusError(
                f"Could not open I2C bus {self._address.bus_id}: {e}"
            ) from e
        logger.debug(
            "Opened I2C bus %d for device 0x%02X",
            self._address.bus_id,
            self._address.device_address,
        )

    def close(self) -> None:
        """Close the bus if it is open."""
        if self._bus is None:
            return
        try:
            self._bus.close()
        except OSError as e:
            logger.warning("Error closing I2C bus %d: %s", self._address.bus_id, e)
        finally:
            self._bus = None

    def __enter__(self) -> I2CConnection:
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _require_open(self) -> SMBus:
        if self._bus is None:
            raise BusError("I2C bus is not open")
        return self._bus

    def read_register(self, register: int) -> int:
        """Read one register as an unsigned byte.

        Raises:
            BusError: If the transaction fails.
        """
        bus = self._require_open()
        try:
            value = bus.read_byte_data(self._address.device_address, register) & 0xFF
        except OSError as e:
            raise BusError(
                f"Read of register 0x{register:02X} on device "
                f"0x{self._address.device_address:02X} failed: {e}"
            ) from e
        logger.debug("read  reg 0x%02X -> 0x%02X", register, value)
        return value

    def write_register(self, register: int, value: int) -> None:
        """Write one byte to a register.

        Raises:
            ValueError: If ``value`` is not 0-255.
            BusError: If the transaction fails.
        """
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Register value must be 0-255, got {value}")
        bus = self._require_open()
        try:
            bus.write_byte_data(self._address.device_address, register, value)
        except OSError as e:
            raise BusError(
                f"Write of 0x{value:02X} to register 0x{register:02X} on device "
                f"0x{self._address.device_address:02X} failed: {e}"
            ) from e
        logger.debug("write reg 0x%02X <- 0x%02X", register, value)
