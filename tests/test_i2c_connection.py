"""Tests for the smbus2-backed register connection."""

from unittest.mock import patch

import pytest

from mcp23017_relay.config import HardwareAddress
from mcp23017_relay.errors import BusError
from mcp23017_relay.transport.i2c_connection import I2CConnection

ADDRESS = HardwareAddress(bus_id=1, device_address=0x24)
SMBUS = "mcp23017_relay.transport.i2c_connection.SMBus"


def test_open_uses_bus_id():
    with patch(SMBUS) as smbus_cls:
        with I2CConnection(ADDRESS) as conn:
            assert conn.connected
        smbus_cls.assert_called_once_with(1)
        smbus_cls.return_value.close.assert_called_once()
    assert not conn.connected


def test_read_register_returns_byte():
    with patch(SMBUS) as smbus_cls:
        bus = smbus_cls.return_value
        bus.read_byte_data.return_value = 0xF7
        with I2CConnection(ADDRESS) as conn:
            assert conn.read_register(0x14) == 0xF7
        bus.read_byte_data.assert_called_once_with(0x24, 0x14)


def test_write_register():
    with patch(SMBUS) as smbus_cls:
        bus = smbus_cls.return_value
        with I2CConnection(ADDRESS) as conn:
            conn.write_register(0x00, 0x00)
            conn.write_register(0x14, 0xFF)
        assert bus.write_byte_data.call_args_list == [
            ((0x24, 0x00, 0x00),),
            ((0x24, 0x14, 0xFF),),
        ]


def test_write_rejects_non_byte():
    with patch(SMBUS) as smbus_cls:
        with I2CConnection(ADDRESS) as conn:
            with pytest.raises(ValueError):
                conn.write_register(0x14, 0x100)
        smbus_cls.return_value.write_byte_data.assert_not_called()


def test_read_failure_is_bus_error():
    with patch(SMBUS) as smbus_cls:
        smbus_cls.return_value.read_byte_data.side_effect = OSError(121, "Remote I/O error")
        with I2CConnection(ADDRESS) as conn:
            with pytest.raises(BusError) as excinfo:
                conn.read_register(0x00)
        assert isinstance(excinfo.value.__cause__, OSError)


def test_write_failure_is_bus_error():
    with patch(SMBUS) as smbus_cls:
        smbus_cls.return_value.write_byte_data.side_effect = OSError(121, "Remote I/O error")
        with I2CConnection(ADDRESS) as conn:
            with pytest.raises(BusError):
                conn.write_register(0x14, 0x01)


def test_open_failure_is_bus_error():
    with patch(SMBUS, side_effect=FileNotFoundError(2, "No such file")):
        with pytest.raises(BusError, match="bus 1"):
            I2CConnection(ADDRESS).open()


def test_use_while_closed():
    conn = I2CConnection(ADDRESS)
    with pytest.raises(BusError):
        conn.read_register(0x00)
    with pytest.raises(BusError):
        conn.write_register(0x00, 0x00)


def test_close_error_is_logged_not_raised():
    with patch(SMBUS) as smbus_cls:
        smbus_cls.return_value.close.side_effect = OSError("gone")
        conn = I2CConnection(ADDRESS)
        conn.open()
        conn.close()
    assert not conn.connected
