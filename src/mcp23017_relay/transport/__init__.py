"""Transport layer: I2C register access and the cross-process device lock."""

from .i2c_connection import I2CConnection
from .lock import DeviceLock
