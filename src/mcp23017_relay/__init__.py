"""Relay control for an MCP23017/MCP23008 I/O expander over I2C."""

__version__ = "0.1.0"
