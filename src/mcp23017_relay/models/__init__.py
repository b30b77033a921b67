"""Data models for relay state read from the device."""

from .relay_bank import RelayBank
