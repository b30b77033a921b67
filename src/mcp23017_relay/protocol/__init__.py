"""Protocol layer: register maps, bit arithmetic, and command parsing."""

from .bitmask import set_bit, clear_bit
from .commands import InitCommand, SetRelayCommand, RelayState, parse_command
