"""Relay commands and parsing of the two-token command line.

A command is either :class:`InitCommand` (configure every pin as an output
and drive all relays to one state) or :class:`SetRelayCommand` (change one
relay, leaving the others alone). Tokens are matched verbatim: ``ON``,
`` on`` or ``03`` are rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Union

from ..errors import ArgumentCountError, InvalidStateError, InvalidTargetError
from .registers import RELAY_COUNT

INIT_TARGET = "init"

# Relay numbers exactly as they may appear on the command line
RELAY_TARGETS: dict[str, int] = {str(i): i for i in range(RELAY_COUNT)}


class RelayState(Enum):
    """Requested relay state."""

    ON = "on"
    OFF = "off"

    @property
    def is_on(self) -> bool:
        return self is RelayState.ON


@dataclass(frozen=True)
class InitCommand:
    """Force all pins to outputs and set every relay to ``state``."""

    state: RelayState


@dataclass(frozen=True)
class SetRelayCommand:
    """Set a single relay without disturbing the others."""

    index: int
    state: RelayState

    def __post_init__(self) -> None:
        if not 0 <= self.index < RELAY_COUNT:
            raise InvalidTargetError(
                f"Relay number must be 0-{RELAY_COUNT - 1}, got {self.index}"
            )


RelayCommand = Union[InitCommand, SetRelayCommand]


def parse_state(token: str) -> RelayState:
    """Parse a state token (``on`` or ``off``).

    Raises:
        InvalidStateError: For any other token.
    """
    for state in RelayState:
        if token == state.value:
            return state
    raise InvalidStateError(f"Invalid state {token!r}: must be 'on' or 'off'")


def parse_command(tokens: Sequence[str]) -> RelayCommand:
    """Build a command from exactly two tokens: ``<target> <state>``.

    Args:
        tokens: Command-line arguments, without the program name.

    Returns:
        An :class:`InitCommand` or :class:`SetRelayCommand`.

    Raises:
        ArgumentCountError: If there are not exactly two tokens.
        InvalidTargetError: If the target is not ``init`` or 0-7.
        InvalidStateError: If the state is not ``on`` or ``off``.
    """
    if len(tokens) != 2:
        raise ArgumentCountError(
            f"Need two arguments (target and state), got {len(tokens)}"
        )
    target, state_token = tokens

    if target == INIT_TARGET:
        return InitCommand(state=parse_state(state_token))
    if target in RELAY_TARGETS:
        return SetRelayCommand(
            index=RELAY_TARGETS[target], state=parse_state(state_token)
        )
    raise InvalidTargetError(
        f"Invalid target {target!r}: must be 'init' or a relay number "
        f"0-{RELAY_COUNT - 1}"
    )
