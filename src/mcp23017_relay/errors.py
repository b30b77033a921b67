"""Error kinds raised while handling a single relay command.

Every error is terminal for the invocation; the CLI maps all of them to
exit code 1.
"""


class RelayError(Exception):
    """Base class for all relay control failures."""


class ArgumentCountError(RelayError):
    """Raised when the command does not consist of exactly two tokens."""


class InvalidTargetError(RelayError):
    """Raised when the target is neither ``init`` nor a relay number 0-7."""


class InvalidStateError(RelayError):
    """Raised when the state is not exactly ``on`` or ``off``."""


class LockTimeoutError(RelayError):
    """Raised when the device lock could not be taken in time."""


class NotInitializedError(RelayError):
    """Raised when the direction register shows the pins are not all outputs."""


class BusError(RelayError):
    """Raised when an I2C register read or write fails."""
