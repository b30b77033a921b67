"""Command-line entry point: ``mcp23017-relay <target> <state>``.

Exits 0 on success and 1 on any validation, lock or bus error, with a
message on stderr.
"""

from __future__ import annotations

import logging
import sys
from typing import Sequence

from .controller import run_command
from .errors import ArgumentCountError, InvalidStateError, InvalidTargetError, RelayError

logger = logging.getLogger(__name__)

PROG = "mcp23017-relay"

USAGE = f"""\
Proper usage: {PROG} (init|relay#) (on|off)
Examples:
 {PROG} init on  # initialize IO direction and set all relays on
 {PROG} 3 off    # set relay #3 off
 {PROG} 5 on     # set relay #5 on"""

# Errors caused by bad arguments get the usage text as well
_USAGE_ERRORS = (ArgumentCountError, InvalidTargetError, InvalidStateError)


def main(argv: Sequence[str] | None = None) -> int:
    """Run one relay command and return the process exit code."""
    logging.basicConfig(level=logging.WARNING)
    if argv is None:
        argv = sys.argv[1:]

    try:
        bank = run_command(list(argv))
    except RelayError as e:
        print(f"error: {e}", file=sys.stderr)
        if isinstance(e, _USAGE_ERRORS):
            print(USAGE, file=sys.stderr)
        return 1

    logger.debug("Output latch now 0x%02X", bank.value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
