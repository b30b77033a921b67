"""Cross-process exclusive lock guarding the expander's registers.

The lock is an advisory ``flock`` on a file. It must be held for the whole
read-modify-write of a command, so two invocations can never interleave
their register accesses. The lock file itself is left in place on release.
"""

from __future__ import annotations

import fcntl
import logging
import os
import time

from ..config import DEFAULT_LOCK_PATH, LOCK_TIMEOUT_S
from ..errors import LockTimeoutError

logger = logging.getLogger(__name__)

POLL_INTERVAL_S = 0.05


class DeviceLock:
    """Exclusive, non-reentrant lock on a named resource.

    Usage::

        with DeviceLock("/tmp/mcp23017relay.lock"):
            ...  # registers may be touched here
    """

    def __init__(
        self,
        path: str = DEFAULT_LOCK_PATH,
        timeout: float = LOCK_TIMEOUT_S,
        poll_interval: float = POLL_INTERVAL_S,
    ) -> None:
        self.path = os.fspath(path)
        self.timeout = timeout
        self.poll_interval = poll_interval
        self._fd: int | None = None

    @property
    def held(self) -> bool:
        return self._fd is not None

    def acquire(self) -> None:
        """Block up to ``timeout`` seconds for the lock.

        Raises:
            LockTimeoutError: If another holder keeps the lock past the deadline.
            RuntimeError: If this instance already holds the lock.
        """
        if self._fd is not None:
            raise RuntimeError(f"Lock {self.path} is already held by this instance")

        try:
            fd = os.open(self.path, os.O_RDWR | os.O_CREAT, 0o666)
        except OSError as e:
            raise LockTimeoutError(f"Could not open lock file {self.path}: {e}") from e
        deadline = time.monotonic() + self.timeout
        while True:
            try:
                fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
                break
            except BlockingIOError:
                if time.monotonic() >= deadline:
                    os.close(fd)
                    raise LockTimeoutError(
                        f"Could not lock {self.path} within {self.timeout:g}s; "
                        f"another command is still running"
                    ) from None
                time.sleep(self.poll_interval)
            except OSError as e:
                os.close(fd)
                raise LockTimeoutError(f"Could not lock {self.path}: {e}") from e

        self._fd = fd
        logger.debug("Acquired lock %s", self.path)

    def release(self) -> None:
        """Release the lock. Does nothing if it is not held."""
        if self._fd is None:
            return
        fd, self._fd = self._fd, None
        try:
            fcntl.flock(fd, fcntl.LOCK_UN)
        finally:
            os.close(fd)
        logger.debug("Released lock %s", self.path)

    def __enter__(self) -> DeviceLock:
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
