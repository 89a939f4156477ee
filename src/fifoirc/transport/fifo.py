"""Named pipe that local writers drop lines into."""

from __future__ import annotations

import logging
import os
import stat
from typing import Optional

from .base import Stream, TransportError, chunk


log = logging.getLogger(__name__)


def make_fifo(path: str, mode: int = 0o700) -> None:
    """Create the named pipe at *path* unless one is already there.

    An existing path that is not a named pipe is an error; so is a failure
    to create the pipe. The permission *mode* is applied on creation.
    """

    try:
        status = os.stat(path)
    except FileNotFoundError:
        pass
    else:
        if not stat.S_ISFIFO(status.st_mode):
            raise TransportError(f"{path}: exists and is not a fifo")
        return

    try:
        os.mkfifo(path, mode)
    except OSError as exc:
        raise TransportError(f"mkfifo {path}: {exc}") from exc

    # mkfifo() is subject to the umask; the requested mode is what we want.
    os.chmod(path, mode)
    log.info("created fifo %s, mode %o", path, mode)


class FifoStream(Stream):
    """Read side of the named pipe at *path*.

    The pipe is opened non-blocking, so opening never waits for a writer.
    When the last writer closes, reading reports end-of-stream; the pipe is
    then reopened with :func:`reopen` to wait for the next writer.
    """

    def __init__(self, path: str, mode: int = 0o700):
        self.path = path
        self.mode = mode
        self.fd: Optional[int] = None

    def __repr__(self) -> str:
        return f"FifoStream({self.path})"

    def open(self) -> None:
        make_fifo(self.path, self.mode)

        try:
            self.fd = os.open(self.path, os.O_RDONLY | os.O_NONBLOCK)
        except OSError as exc:
            raise TransportError(f"open {self.path}: {exc}") from exc

    def close(self) -> None:
        if self.fd is None:
            return

        try:
            os.close(self.fd)
        finally:
            self.fd = None

    def fileno(self) -> int:
        if self.fd is None:
            raise TransportError(f"{self!r} is not open")
        return self.fd

    def read(self) -> Optional[bytes]:
        if self.fd is None:
            raise TransportError(f"{self!r} is not open")

        try:
            return os.read(self.fd, chunk)
        except BlockingIOError:
            return None

    def write(self, data: bytes) -> None:
        raise TransportError(f"{self!r} is read-only")

    @property
    def is_open(self) -> bool:
        return self.fd is not None
