"""Byte stream interface.

This is the (small) contract that every stream watched by the event loop
follows: the remote connection, the named pipe, and the external program.
It lives outside :mod:`fifoirc.protocol` so the protocol remains unaware of
where its bytes come from.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


# How much to read from a stream for a single readiness notification.
chunk = 4096


# Stream agnostic exceptions

class TransportError(Exception):
    """Base class for all stream errors. Fatal when not handled."""


class TransportConnectionError(TransportError):
    """The remote connection could not be established."""


class Disconnected(TransportError):
    """The remote connection was lost and no reconnect is permitted."""


class Stream(ABC):
    """Minimal contract for a readable/writable byte stream."""

    @abstractmethod
    def open(self) -> None:
        """Establish the underlying handle."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying handle."""

    @abstractmethod
    def fileno(self) -> int:
        """The descriptor to register with the poller."""

    @abstractmethod
    def read(self) -> Optional[bytes]:
        """Read whatever is available without blocking.

        Return:
          - bytes -> data currently available
          - b''   -> end-of-stream
          - None  -> nothing available right now
        """

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Write all of *data* to the stream."""

    def reopen(self) -> None:
        self.close()
        self.open()

    @property
    def is_open(self) -> bool:
        """Whether the stream currently holds a handle."""
        return False
