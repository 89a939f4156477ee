"""TCP connection to the IRC server."""

from __future__ import annotations

import logging
import socket
from typing import Optional

from .base import Stream, TransportConnectionError, TransportError, chunk


log = logging.getLogger(__name__)


class TcpStream(Stream):
    """A client connection to *host*:*port*.

    The socket stays in blocking mode: one recv() per readiness
    notification never blocks, and writes are short lines.
    """

    def __init__(self, host: str, port: int):
        self.host = host
        self.port = int(port)
        self.socket: Optional[socket.socket] = None

    def __repr__(self) -> str:
        return f"TcpStream({self.host}:{self.port})"

    def open(self) -> None:
        try:
            self.socket = socket.create_connection((self.host, self.port))
        except socket.gaierror as exc:
            raise TransportConnectionError(f"cannot resolve {self.host}: {exc}") from exc
        except OSError as exc:
            raise TransportConnectionError(f"connect {self.host}:{self.port}: {exc}") from exc

        log.info("connected to %s:%d", self.host, self.port)

    def close(self) -> None:
        if self.socket is None:
            return

        try:
            self.socket.close()
        finally:
            self.socket = None

    def fileno(self) -> int:
        if self.socket is None:
            raise TransportError(f"{self!r} is not open")
        return self.socket.fileno()

    def read(self) -> Optional[bytes]:
        if self.socket is None:
            raise TransportError(f"{self!r} is not open")

        try:
            return self.socket.recv(chunk)
        except BlockingIOError:
            return None
        except ConnectionError as exc:
            log.warning("%s:%d: %s", self.host, self.port, exc)
            return b""

    def write(self, data: bytes) -> None:
        if self.socket is None:
            raise TransportError(f"{self!r} is not open")

        # A failed send leaves the socket readable at end-of-stream; the
        # event loop then applies the disconnect policy.

        try:
            self.socket.sendall(data)
        except OSError as exc:
            log.warning("send to %s:%d: %s", self.host, self.port, exc)

    @property
    def is_open(self) -> bool:
        return self.socket is not None
