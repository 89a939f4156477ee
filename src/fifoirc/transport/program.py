"""External program attached through its standard input and output."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from typing import List, Optional, Sequence, Union

from .base import Stream, TransportError, chunk


log = logging.getLogger(__name__)


class ProgramStream(Stream):
    """A spawned program seen as one duplex byte stream.

    Writing goes to the program's standard input; reading comes from its
    standard output. The *command* is either an argument list or a command
    line, which is split the way a shell would split it.
    """

    timeout = 2

    # Bytes held for a program that is not keeping up with its input.
    backlog = 65536

    def __init__(self, command: Union[str, Sequence[str]]):
        if isinstance(command, str):
            command = shlex.split(command)

        self.arguments: List[str] = list(command)
        if not self.arguments:
            raise ValueError("an empty command cannot be spawned")

        self.process: Optional[subprocess.Popen] = None
        self._pending = bytearray()

    def __repr__(self) -> str:
        return f"ProgramStream({shlex.join(self.arguments)})"

    def open(self) -> None:
        pipe = subprocess.PIPE

        try:
            self.process = subprocess.Popen(self.arguments, stdin=pipe, stdout=pipe, bufsize=0)
        except OSError as exc:
            raise TransportError(f"spawn {self.arguments[0]}: {exc}") from exc

        # Writing to a program that stops reading must never block the loop.
        os.set_blocking(self.process.stdin.fileno(), False)
        self._pending.clear()

        log.info("spawned %s, pid %d", self.arguments[0], self.process.pid)

    def close(self) -> None:
        process = self.process
        if process is None:
            return

        self.process = None
        self._pending.clear()

        for pipe in (process.stdin, process.stdout):
            try:
                pipe.close()
            except OSError:
                pass

        if process.poll() is None:
            process.terminate()
            try:
                process.wait(self.timeout)
            except subprocess.TimeoutExpired:
                process.kill()
                process.wait()

        log.info("%s exited with status %s", self.arguments[0], process.returncode)

    def fileno(self) -> int:
        if self.process is None:
            raise TransportError(f"{self!r} is not running")
        return self.process.stdout.fileno()

    def read(self) -> Optional[bytes]:
        if self.process is None:
            raise TransportError(f"{self!r} is not running")

        try:
            return os.read(self.process.stdout.fileno(), chunk)
        except BlockingIOError:
            return None

    def write(self, data: bytes) -> None:
        if self.process is None:
            raise TransportError(f"{self!r} is not running")

        # Whatever did not fit earlier goes first. New data that would grow
        # the backlog past its bound is dropped whole, so the program never
        # sees a partial line.

        if self._pending:
            self._flush()

        if len(self._pending) + len(data) > self.backlog:
            log.warning("%s is not keeping up with its input, dropped %d bytes", self.arguments[0], len(data))
            return

        self._pending.extend(data)
        self._flush()

    def _flush(self) -> None:
        fd = self.process.stdin.fileno()

        # A program that has exited also closes its standard output; the
        # event loop sees end-of-stream there and respawns it.

        try:
            while self._pending:
                written = os.write(fd, self._pending)
                del self._pending[:written]
        except BlockingIOError:
            pass
        except BrokenPipeError:
            log.warning("%s is not reading its input", self.arguments[0])
            self._pending.clear()

    @property
    def pending(self) -> int:
        """Bytes waiting for the program to read them."""
        return len(self._pending)

    @property
    def is_open(self) -> bool:
        return self.process is not None
