"""Incremental line framing for byte streams.

Each source owns one :class:`LineBuffer`. Bytes are appended as they become
available; complete lines come out, and an unterminated remainder waits in
the buffer for the next readiness notification:

    data -> feed() -> [line, line, ...]      (each line ends with b'\\n')

The buffer never reads from a stream itself, and so it can never block.
"""

from __future__ import annotations

from typing import List, Optional

from ..protocol.message import truncate


terminator = b"\n"


class LineBuffer:
    """Accumulate bytes until a line feed is seen.

    A line longer than *limit* bytes is truncated: once the pending line is
    full, further bytes are discarded until its terminator arrives. The
    truncated line is still emitted, terminator included.
    """

    def __init__(self, limit: int = 1024):
        if limit < 1:
            raise ValueError(f"line limit must be positive, not {limit!r}")

        self.limit = int(limit)
        self._pending = bytearray()
        self._discarding = False

    def __len__(self) -> int:
        return len(self._pending)

    def feed(self, data: bytes) -> List[bytes]:
        """Append *data*; return every line it completes, in order."""

        lines: List[bytes] = []
        start = 0

        while start < len(data):
            end = data.find(terminator, start)

            if end == -1:
                self._append(data[start:])
                break

            self._append(data[start:end])
            lines.append(bytes(self._pending) + terminator)
            self._pending.clear()
            self._discarding = False
            start = end + 1

        return lines

    def flush(self) -> Optional[bytes]:
        """Return and clear any unterminated remainder, or None if empty."""

        self._discarding = False

        if not self._pending:
            return None

        line = bytes(self._pending)
        self._pending.clear()
        return line

    def clear(self) -> None:
        self._pending.clear()
        self._discarding = False

    def _append(self, segment: bytes) -> None:
        if self._discarding:
            return

        room = self.limit - len(self._pending)
        if len(segment) <= room:
            self._pending.extend(segment)
            return

        # The cut must not split a UTF-8 multi-byte sequence, including one
        # that started in an earlier segment.

        kept = truncate(bytes(self._pending) + segment, self.limit)
        self._pending[:] = kept
        self._discarding = True
