from __future__ import annotations

from typing import Optional

from . import fields
from .message import DirectedMessage, Event, Frame, KeepalivePing, Unclassified


_PING = fields.PING.encode()
_PRIVMSG = fields.PRIVMSG.encode()


def pack_frame(frame: Frame) -> bytes:
    """
    Serialize Frame -> bytes

    Layout:
        [command][ params...][ :trailing]\\r\\n

    The result never exceeds the frame's limit (512 bytes by default).
    """

    return bytes(frame)


def strip(line: bytes) -> bytes:
    """
    Cut a received line at its first CR or LF.
    """

    for index, byte in enumerate(line):
        if byte in (0x0D, 0x0A):
            return line[:index]
    return line


def unpack_line(line: bytes) -> Event:
    """
    Deserialize one received line -> Event

    Classification, first match wins:
        PING ...                        -> KeepalivePing
        <prefix> PRIVMSG <target> :body -> DirectedMessage
        anything else                   -> Unclassified
    """

    line = strip(line)

    token, _sep, _rest = line.partition(b" ")
    if token == _PING:
        return KeepalivePing(line, line[len(_PING):])

    # A PING line is never also looked at as a directed message.
    tokens = line.split(b" ", 2)
    if len(tokens) == 3 and tokens[1] == _PRIVMSG:
        after = line[len(tokens[0]) + 1 + len(_PRIVMSG):]
        colon = after.find(b":")
        if colon != -1:
            target = after[:colon].strip() or None
            body = after[colon + 1:]
            return DirectedMessage(line, sender(line), target, body)

    return Unclassified(line)


def sender(line: bytes) -> Optional[bytes]:
    """
    Extract the nickname from a line prefix such as ':alice!u@h'.

    Returns None if the line carries no prefix.
    """

    if not line.startswith(b":"):
        return None

    source = line[1:].split(b" ", 1)[0]
    nickname = source.split(b"!", 1)[0]
    return nickname or None
