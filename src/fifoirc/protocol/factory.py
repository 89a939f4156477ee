"""Convenience constructors for protocol frames."""

from __future__ import annotations

from typing import Optional, Union

from . import fields
from .message import Echo, Frame, KeepalivePing, truncate


Text = Union[str, bytes]


def nick(nickname: Text) -> Frame:
    return Frame(fields.NICK, (nickname,))


def user(nickname: Text, server: Text, fullname: Text) -> Frame:
    """Register our identity; the display name rides in the trailing field."""
    return Frame(fields.USER, (nickname, "localhost", server), trailing=fullname)


def identify(nickname: Text, password: Text) -> Frame:
    """Forward the identification secret to NickServ."""
    body = "identify %s %s" % (_text(nickname), _text(password))
    return Frame(fields.PRIVMSG, (fields.NICKSERV,), trailing=body)


def join(channel: Text) -> Frame:
    return Frame(fields.JOIN, (channel,))


def privmsg(target: Text, body: Text, reserve: Optional[int] = fields.RESERVE) -> Frame:
    """Address *body* to *target*.

    With a *reserve*, the prefix and body together are cut down to that many
    bytes, which leaves the server headroom to echo the message to others.
    """

    frame = Frame(fields.PRIVMSG, (target,), trailing=body)
    if reserve is not None:
        room = reserve - len(frame.prefix())
        if room < 0:
            raise ValueError(f"target {target!r} leaves no room for a message body")
        frame.trailing = truncate(_bytes(body).replace(b"\r", b"").replace(b"\n", b""), room)
    return frame


def notice(target: Text, body: Text) -> Frame:
    return Frame(fields.NOTICE, (target,), trailing=body)


def ping(server: Text) -> Frame:
    return Frame(fields.PING, trailing=server)


def pong(probe: KeepalivePing) -> Frame:
    """Acknowledge a keepalive probe, echoing its argument unchanged."""
    return Echo(fields.PONG, probe.argument)


def quit(message: Optional[Text] = None) -> Frame:
    return Frame(fields.QUIT, trailing=message)


def version_reply(sender: Text, version: Text) -> Frame:
    """Answer a CTCP VERSION query from *sender*."""
    body = fields.CTCP + fields.VERSION + " " + _text(version) + fields.CTCP
    return notice(sender, body)


def _bytes(value: Text) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def _text(value: Text) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", "replace")
    return value
