from . import fields
from . import message
from . import wire
from . import factory

from .message import Frame, Event, KeepalivePing, DirectedMessage, Unclassified
from .wire import pack_frame, unpack_line


"""
fifoirc Protocol Layer
======================

This package defines the line-oriented IRC protocol as used by the bridge.
It provides the frame and event structures, construction utilities, and
the classification of received lines.

The protocol layer MUST NOT depend on any stream implementation
(sockets, named pipes, subprocesses).

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

Router (fifoirc.router)
    Decides what to send in response to what was read

    │
    ▼
Frame Factory (factory.py)
    One constructor per outbound command
    - nick(), user(), identify(), join()
    - privmsg(), notice(), version_reply()
    - ping(), pong(), quit()

    │
    ▼
Wire Codec (wire.py)
    Maps Frame -> bytes, received line -> Event

    │
    ▼
Message Model (message.py)
    - Frame / Echo      (outbound, length-bounded)
    - KeepalivePing     (inbound)
    - DirectedMessage   (inbound)
    - Unclassified      (inbound)

    │
    ▼
Field Vocabulary (fields.py)
    Command names and size limits

---------------------------------------------------------------------

Below the Protocol Layer (for context)
--------------------------------------

Framing Layer (fifoirc.transport.framing)
    Accumulates bytes into complete lines

Stream Layer (fifoirc.transport)
    Moves bytes
    - TCP connection to the server
    - Named pipe
    - External program

---------------------------------------------------------------------

Design Principles
-----------------

1. One line, one frame
   An outbound frame is exactly one protocol line; embedded line
   terminators are removed, never sent.

2. Bounded
   No frame exceeds 512 bytes. Only the payload is ever truncated.

3. One line, one event
   Every received line is classified exactly once.

---------------------------------------------------------------------
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
