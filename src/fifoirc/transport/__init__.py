"""Byte stream implementations watched by the event loop."""

from .base import (
    Stream,
    TransportError,
    TransportConnectionError,
    Disconnected,
)

from .framing import LineBuffer
from .fifo import FifoStream, make_fifo
from .program import ProgramStream
from .tcp import TcpStream
