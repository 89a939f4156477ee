""" Python implementation of fifoirc: read lines from a named pipe, and
    optionally from an external program, and send them to an IRC channel.
    Keepalive probes and capability queries from the server are answered
    automatically.
"""

__version__ = '1.0.0'

# Utility components.

from . import log
from . import config

# Submodules used by multiple other components.

from . import protocol
from . import transport

# Primary public-facing interfaces.

from .config import Configuration
from .session import Session
from .connection import Connection
from .router import Router
from .loop import EventLoop

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
