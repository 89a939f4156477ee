""" The :class:`Router` decides what each line means. Lines from the local
    pipe or the external program become directed messages to the channel;
    lines from the server are classified, and keepalive probes and
    capability queries are answered automatically.
"""

import logging

from . import __version__
from . import log as logs
from .protocol import factory
from .protocol import fields
from .protocol.message import DirectedMessage, KeepalivePing
from .protocol.wire import strip, unpack_line
from .session import PROGRAM


log = logging.getLogger(__name__)


class Router:
    """ Dispatch lines between the :class:`fifoirc.connection.Connection`
        and the local sources of a :class:`fifoirc.session.Session`. The
        *version* is what this bridge reports in reply to a CTCP VERSION
        query.
    """

    def __init__(self, session, connection, version=None):

        if version is None:
            version = 'fifoirc ' + __version__

        self.session = session
        self.connection = connection
        self.version = version


    def budget(self):
        """ The number of bytes available for the body of one outgoing
            directed message.
        """

        target = self.session.config.channel
        prefix = factory.privmsg(target, '', reserve=None).prefix()
        return max(fields.RESERVE - len(prefix), 1)


    def local_line(self, line):
        """ Send one line of local text to the channel. Line terminators
            anywhere in the line are removed, so that one local line is
            always exactly one protocol line.
        """

        body = line.replace(b'\r', b'').replace(b'\n', b'')
        frame = factory.privmsg(self.session.config.channel, body)
        self.connection.send(frame)


    def remote_line(self, line):
        """ Handle one line received from the server.
        """

        self.connection.received()

        line = strip(line)
        logs.traffic(log, '<', line)

        event = unpack_line(line)

        if isinstance(event, KeepalivePing):
            self.connection.send(factory.pong(event))

        elif isinstance(event, DirectedMessage):
            self._forward(event)

            if event.is_ctcp(fields.VERSION) and event.sender:
                reply = factory.version_reply(event.sender, self.version)
                self.connection.send(reply)

        return event


    def _forward(self, event):
        """ Hand the body of a directed message to the external program,
            if there is one.
        """

        source = self.session.get(PROGRAM)
        if source is None:
            return

        source.stream.write(event.body + b'\n')


# end of class Router


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
