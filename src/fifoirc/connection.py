""" The :class:`Connection` owns the lifecycle of the connection to the IRC
    server: the connect handshake, idle detection, the disconnect policy,
    and the orderly quit.

        DISCONNECTED -> CONNECTING -> CONNECTED -> DISCONNECTED
                                              \\-> TERMINATED

    Keepalive probes are not part of this state machine; the event loop
    sends one whenever its wait times out.
"""

import enum
import logging

from . import log as logs
from .protocol import factory
from .protocol.wire import pack_frame
from .session import REMOTE, RemoteSource
from .transport.base import Disconnected, TransportError
from .transport.tcp import TcpStream


log = logging.getLogger(__name__)


class State(enum.Enum):
    DISCONNECTED = 'disconnected'
    CONNECTING = 'connecting'
    CONNECTED = 'connected'
    TERMINATED = 'terminated'


class Connection:
    """ Connection manager for the single remote connection of a
        :class:`fifoirc.session.Session`. The *connector* is called with
        (host, port) and returns an unopened
        :class:`fifoirc.transport.Stream`; the default opens a TCP
        connection. Every successful connect installs a fresh
        :class:`fifoirc.session.RemoteSource` in the session.

        :ivar idle_limit: Seconds of silence from the remote after which
            the peer is considered dead.
    """

    idle_limit = 600
    line_limit = 1024

    def __init__(self, session, connector=TcpStream):

        self.session = session
        self.connector = connector
        self.state = State.DISCONNECTED
        self.stream = None
        self.connects = 0


    def connect(self):
        """ Open the connection and register with the server. A failure to
            connect raises :class:`fifoirc.transport.TransportConnectionError`
            immediately; there is no retry at this stage.
        """

        config = self.session.config

        self.state = State.CONNECTING
        stream = self.connector(config.server, config.port)

        try:
            stream.open()
        except TransportError:
            self.state = State.DISCONNECTED
            raise

        self.stream = stream
        self.session.add(RemoteSource(stream, self.line_limit))
        self.state = State.CONNECTED
        self.connects += 1

        self.send(factory.nick(config.nickname))
        self.send(factory.user(config.nickname, config.server, config.fullname))

        if config.password:
            self.send(factory.identify(config.nickname, config.password))

        self.send(factory.join(config.channel))

        self.session.touch()


    def send(self, frame):
        """ Put one :class:`fifoirc.protocol.Frame` on the wire.
        """

        if self.stream is None:
            raise TransportError('not connected to ' + self.session.config.server)

        data = pack_frame(frame)
        logs.traffic(log, '>', frame.line())
        self.stream.write(data)


    def received(self):
        """ Any line from the remote, whatever its content, proves the peer
            is alive.
        """

        self.session.touch()


    def idle_check(self):
        """ Apply the disconnect policy if the remote has been silent for
            longer than :attr:`idle_limit` seconds. Returns True if it was.
        """

        idle = self.session.idle()

        if idle <= self.idle_limit:
            return False

        log.error('ping timeout: %d seconds', int(idle))
        self.disconnect()
        return True


    def keepalive(self):
        self.send(factory.ping(self.session.config.server))


    def disconnect(self):
        """ The connection is gone. Reconnect with a full handshake if the
            configuration allows it; otherwise raise
            :class:`fifoirc.transport.Disconnected`.
        """

        config = self.session.config
        log.error('disconnection from %s', config.server)

        self._drop()
        self.state = State.DISCONNECTED

        if config.reconnect:
            self.connect()
        else:
            raise Disconnected('disconnection from ' + config.server)


    def quit(self):
        """ Tell the server we are leaving, without waiting for any
            acknowledgment, and close the connection.
        """

        if self.state == State.CONNECTED:
            self.send(factory.quit())

        self._drop()
        self.state = State.TERMINATED


    def _drop(self):

        source = self.session.get(REMOTE)
        if source is not None and source.stream is self.stream:
            self.session.remove(REMOTE)

        stream = self.stream
        self.stream = None

        if stream is not None:
            stream.close()


# end of class Connection


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
