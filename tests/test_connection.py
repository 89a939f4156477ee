import pytest
import socket

import fifoirc
from fifoirc.connection import State
from fifoirc.session import REMOTE


handshake = [
    b'NICK bot',
    b'USER bot localhost irc.example.net :bot',
    b'JOIN #test',
]


def test_connect(connection, remote, session):

    assert connection.state == State.DISCONNECTED

    connection.connect()

    assert connection.state == State.CONNECTED
    assert remote.lines() == handshake
    assert session.get(REMOTE).stream is connection.stream
    assert session.idle() == 0


def test_connect_with_password(connection, remote, config):

    config.password = 'secret'
    config.fullname = 'Bridge Bot'
    connection.connect()

    assert remote.lines() == [
        b'NICK bot',
        b'USER bot localhost irc.example.net :Bridge Bot',
        b'PRIVMSG NickServ :identify bot secret',
        b'JOIN #test',
    ]


def test_connect_refused(connection, remote):

    remote.refuse = True

    with pytest.raises(fifoirc.transport.TransportConnectionError):
        connection.connect()

    assert connection.state == State.DISCONNECTED


def test_tcp_connect_refused(session):

    # Find a port nobody is listening on.

    spare = socket.socket()
    spare.bind(('127.0.0.1', 0))
    port = spare.getsockname()[1]
    spare.close()

    session.config.server = '127.0.0.1'
    session.config.port = port
    connection = fifoirc.Connection(session)

    with pytest.raises(fifoirc.transport.TransportConnectionError):
        connection.connect()


def test_received_resets_idle(connection, session, clock):

    connection.connect()
    clock.advance(300)
    assert session.idle() == 300

    connection.received()
    assert session.idle() == 0


def test_idle_check(connection, remote, clock, config):

    config.reconnect = True
    connection.connect()
    remote.drain()

    clock.advance(600)
    assert connection.idle_check() == False
    assert remote.drain() == b''

    clock.advance(1)
    assert connection.idle_check() == True
    assert connection.connects == 2
    assert len(remote.peers) == 2
    assert remote.lines() == handshake

    # The reconnect reset the idle timer.

    assert connection.idle_check() == False


def test_idle_check_without_reconnect(connection, clock):

    connection.connect()
    clock.advance(601)

    with pytest.raises(fifoirc.transport.Disconnected):
        connection.idle_check()

    assert connection.state == State.DISCONNECTED
    assert connection.stream is None


def test_disconnect_reconnects(connection, remote, session, config):

    config.reconnect = True
    connection.connect()
    first = session.get(REMOTE)

    connection.disconnect()

    second = session.get(REMOTE)
    assert second is not first
    assert first.stream.is_open == False
    assert connection.state == State.CONNECTED
    assert remote.lines() == handshake


def test_keepalive(connection, remote):

    connection.connect()
    remote.drain()

    connection.keepalive()
    assert remote.lines() == [b'PING :irc.example.net']


def test_quit(connection, remote, session):

    connection.connect()
    peer = remote.peer
    remote.drain()

    connection.quit()

    assert remote.lines(peer) == [b'QUIT']
    assert connection.state == State.TERMINATED
    assert session.get(REMOTE) is None

    # Quitting twice is harmless, and sends nothing more.

    connection.quit()


def test_send_requires_connection(connection):

    with pytest.raises(fifoirc.transport.TransportError):
        connection.keepalive()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
