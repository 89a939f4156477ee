import os
import pytest
import socket

import fifoirc


class Clock:
    """ Simulated time; tests advance it explicitly.
    """

    def __init__(self, now=1000000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class PairedStream(fifoirc.transport.TcpStream):
    """ A TcpStream whose open() connects to one end of a socket pair
        instead of a real server. The other end is handed to the Remote
        that created it, so that a test can play the server.
    """

    def __init__(self, remote, host, port):
        fifoirc.transport.TcpStream.__init__(self, host, port)
        self.remote = remote

    def open(self):
        if self.remote.refuse:
            raise fifoirc.transport.TransportConnectionError('connect refused')

        ours, theirs = socket.socketpair()
        self.socket = ours
        self.remote.peers.append(theirs)


class Remote:
    """ Stands in for the IRC server. Each connect creates a new peer
        socket; the most recent one is :attr:`peer`.
    """

    def __init__(self):
        self.peers = list()
        self.refuse = False

    def __call__(self, host, port):
        return PairedStream(self, host, port)

    @property
    def peer(self):
        return self.peers[-1]

    def send(self, data):
        self.peer.sendall(data)

    def drain(self, peer=None):
        """ Return everything sent to *peer* so far, without waiting.
        """

        if peer is None:
            peer = self.peer

        peer.setblocking(False)
        data = b''

        while True:
            try:
                chunk = peer.recv(65536)
            except BlockingIOError:
                break

            if not chunk:
                break
            data += chunk

        return data

    def lines(self, peer=None):
        return self.drain(peer).split(b'\r\n')[:-1]

    def close(self):
        for peer in self.peers:
            peer.close()


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def remote():
    remote = Remote()
    yield remote
    remote.close()


@pytest.fixture
def config(tmp_path):
    configuration = fifoirc.Configuration(
        server='irc.example.net',
        nickname='bot',
        channel='#test',
        fifo=str(tmp_path / 'irc-pipe'))

    return configuration.validate()


@pytest.fixture
def session(config, clock):
    return fifoirc.Session(config, clock=clock)


@pytest.fixture
def connection(session, remote):
    return fifoirc.Connection(session, connector=remote)


@pytest.fixture
def loop(session, connection):
    loop = fifoirc.EventLoop(session, connection)
    yield loop
    loop.close()


@pytest.fixture
def writer(config):
    """ Open a write end on the bridge's FIFO; the reader must already be
        open, otherwise a non-blocking open for writing fails.
    """

    opened = list()

    def open_writer():
        fd = os.open(config.fifo, os.O_WRONLY | os.O_NONBLOCK)
        opened.append(fd)
        return fd

    yield open_writer

    for fd in opened:
        try:
            os.close(fd)
        except OSError:
            pass

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
