import fifoirc
from fifoirc.protocol.message import DirectedMessage, KeepalivePing, Unclassified
from fifoirc.session import PROGRAM, ProgramSource


class Recorder(fifoirc.transport.Stream):
    """ Stand-in for the external program: remembers what was written.
    """

    def __init__(self):
        self.written = list()

    def open(self):
        pass

    def close(self):
        pass

    def fileno(self):
        return -1

    def read(self):
        return None

    def write(self, data):
        self.written.append(data)


def connected(connection, remote):
    connection.connect()
    remote.drain()


def test_local_line(session, connection, remote):

    connected(connection, remote)
    router = fifoirc.Router(session, connection)

    router.local_line(b'hello\n')
    router.local_line(b'with\rcarriage\r\n')
    router.local_line(b'\n')

    assert remote.drain() == b'PRIVMSG #test :hello\r\nPRIVMSG #test :withcarriage\r\nPRIVMSG #test :\r\n'


def test_budget(session, connection):

    router = fifoirc.Router(session, connection)
    assert router.budget() == fifoirc.protocol.fields.RESERVE - len(b'PRIVMSG #test :')


def test_ping(session, connection, remote, clock):

    connected(connection, remote)
    router = fifoirc.Router(session, connection)
    clock.advance(100)

    event = router.remote_line(b'PING :xyz\r\n')

    assert isinstance(event, KeepalivePing)
    assert remote.drain() == b'PONG :xyz\r\n'
    assert session.idle() == 0


def test_version(session, connection, remote):

    connected(connection, remote)
    router = fifoirc.Router(session, connection, version='fifoirc test')

    event = router.remote_line(b':alice!u@h PRIVMSG bot :\x01VERSION\x01\r\n')

    assert isinstance(event, DirectedMessage)
    assert remote.drain() == b'NOTICE alice :\x01VERSION fifoirc test\x01\r\n'


def test_version_without_sender(session, connection, remote):

    connected(connection, remote)
    router = fifoirc.Router(session, connection)

    router.remote_line(b'PRIVMSG bot :\x01VERSION\x01\r\n')
    assert remote.drain() == b''


def test_forward(session, connection, remote):

    connected(connection, remote)
    router = fifoirc.Router(session, connection)

    program = Recorder()
    session.add(ProgramSource(program))

    router.remote_line(b':alice!u@h PRIVMSG #test :do something\r\n')
    router.remote_line(b':alice!u@h PRIVMSG bot :\x01VERSION\x01\r\n')
    router.remote_line(b':irc.example.net 001 bot :Welcome\r\n')

    assert program.written == [b'do something\n', b'\x01VERSION\x01\n']


def test_unclassified(session, connection, remote):

    connected(connection, remote)
    router = fifoirc.Router(session, connection)

    event = router.remote_line(b':irc.example.net 001 bot :Welcome\r\n')

    assert isinstance(event, Unclassified)
    assert remote.drain() == b''


def test_session_sources(session):

    first = ProgramSource(Recorder())
    second = ProgramSource(Recorder())

    assert session.add(first) is None
    assert session.active(first)

    assert session.add(second) is first
    assert session.active(first) == False
    assert session.get(PROGRAM) is second

    assert session.remove(PROGRAM) is second
    assert session.remove(PROGRAM) is None


def test_source_read(session):

    class Chunks(Recorder):
        def __init__(self, chunks):
            Recorder.__init__(self)
            self.chunks = list(chunks)

        def read(self):
            return self.chunks.pop(0)

    source = ProgramSource(Chunks((b'one\ntw', None, b'o\nthr', b'')))

    assert source.read() == ([b'one\n'], False)
    assert source.read() == ([], False)
    assert source.read() == ([b'two\n'], False)

    # Local sources deliver an unterminated last line at end-of-stream;
    # the remote does not.

    assert source.read() == ([b'thr'], True)

    source = fifoirc.session.RemoteSource(Chunks((b'partial', b'')))
    assert source.read() == ([], False)
    assert source.read() == ([], True)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
