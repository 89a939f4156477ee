""" The :class:`EventLoop` is the heart of the bridge: it waits for any of
    the active sources to become readable, and dispatches whatever lines
    they produce. All work happens synchronously inside the loop; the wait
    is the only place the bridge ever blocks.
"""

import logging
import os
import signal
import zmq

from .connection import Connection
from .router import Router
from .session import PIPE, PROGRAM, REMOTE, PipeSource, ProgramSource
from .transport.base import TransportError
from .transport.fifo import FifoStream
from .transport.program import ProgramStream


log = logging.getLogger(__name__)


class EventLoop:
    """ Multiplex the sources of a :class:`fifoirc.session.Session`. A
        :class:`fifoirc.connection.Connection` and a
        :class:`fifoirc.router.Router` are created for the session unless
        provided.

        Each pass through :func:`step` waits at most :attr:`wait` seconds.
        If nothing arrives in that time the connection's idle check runs,
        and one keepalive probe is sent regardless of its outcome.

        Termination signals only raise the session's cancellation flag and
        wake the wait; the loop notices the flag, sends QUIT, and returns.
    """

    wait = 600
    signals = (signal.SIGINT, signal.SIGTERM, signal.SIGHUP)

    def __init__(self, session, connection=None, router=None):

        if connection is None:
            connection = Connection(session)

        if router is None:
            router = Router(session, connection)

        self.session = session
        self.connection = connection
        self.router = router

        self.handlers = {
            PIPE: router.local_line,
            PROGRAM: router.local_line,
            REMOTE: router.remote_line,
        }

        self.recovery = {
            PIPE: self._recover_pipe,
            PROGRAM: self._recover_program,
            REMOTE: self._recover_remote,
        }

        self._previous_handlers = dict()
        self._wake_rx, self._wake_tx = os.pipe()
        os.set_blocking(self._wake_rx, False)
        os.set_blocking(self._wake_tx, False)


    def start(self):
        """ Open the named pipe, connect to the server, and spawn the
            external program if one is configured, in that order.
        """

        config = self.session.config
        limit = self.router.budget()

        pipe = PipeSource(FifoStream(config.fifo, config.mode), limit)
        pipe.stream.open()
        self.session.add(pipe)
        log.info('fifo at %s', config.fifo)

        self.connection.connect()

        if config.program:
            program = ProgramSource(ProgramStream(config.program), limit)
            program.stream.open()
            self.session.add(program)


    def run(self):
        """ Start the bridge and loop until cancelled. Returns the exit
            status for the process; fatal conditions are raised as
            :class:`fifoirc.transport.TransportError` instead.
        """

        self.install_signals()

        try:
            self.start()

            while self.step(self.wait):
                pass
        finally:
            self.restore_signals()

        self.quit()
        return 0


    def step(self, timeout=None):
        """ Wait up to *timeout* seconds for activity and handle it. Returns
            False once the session has been cancelled, True otherwise.
        """

        if self.session.cancelled:
            return False

        poller = zmq.Poller()
        poller.register(self._wake_rx, zmq.POLLIN)

        by_fd = dict()
        for source in list(self.session.sources.values()):
            fd = source.fileno()
            by_fd[fd] = source
            poller.register(fd, zmq.POLLIN | zmq.POLLERR)

        if timeout is None:
            milliseconds = None
        else:
            milliseconds = int(timeout * 1000)

        interrupted = False

        try:
            ready = poller.poll(milliseconds)
        except zmq.error.InterruptedSystemCall:
            ready = list()
            interrupted = True
        except zmq.ZMQError as e:
            raise TransportError('poll: ' + str(e))

        ready = dict(ready)

        if self._wake_rx in ready:
            del ready[self._wake_rx]
            self._drain_wake()
            interrupted = True

        if self.session.cancelled:
            return False

        if not ready:
            if timeout is not None and not interrupted:
                self.timeout()
            return True

        for fd, flags in ready.items():
            source = by_fd[fd]

            # An earlier source in this same pass may have replaced this
            # one, for example by reconnecting.

            if not self.session.active(source):
                continue

            self.handle(source, flags)

        return True


    def timeout(self):
        """ Nothing arrived during a full wait. The idle check may decide
            the peer is dead; either way, probe the connection.
        """

        self.connection.idle_check()
        self.connection.keepalive()


    def handle(self, source, flags):
        """ Process one ready *source*: read what is available, dispatch
            every complete line, and recover the source if it reported
            end-of-stream.
        """

        # A hang-up is reported as POLLERR. Reading is still the right
        # response: whatever the writer left behind comes out first, and
        # then the read reports end-of-stream.

        if not flags & (zmq.POLLIN | zmq.POLLERR):
            return

        lines, eof = source.read()
        handler = self.handlers[source.kind]

        for line in lines:
            handler(line)

        if eof:
            self.hangup(source)


    def hangup(self, source):
        if not self.session.active(source):
            return

        recover = self.recovery[source.kind]
        recover(source)


    def _recover_pipe(self, source):
        log.info('fifo %s closed by writer, reopening', self.session.config.fifo)
        source.reopen()


    def _recover_program(self, source):
        log.warning('%s exited, restarting', self.session.config.program)
        source.reopen()


    def _recover_remote(self, source):
        self.connection.disconnect()


    def quit(self):
        """ Send the termination message and close every source.
        """

        self.connection.quit()

        for kind in list(self.session.sources):
            source = self.session.remove(kind)
            source.close()


    def close(self):
        """ Best-effort shutdown after a fatal error. Errors raised while
            closing are logged, not raised; the original error is what
            matters to the caller.
        """

        try:
            self.quit()
        except (OSError, TransportError) as e:
            log.error('error while shutting down: %s', str(e))

        for fd in (self._wake_rx, self._wake_tx):
            if fd is not None:
                os.close(fd)

        self._wake_rx = None
        self._wake_tx = None


    def install_signals(self):
        for signum in self.signals:
            self._previous_handlers[signum] = signal.signal(signum, self._signal)


    def restore_signals(self):
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, handler)

        self._previous_handlers.clear()


    def _signal(self, signum, frame):

        self.session.cancel()

        try:
            os.write(self._wake_tx, b'\0')
        except BlockingIOError:
            # The pipe is full; the loop is already due to wake up.
            pass


    def _drain_wake(self):

        while True:
            try:
                data = os.read(self._wake_rx, 64)
            except BlockingIOError:
                return

            if not data:
                return


# end of class EventLoop


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
