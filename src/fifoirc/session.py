""" The :class:`Session` is the single long-lived context for one run of
    the bridge, and the :class:`Source` subclasses are the streams it
    watches. Each source pairs one stream with its own partial-line buffer,
    so that a line arriving in pieces on one source never holds up another.
"""

import time

from .transport.framing import LineBuffer


PIPE = 'pipe'
REMOTE = 'remote'
PROGRAM = 'program'


class Source:
    """ A :class:`Source` wraps one :class:`fifoirc.transport.Stream` and
        the :class:`fifoirc.transport.LineBuffer` that frames its bytes.
        Subclasses identify which kind of stream this is; the event loop
        chooses how to dispatch lines and recover from end-of-stream based
        on the *kind*.

        :ivar flush_on_eof: If True, an unterminated line left in the
            buffer at end-of-stream is still delivered.
    """

    kind = None
    flush_on_eof = True

    def __init__(self, stream, limit=1024):
        self.stream = stream
        self.buffer = LineBuffer(limit)


    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.stream)


    def fileno(self):
        return self.stream.fileno()


    def read(self):
        """ Read once from the stream and return a (lines, eof) tuple. The
            list of lines contains every line completed by the bytes that
            were available; *eof* is True if the stream reported
            end-of-stream.
        """

        data = self.stream.read()

        if data is None:
            return [], False

        if data == b'':
            lines = list()
            if self.flush_on_eof:
                remainder = self.buffer.flush()
                if remainder is not None:
                    lines.append(remainder)
            self.buffer.clear()
            return lines, True

        return self.buffer.feed(data), False


    def reopen(self):
        """ Discard any buffered partial line and reopen the stream.
        """

        self.buffer.clear()
        self.stream.reopen()


    def close(self):
        self.buffer.clear()
        self.stream.close()


# end of class Source



class PipeSource(Source):
    kind = PIPE


class RemoteSource(Source):
    kind = REMOTE
    flush_on_eof = False


class ProgramSource(Source):
    kind = PROGRAM



class Session:
    """ One :class:`Session` exists per run of the bridge. It carries the
        static :class:`fifoirc.config.Configuration`, the time the remote
        last sent us anything, the set of active sources (at most one of
        each kind), and the cancellation flag raised by a termination
        signal.

        The *clock* is a callable returning the current time in seconds;
        tests substitute a simulated clock.
    """

    def __init__(self, config, clock=time.time):

        self.config = config
        self.clock = clock
        self.cancelled = False
        self.last_receive = clock()
        self.sources = dict()


    def add(self, source):
        """ Make *source* active, replacing any previous source of the same
            kind. The replaced source, if any, is returned unclosed.
        """

        previous = self.sources.get(source.kind)
        self.sources[source.kind] = source
        return previous


    def remove(self, kind):
        """ Deactivate and return the source of the given *kind*, or None.
        """

        return self.sources.pop(kind, None)


    def get(self, kind):
        return self.sources.get(kind)


    def active(self, source):
        """ Return True if *source* is still the current source of its kind.
        """

        return self.sources.get(source.kind) is source


    def touch(self):
        """ Record that the remote just sent us something.
        """

        self.last_receive = self.clock()


    def idle(self):
        """ Seconds since the remote last sent us anything.
        """

        return self.clock() - self.last_receive


    def cancel(self):
        self.cancelled = True


# end of class Session


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
