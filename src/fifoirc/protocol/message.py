""" A class representation of IRC protocol lines: :class:`Frame` for lines
    we put on the wire, and the :class:`Event` subclasses for lines the
    remote sends to us.
"""

from . import fields


def _as_bytes(value):
    """ Everything on the wire is bytes; strings are encoded as UTF-8, and
        anything that is already bytes passes through untouched.
    """

    try:
        value = value.encode('utf-8')
    except AttributeError:
        # Assume it is already bytes.
        pass

    return bytes(value)


def truncate(payload, length):
    """ Return at most *length* bytes of *payload*. If the cut would land in
        the middle of a UTF-8 multi-byte sequence, back off to the start of
        that sequence so that the result remains decodable.
    """

    if length < 0:
        length = 0

    if len(payload) <= length:
        return payload

    cut = length
    while cut > 0 and (payload[cut] & 0xC0) == 0x80:
        cut -= 1

    return payload[:cut]


class Frame:
    """ The :class:`Frame` represents one outgoing protocol line. The fields
        are in order of how they are represented on the wire: the *command*,
        zero or more middle *params*, and an optional *trailing* parameter,
        which is the only part of the line allowed to contain spaces.

        The encoded frame, terminator included, never exceeds *limit* bytes.
        Only the trailing payload is truncated to honor that ceiling; the
        command and its params are the addressing prefix, and a prefix that
        does not fit is an error rather than something to cut short.

        :ivar parts: The (prefix, payload) pair once :func:`_finalize` ran.
    """

    def __init__(self, command, params=(), trailing=None, limit=fields.MAXIMUM):

        self.command = command
        self.params = tuple(params)
        self.trailing = trailing
        self.limit = limit

        self.parts = None


    def __bytes__(self):
        self._finalize()
        prefix, payload = self.parts
        return prefix + payload + fields.CRLF


    def __repr__(self):
        self._finalize()
        return 'Frame: ' + repr(b''.join(self.parts))


    def __len__(self):
        return len(bytes(self))


    def line(self):
        """ Return the frame contents without the line terminator.
        """

        self._finalize()
        return b''.join(self.parts)


    def prefix(self):
        """ Return the addressing prefix: everything before the payload.
        """

        prefix = _as_bytes(self.command)

        for param in self.params:
            prefix += b' ' + _as_bytes(param)

        if self.trailing is not None:
            prefix += b' :'

        return prefix


    def _finalize(self):
        """ Interpret the contents of this :class:`Frame` as bytes, and
            apply the length ceiling to the payload.
        """

        if self.parts is not None:
            return

        prefix = self.prefix()

        if self.trailing is None:
            payload = b''
        else:
            payload = _as_bytes(self.trailing)

        budget = self.limit - len(fields.CRLF) - len(prefix)

        if budget < 0:
            raise ValueError('frame prefix exceeds %d bytes: %r' % (self.limit, prefix))

        # Line terminators embedded in the payload would split one frame
        # into several protocol lines.

        payload = payload.replace(b'\r', b'').replace(b'\n', b'')
        payload = truncate(payload, budget)

        self.parts = (prefix, payload)


# end of class Frame



class Echo(Frame):
    """ An :class:`Echo` replaces the leading command of a received line and
        sends everything after it back byte-for-byte. This is how a keepalive
        probe is acknowledged: the probe's argument is returned unchanged.
    """

    def __init__(self, command, remainder, limit=fields.MAXIMUM):
        Frame.__init__(self, command, limit=limit)
        self.remainder = remainder


    def _finalize(self):

        if self.parts is not None:
            return

        prefix = _as_bytes(self.command)
        payload = _as_bytes(self.remainder)

        payload = payload.replace(b'\r', b'').replace(b'\n', b'')
        payload = truncate(payload, self.limit - len(fields.CRLF) - len(prefix))

        self.parts = (prefix, payload)


# end of class Echo



class Event:
    """ One line received from the remote, with the line terminator already
        removed. Every received line becomes exactly one :class:`Event`.

        :ivar raw: The received line, as bytes.
    """

    def __init__(self, raw):
        self.raw = raw


    def __repr__(self):
        return '%s: %r' % (self.__class__.__name__, self.raw)


# end of class Event



class KeepalivePing(Event):
    """ The remote is probing whether we are still alive. The *argument* is
        everything following the leading PING token, separator included.
    """

    def __init__(self, raw, argument):
        Event.__init__(self, raw)
        self.argument = argument


# end of class KeepalivePing



class DirectedMessage(Event):
    """ A PRIVMSG addressed to a channel or directly to us. The *sender* is
        the nickname portion of the line's prefix, or None if the line did
        not have one; the *body* is the free-form text payload.
    """

    def __init__(self, raw, sender, target, body):
        Event.__init__(self, raw)
        self.sender = sender
        self.target = target
        self.body = body


    def is_ctcp(self, query):
        """ Return True if the body is exactly the CTCP *query*, for example
            '\\x01VERSION\\x01' for *query* 'VERSION'.
        """

        expected = _as_bytes(fields.CTCP + query + fields.CTCP)
        return self.body == expected


# end of class DirectedMessage



class Unclassified(Event):
    pass


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
