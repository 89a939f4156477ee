""" Logging setup for the bridge. Every module logs through its own
    ``logging.getLogger(__name__)``; :func:`setup` attaches one handler to
    the package logger, with a level chosen by the verbosity count.
"""

import logging
import string
import sys


# Verbosity thresholds, as counted by repeated -v options.

INFO = 1
TRAFFIC = 2

_printable = set(string.printable.encode()) - set(b'\t\n\r\x0b\x0c')


def setup(verbose=0, stream=None):
    """ Configure the 'fifoirc' logger. With no -v only warnings and errors
        are shown; -v adds connection and pipe lifecycle messages; -vv adds
        every protocol line sent and received.
    """

    if verbose >= TRAFFIC:
        level = logging.DEBUG
    elif verbose >= INFO:
        level = logging.INFO
    else:
        level = logging.WARNING

    if stream is None:
        stream = sys.stderr

    logger = logging.getLogger('fifoirc')
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter('fifoirc: %(message)s'))
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def printable(line):
    """ Render *line* (bytes) for display, escaping anything that is not
        printable ASCII as \\xNN.
    """

    rendered = list()
    for byte in line:
        if byte in _printable:
            rendered.append(chr(byte))
        else:
            rendered.append('\\x%02x' % (byte))

    return ''.join(rendered)


def traffic(logger, direction, line):
    """ Log one protocol line; *direction* is '>' for sent, '<' for received.
    """

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug('%s %s', direction, printable(line))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
