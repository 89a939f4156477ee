""" Command-line entry point. This is a thin layer: parse the options into a
    :class:`fifoirc.config.Configuration`, set up logging, and hand control
    to the :class:`fifoirc.loop.EventLoop`.
"""

import argparse
import logging
import sys

from . import __version__
from . import config
from . import log as logs
from .loop import EventLoop
from .session import Session
from .transport.base import TransportError


log = logging.getLogger(__name__)


description = 'Read lines from a named pipe and write them to an IRC channel.'


def parser():

    parser = argparse.ArgumentParser(prog='fifoirc', description=description)

    parser.add_argument('-c', '--channel', help='channel to join')
    parser.add_argument('-C', '--config', help='JSON configuration file; options on the command line take precedence')
    parser.add_argument('-e', '--exec', dest='program', help='external program: its output is sent to the channel, and it receives every message sent to us')
    parser.add_argument('-f', '--fifo', help='path to the FIFO to use')
    parser.add_argument('-F', '--fullname', help='IRC full name')
    parser.add_argument('-m', '--mode', help='octal permission mode for a newly created FIFO')
    parser.add_argument('-n', '--nickname', help='IRC nickname')
    parser.add_argument('-p', '--port', type=int, help='port on the IRC server')
    parser.add_argument('-P', '--password', help='password to authenticate with NickServ')
    parser.add_argument('-r', '--reconnect', action='store_true', default=None, help='reconnect to the server if the connection is lost')
    parser.add_argument('-s', '--server', help='server to connect to')
    parser.add_argument('-v', '--verbose', action='count', default=None, help='be verbose, specify twice to increase verbosity')
    parser.add_argument('-V', '--version', action='version', version='%(prog)s ' + __version__)

    return parser


def configure(arguments):
    """ Build a validated :class:`fifoirc.config.Configuration` from parsed
        command-line *arguments*, layered over the configuration file if
        one was named.
    """

    options = vars(arguments).copy()
    filename = options.pop('config', None)

    configuration = config.Configuration()

    if filename:
        configuration.update(config.load(filename))

    configuration.update(options)
    return configuration.validate()


def main(argv=None):

    if argv is None:
        argv = sys.argv[1:]

    options = parser()

    if not argv:
        options.print_help()
        return 0

    arguments = options.parse_args(argv)

    try:
        configuration = configure(arguments)
    except config.ConfigurationError as e:
        print('fifoirc: ' + str(e), file=sys.stderr)
        return 1

    logs.setup(configuration.verbose)

    session = Session(configuration)
    loop = EventLoop(session)

    try:
        status = loop.run()
    except TransportError as e:
        log.error(str(e))
        status = 1
    finally:
        loop.close()

    return status


if __name__ == '__main__':
    sys.exit(main())


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
