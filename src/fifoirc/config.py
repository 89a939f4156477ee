""" Static configuration for one bridge run. The values come from the
    command line, optionally layered over a JSON configuration file; once
    the bridge starts, the :class:`Configuration` is treated as read-only.
"""

import json
import os


class ConfigurationError(ValueError):
    pass


def default_fifo():
    """ The named pipe lives in the user's home directory unless told
        otherwise; /tmp stands in when there is no home directory.
    """

    home = os.environ.get('HOME') or '/tmp'
    return os.path.join(home, 'irc-pipe')


class Configuration:
    """ A convenience class to represent the bridge configuration. Every
        field has a default except the *nickname*, which must be provided.
        Any keyword argument that does not name a known field is an error;
        this catches typos in configuration files early.

        The *fullname* is the display name announced to the server, and
        falls back to the nickname when not set. The *password*, when set,
        is forwarded once to NickServ at connect time. The *program* is an
        optional command line for an external program whose output is sent
        to the channel, and which receives every directed message body.
    """

    defaults = {
        'server': 'irc.freenode.net',
        'port': 6667,
        'nickname': None,
        'fullname': None,
        'password': None,
        'channel': '#maximilian',
        'reconnect': False,
        'program': None,
        'verbose': 0,
        'fifo': None,
        'mode': 0o700,
    }

    max_channel = 200

    def __init__(self, **kwargs):

        unknown = set(kwargs) - set(self.defaults)
        if unknown:
            unknown = ', '.join(sorted(unknown))
            raise ConfigurationError('unknown configuration field(s): ' + unknown)

        for key, value in self.defaults.items():
            setattr(self, key, value)

        self.update(kwargs)


    def __repr__(self):
        shown = dict()
        for key in self.defaults:
            value = getattr(self, key)
            if key == 'password' and value is not None:
                value = '***'
            shown[key] = value

        return 'Configuration: ' + repr(shown)


    def update(self, values):
        """ Apply every field in the *values* dictionary that is not None.
            This is how command-line options override file contents: an
            option the user did not specify arrives as None.
        """

        for key, value in values.items():
            if key not in self.defaults:
                raise ConfigurationError('unknown configuration field: ' + key)
            if value is None:
                continue
            setattr(self, key, value)


    def validate(self):
        """ Check the configuration for consistency and fill in the derived
            defaults. Raises :class:`ConfigurationError` on the first
            problem found.
        """

        if not self.nickname:
            raise ConfigurationError('no nickname specified')

        if ' ' in self.nickname:
            raise ConfigurationError('nickname cannot contain spaces: ' + repr(self.nickname))

        if not self.channel:
            raise ConfigurationError('no channel specified')

        # Bytes, as encoded on the wire.
        if len(self.channel.encode('utf-8')) > self.max_channel:
            raise ConfigurationError('%s: channels must be at most %d bytes' % (self.channel, self.max_channel))

        try:
            self.port = int(self.port)
        except (TypeError, ValueError):
            raise ConfigurationError('invalid port: ' + repr(self.port))

        if self.port < 1 or self.port > 65535:
            raise ConfigurationError('port out of range: ' + str(self.port))

        if isinstance(self.mode, str):
            try:
                self.mode = int(self.mode, 8)
            except ValueError:
                raise ConfigurationError('invalid octal mode: ' + repr(self.mode))

        if not self.fullname:
            self.fullname = self.nickname

        if not self.fifo:
            self.fifo = default_fifo()

        self.reconnect = bool(self.reconnect)
        self.verbose = int(self.verbose)

        return self


# end of class Configuration



def load(filename):
    """ Read a JSON configuration file and return its contents as a
        dictionary suitable for :func:`Configuration.update`.
    """

    try:
        with open(filename, 'r') as file:
            contents = json.load(file)
    except OSError as e:
        raise ConfigurationError('cannot read %s: %s' % (filename, e.strerror))
    except ValueError as e:
        raise ConfigurationError('%s is not valid JSON: %s' % (filename, str(e)))

    if not isinstance(contents, dict):
        raise ConfigurationError(filename + ' must contain a JSON object')

    return contents


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
