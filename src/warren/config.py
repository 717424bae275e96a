""" Connection parameters for a :class:`warren.Client`. The values are read
    once, when the client is constructed; the only setting that can change
    afterwards is frame logging, which is toggled on the client itself.

    Each parameter can be given a site-wide default with an environment
    variable named WARREN_AMQP_ followed by the upper-cased parameter name,
    for example WARREN_AMQP_HOST or WARREN_AMQP_FRAME_MAX.
"""

import os
from typing import Optional

import msgspec

from .protocol import fields


prefix = 'WARREN_AMQP_'


class ConnectionParameters(msgspec.Struct, frozen=True, kw_only=True):
    """ Immutable set of options for one broker connection.
    """

    host: str = 'localhost'
    port: int = fields.PORT
    vhost: str = '/'
    user: str = 'guest'
    password: str = 'guest'
    frame_max: int = 131072
    channel_max: int = 0
    heartbeat: int = 0
    insist: bool = False
    logging: bool = False
    logfile: Optional[str] = None
    connect_timeout: float = 5.0
    max_redirects: Optional[int] = 10

    def __repr__(self):
        return 'ConnectionParameters(host=%r, port=%r, vhost=%r, user=%r)' % (
            self.host, self.port, self.vhost, self.user)


def environment():
    """ Return a dictionary of any parameters set via environment variables.
        The values are returned as strings; :func:`parameters` handles the
        conversion to the appropriate types.
    """

    found = dict()

    for name in ConnectionParameters.__struct_fields__:
        try:
            value = os.environ[prefix + name.upper()]
        except KeyError:
            continue

        found[name] = value

    return found


def parameters(**options):
    """ Build a :class:`ConnectionParameters` instance. Explicit keyword
        arguments take precedence over the environment, which takes
        precedence over the built-in defaults.
    """

    known = ConnectionParameters.__struct_fields__

    for name in options:
        if name not in known:
            raise TypeError('unknown connection parameter: ' + repr(name))

    raw = environment()
    raw.update(options)

    return msgspec.convert(raw, ConnectionParameters, strict=False)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
