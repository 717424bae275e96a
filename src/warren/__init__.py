""" Python implementation of an AMQP 0-8 client session: the connection
    handshake with a broker, channel management, and the synchronous
    request/response exchanges (access, quality of service, transactions)
    that everything else rides on.
"""

from .version import __version__

# Error vocabulary shared by all components.

from .errors import WarrenError, ServerDownError, ProtocolError, ConnectionError

# Submodules used by multiple other components.

from . import protocol
from . import config
from . import log
from . import transport

# Primary public-facing interfaces.

from .channel import Channel, ChannelRegistry
from .client import Client
from . import heartbeat

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
