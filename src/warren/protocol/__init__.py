from . import fields
from . import methods
from . import wire


"""
warren Protocol Layer
=====================

AMQP 0-8 vocabulary and framing. Nothing in here knows about sockets or
session state; it only maps between Method/Frame objects and bytes.

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

Client (client.py)
    Session lifecycle: connect, close, heartbeat, qos, tx, recover

    │
    ▼
Handshake (handshake.py)
    start / tune / open, redirects, access ticket

    │
    ▼
Command Session (session.py)
    send a command, require one of the expected replies

    │
    ▼
Frame Dispatcher (dispatch.py)
    ticket attachment, channel tagging, frame logging

    │
    ▼
Protocol (this package)
    - fields.py   constants
    - methods.py  Method structs <-> argument bytes
    - wire.py     Frame <-> bytes

    │
    ▼
Transport (transport/)
    Moves bytes over TCP

---------------------------------------------------------------------

Dependencies only flow downward. The protocol layer MUST NOT depend on
any transport or session implementation.
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
