""" AMQP 0-8 method definitions. Each method is a :class:`msgspec.Struct`
    whose class is the tag callers check replies against; the fields are
    listed in wire order, and the *layout* string describes their encoding
    using the format characters understood by :mod:`amqp.serialization`:

        b   bit (consecutive bits share an octet)
        o   octet
        B   short
        l   long
        s   short string
        S   long string
        F   field table

    Only the methods the session layer exchanges are defined here, plus the
    ticket-bearing declare/bind commands that exchange and queue registries
    issue through a session.
"""

import struct
from typing import ClassVar, Dict, Tuple, Type

import msgspec
from amqp import serialization
from amqp.exceptions import FrameSyntaxError

from ..errors import ProtocolError


class Method(msgspec.Struct, tag=True, tag_field='kind'):
    """ Base class for all AMQP methods.
    """

    CLASS_ID: ClassVar[int] = 0
    METHOD_ID: ClassVar[int] = 0
    layout: ClassVar[str] = ''


# Connection class

class ConnectionStart(Method):
    CLASS_ID = 10
    METHOD_ID = 10
    layout = 'ooFSS'

    version_major: int = 0
    version_minor: int = 0
    server_properties: dict = msgspec.field(default_factory=dict)
    mechanisms: str = ''
    locales: str = ''


class ConnectionStartOk(Method):
    CLASS_ID = 10
    METHOD_ID = 11
    layout = 'FsSs'

    client_properties: dict = msgspec.field(default_factory=dict)
    mechanism: str = 'AMQPLAIN'
    response: bytes = b''
    locale: str = 'en_US'

    def __repr__(self):
        # The response carries the login credentials.
        return 'ConnectionStartOk(client_properties=%r, mechanism=%r, response=<%d bytes>, locale=%r)' % (
            self.client_properties, self.mechanism, len(self.response), self.locale)


class ConnectionSecure(Method):
    CLASS_ID = 10
    METHOD_ID = 20
    layout = 'S'

    challenge: str = ''


class ConnectionSecureOk(Method):
    CLASS_ID = 10
    METHOD_ID = 21
    layout = 'S'

    response: bytes = b''


class ConnectionTune(Method):
    CLASS_ID = 10
    METHOD_ID = 30
    layout = 'BlB'

    channel_max: int = 0
    frame_max: int = 0
    heartbeat: int = 0


class ConnectionTuneOk(Method):
    CLASS_ID = 10
    METHOD_ID = 31
    layout = 'BlB'

    channel_max: int = 0
    frame_max: int = 0
    heartbeat: int = 0


class ConnectionOpen(Method):
    CLASS_ID = 10
    METHOD_ID = 40
    layout = 'ssb'

    virtual_host: str = '/'
    capabilities: str = ''
    insist: bool = False


class ConnectionOpenOk(Method):
    CLASS_ID = 10
    METHOD_ID = 41
    layout = 's'

    known_hosts: str = ''


class ConnectionRedirect(Method):
    CLASS_ID = 10
    METHOD_ID = 50
    layout = 'ss'

    host: str = ''
    known_hosts: str = ''


class ConnectionClose(Method):
    CLASS_ID = 10
    METHOD_ID = 60
    layout = 'BsBB'

    reply_code: int = 0
    reply_text: str = ''
    class_id: int = 0
    method_id: int = 0


class ConnectionCloseOk(Method):
    CLASS_ID = 10
    METHOD_ID = 61


# Channel class

class ChannelOpen(Method):
    CLASS_ID = 20
    METHOD_ID = 10
    layout = 's'

    out_of_band: str = ''


class ChannelOpenOk(Method):
    CLASS_ID = 20
    METHOD_ID = 11


class ChannelFlow(Method):
    CLASS_ID = 20
    METHOD_ID = 20
    layout = 'b'

    active: bool = True


class ChannelFlowOk(Method):
    CLASS_ID = 20
    METHOD_ID = 21
    layout = 'b'

    active: bool = True


class ChannelClose(Method):
    CLASS_ID = 20
    METHOD_ID = 40
    layout = 'BsBB'

    reply_code: int = 0
    reply_text: str = ''
    class_id: int = 0
    method_id: int = 0


class ChannelCloseOk(Method):
    CLASS_ID = 20
    METHOD_ID = 41


# Access class

class AccessRequest(Method):
    CLASS_ID = 30
    METHOD_ID = 10
    layout = 'sbbbbb'

    realm: str = '/data'
    exclusive: bool = False
    passive: bool = True
    active: bool = True
    write: bool = True
    read: bool = True


class AccessRequestOk(Method):
    CLASS_ID = 30
    METHOD_ID = 11
    layout = 'B'

    ticket: int = 0


# Exchange and queue declarations. The session never interprets these; they
# are defined so registries layered on a session can send them.

class ExchangeDeclare(Method):
    CLASS_ID = 40
    METHOD_ID = 10
    layout = 'BssbbbbbF'

    ticket: int = 0
    exchange: str = ''
    type: str = 'direct'
    passive: bool = False
    durable: bool = False
    auto_delete: bool = False
    internal: bool = False
    nowait: bool = False
    arguments: dict = msgspec.field(default_factory=dict)


class ExchangeDeclareOk(Method):
    CLASS_ID = 40
    METHOD_ID = 11


class QueueDeclare(Method):
    CLASS_ID = 50
    METHOD_ID = 10
    layout = 'BsbbbbbF'

    ticket: int = 0
    queue: str = ''
    passive: bool = False
    durable: bool = False
    exclusive: bool = False
    auto_delete: bool = False
    nowait: bool = False
    arguments: dict = msgspec.field(default_factory=dict)


class QueueDeclareOk(Method):
    CLASS_ID = 50
    METHOD_ID = 11
    layout = 'sll'

    queue: str = ''
    message_count: int = 0
    consumer_count: int = 0


class QueueBind(Method):
    CLASS_ID = 50
    METHOD_ID = 20
    layout = 'BsssbF'

    ticket: int = 0
    queue: str = ''
    exchange: str = ''
    routing_key: str = ''
    nowait: bool = False
    arguments: dict = msgspec.field(default_factory=dict)


class QueueBindOk(Method):
    CLASS_ID = 50
    METHOD_ID = 21


# Basic class

class BasicQos(Method):
    CLASS_ID = 60
    METHOD_ID = 10
    layout = 'lBb'

    prefetch_size: int = 0
    prefetch_count: int = 1
    global_: bool = False


class BasicQosOk(Method):
    CLASS_ID = 60
    METHOD_ID = 11


class BasicRecover(Method):
    CLASS_ID = 60
    METHOD_ID = 100
    layout = 'b'

    requeue: bool = False


# Tx class

class TxSelect(Method):
    CLASS_ID = 90
    METHOD_ID = 10


class TxSelectOk(Method):
    CLASS_ID = 90
    METHOD_ID = 11


class TxCommit(Method):
    CLASS_ID = 90
    METHOD_ID = 20


class TxCommitOk(Method):
    CLASS_ID = 90
    METHOD_ID = 21


class TxRollback(Method):
    CLASS_ID = 90
    METHOD_ID = 30


class TxRollbackOk(Method):
    CLASS_ID = 90
    METHOD_ID = 31


registry: Dict[Tuple[int, int], Type[Method]] = dict()

for _method in (
        ConnectionStart, ConnectionStartOk, ConnectionSecure, ConnectionSecureOk,
        ConnectionTune, ConnectionTuneOk, ConnectionOpen, ConnectionOpenOk,
        ConnectionRedirect, ConnectionClose, ConnectionCloseOk,
        ChannelOpen, ChannelOpenOk, ChannelFlow, ChannelFlowOk,
        ChannelClose, ChannelCloseOk,
        AccessRequest, AccessRequestOk,
        ExchangeDeclare, ExchangeDeclareOk,
        QueueDeclare, QueueDeclareOk, QueueBind, QueueBindOk,
        BasicQos, BasicQosOk, BasicRecover,
        TxSelect, TxSelectOk, TxCommit, TxCommitOk, TxRollback, TxRollbackOk):
    registry[(_method.CLASS_ID, _method.METHOD_ID)] = _method

del _method


def accepts_ticket(method):
    """ Return True if the supplied *method* carries an access ticket field.
    """

    return 'ticket' in type(method).__struct_fields__


def encode_method(method):
    """ Serialize a :class:`Method` into a method frame payload.
    """

    values = msgspec.structs.astuple(method)
    arguments = serialization.dumps(method.layout, values)
    return struct.pack('>HH', method.CLASS_ID, method.METHOD_ID) + arguments


def decode_method(payload):
    """ Parse a method frame payload back into a :class:`Method` instance.
        Raises :class:`ProtocolError` for unknown methods or malformed
        arguments.
    """

    try:
        class_id, method_id = struct.unpack_from('>HH', payload, 0)
    except struct.error as e:
        raise ProtocolError('truncated method frame: ' + str(e))

    try:
        cls = registry[(class_id, method_id)]
    except KeyError:
        raise ProtocolError('unknown method %d.%d' % (class_id, method_id))

    try:
        values, offset = serialization.loads(cls.layout, payload, 4)
    except (struct.error, IndexError, KeyError, TypeError, ValueError, FrameSyntaxError) as e:
        raise ProtocolError('malformed %s arguments: %s' % (cls.__name__, e))

    return cls(*values)


def name(kind):
    """ Return a printable name for a method class, instance, or None.
    """

    if kind is None:
        return 'nothing'
    if not isinstance(kind, type):
        kind = type(kind)
    return kind.__name__


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
