"""Connection handshake: protocol header, start, tune, open, access.

The broker may answer Connection.Open with a redirect to another server.
Unless the client insists on its original broker, the transport is torn
down and the whole handshake starts over against the new address; every
other connection parameter is preserved.
"""

from __future__ import annotations

import enum
import logging
import platform
from typing import TYPE_CHECKING, Tuple

from amqp.sasl import AMQPLAIN

from .errors import ConnectionError, ProtocolError
from .protocol import fields
from .protocol import methods
from .version import __version__

if TYPE_CHECKING:
    from .channel import Channel
    from .client import Client

logger = logging.getLogger(__name__)


class HandshakeState(enum.Enum):
    IDLE = "idle"
    HEADER_SENT = "protocol-header-sent"
    START_RECEIVED = "start-received"
    TUNED = "tuned"
    OPENED = "opened"
    ACCESS_GRANTED = "access-granted"


def client_properties() -> dict:
    return {
        "platform": "Python " + platform.python_version(),
        "product": "warren",
        "version": __version__,
        "information": "AMQP 0-8 session client",
    }


def parse_address(text: str) -> Tuple[str, int]:
    """Split a redirect target of the form ``host[:port]``."""

    host, sep, port = text.rpartition(":")
    if not sep:
        return text, fields.PORT

    try:
        return host, int(port)
    except ValueError:
        raise ProtocolError(f"invalid redirect address: {text!r}") from None


class Handshake:
    """Drive a client from a bare transport to an opened connection."""

    def __init__(self, client: Client):
        self.client = client
        self.state = HandshakeState.IDLE
        self.redirects = 0

    def run(self) -> HandshakeState:
        """Connect and negotiate until the broker accepts Connection.Open.

        Raises ConnectionError when redirected while insisting, or when
        more than ``max_redirects`` redirects have been followed.
        """

        client = self.client
        limit = client.params.max_redirects
        self.redirects = 0

        while True:
            self.state = HandshakeState.IDLE
            client.open_transport()

            self.send_header()
            self.receive_start()
            self.start_ok()
            self.tune()

            if self.open():
                return self.state

            self.redirects += 1
            if limit is not None and self.redirects > limit:
                raise ConnectionError(
                    f"gave up after {limit} redirects, last target {client.host}:{client.port}"
                )

    def send_header(self) -> None:
        self.client.write(fields.PROTOCOL_HEADER)
        self.state = HandshakeState.HEADER_SENT

    def receive_start(self) -> methods.ConnectionStart:
        method = self.client.dispatcher.receive_command()
        if not isinstance(method, methods.ConnectionStart):
            raise ProtocolError("Connection initiation failed")

        self.client.server_properties = method.server_properties
        self.state = HandshakeState.START_RECEIVED
        return method

    def start_ok(self) -> None:
        params = self.client.params
        mechanism = AMQPLAIN(params.user, params.password)

        command = methods.ConnectionStartOk(
            client_properties=client_properties(),
            mechanism=mechanism.mechanism.decode(),
            response=mechanism.start(None),
            locale="en_US",
        )
        self._send(command)

    def tune(self) -> None:
        client = self.client
        params = client.params

        method = client.dispatcher.receive_command()

        # Never put the password in the error text.
        if method is None:
            raise ProtocolError(f"Connection failed - user: {params.user}")
        if not isinstance(method, methods.ConnectionTune):
            raise ProtocolError(
                f"Connection failed - user: {params.user}: "
                f"expected ConnectionTune, received {methods.name(method)}"
            )

        client.tune = method
        self._send(
            methods.ConnectionTuneOk(
                channel_max=params.channel_max,
                frame_max=params.frame_max,
                heartbeat=params.heartbeat,
            )
        )
        self.state = HandshakeState.TUNED

    def open(self) -> bool:
        """Send Connection.Open; return True once opened, False if redirected."""

        client = self.client
        params = client.params

        self._send(
            methods.ConnectionOpen(
                virtual_host=params.vhost,
                capabilities="",
                insist=params.insist,
            )
        )

        method = client.dispatcher.receive_command()

        if isinstance(method, methods.ConnectionOpenOk):
            client.known_hosts = method.known_hosts
            logger.debug("connection to %s:%s opened", client.host, client.port)
            self.state = HandshakeState.OPENED
            return True

        if isinstance(method, methods.ConnectionRedirect):
            if params.insist:
                raise ConnectionError(
                    f"Cannot connect to the specified server - host: {client.host}, port: {client.port}"
                )

            host, port = parse_address(method.host)
            logger.debug("redirected from %s:%s to %s:%s", client.host, client.port, host, port)

            client.host = host
            client.port = port
            client.transport.close()
            return False

        raise ProtocolError("Cannot open connection")

    def request_access(self, channel: Channel) -> int:
        """Request an access ticket on *channel* and store it on the client."""

        command = methods.AccessRequest(
            realm="/data",
            exclusive=False,
            passive=True,
            active=True,
            write=True,
            read=True,
        )
        response = self.client.session.request(
            command, channel, (methods.AccessRequestOk,), "Access denied"
        )

        self.client.ticket = response.ticket
        self.state = HandshakeState.ACCESS_GRANTED
        return response.ticket

    def _send(self, command: methods.Method) -> None:
        self.client.dispatcher.send(command, self.client.channels[0])
