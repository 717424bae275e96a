""" The :class:`Client` is the primary interface to a broker: one client is
    one connection, carrying any number of numbered channels. All calls are
    synchronous; a call that expects a reply from the broker blocks until
    that reply arrives, or until the connection fails.
"""

from . import config
from . import log
from .channel import Channel, ChannelRegistry
from .dispatch import FrameDispatcher
from .errors import WarrenError
from .handshake import Handshake
from .protocol import fields
from .protocol import methods
from .protocol.wire import HeartbeatFrame
from .session import CommandSession
from .transport import TcpTransport


class Client:
    """ Set up a client ready for connection to a broker. The client does
        not touch the network until :func:`connect` is called; until then,
        and after :func:`close`, the *status* is 'not_connected'.

        Keyword arguments are the connection parameters described in
        :class:`warren.config.ConnectionParameters`: *host*, *port*,
        *vhost*, *user*, *password*, *frame_max*, *channel_max*,
        *heartbeat*, *insist*, *logging*, *logfile*, *connect_timeout*, and
        *max_redirects*. A *transport* instance may be supplied to replace
        the default TCP socket transport.

        :ivar status: 'connected' or 'not_connected'.
        :ivar ticket: The access ticket granted by the broker, if any.
        :ivar channel: The active :class:`Channel`; commands sent with
            :func:`send_frame` travel on this channel.
        :ivar channels: The :class:`ChannelRegistry` for this connection.
        :ivar host: The broker currently targeted, which changes if the
            broker redirects the client elsewhere.
    """

    def __init__(self, transport=None, **options):

        self.params = config.parameters(**options)
        self.host = self.params.host
        self.port = self.params.port

        self.status = fields.NOT_CONNECTED
        self.ticket = None
        self.tune = None
        self.server_properties = None
        self.known_hosts = None

        if transport is None:
            transport = TcpTransport()

        self.transport = transport
        self.dispatcher = FrameDispatcher(self)
        self.session = CommandSession(self.dispatcher)
        self.handshake = Handshake(self)

        self.channels = ChannelRegistry(self)
        control = Channel(self, 0)
        self.channels.register(control)
        self.channel = control

        self.logger = None
        self._logging = False
        self.logging = self.params.logging


    def __repr__(self):
        return 'Client(%s:%s, %s)' % (self.host, self.port, self.status)


    @property
    def logging(self):
        """ True if every frame sent and received is being logged. This can
            be toggled at any time.
        """

        return self._logging


    @logging.setter
    def logging(self, enabled):

        enabled = bool(enabled)
        if enabled and self.logger is None:
            self.logger = log.create_logger(self, self.params.logfile)

        self._logging = enabled


    def connect(self):
        """ Perform the protocol handshake with the broker, open a channel,
            and request an access ticket on it. Returns 'connected'.

            Raises :class:`warren.ServerDownError` if the broker cannot be
            reached, :class:`warren.ProtocolError` if the broker does not
            follow the expected sequence, and :class:`warren.ConnectionError`
            if the broker redirects a client that insists on its original
            server. On any failure the client is left 'not_connected'.
        """

        if self.status == fields.CONNECTED:
            return self.status

        try:
            self.handshake.run()
            self.channels[0].active = True

            self.channel = self.get_channel()
            self.channel.open()

            self.handshake.request_access(self.channel)
        except WarrenError:
            self._disconnect()
            raise

        self.status = fields.CONNECTED
        return self.status

    start = connect
    start_session = connect


    def close(self):
        """ Close every open channel, then the connection itself, and finally
            the socket. Returns 'not_connected'. Raises
            :class:`warren.ProtocolError` if the broker does not acknowledge
            the close; the socket is closed regardless.
        """

        try:
            for channel in self.channels:
                if channel.number != 0 and channel.active:
                    channel.close()

            self.channel = self.channels[0]

            close = methods.ConnectionClose(reply_code=fields.REPLY_SUCCESS,
                                            reply_text='Goodbye',
                                            class_id=0, method_id=0)
            self.session.request(close, self.channel,
                                 (methods.ConnectionCloseOk,),
                                 'Error closing connection')
        finally:
            self._disconnect()

        return self.status

    stop = close


    def _disconnect(self):
        """ Drop the socket and reset the session state, without talking to
            the broker.
        """

        self.transport.close()

        for channel in self.channels:
            channel.active = False

        self.channel = self.channels[0]
        self.ticket = None
        self.status = fields.NOT_CONNECTED


    def open_transport(self):
        """ Connect the transport to the currently targeted broker.
        """

        self.transport.connect(self.host, self.port, self.params.connect_timeout)


    def heartbeat(self):
        """ Send a heartbeat frame. Heartbeats always travel on channel 0,
            which becomes the active channel.
        """

        if self.channel.number != 0:
            self.channel = self.channels[0]

        self.send_frame(HeartbeatFrame())

    send_heartbeat = heartbeat


    def get_channel(self):
        """ Return a closed channel for reuse, or a new channel if there are
            none. The returned channel is not opened.
        """

        return self.channels.allocate()


    def send_frame(self, *commands):
        """ Send one or more commands (or pre-built frames) on the active
            channel. The access ticket is attached to any command that takes
            one.
        """

        for command in commands:
            self.dispatcher.send(command, self.channel)


    def next_frame(self):
        return self.dispatcher.receive_frame()


    def next_method(self):
        return self.dispatcher.receive_command()

    next_payload = next_method


    def read(self, size):
        return self.transport.read(size)


    def write(self, data):
        self.transport.write(data)


    def request_access(self):
        """ Request a fresh access ticket on the active channel. Returns the
            ticket.
        """

        return self.handshake.request_access(self.channel)


    def qos(self, prefetch_size=0, prefetch_count=1, global_=False):
        """ Request a specific quality of service for the active channel, or,
            if *global_* is True, for every channel on the connection.

            *prefetch_size* is the prefetch window in octets, zero meaning no
            specific limit; *prefetch_count* is the prefetch window in whole
            messages. Returns 'qos_ok'.
        """

        command = methods.BasicQos(prefetch_size=prefetch_size,
                                   prefetch_count=prefetch_count,
                                   global_=global_)

        self.session.request(command, self.channel, (methods.BasicQosOk,),
                             'Error specifying Quality of Service')
        return fields.QOS_OK


    def tx_select(self):
        """ Put the active channel in transaction mode. This is required
            before :func:`tx_commit` or :func:`tx_rollback` can be used.
        """

        self.session.request(methods.TxSelect(), self.channel,
                             (methods.TxSelectOk,),
                             'Error initiating transactions for current channel')
        return fields.SELECT_OK


    def tx_commit(self):
        """ Commit everything published and acknowledged in the current
            transaction; a new transaction starts immediately.
        """

        self.session.request(methods.TxCommit(), self.channel,
                             (methods.TxCommitOk,),
                             'Error committing transaction')
        return fields.COMMIT_OK


    def tx_rollback(self):
        """ Abandon everything published and acknowledged in the current
            transaction; a new transaction starts immediately.
        """

        self.session.request(methods.TxRollback(), self.channel,
                             (methods.TxRollbackOk,),
                             'Error rolling back transaction')
        return fields.ROLLBACK_OK


    def recover(self, requeue=False):
        """ Ask the broker to redeliver all unacknowledged messages on the
            active channel. If *requeue* is True the broker may deliver them
            to a different subscriber. The broker does not reply.
        """

        self.send_frame(methods.BasicRecover(requeue=requeue))


# end of class Client


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
