""" Logical channels multiplexed over a single broker connection, and the
    registry that hands them out. Channel 0 is the control channel: it is
    created along with the client, carries the connection-level handshake
    and heartbeats, and is never handed out for reuse.
"""

import weakref

from .protocol import fields
from .protocol import methods


class Channel:
    """ A single numbered channel. The channel holds only a weak reference
        to its :class:`warren.Client`; the client owns the channel, not the
        other way around.

        :ivar number: The channel id used to tag frames on the wire.
        :ivar active: True while the broker considers the channel open.
    """

    def __init__(self, client, number):

        self._client = weakref.ref(client)
        self.number = int(number)
        self.active = False


    def __repr__(self):
        state = 'open' if self.active else 'closed'
        return 'Channel(%d, %s)' % (self.number, state)


    @property
    def client(self):
        client = self._client()
        if client is None:
            raise RuntimeError('client for channel %d no longer exists' % (self.number))
        return client


    @property
    def is_open(self):
        return self.active


    def open(self):
        """ Make this the active channel of its client and open it with the
            broker. Returns 'open_ok'; raises :class:`warren.ProtocolError`
            if the broker does not confirm.
        """

        if self.number == 0:
            raise ValueError('channel 0 is opened by the connection handshake')

        client = self.client
        client.channel = self

        client.session.request(methods.ChannelOpen(), self,
                               (methods.ChannelOpenOk,),
                               'Cannot open channel %d' % (self.number))

        self.active = True
        return fields.OPEN_OK


    def close(self):
        """ Make this the active channel of its client and close it. Returns
            'close_ok'; raises :class:`warren.ProtocolError` if the broker
            does not confirm.
        """

        if self.number == 0:
            raise ValueError('channel 0 is closed by closing the connection')

        client = self.client
        client.channel = self

        close = methods.ChannelClose(reply_code=fields.REPLY_SUCCESS,
                                     reply_text='bye')
        client.session.request(close, self, (methods.ChannelCloseOk,),
                               'Error closing channel %d' % (self.number))

        self.active = False
        return fields.CLOSE_OK


# end of class Channel



class ChannelRegistry:
    """ All channels known to a client, keyed by channel number. Closed
        channels are recycled by :func:`allocate` before a new number is
        minted, so repeatedly opening and closing channels does not grow
        the channel numbers without bound.
    """

    def __init__(self, client):

        self._client = weakref.ref(client)
        self._channels = dict()


    def __contains__(self, number):
        return number in self._channels


    def __getitem__(self, number):
        return self._channels[number]


    def __iter__(self):
        return iter(list(self._channels.values()))


    def __len__(self):
        return len(self._channels)


    def get(self, number):
        return self._channels.get(number)


    def register(self, channel):

        existing = self._channels.get(channel.number)
        if existing is not None and existing is not channel:
            raise ValueError('channel %d is already registered' % (channel.number))

        self._channels[channel.number] = channel


    def allocate(self):
        """ Return a closed channel for reuse if there is one, otherwise
            create and register a new channel with the next unused number.
            The control channel is never returned.
        """

        for channel in self._channels.values():
            if channel.number != 0 and not channel.active:
                return channel

        # A linear scan is fine at the channel counts this protocol sees.

        number = max(self._channels, default=0) + 1
        channel = Channel(self._client(), number)
        self.register(channel)
        return channel


# end of class ChannelRegistry


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
