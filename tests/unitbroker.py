""" This is a super-simple scripted broker to act as a foil for any
    client-facing unit tests. Each call to connect() consumes the next
    script: a list of frames the broker will send, in order, regardless of
    what the client writes. Everything the client writes is recorded so the
    tests can decode it again.
"""

import io
import struct

import warren
from warren.protocol import fields
from warren.protocol import methods
from warren.protocol import wire


class ScriptedTransport(warren.transport.Transport):

    def __init__(self, *scripts):

        self.scripts = list(scripts)
        self.connects = list()
        self.closes = 0
        self.sent = list()
        self.inbound = bytearray()
        self.open = False


    @property
    def is_open(self):
        return self.open


    def connect(self, host, port, timeout):

        self.connects.append((host, port))

        if len(self.scripts) == 0:
            raise warren.ServerDownError('no broker at %s:%s' % (host, port))

        script = self.scripts.pop(0)
        self.inbound = bytearray()
        self.feed(*script)
        self.sent.append(bytearray())
        self.open = True


    def close(self):

        if self.open:
            self.closes += 1
        self.open = False


    def read(self, size):

        if not self.open:
            raise warren.ConnectionError('No connection - socket has not been created')

        if len(self.inbound) < size:
            raise warren.ServerDownError('broker script exhausted')

        data = bytes(self.inbound[:size])
        del self.inbound[:size]
        return data


    def write(self, data):

        if not self.open:
            raise warren.ConnectionError('No connection - socket has not been created')

        self.sent[-1] += data


    def feed(self, *frames):
        """ Queue more frames for the client to receive.
        """

        for frame in frames:
            if isinstance(frame, bytes):
                self.inbound += frame
            else:
                self.inbound += wire.pack_frame(frame)


    def clear(self):
        """ Forget what the client has written so far on this connection.
        """

        self.sent[-1] = bytearray()


    def frames(self, index=-1):
        """ Decode everything the client wrote on one connection.
        """

        data = bytes(self.sent[index])
        if data.startswith(fields.PROTOCOL_HEADER):
            data = data[len(fields.PROTOCOL_HEADER):]

        stream = io.BytesIO(data)

        def read(size):
            chunk = stream.read(size)
            if len(chunk) != size:
                raise EOFError('short read decoding client output')
            return chunk

        decoded = list()
        while stream.tell() < len(data):
            decoded.append(wire.parse_frame(read))

        return decoded


    def methods(self, index=-1):
        return [frame.payload for frame in self.frames(index)]


# end of class ScriptedTransport



def method(command, channel=0):
    return wire.MethodFrame(channel=channel, method=command)


def handshake():
    """ The broker side of a handshake that ends with Connection.OpenOk.
    """

    frames = list()
    frames.append(method(methods.ConnectionStart(version_major=8, version_minor=0,
                                                 server_properties={'product': 'unitbroker'},
                                                 mechanisms='AMQPLAIN PLAIN',
                                                 locales='en_US')))
    frames.append(method(methods.ConnectionTune(channel_max=0, frame_max=131072, heartbeat=0)))
    frames.append(method(methods.ConnectionOpenOk(known_hosts='unitbroker:5672')))
    return frames


def raw_method(payload, channel=0):
    """ A method frame around arbitrary payload bytes, which need not
        decode to a valid method.
    """

    header = struct.pack('>BHI', fields.FRAME_METHOD, channel, len(payload))
    return header + payload + bytes((fields.FRAME_END,))


def redirect(target):
    """ The broker side of a handshake that ends with Connection.Redirect.
    """

    frames = handshake()
    frames[-1] = method(methods.ConnectionRedirect(host=target, known_hosts=target))
    return frames


def session(ticket=1234):
    """ A complete successful connect(): handshake, channel 1 open, and an
        access ticket granted on channel 1.
    """

    frames = handshake()
    frames.append(method(methods.ChannelOpenOk(), channel=1))
    frames.append(method(methods.AccessRequestOk(ticket=ticket), channel=1))
    return frames


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
