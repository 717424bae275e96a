"""AMQP 0-8 framing.

Every frame on the wire is laid out as::

    type (octet), channel (short), size (long), payload[size], 0xCE

Method frames carry an encoded :class:`~warren.protocol.methods.Method`;
content header and body frames are passed through as raw bytes, and a
heartbeat frame has an empty payload.
"""

from __future__ import annotations

import struct
from typing import Callable, ClassVar, Optional

import msgspec

from ..errors import ProtocolError
from . import fields
from .methods import Method, decode_method, encode_method


_HEADER = struct.Struct(">BHI")


class Frame(msgspec.Struct):
    """A single frame, tagged with the channel it travels on."""

    frame_type: ClassVar[int] = 0

    channel: int = 0

    @property
    def payload(self):
        return None

    def body(self) -> bytes:
        return b""


class MethodFrame(Frame):
    frame_type = fields.FRAME_METHOD

    method: Optional[Method] = None

    @property
    def payload(self) -> Optional[Method]:
        return self.method

    def body(self) -> bytes:
        return encode_method(self.method)


class HeaderFrame(Frame):
    frame_type = fields.FRAME_HEADER

    data: bytes = b""

    @property
    def payload(self) -> bytes:
        return self.data

    def body(self) -> bytes:
        return self.data


class BodyFrame(HeaderFrame):
    frame_type = fields.FRAME_BODY


class HeartbeatFrame(Frame):
    frame_type = fields.FRAME_HEARTBEAT


def to_frame(command: Method, channel: int) -> MethodFrame:
    return MethodFrame(channel=channel, method=command)


def pack_frame(frame: Frame) -> bytes:
    """Serialize a Frame -> bytes."""

    body = frame.body()
    header = _HEADER.pack(frame.frame_type, frame.channel, len(body))
    return header + body + bytes((fields.FRAME_END,))


def parse_frame(read: Callable[[int], bytes]) -> Frame:
    """Read exactly one frame using *read*, which must return exactly the
    number of bytes requested (or raise).
    """

    frame_type, channel, size = _HEADER.unpack(read(_HEADER.size))
    body = read(size) if size else b""

    end = read(1)
    if end[0] != fields.FRAME_END:
        raise ProtocolError(f"frame end octet missing: got {end!r}")

    if frame_type == fields.FRAME_METHOD:
        return MethodFrame(channel=channel, method=decode_method(body))
    if frame_type == fields.FRAME_HEADER:
        return HeaderFrame(channel=channel, data=body)
    if frame_type == fields.FRAME_BODY:
        return BodyFrame(channel=channel, data=body)
    if frame_type == fields.FRAME_HEARTBEAT:
        return HeartbeatFrame(channel=channel)

    raise ProtocolError(f"unknown frame type {frame_type}")
