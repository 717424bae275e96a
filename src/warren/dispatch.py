"""Frame dispatch: commands out to the transport, frames in from it."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Union

from .protocol.methods import Method, accepts_ticket
from .protocol.wire import Frame, pack_frame, parse_frame, to_frame

if TYPE_CHECKING:
    from .channel import Channel
    from .client import Client


class FrameDispatcher:
    """Turns commands into frames on a channel and frames back into commands.

    Codec failures surface as :class:`~warren.errors.ProtocolError`,
    transport failures as :class:`~warren.errors.ServerDownError`.
    """

    def __init__(self, client: Client):
        self.client = client

    def send(self, command: Union[Method, Frame], channel: Channel) -> None:
        client = self.client

        if isinstance(command, Frame):
            frame = command
            frame.channel = channel.number
        else:
            if client.ticket is not None and accepts_ticket(command):
                command.ticket = client.ticket
            frame = to_frame(command, channel.number)

        if client.logging:
            client.logger.info("send %r", frame)

        client.transport.write(pack_frame(frame))

    def receive_frame(self) -> Frame:
        client = self.client
        frame = parse_frame(client.transport.read)

        if client.logging:
            client.logger.info("received %r", frame)

        return frame

    def receive_command(self) -> Optional[Union[Method, bytes]]:
        return self.receive_frame().payload
