"""Synchronous command/response correlation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Tuple, Type

from .errors import ProtocolError
from .protocol import methods
from .protocol.methods import Method

if TYPE_CHECKING:
    from .channel import Channel
    from .dispatch import FrameDispatcher


class PendingCommand:
    """The one command in flight, and the replies that would satisfy it."""

    def __init__(self, command: Method, expected: Tuple[Type[Method], ...], failure: str):
        self.command = command
        self.expected = tuple(expected)
        self.failure = failure

    def check(self, response) -> Method:
        """Return *response* if it is one of the expected kinds, else raise."""

        if isinstance(response, self.expected):
            return response

        wanted = " or ".join(methods.name(kind) for kind in self.expected)
        text = f"{self.failure}: expected {wanted}, received {methods.name(response)}"

        # The broker explains itself when it closes instead of replying.
        if isinstance(response, (methods.ConnectionClose, methods.ChannelClose)):
            text += f" ({response.reply_code} {response.reply_text})"

        raise ProtocolError(text)


class CommandSession:
    """Send a command and block for its matching reply.

    Only one command may be pending at a time; callers sharing a client
    across threads must serialize their calls.
    """

    def __init__(self, dispatcher: FrameDispatcher):
        self.dispatcher = dispatcher
        self.pending: Optional[PendingCommand] = None

    def request(
        self,
        command: Method,
        channel: Channel,
        expected: Tuple[Type[Method], ...],
        failure: str,
    ) -> Method:
        pending = PendingCommand(command, expected, failure)
        self.pending = pending

        try:
            self.dispatcher.send(command, channel)
            response = self.dispatcher.receive_command()
            return pending.check(response)
        finally:
            self.pending = None
