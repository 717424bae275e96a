"""Error types raised by warren sessions."""

from __future__ import annotations


class WarrenError(Exception):
    """Base class for all warren errors."""


class ServerDownError(WarrenError):
    """The broker could not be reached, or the byte stream to it failed."""


class ProtocolError(WarrenError):
    """A received command was not what the current protocol step requires."""


class ConnectionError(WarrenError):
    """The connection cannot be used: redirected while insisting, or no socket."""
