"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`warren.protocol` so the protocol remains
transport-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Transport(ABC):
    """Minimal contract for a blocking, byte-oriented duplex stream."""

    @abstractmethod
    def connect(self, host: str, port: int, timeout: float) -> None:
        """Establish the underlying connection, bounded by *timeout* seconds."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection. Closing twice is a no-op."""

    @abstractmethod
    def read(self, size: int) -> bytes:
        """Block until exactly *size* bytes have been received."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Send all of *data*."""

    @property
    def is_open(self) -> bool:
        """Whether the transport is currently connected."""
        return False
