"""TCP socket transport."""

from __future__ import annotations

import socket
from typing import Optional

from ..errors import ConnectionError, ServerDownError
from .base import Transport


class TcpTransport(Transport):
    """Blocking TCP stream to a broker.

    Every socket failure is reported as :class:`ServerDownError` so the
    session layer only has one failure vocabulary to deal with.
    """

    def __init__(self) -> None:
        self._socket: Optional[socket.socket] = None
        self.host: Optional[str] = None
        self.port: Optional[int] = None

    def connect(self, host: str, port: int, timeout: float) -> None:
        self.close()

        try:
            sock = socket.create_connection((host, port), timeout=timeout)
        except OSError as e:
            raise ServerDownError(f"cannot connect to {host}:{port}: {e}") from e

        # The timeout only bounds the connect; reads block until a frame
        # arrives or the stream fails.
        try:
            sock.settimeout(None)
        except OSError as e:
            sock.close()
            raise ServerDownError(f"cannot connect to {host}:{port}: {e}") from e

        # Best effort.
        if hasattr(socket, "TCP_NODELAY"):
            try:
                sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
            except OSError:
                pass

        self._socket = sock
        self.host = host
        self.port = port

    def close(self) -> None:
        sock = self._socket
        self._socket = None
        if sock is not None:
            sock.close()

    @property
    def is_open(self) -> bool:
        return self._socket is not None

    def read(self, size: int) -> bytes:
        sock = self._require_socket()
        chunks = bytearray()

        while len(chunks) < size:
            try:
                chunk = sock.recv(size - len(chunks))
            except OSError as e:
                raise ServerDownError(str(e)) from e
            if not chunk:
                raise ServerDownError(f"connection to {self.host}:{self.port} closed by peer")
            chunks += chunk

        return bytes(chunks)

    def write(self, data: bytes) -> None:
        sock = self._require_socket()
        try:
            sock.sendall(data)
        except OSError as e:
            raise ServerDownError(str(e)) from e

    def _require_socket(self) -> socket.socket:
        if self._socket is None:
            raise ConnectionError("No connection - socket has not been created")
        return self._socket
