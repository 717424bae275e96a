"""Transport layer implementations."""

from ..errors import (
    ConnectionError,
    ServerDownError,
)
from .base import Transport
from .tcp import TcpTransport
