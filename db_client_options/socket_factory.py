"""
Factories producing connected sockets configured from ``SocketSettings``.

``ClientOptions`` carries one of these for the socket layer: a plain
``SocketFactory`` by default, or an ``SSLSocketFactory`` when TLS is enabled.
"""

from __future__ import annotations

import socket
import ssl
from typing import ClassVar

from .logger import get_logger
from .settings import SocketSettings

logger = get_logger(__name__)


def _to_seconds(millis: int) -> float | None:
    # 0 means no timeout, which the socket module spells None
    if millis == 0:
        return None
    return millis / 1000.0


class SocketFactory:
    """
    Opens plain TCP connections.

    Examples
    --------
    >>> factory = SocketFactory.get_default()
    >>> sock = factory.create_socket("localhost", 27017, SocketSettings())
    """

    _default: ClassVar[SocketFactory | None] = None

    @classmethod
    def get_default(cls) -> SocketFactory:
        """Return the shared default instance of this factory class."""
        # Looked up on cls.__dict__ so subclasses keep their own instance
        default = cls.__dict__.get("_default")
        if default is None:
            default = cls()
            cls._default = default
        return default

    def create_socket(
        self, host: str, port: int, settings: SocketSettings
    ) -> socket.socket:
        """
        Connect to host:port and apply the socket settings.

        Parameters
        ----------
        host : str
            Server host name or address.
        port : int
            Server port.
        settings : SocketSettings
            Timeouts, keep-alive and buffer sizes to apply.

        Returns
        -------
        socket.socket
            The connected socket, with its timeout set to the read timeout.

        Raises
        ------
        OSError
            If the connection cannot be established.
        """
        logger.debug(
            f"Opening socket to {host}:{port} "
            f"(connect_timeout={settings.connect_timeout}ms)"
        )
        sock = socket.create_connection(
            (host, port), timeout=_to_seconds(settings.connect_timeout)
        )
        try:
            self._configure(sock, settings)
        except OSError:
            sock.close()
            raise
        return sock

    def _configure(self, sock: socket.socket, settings: SocketSettings) -> None:
        sock.settimeout(_to_seconds(settings.read_timeout))
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, int(settings.keep_alive))
        if settings.receive_buffer_size:
            sock.setsockopt(
                socket.SOL_SOCKET, socket.SO_RCVBUF, settings.receive_buffer_size
            )
        if settings.send_buffer_size:
            sock.setsockopt(
                socket.SOL_SOCKET, socket.SO_SNDBUF, settings.send_buffer_size
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class SSLSocketFactory(SocketFactory):
    """
    Opens TCP connections and wraps them in TLS.

    Parameters
    ----------
    context : ssl.SSLContext | None, optional
        Context used to wrap sockets. Defaults to
        ``ssl.create_default_context()``, which verifies the server
        certificate and host name.
    """

    def __init__(self, context: ssl.SSLContext | None = None) -> None:
        self._context = context

    @property
    def context(self) -> ssl.SSLContext:
        if self._context is None:
            self._context = ssl.create_default_context()
        return self._context

    def create_socket(
        self, host: str, port: int, settings: SocketSettings
    ) -> socket.socket:
        sock = super().create_socket(host, port, settings)
        try:
            return self.context.wrap_socket(sock, server_hostname=host)
        except OSError:
            sock.close()
            raise
