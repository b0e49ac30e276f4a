"""
Tests for plain and TLS socket factories.

This test module covers:
- Default factory instances
- Socket options applied from SocketSettings
- TLS wrapping and cleanup on failure

No real network connections are made; socket creation is mocked.
"""

from __future__ import annotations

import socket
import ssl
from unittest.mock import MagicMock, patch

import pytest

from db_client_options.settings import SocketSettings
from db_client_options.socket_factory import SocketFactory, SSLSocketFactory

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_socket() -> MagicMock:
    """Create a mock connected socket."""
    return MagicMock(spec=socket.socket)


@pytest.fixture
def create_connection(mock_socket: MagicMock):
    """Patch socket.create_connection to return the mock socket."""
    with patch(
        "db_client_options.socket_factory.socket.create_connection",
        return_value=mock_socket,
    ) as patched:
        yield patched


# ============================================================================
# Defaults
# ============================================================================


class TestDefaults:
    """Test default factory instances."""

    def test_default_instances_are_cached(self) -> None:
        assert SocketFactory.get_default() is SocketFactory.get_default()
        assert SSLSocketFactory.get_default() is SSLSocketFactory.get_default()

    def test_default_instances_are_distinct_per_class(self) -> None:
        plain = SocketFactory.get_default()
        tls = SSLSocketFactory.get_default()

        assert plain is not tls
        assert not isinstance(plain, SSLSocketFactory)
        assert isinstance(tls, SSLSocketFactory)


# ============================================================================
# Plain sockets
# ============================================================================


class TestSocketFactory:
    """Test options applied by the plain factory."""

    def test_applies_timeouts_and_keep_alive(
        self, create_connection: MagicMock, mock_socket: MagicMock
    ) -> None:
        settings = SocketSettings(connect_timeout=1500, read_timeout=700, keep_alive=True)

        sock = SocketFactory().create_socket("db.example.com", 27017, settings)

        assert sock is mock_socket
        create_connection.assert_called_once_with(("db.example.com", 27017), timeout=1.5)
        mock_socket.settimeout.assert_called_once_with(0.7)
        mock_socket.setsockopt.assert_called_once_with(
            socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1
        )

    def test_zero_timeouts_mean_blocking(
        self, create_connection: MagicMock, mock_socket: MagicMock
    ) -> None:
        SocketFactory().create_socket("localhost", 1, SocketSettings(connect_timeout=0))

        create_connection.assert_called_once_with(("localhost", 1), timeout=None)
        mock_socket.settimeout.assert_called_once_with(None)

    def test_applies_buffer_sizes(
        self, create_connection: MagicMock, mock_socket: MagicMock
    ) -> None:
        settings = SocketSettings(receive_buffer_size=4096, send_buffer_size=8192)

        SocketFactory().create_socket("localhost", 1, settings)

        mock_socket.setsockopt.assert_any_call(socket.SOL_SOCKET, socket.SO_RCVBUF, 4096)
        mock_socket.setsockopt.assert_any_call(socket.SOL_SOCKET, socket.SO_SNDBUF, 8192)

    def test_closes_socket_when_configuration_fails(
        self, create_connection: MagicMock, mock_socket: MagicMock
    ) -> None:
        mock_socket.setsockopt.side_effect = OSError("bad option")

        with pytest.raises(OSError):
            SocketFactory().create_socket("localhost", 1, SocketSettings())

        mock_socket.close.assert_called_once()


# ============================================================================
# TLS sockets
# ============================================================================


class TestSSLSocketFactory:
    """Test TLS wrapping."""

    def test_wraps_with_context(
        self, create_connection: MagicMock, mock_socket: MagicMock
    ) -> None:
        context = MagicMock(spec=ssl.SSLContext)
        factory = SSLSocketFactory(context)

        sock = factory.create_socket("db.example.com", 27017, SocketSettings())

        context.wrap_socket.assert_called_once_with(
            mock_socket, server_hostname="db.example.com"
        )
        assert sock is context.wrap_socket.return_value

    def test_closes_socket_when_handshake_fails(
        self, create_connection: MagicMock, mock_socket: MagicMock
    ) -> None:
        context = MagicMock(spec=ssl.SSLContext)
        context.wrap_socket.side_effect = ssl.SSLError("handshake failed")

        with pytest.raises(ssl.SSLError):
            SSLSocketFactory(context).create_socket("localhost", 1, SocketSettings())

        mock_socket.close.assert_called_once()

    def test_default_context_is_created_lazily(self) -> None:
        factory = SSLSocketFactory()

        with patch(
            "db_client_options.socket_factory.ssl.create_default_context"
        ) as create_context:
            assert factory.context is create_context.return_value
            assert factory.context is create_context.return_value

        create_context.assert_called_once_with()
