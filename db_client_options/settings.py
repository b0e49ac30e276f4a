"""Structured settings handed to the connection subsystems.

This module provides the immutable, validated value objects derived by
``ClientOptions``: socket tuning for data and heartbeat connections, connection
pool sizing, and server-monitoring cadence. They carry no behavior beyond
field access and compare by value.

All durations are stored as integer milliseconds.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ._internal.validation import (
    require_at_least_one,
    require_bool,
    require_int,
    require_non_negative,
    require_positive,
)


class TimeUnit(Enum):
    """Granularity used when reading a stored millisecond duration.

    The enum value is the number of milliseconds in one unit. Conversions
    truncate toward zero, so 1500 ms read as SECONDS is 1.

    Examples
    --------
    >>> TimeUnit.SECONDS.from_millis(20000)
    20
    >>> TimeUnit.SECONDS.to_millis(20)
    20000
    """

    MILLISECONDS = 1
    SECONDS = 1000
    MINUTES = 60 * 1000

    def from_millis(self, millis: int) -> int:
        # integer division truncated toward zero
        if millis < 0:
            return -(-millis // self.value)
        return millis // self.value

    def to_millis(self, duration: int) -> int:
        return duration * self.value


@dataclass(frozen=True)
class SocketSettings:
    """Configuration for raw socket I/O.

    Used twice by ``ClientOptions``: once for data connections and once,
    independently, for server-monitoring heartbeat connections.

    Parameters
    ----------
    connect_timeout : int, default 10000
        Milliseconds to wait for a TCP connection to be established.
        0 means no timeout.
    read_timeout : int, default 0
        Milliseconds a blocking read may wait for data. 0 means no timeout.
    keep_alive : bool, default False
        Whether SO_KEEPALIVE is enabled on the socket.
    receive_buffer_size : int, default 0
        SO_RCVBUF in bytes. 0 leaves the operating system default.
    send_buffer_size : int, default 0
        SO_SNDBUF in bytes. 0 leaves the operating system default.

    Examples
    --------
    >>> settings = SocketSettings(connect_timeout=100, read_timeout=700, keep_alive=True)
    >>> settings == SocketSettings(connect_timeout=100, read_timeout=700, keep_alive=True)
    True
    """

    connect_timeout: int = 10000
    read_timeout: int = 0
    keep_alive: bool = False
    receive_buffer_size: int = 0
    send_buffer_size: int = 0

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check every field, as done automatically on construction.

        Raises
        ------
        InvalidConfigurationError
            If any timeout or buffer size is negative, or if keep_alive
            is not a bool.
        """
        require_non_negative("connect_timeout", self.connect_timeout)
        require_non_negative("read_timeout", self.read_timeout)
        require_bool("keep_alive", self.keep_alive)
        require_non_negative("receive_buffer_size", self.receive_buffer_size)
        require_non_negative("send_buffer_size", self.send_buffer_size)

    def get_connect_timeout(self, unit: TimeUnit = TimeUnit.MILLISECONDS) -> int:
        return unit.from_millis(self.connect_timeout)

    def get_read_timeout(self, unit: TimeUnit = TimeUnit.MILLISECONDS) -> int:
        return unit.from_millis(self.read_timeout)


@dataclass(frozen=True)
class ConnectionPoolSettings:
    """Configuration for the per-server connection pool.

    Parameters
    ----------
    max_size : int, default 100
        Maximum number of connections the pool keeps open to one server.
    min_size : int, default 0
        Number of connections the pool maintains even when idle.
    max_wait_queue_size : int, default 500
        Maximum number of callers that may wait for a connection before new
        requests are rejected.
    max_wait_time : int, default 120000
        Milliseconds a caller waits for a connection. 0 means never wait,
        a negative value means wait indefinitely.
    max_connection_life_time : int, default 0
        Milliseconds a pooled connection may live. 0 means unbounded.
    max_connection_idle_time : int, default 0
        Milliseconds a pooled connection may sit idle. 0 means unbounded.
    maintenance_initial_delay : int, default 0
        Milliseconds before the first pool maintenance pass.
    maintenance_frequency : int, default 60000
        Milliseconds between pool maintenance passes.

    Examples
    --------
    >>> settings = ConnectionPoolSettings(max_size=500, min_size=30, max_wait_queue_size=1000)
    >>> settings.max_wait_queue_size
    1000
    """

    max_size: int = 100
    min_size: int = 0
    max_wait_queue_size: int = 500
    max_wait_time: int = 120000
    max_connection_life_time: int = 0
    max_connection_idle_time: int = 0
    maintenance_initial_delay: int = 0
    maintenance_frequency: int = 60000

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check every field, as done automatically on construction.

        Raises
        ------
        InvalidConfigurationError
            If max_size is less than 1, or if any other size or duration is
            negative (max_wait_time excepted).
        """
        require_at_least_one("max_size", self.max_size)
        require_non_negative("min_size", self.min_size)
        require_non_negative("max_wait_queue_size", self.max_wait_queue_size)
        require_int("max_wait_time", self.max_wait_time)
        require_non_negative("max_connection_life_time", self.max_connection_life_time)
        require_non_negative("max_connection_idle_time", self.max_connection_idle_time)
        require_non_negative("maintenance_initial_delay", self.maintenance_initial_delay)
        require_positive("maintenance_frequency", self.maintenance_frequency)

    def get_max_wait_time(self, unit: TimeUnit = TimeUnit.MILLISECONDS) -> int:
        return unit.from_millis(self.max_wait_time)

    def get_max_connection_life_time(
        self, unit: TimeUnit = TimeUnit.MILLISECONDS
    ) -> int:
        return unit.from_millis(self.max_connection_life_time)

    def get_max_connection_idle_time(
        self, unit: TimeUnit = TimeUnit.MILLISECONDS
    ) -> int:
        return unit.from_millis(self.max_connection_idle_time)


@dataclass(frozen=True)
class ServerSettings:
    """Configuration for server monitoring.

    Parameters
    ----------
    heartbeat_frequency : int, default 10000
        Milliseconds between heartbeats sent to each monitored server.
    min_heartbeat_frequency : int, default 500
        Minimum milliseconds between two heartbeats, used as a rate-limit
        floor when a check is requested ahead of schedule.

    Examples
    --------
    >>> ServerSettings(heartbeat_frequency=5, min_heartbeat_frequency=11).get_heartbeat_frequency()
    5
    """

    heartbeat_frequency: int = 10000
    min_heartbeat_frequency: int = 500

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check every field, as done automatically on construction.

        Raises
        ------
        InvalidConfigurationError
            If either frequency is not positive.
        """
        require_positive("heartbeat_frequency", self.heartbeat_frequency)
        require_positive("min_heartbeat_frequency", self.min_heartbeat_frequency)

    def get_heartbeat_frequency(self, unit: TimeUnit = TimeUnit.MILLISECONDS) -> int:
        return unit.from_millis(self.heartbeat_frequency)

    def get_min_heartbeat_frequency(
        self, unit: TimeUnit = TimeUnit.MILLISECONDS
    ) -> int:
        return unit.from_millis(self.min_heartbeat_frequency)
