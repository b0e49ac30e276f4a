"""Client options and the builder that validates them.

``ClientOptionsBuilder`` accumulates connection parameters through chained
setters, rejecting bad values as soon as they are assigned. ``build()``
freezes the current values into an immutable ``ClientOptions`` and derives
the structured settings consumed by the connection pool, the socket layer
and the server monitor.

A builder is meant to be configured by a single thread. The options it
produces are deeply immutable and may be shared freely between threads.

Examples
--------
>>> options = (
...     ClientOptions.builder()
...     .description("reporting")
...     .connections_per_host(500)
...     .threads_allowed_to_block_for_connection_multiplier(2)
...     .build()
... )
>>> options.connection_pool_settings.max_wait_queue_size
1000
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ._internal.validation import (
    require_at_least_one,
    require_bool,
    require_instance,
    require_int,
    require_non_negative,
    require_optional_str,
    require_positive,
)
from .codec import (
    DecoderFactory,
    DefaultDocumentDecoder,
    DefaultDocumentEncoder,
    EncoderFactory,
)
from .concerns import ACKNOWLEDGED, ReadPreference, WriteConcern
from .logger import get_logger
from .settings import ConnectionPoolSettings, ServerSettings, SocketSettings
from .socket_factory import SocketFactory, SSLSocketFactory

logger = get_logger(__name__)


def default_socket_factory(ssl_enabled: bool) -> SocketFactory:
    if ssl_enabled:
        return SSLSocketFactory.get_default()
    return SocketFactory.get_default()


class SocketFactorySource(Enum):
    # neither socket_factory() nor ssl_enabled() has been called
    UNSET = 0
    # socket_factory() was called last
    EXPLICIT = 1
    # ssl_enabled() was called last
    DERIVED_FROM_FLAG = 2


@dataclass(frozen=True)
class ClientOptions:
    """Immutable client configuration.

    Instances are created by ``ClientOptionsBuilder.build()``. The flat
    fields mirror what was assigned on the builder; the structured settings
    (``socket_settings``, ``heartbeat_socket_settings``,
    ``connection_pool_settings``, ``server_settings``) are derived once when
    the instance is created.

    All durations are integer milliseconds.
    """

    description: str | None = None
    write_concern: WriteConcern = ACKNOWLEDGED
    read_preference: ReadPreference = field(default_factory=ReadPreference.primary)
    min_connections_per_host: int = 0
    connections_per_host: int = 100
    threads_allowed_to_block_for_connection_multiplier: int = 5
    connect_timeout: int = 10000
    socket_timeout: int = 0
    max_wait_time: int = 120000
    max_connection_idle_time: int = 0
    max_connection_life_time: int = 0
    socket_keep_alive: bool = False
    ssl_enabled: bool = False
    socket_factory: SocketFactory | None = None
    db_decoder_factory: DecoderFactory = DefaultDocumentDecoder.FACTORY
    db_encoder_factory: EncoderFactory = DefaultDocumentEncoder.FACTORY
    heartbeat_frequency: int = 10000
    min_heartbeat_frequency: int = 10
    heartbeat_connect_timeout: int = 20000
    heartbeat_socket_timeout: int = 20000
    acceptable_latency_difference: int = 15
    required_replica_set_name: str | None = None
    cursor_finalizer_enabled: bool = True

    socket_settings: SocketSettings = field(init=False, repr=False, compare=False)
    heartbeat_socket_settings: SocketSettings = field(
        init=False, repr=False, compare=False
    )
    connection_pool_settings: ConnectionPoolSettings = field(
        init=False, repr=False, compare=False
    )
    server_settings: ServerSettings = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._validate()
        if self.socket_factory is None:
            object.__setattr__(
                self, "socket_factory", default_socket_factory(self.ssl_enabled)
            )
        # frozen dataclass, so derived views go through object.__setattr__
        object.__setattr__(
            self,
            "socket_settings",
            SocketSettings(
                connect_timeout=self.connect_timeout,
                read_timeout=self.socket_timeout,
                keep_alive=self.socket_keep_alive,
            ),
        )
        # Heartbeat connections always use keep-alive
        object.__setattr__(
            self,
            "heartbeat_socket_settings",
            SocketSettings(
                connect_timeout=self.heartbeat_connect_timeout,
                read_timeout=self.heartbeat_socket_timeout,
                keep_alive=True,
            ),
        )
        object.__setattr__(
            self,
            "connection_pool_settings",
            ConnectionPoolSettings(
                max_size=self.connections_per_host,
                min_size=self.min_connections_per_host,
                max_wait_queue_size=self.connections_per_host
                * self.threads_allowed_to_block_for_connection_multiplier,
                max_wait_time=self.max_wait_time,
                max_connection_life_time=self.max_connection_life_time,
                max_connection_idle_time=self.max_connection_idle_time,
            ),
        )
        object.__setattr__(
            self,
            "server_settings",
            ServerSettings(
                heartbeat_frequency=self.heartbeat_frequency,
                min_heartbeat_frequency=self.min_heartbeat_frequency,
            ),
        )

    def _validate(self) -> None:
        """Apply the builder's argument checks to directly constructed options.

        Raises
        ------
        InvalidConfigurationError
            If any field holds a value its builder setter would reject.
        """
        require_optional_str("description", self.description)
        require_instance("write_concern", self.write_concern, WriteConcern)
        require_instance("read_preference", self.read_preference, ReadPreference)
        require_non_negative("min_connections_per_host", self.min_connections_per_host)
        require_at_least_one("connections_per_host", self.connections_per_host)
        require_at_least_one(
            "threads_allowed_to_block_for_connection_multiplier",
            self.threads_allowed_to_block_for_connection_multiplier,
        )
        require_non_negative("connect_timeout", self.connect_timeout)
        require_non_negative("socket_timeout", self.socket_timeout)
        require_int("max_wait_time", self.max_wait_time)
        require_non_negative("max_connection_idle_time", self.max_connection_idle_time)
        require_non_negative("max_connection_life_time", self.max_connection_life_time)
        require_bool("socket_keep_alive", self.socket_keep_alive)
        require_bool("ssl_enabled", self.ssl_enabled)
        if self.socket_factory is not None:
            require_instance("socket_factory", self.socket_factory, SocketFactory)
        require_instance("db_decoder_factory", self.db_decoder_factory, DecoderFactory)
        require_instance("db_encoder_factory", self.db_encoder_factory, EncoderFactory)
        require_positive("heartbeat_frequency", self.heartbeat_frequency)
        require_positive("min_heartbeat_frequency", self.min_heartbeat_frequency)
        require_non_negative("heartbeat_connect_timeout", self.heartbeat_connect_timeout)
        require_non_negative("heartbeat_socket_timeout", self.heartbeat_socket_timeout)
        require_non_negative(
            "acceptable_latency_difference", self.acceptable_latency_difference
        )
        require_optional_str("required_replica_set_name", self.required_replica_set_name)
        require_bool("cursor_finalizer_enabled", self.cursor_finalizer_enabled)

    @classmethod
    def builder(cls, options: ClientOptions | None = None) -> ClientOptionsBuilder:
        """Return a new builder, pre-populated from ``options`` when given."""
        if options is None:
            return ClientOptionsBuilder()
        return ClientOptionsBuilder.from_options(options)


class ClientOptionsBuilder:
    """
    Mutable, fluent builder for ``ClientOptions``.

    Every setter validates its argument and raises
    ``InvalidConfigurationError`` immediately; a rejected value is never
    stored. Setters return the builder so calls can be chained.

    ``socket_factory()`` and ``ssl_enabled()`` share one concern: whichever
    was called last decides the factory. An explicit factory is kept until
    ``ssl_enabled()`` is called again, which resets it to the default plain
    or TLS factory for that flag.

    The builder is not consumed by ``build()`` and may be reused. It is not
    thread-safe.
    """

    def __init__(self) -> None:
        self._description: str | None = None
        self._write_concern: WriteConcern = ACKNOWLEDGED
        self._read_preference: ReadPreference = ReadPreference.primary()
        self._min_connections_per_host = 0
        self._connections_per_host = 100
        self._threads_allowed_to_block_for_connection_multiplier = 5
        self._connect_timeout = 10000
        self._socket_timeout = 0
        self._max_wait_time = 120000
        self._max_connection_idle_time = 0
        self._max_connection_life_time = 0
        self._socket_keep_alive = False
        self._ssl_enabled = False
        self._socket_factory: SocketFactory | None = None
        self._socket_factory_source = SocketFactorySource.UNSET
        self._db_decoder_factory: DecoderFactory = DefaultDocumentDecoder.FACTORY
        self._db_encoder_factory: EncoderFactory = DefaultDocumentEncoder.FACTORY
        self._heartbeat_frequency = 10000
        self._min_heartbeat_frequency = 10
        self._heartbeat_connect_timeout = 20000
        self._heartbeat_socket_timeout = 20000
        self._acceptable_latency_difference = 15
        self._required_replica_set_name: str | None = None
        self._cursor_finalizer_enabled = True

    @classmethod
    def from_options(cls, options: ClientOptions) -> ClientOptionsBuilder:
        """Create a builder holding every value of an existing ``ClientOptions``.

        A socket factory other than the default for the options' ssl flag is
        carried over as an explicit factory.
        """
        builder = cls()
        builder._description = options.description
        builder._write_concern = options.write_concern
        builder._read_preference = options.read_preference
        builder._min_connections_per_host = options.min_connections_per_host
        builder._connections_per_host = options.connections_per_host
        builder._threads_allowed_to_block_for_connection_multiplier = (
            options.threads_allowed_to_block_for_connection_multiplier
        )
        builder._connect_timeout = options.connect_timeout
        builder._socket_timeout = options.socket_timeout
        builder._max_wait_time = options.max_wait_time
        builder._max_connection_idle_time = options.max_connection_idle_time
        builder._max_connection_life_time = options.max_connection_life_time
        builder._socket_keep_alive = options.socket_keep_alive
        builder._ssl_enabled = options.ssl_enabled
        if options.socket_factory is not default_socket_factory(options.ssl_enabled):
            builder._socket_factory = options.socket_factory
            builder._socket_factory_source = SocketFactorySource.EXPLICIT
        builder._db_decoder_factory = options.db_decoder_factory
        builder._db_encoder_factory = options.db_encoder_factory
        builder._heartbeat_frequency = options.heartbeat_frequency
        builder._min_heartbeat_frequency = options.min_heartbeat_frequency
        builder._heartbeat_connect_timeout = options.heartbeat_connect_timeout
        builder._heartbeat_socket_timeout = options.heartbeat_socket_timeout
        builder._acceptable_latency_difference = options.acceptable_latency_difference
        builder._required_replica_set_name = options.required_replica_set_name
        builder._cursor_finalizer_enabled = options.cursor_finalizer_enabled
        return builder

    def description(self, description: str | None) -> ClientOptionsBuilder:
        """Set a human-readable label for this client, or None to clear it."""
        self._description = require_optional_str("description", description)
        return self

    def write_concern(self, write_concern: WriteConcern) -> ClientOptionsBuilder:
        self._write_concern = require_instance(
            "write_concern", write_concern, WriteConcern
        )
        return self

    def read_preference(self, read_preference: ReadPreference) -> ClientOptionsBuilder:
        self._read_preference = require_instance(
            "read_preference", read_preference, ReadPreference
        )
        return self

    def min_connections_per_host(self, value: int) -> ClientOptionsBuilder:
        """Minimum number of pooled connections kept per server (>= 0)."""
        self._min_connections_per_host = require_non_negative(
            "min_connections_per_host", value
        )
        return self

    def connections_per_host(self, value: int) -> ClientOptionsBuilder:
        """Maximum number of pooled connections per server (>= 1)."""
        self._connections_per_host = require_at_least_one(
            "connections_per_host", value
        )
        return self

    def threads_allowed_to_block_for_connection_multiplier(
        self, value: int
    ) -> ClientOptionsBuilder:
        """Multiplier applied to connections_per_host to size the wait queue.

        With connections_per_host=10 and a multiplier of 5, up to 50 callers
        may wait for a connection before further requests are rejected.
        """
        self._threads_allowed_to_block_for_connection_multiplier = (
            require_at_least_one(
                "threads_allowed_to_block_for_connection_multiplier", value
            )
        )
        return self

    def connect_timeout(self, value: int) -> ClientOptionsBuilder:
        """Connect timeout in milliseconds (>= 0, 0 means no timeout)."""
        self._connect_timeout = require_non_negative("connect_timeout", value)
        return self

    def socket_timeout(self, value: int) -> ClientOptionsBuilder:
        """Read timeout in milliseconds (>= 0, 0 means no timeout)."""
        self._socket_timeout = require_non_negative("socket_timeout", value)
        return self

    def max_wait_time(self, value: int) -> ClientOptionsBuilder:
        """Milliseconds a caller waits for a pooled connection.

        0 means never wait, a negative value means wait indefinitely.
        """
        self._max_wait_time = require_int("max_wait_time", value)
        return self

    def max_connection_idle_time(self, value: int) -> ClientOptionsBuilder:
        self._max_connection_idle_time = require_non_negative(
            "max_connection_idle_time", value
        )
        return self

    def max_connection_life_time(self, value: int) -> ClientOptionsBuilder:
        self._max_connection_life_time = require_non_negative(
            "max_connection_life_time", value
        )
        return self

    def socket_keep_alive(self, value: bool) -> ClientOptionsBuilder:
        self._socket_keep_alive = require_bool("socket_keep_alive", value)
        return self

    def ssl_enabled(self, value: bool) -> ClientOptionsBuilder:
        """Enable or disable TLS.

        Resets the socket factory to the default for the new flag, replacing
        any factory set earlier through ``socket_factory()``.
        """
        self._ssl_enabled = require_bool("ssl_enabled", value)
        self._socket_factory = None
        self._socket_factory_source = SocketFactorySource.DERIVED_FROM_FLAG
        return self

    def socket_factory(self, factory: SocketFactory) -> ClientOptionsBuilder:
        """Use ``factory`` for new connections until ``ssl_enabled()`` is called."""
        self._socket_factory = require_instance(
            "socket_factory", factory, SocketFactory
        )
        self._socket_factory_source = SocketFactorySource.EXPLICIT
        return self

    def db_decoder_factory(self, factory: DecoderFactory) -> ClientOptionsBuilder:
        self._db_decoder_factory = require_instance(
            "db_decoder_factory", factory, DecoderFactory
        )
        return self

    def db_encoder_factory(self, factory: EncoderFactory) -> ClientOptionsBuilder:
        self._db_encoder_factory = require_instance(
            "db_encoder_factory", factory, EncoderFactory
        )
        return self

    def heartbeat_frequency(self, value: int) -> ClientOptionsBuilder:
        """Milliseconds between heartbeats to each monitored server (> 0)."""
        self._heartbeat_frequency = require_positive("heartbeat_frequency", value)
        return self

    def min_heartbeat_frequency(self, value: int) -> ClientOptionsBuilder:
        """Minimum milliseconds between two heartbeats to one server (> 0)."""
        self._min_heartbeat_frequency = require_positive(
            "min_heartbeat_frequency", value
        )
        return self

    def heartbeat_connect_timeout(self, value: int) -> ClientOptionsBuilder:
        self._heartbeat_connect_timeout = require_non_negative(
            "heartbeat_connect_timeout", value
        )
        return self

    def heartbeat_socket_timeout(self, value: int) -> ClientOptionsBuilder:
        self._heartbeat_socket_timeout = require_non_negative(
            "heartbeat_socket_timeout", value
        )
        return self

    def acceptable_latency_difference(self, value: int) -> ClientOptionsBuilder:
        """Latency window in milliseconds for choosing among eligible members."""
        self._acceptable_latency_difference = require_non_negative(
            "acceptable_latency_difference", value
        )
        return self

    def required_replica_set_name(self, name: str | None) -> ClientOptionsBuilder:
        self._required_replica_set_name = require_optional_str(
            "required_replica_set_name", name
        )
        return self

    def cursor_finalizer_enabled(self, value: bool) -> ClientOptionsBuilder:
        """Whether abandoned server-side cursors are released proactively."""
        self._cursor_finalizer_enabled = require_bool(
            "cursor_finalizer_enabled", value
        )
        return self

    def _resolve_socket_factory(self) -> SocketFactory:
        if self._socket_factory_source == SocketFactorySource.EXPLICIT:
            if isinstance(self._socket_factory, SSLSocketFactory) != self._ssl_enabled:
                logger.warning(
                    f"Explicit socket factory {self._socket_factory!r} does not "
                    f"match ssl_enabled={self._ssl_enabled}"
                )
            return self._socket_factory
        return default_socket_factory(self._ssl_enabled)

    def build(self) -> ClientOptions:
        """Freeze the current values into a new ``ClientOptions``.

        Returns
        -------
        ClientOptions
            A new immutable options object. Calling build() twice without
            changing the builder returns equal objects.
        """
        options = ClientOptions(
            description=self._description,
            write_concern=self._write_concern,
            read_preference=self._read_preference,
            min_connections_per_host=self._min_connections_per_host,
            connections_per_host=self._connections_per_host,
            threads_allowed_to_block_for_connection_multiplier=(
                self._threads_allowed_to_block_for_connection_multiplier
            ),
            connect_timeout=self._connect_timeout,
            socket_timeout=self._socket_timeout,
            max_wait_time=self._max_wait_time,
            max_connection_idle_time=self._max_connection_idle_time,
            max_connection_life_time=self._max_connection_life_time,
            socket_keep_alive=self._socket_keep_alive,
            ssl_enabled=self._ssl_enabled,
            socket_factory=self._resolve_socket_factory(),
            db_decoder_factory=self._db_decoder_factory,
            db_encoder_factory=self._db_encoder_factory,
            heartbeat_frequency=self._heartbeat_frequency,
            min_heartbeat_frequency=self._min_heartbeat_frequency,
            heartbeat_connect_timeout=self._heartbeat_connect_timeout,
            heartbeat_socket_timeout=self._heartbeat_socket_timeout,
            acceptable_latency_difference=self._acceptable_latency_difference,
            required_replica_set_name=self._required_replica_set_name,
            cursor_finalizer_enabled=self._cursor_finalizer_enabled,
        )
        logger.debug(f"Built client options: {options!r}")
        return options
