"""
db_client_options - client configuration for a document database driver

Collects connection parameters into an immutable, validated ClientOptions
object and derives the settings consumed by the connection pool, the socket
layer and the server monitor.
"""

# Core options and builder
from db_client_options.client_options import (
    ClientOptions,
    ClientOptionsBuilder,
    SocketFactorySource,
)

# Codecs
from db_client_options.codec import (
    CodecFactory,
    DecoderFactory,
    DefaultDocumentDecoder,
    DefaultDocumentEncoder,
    DocumentDecoder,
    DocumentEncoder,
    EncoderFactory,
    LazyDocument,
    LazyDocumentDecoder,
)

# Read and write policies
from db_client_options.concerns import (
    ACKNOWLEDGED,
    FSYNCED,
    JOURNAL_SAFE,
    JOURNALED,
    MAJORITY,
    REPLICA_ACKNOWLEDGED,
    UNACKNOWLEDGED,
    ReadPreference,
    ReadPreferenceMode,
    WriteConcern,
)

# Exceptions
from db_client_options.exceptions import ClientOptionsError, InvalidConfigurationError

# Logging utilities
from db_client_options.logger import LoggingModes, get_logger, logging_config

# Derived settings
from db_client_options.settings import (
    ConnectionPoolSettings,
    ServerSettings,
    SocketSettings,
    TimeUnit,
)
from db_client_options.socket_factory import SocketFactory, SSLSocketFactory

__version__ = "0.1.0"

__all__ = [
    "ACKNOWLEDGED",
    "FSYNCED",
    "JOURNALED",
    "JOURNAL_SAFE",
    "MAJORITY",
    "REPLICA_ACKNOWLEDGED",
    "UNACKNOWLEDGED",
    "ClientOptions",
    "ClientOptionsBuilder",
    "ClientOptionsError",
    "CodecFactory",
    "ConnectionPoolSettings",
    "DecoderFactory",
    "DefaultDocumentDecoder",
    "DefaultDocumentEncoder",
    "DocumentDecoder",
    "DocumentEncoder",
    "EncoderFactory",
    "InvalidConfigurationError",
    "LazyDocument",
    "LazyDocumentDecoder",
    "LoggingModes",
    "ReadPreference",
    "ReadPreferenceMode",
    "SSLSocketFactory",
    "ServerSettings",
    "SocketFactory",
    "SocketFactorySource",
    "SocketSettings",
    "TimeUnit",
    "WriteConcern",
    "get_logger",
    "logging_config",
]
