"""
Exception classes for db_client_options.

This module defines all custom exceptions raised by the library.
All exceptions inherit from ClientOptionsError, which inherits from Exception.
"""


class ClientOptionsError(Exception):
    """
    Base exception for all client configuration errors.

    This is the parent class for all custom exceptions raised by the
    db_client_options library. Catching this exception will catch
    all library-specific errors.
    """


class InvalidConfigurationError(ClientOptionsError, ValueError):
    """
    Raised when a configuration value is rejected.

    This exception is raised synchronously by the builder setter (or the
    settings constructor) that received the offending value. The rejected
    value is never stored, so the builder keeps its previous valid state.

    Conditions that raise it:
    - A count or multiplier set below 1
    - A timing or size value set below 0
    - A heartbeat frequency that is not strictly positive
    - None assigned to a required field (write concern, read preference,
      decoder factory, encoder factory)
    - A value of the wrong type (e.g. a string or bool for an integer field)

    It also derives from ValueError so callers catching the built-in
    keep working.
    """
