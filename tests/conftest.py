"""
Pytest configuration and shared fixtures for db_client_options tests.

This module provides:
- Custom pytest markers for test categorization
- Test configuration and setup
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pytest


def pytest_configure(config: pytest.Config) -> None:
    """
    Register custom pytest markers.

    This function is called during pytest initialization to register
    custom markers that can be used to categorize and filter tests.
    """
    config.addinivalue_line(
        "markers",
        "network: mark test as touching real sockets",
    )


# ============================================================================
# Shared Fixtures
# ============================================================================
# Each test module defines its own fixtures for clarity
