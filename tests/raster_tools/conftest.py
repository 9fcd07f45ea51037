"""Pytest configuration for raster-tools tests."""

from typing import Any

import pytest


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "filters: mark test as requiring filter dependencies (scipy)",
    )


# Check if filter dependencies are available
try:
    import scipy  # noqa: F401 # type: ignore

    HAS_FILTERS = True
except ImportError:
    HAS_FILTERS = False


# Marker to skip tests that require filter dependencies
skip_without_filters = pytest.mark.skipif(
    not HAS_FILTERS,
    reason="Requires filter dependencies: pip install 'raster-tools[filters]'",
)
