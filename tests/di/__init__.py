"""Mock providers for testing."""

from .persistence import MockContentProvider, MockMetadataProvider
from .container import build_test_container

__all__ = [
    "MockContentProvider",
    "MockMetadataProvider",
    "build_test_container",
]
