"""Infrastructure providers."""

# Import bases
from .persistence import ContentProvider, MetadataProvider

# Import implementations (needed for __subclasses__())
from .persistence import ProdContentProvider, ProdMetadataProvider  # noqa: F401

__all__ = [
    "ContentProvider",
    "MetadataProvider",
    "ProdContentProvider",
    "ProdMetadataProvider",
]
