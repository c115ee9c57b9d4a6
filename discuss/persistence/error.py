"""Translation of driver errors into domain errors.

Driver exception text never leaves this module: callers see
ConflictError or StoreUnavailableError with a stable message.
"""

import asyncio
from contextlib import contextmanager
from typing import Iterator

import logfire
from pymongo.errors import (
    ConnectionFailure,
    DuplicateKeyError,
    ExecutionTimeout,
    ServerSelectionTimeoutError,
    WTimeoutError,
)
from sqlalchemy.exc import (
    IntegrityError,
    InterfaceError,
    OperationalError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from discuss.domain.error import ConflictError, StoreUnavailableError

METADATA_STORE = "metadata"
CONTENT_STORE = "content"

_SQL_UNAVAILABLE = (
    OperationalError,
    InterfaceError,
    PoolTimeoutError,
    OSError,
    asyncio.TimeoutError,
)

_MONGO_UNAVAILABLE = (
    ConnectionFailure,
    ServerSelectionTimeoutError,
    ExecutionTimeout,
    WTimeoutError,
    OSError,
    asyncio.TimeoutError,
)


@contextmanager
def metadata_errors(resource: str = "Thread") -> Iterator[None]:
    """Translate SQLAlchemy/asyncpg failures raised inside the block.

    Args:
        resource: Resource named in ConflictError on a uniqueness violation
    """
    try:
        yield
    except IntegrityError as e:
        logfire.warn("Metadata store integrity violation", resource=resource)
        raise ConflictError(resource) from e
    except _SQL_UNAVAILABLE as e:
        logfire.error("Metadata store unavailable", error_type=type(e).__name__)
        raise StoreUnavailableError(METADATA_STORE) from e


@contextmanager
def content_errors(resource: str = "Thread content") -> Iterator[None]:
    """Translate pymongo failures raised inside the block.

    Args:
        resource: Resource named in ConflictError on a duplicate key
    """
    try:
        yield
    except DuplicateKeyError as e:
        logfire.warn("Content store duplicate key", resource=resource)
        raise ConflictError(resource) from e
    except _MONGO_UNAVAILABLE as e:
        logfire.error("Content store unavailable", error_type=type(e).__name__)
        raise StoreUnavailableError(CONTENT_STORE) from e
