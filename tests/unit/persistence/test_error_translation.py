"""Unit tests for driver error translation."""

import asyncio

import pytest
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError
from sqlalchemy.exc import IntegrityError, OperationalError

from discuss.domain.error import ConflictError, StoreUnavailableError
from discuss.persistence.error import content_errors, metadata_errors


class TestMetadataErrors:
    """Tests for metadata_errors()."""

    def test_integrity_error_becomes_conflict(self):
        with pytest.raises(ConflictError, match="Category already exists"):
            with metadata_errors("Category"):
                raise IntegrityError("INSERT ...", {}, Exception("duplicate key value"))

    def test_operational_error_becomes_store_unavailable(self):
        with pytest.raises(StoreUnavailableError) as exc_info:
            with metadata_errors():
                raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        # Driver text never reaches the message
        assert str(exc_info.value) == "metadata store unavailable"
        assert exc_info.value.store == "metadata"

    def test_timeout_becomes_store_unavailable(self):
        with pytest.raises(StoreUnavailableError):
            with metadata_errors():
                raise asyncio.TimeoutError()

    def test_other_errors_pass_through(self):
        with pytest.raises(KeyError):
            with metadata_errors():
                raise KeyError("programming error")


class TestContentErrors:
    """Tests for content_errors()."""

    def test_duplicate_key_becomes_conflict(self):
        with pytest.raises(ConflictError, match="Thread content"):
            with content_errors():
                raise DuplicateKeyError("E11000 duplicate key error")

    def test_server_selection_timeout_becomes_store_unavailable(self):
        with pytest.raises(StoreUnavailableError) as exc_info:
            with content_errors():
                raise ServerSelectionTimeoutError("no servers found")

        assert str(exc_info.value) == "content store unavailable"
