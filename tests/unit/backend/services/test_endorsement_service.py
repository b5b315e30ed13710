"""
Unit Tests for EndorsementService.

Repositories are replaced with mocks; store failures are simulated with
SQLAlchemy exceptions.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from endorseme.backend.core.exceptions import (
    CategoryLookupError,
    EndorsementInsertError,
    QueryError,
)
from endorseme.backend.services.endorsement import EndorsementService


@pytest.fixture
def service(mock_db_session) -> EndorsementService:
    service = EndorsementService(mock_db_session)
    service.categories = MagicMock()
    service.categories.get_id_by_name = AsyncMock(return_value=3)
    service.endorsements = MagicMock()
    service.endorsements.create = AsyncMock(return_value=MagicMock(id=1))
    service.endorsements.list_for_username = AsyncMock(return_value=[])
    return service


class TestCreateEndorsement:
    """Tests for EndorsementService.create_endorsement."""

    @pytest.mark.asyncio
    async def test_inserts_normalized_row_and_commits(self, service, mock_db_session):
        await service.create_endorsement("alice", "Services", "great", "bob", 3)

        service.categories.get_id_by_name.assert_awaited_once_with("Services")
        service.endorsements.create.assert_awaited_once_with(
            username="@alice",
            category_id=3,
            note="great",
            endorsed_by="bob",
            trust_level=3,
        )
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_category_writes_nothing(self, service, mock_db_session):
        service.categories.get_id_by_name.return_value = None

        with pytest.raises(CategoryLookupError) as exc_info:
            await service.create_endorsement("alice", "Nonexistent", None, "bob", 3)

        assert exc_info.value.message.startswith("Failed to get category ID:")
        assert "Nonexistent" in exc_info.value.message
        service.endorsements.create.assert_not_called()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_lookup_failure(self, service, mock_db_session):
        service.categories.get_id_by_name.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(CategoryLookupError):
            await service.create_endorsement("alice", "Services", None, "bob", 3)

        mock_db_session.rollback.assert_awaited_once()
        service.endorsements.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_insert_failure(self, service, mock_db_session):
        service.endorsements.create.side_effect = IntegrityError("INSERT", {}, Exception("check"))

        with pytest.raises(EndorsementInsertError) as exc_info:
            await service.create_endorsement("alice", "Services", None, "bob", 3)

        assert exc_info.value.code == "DB_ENDORSEMENT_INSERT_FAILED"
        assert exc_info.value.message.startswith("Failed to create endorsement:")
        mock_db_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_commit_failure(self, service, mock_db_session):
        mock_db_session.commit.side_effect = OperationalError("COMMIT", {}, Exception("lost"))

        with pytest.raises(EndorsementInsertError):
            await service.create_endorsement("alice", "Services", None, "bob", 3)


class TestGetEndorsements:
    """Tests for EndorsementService.get_endorsements."""

    @pytest.mark.asyncio
    async def test_empty_is_not_an_error(self, service):
        assert await service.get_endorsements("@alice") == []
        service.endorsements.list_for_username.assert_awaited_once_with("@alice")

    @pytest.mark.asyncio
    async def test_normalizes_username(self, service):
        await service.get_endorsements("alice")
        service.endorsements.list_for_username.assert_awaited_once_with("@alice")

    @pytest.mark.asyncio
    async def test_store_failure(self, service):
        service.endorsements.list_for_username.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(QueryError) as exc_info:
            await service.get_endorsements("@alice")

        assert exc_info.value.message.startswith("Failed to get endorsements:")
