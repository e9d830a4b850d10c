"""
PasteBin Backend - Paste Service Unit Tests
============================================

What:  Tests for PasteService business logic (create, get, list, delete).
How:   Uses mock DB sessions (no real DB).

What we test:
    ✅ Blank content rejected before touching storage
    ✅ Ownership recorded only for a resolved identity
    ✅ Not found raises NotFoundError
    ✅ List and delete require identity
    ✅ Delete on zero affected rows raises the merged not-found error
    ✅ Storage failures are wrapped in DatabaseError
"""

import uuid

import pytest
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy.exc import OperationalError

from app.exceptions import (
    AuthenticationError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from app.models.paste import Paste
from app.services.paste_service import PasteService


def _mock_paste(data):
    paste = MagicMock()
    for key, value in data.items():
        setattr(paste, key, value)
    return paste


class TestPasteServiceCreate:

    def setup_method(self):
        self.service = PasteService()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [None, "", "   ", "\n\t \r\n"])
    async def test_blank_content_rejected(self, mock_db_session, content):
        with pytest.raises(ValidationError, match="Content required"):
            await self.service.create_paste(mock_db_session, content, None)
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_anonymous_paste_has_no_owner(self, mock_db_session):
        result = await self.service.create_paste(mock_db_session, "hello", None)

        stored = mock_db_session.add.call_args.args[0]
        assert isinstance(stored, Paste)
        assert stored.user_id is None
        assert stored.uuid == result.uuid
        assert str(uuid.UUID(result.uuid)) == result.uuid
        assert len(result.uuid) == 36

    @pytest.mark.asyncio
    async def test_owned_paste_records_owner(self, mock_db_session, identity):
        await self.service.create_paste(mock_db_session, "hello", identity)

        stored = mock_db_session.add.call_args.args[0]
        assert stored.user_id == identity.user_id

    @pytest.mark.asyncio
    async def test_content_stored_verbatim(self, mock_db_session):
        content = "  leading and trailing space  \n"
        await self.service.create_paste(mock_db_session, content, None)

        assert mock_db_session.add.call_args.args[0].content == content

    @pytest.mark.asyncio
    async def test_each_paste_gets_a_fresh_uuid(self, mock_db_session):
        first = await self.service.create_paste(mock_db_session, "a", None)
        second = await self.service.create_paste(mock_db_session, "b", None)
        assert first.uuid != second.uuid

    @pytest.mark.asyncio
    async def test_flush_failure_is_wrapped(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("disk I/O error"))
        )
        with pytest.raises(DatabaseError):
            await self.service.create_paste(mock_db_session, "hello", None)


class TestPasteServiceGet:

    def setup_method(self):
        self.service = PasteService()

    @pytest.mark.asyncio
    async def test_get_paste_found(self, mock_db_session, sample_paste_data):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = _mock_paste(sample_paste_data)
        mock_db_session.execute.return_value = mock_result

        result = await self.service.get_paste(mock_db_session, sample_paste_data["uuid"])

        assert result.id == sample_paste_data["id"]
        assert result.uuid == sample_paste_data["uuid"]
        assert result.content == sample_paste_data["content"]
        assert "user_id" not in result.model_dump()

    @pytest.mark.asyncio
    async def test_get_paste_not_found(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(NotFoundError, match="Paste not found"):
            await self.service.get_paste(mock_db_session, str(uuid.uuid4()))


class TestPasteServiceList:

    def setup_method(self):
        self.service = PasteService()

    @pytest.mark.asyncio
    async def test_requires_identity(self, mock_db_session):
        with pytest.raises(AuthenticationError):
            await self.service.list_pastes(mock_db_session, None)
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_list(self, mock_db_session, identity):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = mock_result

        assert await self.service.list_pastes(mock_db_session, identity) == []

    @pytest.mark.asyncio
    async def test_query_filters_by_owner_newest_first(self, mock_db_session, identity, sample_paste_data):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = [_mock_paste(sample_paste_data)]
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_pastes(mock_db_session, identity)

        assert [p.uuid for p in result] == [sample_paste_data["uuid"]]
        sql = str(mock_db_session.execute.await_args.args[0])
        assert "pastes.user_id = :user_id_1" in sql
        assert "ORDER BY pastes.created_at DESC, pastes.id DESC" in sql


class TestPasteServiceDelete:

    def setup_method(self):
        self.service = PasteService()

    @pytest.mark.asyncio
    async def test_requires_identity(self, mock_db_session):
        with pytest.raises(AuthenticationError):
            await self.service.delete_paste(mock_db_session, "any", None)

    @pytest.mark.asyncio
    async def test_deleted(self, mock_db_session, identity):
        mock_result = MagicMock()
        mock_result.rowcount = 1
        mock_db_session.execute.return_value = mock_result

        result = await self.service.delete_paste(mock_db_session, "some-uuid", identity)
        assert result.message == "Paste deleted"

    @pytest.mark.asyncio
    async def test_zero_rows_is_merged_not_found(self, mock_db_session, identity):
        mock_result = MagicMock()
        mock_result.rowcount = 0
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(NotFoundError, match="Paste not found or unauthorized"):
            await self.service.delete_paste(mock_db_session, "some-uuid", identity)

    @pytest.mark.asyncio
    async def test_statement_matches_uuid_and_owner(self, mock_db_session, identity):
        mock_result = MagicMock()
        mock_result.rowcount = 1
        mock_db_session.execute.return_value = mock_result

        await self.service.delete_paste(mock_db_session, "some-uuid", identity)

        params = mock_db_session.execute.await_args.args[0].compile().params
        assert set(params.values()) == {"some-uuid", identity.user_id}
