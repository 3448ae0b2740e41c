"""
Tests for DocumentService with in-process and SQLite durable tiers.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from docflow.application.services.document_service import DocumentService
from docflow.core.exceptions import DocumentStoreError
from docflow.models.document import DocumentCreate


def _document(file_id: str = "file-1") -> DocumentCreate:
    return DocumentCreate(
        file_id=file_id,
        original_name="a.txt",
        file_size=5,
        text_content="hello",
        file_path="/tmp/a.txt",
        user_id="user-1",
    )


class TestDocumentServiceInMemory:
    """Test DocumentService without a database."""

    @pytest.mark.asyncio
    async def test_ids_are_sequential(self) -> None:
        service = DocumentService()

        first = await service.create_document(_document("file-1"))
        second = await service.create_document(_document("file-2"))

        assert (first.id, second.id) == ("doc_1", "doc_2")

    @pytest.mark.asyncio
    async def test_get_and_delete(self) -> None:
        service = DocumentService()
        created = await service.create_document(_document())

        assert await service.get_document_by_file_id("file-1") == created
        assert await service.delete_document("file-1") is True
        assert await service.get_document_by_file_id("file-1") is None

    @pytest.mark.asyncio
    async def test_instances_do_not_share_state(self) -> None:
        await DocumentService().create_document(_document())

        assert await DocumentService().get_document_by_file_id("file-1") is None


class TestDocumentServiceDurable:
    """Test DocumentService with the SQLite documents table."""

    @pytest.mark.asyncio
    async def test_create_persists_row(self, session_factory) -> None:
        service = DocumentService(session_factory)

        created = await service.create_document(_document())
        found = await service.get_document_by_file_id("file-1")

        assert found.id == created.id
        assert not created.id.startswith("doc_")
        assert found.user_id == "user-1"

    @pytest.mark.asyncio
    async def test_durable_failure_falls_back_to_memory(self) -> None:
        """Should store the record in process when the database fails."""
        service = DocumentService(MagicMock())
        service._durable = MagicMock()
        service._durable.create = AsyncMock(side_effect=DocumentStoreError("db down"))

        created = await service.create_document(_document())

        assert created.id == "doc_1"
