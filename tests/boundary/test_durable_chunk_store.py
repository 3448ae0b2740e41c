"""
Tests for DatabaseChunkStore and FailoverChunkStore.

Uses the in-memory SQLite engine from conftest for the durable tier.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from docflow.boundary.vdb.database_store import DatabaseChunkStore
from docflow.boundary.vdb.failover import FailoverChunkStore, call_with_failover
from docflow.boundary.vdb.memory_store import MemoryChunkStore
from docflow.boundary.vdb.vector_store import VectorStore
from docflow.boundary.vdb.vector_store_factory import get_vector_store
from docflow.configs.vector_store import VectorStoreSettings
from docflow.core.exceptions import VectorStoreError


@pytest.fixture
def durable_vector_store(session_factory, memory_store, embedding_task) -> VectorStore:
    """Vector store with SQLite durable tier over the in-process tier."""
    durable = DatabaseChunkStore(session_factory, memory_store)
    return VectorStore(FailoverChunkStore(durable, memory_store), embedding_task)


@pytest.fixture
def broken_durable() -> MagicMock:
    """Durable tier whose every call raises."""
    error = VectorStoreError("database unavailable")
    store = MagicMock()
    store.save_chunk = AsyncMock(side_effect=error)
    store.get_chunks = AsyncMock(side_effect=error)
    store.delete_document = AsyncMock(side_effect=error)
    store.search_candidates = AsyncMock(side_effect=error)
    store.stats = AsyncMock(side_effect=error)
    return store


class TestDatabaseChunkStore:
    """Test the SQLite-backed durable tier."""

    @pytest.mark.asyncio
    async def test_save_writes_metadata_only(
        self,
        durable_vector_store: VectorStore,
        memory_store: MemoryChunkStore,
    ) -> None:
        """Durable save should persist the row without an in-process vector."""
        assert await durable_vector_store.save_chunk_vector("doc_1", "hello", [0.1] * 8, 0, 2)

        chunks = await durable_vector_store.get_document_chunks("doc_1")
        assert len(chunks) == 1
        assert chunks[0].content == "hello"
        assert chunks[0].page_number == 2
        assert chunks[0].token_count == 2
        assert memory_store.get_vector("doc_1", 0) is None

    @pytest.mark.asyncio
    async def test_search_only_scores_chunks_with_in_process_vector(
        self,
        durable_vector_store: VectorStore,
        memory_store: MemoryChunkStore,
        embedding_task,
    ) -> None:
        """Rows without an in-process vector should be invisible to search."""
        await durable_vector_store.save_chunk_vector("doc_1", "first", [0.1] * 1536, 0)
        await durable_vector_store.save_chunk_vector("doc_1", "second", [0.1] * 1536, 1)
        vector = await embedding_task.embed("second")
        await memory_store.save_chunk("doc_1", "second", vector, 1)

        results = await durable_vector_store.semantic_search("second")

        assert [r.chunk_index for r in results] == [1]
        assert results[0].similarity == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_get_chunks_orders_by_index(self, durable_vector_store: VectorStore) -> None:
        for index in (1, 0):
            await durable_vector_store.save_chunk_vector("doc_1", f"c{index}", [0.1], index)

        chunks = await durable_vector_store.get_document_chunks("doc_1")

        assert [c.chunk_index for c in chunks] == [0, 1]

    @pytest.mark.asyncio
    async def test_delete_removes_rows_and_in_process_vectors(
        self,
        durable_vector_store: VectorStore,
        memory_store: MemoryChunkStore,
    ) -> None:
        await durable_vector_store.save_chunk_vector("doc_1", "row", [0.1], 0)
        await memory_store.save_chunk("doc_1", "row", [0.1], 0)

        assert await durable_vector_store.delete_document_vectors("doc_1") is True

        assert await durable_vector_store.get_document_chunks("doc_1") == []
        assert memory_store.get_vector("doc_1", 0) is None

    @pytest.mark.asyncio
    async def test_stats_from_rows(self, durable_vector_store: VectorStore) -> None:
        await durable_vector_store.save_chunk_vector("doc_1", "a", [0.1], 0)
        await durable_vector_store.save_chunk_vector("doc_1", "b", [0.1], 1)
        await durable_vector_store.save_chunk_vector("doc_2", "c", [0.1], 0)

        stats = await durable_vector_store.get_vector_stats()

        assert stats.total_chunks == 3
        assert stats.total_documents == 2
        assert stats.average_chunks_per_document == 1.5


class TestFailoverChunkStore:
    """Test degradation to the in-process tier."""

    @pytest.mark.asyncio
    async def test_save_falls_back_and_succeeds(
        self,
        broken_durable: MagicMock,
        memory_store: MemoryChunkStore,
        embedding_task,
    ) -> None:
        """Should store in memory and still report success."""
        store = VectorStore(FailoverChunkStore(broken_durable, memory_store), embedding_task)

        assert await store.save_chunk_vector("doc_1", "hello", [0.1] * 4, 0) is True

        broken_durable.save_chunk.assert_awaited_once()
        assert memory_store.get_vector("doc_1", 0) == [0.1] * 4

    @pytest.mark.asyncio
    async def test_reads_fall_back(
        self,
        broken_durable: MagicMock,
        memory_store: MemoryChunkStore,
        embedding_task,
    ) -> None:
        """List, search and stats should be answered by the in-process tier."""
        store = VectorStore(FailoverChunkStore(broken_durable, memory_store), embedding_task)
        vector = await embedding_task.embed("hello")
        await store.save_chunk_vector("doc_1", "hello", vector, 0)

        chunks = await store.get_document_chunks("doc_1")
        results = await store.semantic_search("hello")
        stats = await store.get_vector_stats()

        assert [c.content for c in chunks] == ["hello"]
        assert results[0].similarity == pytest.approx(1.0)
        assert stats.total_chunks == 1

    @pytest.mark.asyncio
    async def test_delete_falls_back(
        self,
        broken_durable: MagicMock,
        memory_store: MemoryChunkStore,
        embedding_task,
    ) -> None:
        store = VectorStore(FailoverChunkStore(broken_durable, memory_store), embedding_task)
        await store.save_chunk_vector("doc_1", "hello", [0.1], 0)

        assert await store.delete_document_vectors("doc_1") is True
        assert memory_store.get_vector("doc_1", 0) is None

    @pytest.mark.asyncio
    async def test_without_durable_tier_goes_straight_to_memory(
        self,
        memory_store: MemoryChunkStore,
    ) -> None:
        failover = FailoverChunkStore(None, memory_store)

        await failover.save_chunk("doc_1", "x", [1.0], 0)

        assert failover.has_durable_tier is False
        assert memory_store.get_vector("doc_1", 0) == [1.0]

    @pytest.mark.asyncio
    async def test_call_with_failover_returns_durable_result(self) -> None:
        durable = MagicMock()
        durable.get = AsyncMock(return_value="durable")
        fallback = MagicMock()
        fallback.get = AsyncMock(return_value="fallback")

        result = await call_with_failover("get", durable, fallback, lambda s: s.get())

        assert result == "durable"
        fallback.get.assert_not_awaited()


class TestVectorStoreFactory:
    """Test get_vector_store() backend selection."""

    def test_memory_backend_has_no_durable_tier(self, embedding_task) -> None:
        store = get_vector_store(VectorStoreSettings(backend="memory"), embedding_task)

        assert store._chunk_store.has_durable_tier is False

    def test_database_backend_without_database_uses_memory(self, embedding_task) -> None:
        store = get_vector_store(VectorStoreSettings(backend="database"), embedding_task)

        assert store._chunk_store.has_durable_tier is False

    @pytest.mark.asyncio
    async def test_database_backend_with_session_factory(self, embedding_task, session_factory) -> None:
        store = get_vector_store(
            VectorStoreSettings(backend="database"),
            embedding_task,
            session_factory=session_factory,
        )

        assert store._chunk_store.has_durable_tier is True

    def test_invalid_backend_raises(self, embedding_task) -> None:
        with pytest.raises(ValueError):
            get_vector_store(VectorStoreSettings(backend="faiss"), embedding_task)
