"""
Durable-first storage with in-process fallback.

Tries the durable tier first; on any exception the same call is delegated
to the in-process tier and its result is returned. Shared by the chunk
store and the document store.

Dependencies: docflow.boundary.vdb
System role: Two-tier storage discipline for chunk persistence
"""

import logging
from typing import Any, Awaitable, Callable, Protocol, TypeVar

from docflow.boundary.vdb.memory_store import MemoryChunkStore
from docflow.models.chunk import ChunkRecord, VectorStats
from docflow.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

TierT = TypeVar("TierT")


async def call_with_failover(
    operation: str,
    durable: TierT | None,
    fallback: TierT,
    call: Callable[[TierT], Awaitable[Any]],
) -> Any:
    """
    Run `call` against the durable tier, or against the fallback tier when the
    durable tier is absent or raises.

    Args:
        operation: Name used in the warning log
        durable: Durable tier (None skips straight to the fallback)
        fallback: In-process tier
        call: Coroutine factory taking a tier

    Returns:
        Whatever the tier that answered returned
    """
    if durable is None:
        return await call(fallback)
    try:
        return await call(durable)
    except Exception as e:
        log_exception_with_context(
            logger,
            f"{__name__}:{operation} - Durable tier failed, using in-process tier",
            e,
            level=logging.WARNING,
            operation=operation,
        )
        return await call(fallback)


class ChunkStore(Protocol):
    """Operations shared by every chunk storage tier."""

    async def save_chunk(
        self,
        document_id: str,
        content: str,
        vector: list[float],
        chunk_index: int,
        page_number: int | None = None,
    ) -> None: ...

    async def get_chunks(self, document_id: str) -> list[ChunkRecord]: ...

    async def delete_document(self, document_id: str) -> None: ...

    async def search_candidates(
        self,
        document_id: str | None = None,
    ) -> list[tuple[ChunkRecord, list[float]]]: ...

    async def stats(self) -> VectorStats: ...


class FailoverChunkStore:
    """
    Chunk store that degrades from a durable tier to the in-process tier.

    With no durable tier configured every call goes straight to memory.
    """

    def __init__(self, durable: ChunkStore | None, fallback: MemoryChunkStore) -> None:
        self._durable = durable
        self._fallback = fallback

    @property
    def has_durable_tier(self) -> bool:
        return self._durable is not None

    async def _call(
        self,
        operation: str,
        call: Callable[[ChunkStore], Awaitable[Any]],
    ) -> Any:
        return await call_with_failover(operation, self._durable, self._fallback, call)

    async def save_chunk(
        self,
        document_id: str,
        content: str,
        vector: list[float],
        chunk_index: int,
        page_number: int | None = None,
    ) -> None:
        await self._call(
            "save_chunk",
            lambda store: store.save_chunk(document_id, content, vector, chunk_index, page_number),
        )

    async def get_chunks(self, document_id: str) -> list[ChunkRecord]:
        return await self._call("get_chunks", lambda store: store.get_chunks(document_id))

    async def delete_document(self, document_id: str) -> None:
        await self._call("delete_document", lambda store: store.delete_document(document_id))

    async def search_candidates(
        self,
        document_id: str | None = None,
    ) -> list[tuple[ChunkRecord, list[float]]]:
        return await self._call(
            "search_candidates", lambda store: store.search_candidates(document_id)
        )

    async def stats(self) -> VectorStats:
        return await self._call("stats", lambda store: store.stats())
