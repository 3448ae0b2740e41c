"""
In-process chunk store.

Holds chunk records and their vectors in a dict keyed by document id. Used
as the fallback tier and as the only home of raw vectors.

Dependencies: docflow.models.chunk
System role: Fallback chunk/vector storage
"""

import threading
from dataclasses import dataclass

from docflow.models.chunk import ChunkRecord, VectorStats, estimate_tokens


@dataclass
class StoredChunk:
    """Chunk record paired with its vector."""

    record: ChunkRecord
    vector: list[float]


def compute_stats(total_chunks: int, total_documents: int) -> VectorStats:
    """Build VectorStats; the average is 0 when there are no documents."""
    average = total_chunks / total_documents if total_documents else 0.0
    return VectorStats(
        total_chunks=total_chunks,
        total_documents=total_documents,
        average_chunks_per_document=average,
    )


class MemoryChunkStore:
    """
    Thread-safe in-process chunk store.

    Saving the same (document_id, chunk_index) twice replaces the earlier
    entry. Instances are owned by the service that creates them; there is no
    module-level state.
    """

    def __init__(self) -> None:
        self._chunks: dict[str, dict[int, StoredChunk]] = {}
        self._lock = threading.Lock()

    async def save_chunk(
        self,
        document_id: str,
        content: str,
        vector: list[float],
        chunk_index: int,
        page_number: int | None = None,
    ) -> None:
        record = ChunkRecord(
            document_id=document_id,
            chunk_index=chunk_index,
            content=content,
            page_number=page_number,
            token_count=estimate_tokens(content),
        )
        with self._lock:
            self._chunks.setdefault(document_id, {})[chunk_index] = StoredChunk(
                record=record, vector=list(vector)
            )

    async def get_chunks(self, document_id: str) -> list[ChunkRecord]:
        with self._lock:
            entries = self._chunks.get(document_id, {})
            return [entries[index].record for index in sorted(entries)]

    async def delete_document(self, document_id: str) -> None:
        with self._lock:
            self._chunks.pop(document_id, None)

    async def search_candidates(
        self,
        document_id: str | None = None,
    ) -> list[tuple[ChunkRecord, list[float]]]:
        """Return (record, vector) pairs, optionally filtered to one document."""
        with self._lock:
            if document_id is not None:
                documents = {document_id: self._chunks.get(document_id, {})}
            else:
                documents = self._chunks
            return [
                (entries[index].record, entries[index].vector)
                for entries in documents.values()
                for index in sorted(entries)
            ]

    async def stats(self) -> VectorStats:
        with self._lock:
            total_chunks = sum(len(entries) for entries in self._chunks.values())
            total_documents = sum(1 for entries in self._chunks.values() if entries)
        return compute_stats(total_chunks, total_documents)

    def get_vector(self, document_id: str, chunk_index: int) -> list[float] | None:
        """Look up the in-process vector for one chunk."""
        with self._lock:
            entry = self._chunks.get(document_id, {}).get(chunk_index)
            return entry.vector if entry is not None else None
