"""
Vector storage boundary layer.

- VectorStore: save/list/delete/search/stats facade
- MemoryChunkStore: in-process tier, holds raw vectors
- DatabaseChunkStore: durable tier (chunk metadata only)
- FailoverChunkStore: durable-first with in-process fallback

Dependencies: sqlalchemy
System role: Vector store adapter for vectorization and search
"""

from docflow.boundary.vdb.database_store import DatabaseChunkStore
from docflow.boundary.vdb.failover import ChunkStore, FailoverChunkStore, call_with_failover
from docflow.boundary.vdb.memory_store import MemoryChunkStore
from docflow.boundary.vdb.vector_store import VectorStore, cosine_similarity
from docflow.boundary.vdb.vector_store_factory import get_vector_store

__all__ = [
    "ChunkStore",
    "DatabaseChunkStore",
    "FailoverChunkStore",
    "MemoryChunkStore",
    "VectorStore",
    "call_with_failover",
    "cosine_similarity",
    "get_vector_store",
]
