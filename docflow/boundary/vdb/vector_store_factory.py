"""
Vector store factory.

Builds the chunk storage tiers from VECTOR_STORE_BACKEND and the database
settings: 'database' layers the SQLAlchemy store over the in-process store,
'memory' uses the in-process store alone.

Dependencies: docflow.boundary.vdb, docflow.configs
System role: Vector store instantiation and selection
"""

import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from docflow.boundary.vdb.database_store import DatabaseChunkStore
from docflow.boundary.vdb.failover import FailoverChunkStore
from docflow.boundary.vdb.memory_store import MemoryChunkStore
from docflow.boundary.vdb.vector_store import VectorStore
from docflow.configs.vector_store import VectorStoreSettings
from docflow.core.document_processing.tasks.embedding_task import EmbeddingTask

logger = logging.getLogger(__name__)


def get_vector_store(
    settings: VectorStoreSettings,
    embedding_task: EmbeddingTask,
    session_factory: async_sessionmaker | None = None,
    memory_store: MemoryChunkStore | None = None,
) -> VectorStore:
    """
    Create a vector store for the configured backend.

    Args:
        settings: Vector store settings
        embedding_task: Query embedder
        session_factory: Durable session factory (None disables the durable tier)
        memory_store: Shared in-process store (new one when omitted)

    Returns:
        VectorStore: Configured vector store

    Raises:
        ValueError: If VECTOR_STORE_BACKEND is invalid
    """
    backend = settings.backend.lower()
    memory_store = memory_store or MemoryChunkStore()

    if backend == "database":
        if session_factory is None:
            logger.warning(
                f"{__name__}:get_vector_store - Database backend requested without a database, "
                "using in-process store"
            )
            durable = None
        else:
            logger.info(f"{__name__}:get_vector_store - Creating database vector store")
            durable = DatabaseChunkStore(session_factory, memory_store)
    elif backend == "memory":
        logger.info(f"{__name__}:get_vector_store - Creating in-process vector store")
        durable = None
    else:
        raise ValueError(
            f"Invalid VECTOR_STORE_BACKEND: {backend}. Must be 'database' or 'memory'."
        )

    return VectorStore(FailoverChunkStore(durable, memory_store), embedding_task)
