"""
Dependency injection container.

Builds and caches every service from Settings. Each container owns its
in-process stores, so two containers never share state.

Dependencies: docflow.configs, docflow.application, docflow.boundary, docflow.core
System role: Composition root for callers and Celery workers
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from docflow.application.services import BatchService, DocumentService, JobProcessor, JobService
from docflow.boundary.db.connection import (
    create_all_tables,
    get_async_engine,
    get_async_session_factory,
)
from docflow.boundary.vdb.memory_store import MemoryChunkStore
from docflow.boundary.vdb.vector_store import VectorStore
from docflow.boundary.vdb.vector_store_factory import get_vector_store
from docflow.configs import Settings, get_settings
from docflow.core.document_processing.tasks import ChunkingTask, EmbeddingTask, ParsingTask
from docflow.core.document_processing.vectorizer import DocumentVectorizer

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Container for cached service instances."""

    def __init__(self, settings: Settings, engine: AsyncEngine | None = None) -> None:
        """
        Initialize container.

        Args:
            settings: Application settings
            engine: Pre-built engine (tests); otherwise created when the database is enabled
        """
        self.settings = settings
        self._engine = engine
        self._owns_engine = engine is None
        self._session_factory: async_sessionmaker | None = None
        self._embedding_task = None
        self._memory_chunk_store = None
        self._vector_store = None
        self._document_service = None
        self._job_processor = None
        self._job_service = None
        self._batch_service = None

    @property
    def engine(self) -> AsyncEngine | None:
        """Async engine, or None when the database is disabled."""
        if self._engine is None and self.settings.database.enabled:
            self._engine = get_async_engine(self.settings.database)
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker | None:
        """Session factory for the durable tier, or None when it is disabled."""
        if self._session_factory is None and self.engine is not None:
            self._session_factory = get_async_session_factory(self.engine)
        return self._session_factory

    @property
    def embedding_task(self) -> EmbeddingTask:
        if self._embedding_task is None:
            self._embedding_task = EmbeddingTask.from_settings(
                self.settings.embedding,
                dimension=self.settings.vector_store.embedding_dimension,
            )
        return self._embedding_task

    @property
    def memory_chunk_store(self) -> MemoryChunkStore:
        if self._memory_chunk_store is None:
            self._memory_chunk_store = MemoryChunkStore()
        return self._memory_chunk_store

    @property
    def vector_store(self) -> VectorStore:
        """Get cached vector store."""
        if self._vector_store is None:
            self._vector_store = get_vector_store(
                self.settings.vector_store,
                self.embedding_task,
                session_factory=self.session_factory,
                memory_store=self.memory_chunk_store,
            )
        return self._vector_store

    @property
    def vectorizer(self) -> DocumentVectorizer:
        return DocumentVectorizer(
            ChunkingTask(
                chunk_size=self.settings.vector_store.chunk_size,
                chunk_overlap=self.settings.vector_store.chunk_overlap,
            ),
            self.embedding_task,
            self.vector_store,
        )

    @property
    def document_service(self) -> DocumentService:
        if self._document_service is None:
            self._document_service = DocumentService(self.session_factory)
        return self._document_service

    @property
    def job_processor(self) -> JobProcessor:
        if self._job_processor is None:
            self._job_processor = JobProcessor(
                ParsingTask(), self.document_service, self.vectorizer
            )
        return self._job_processor

    @property
    def job_service(self) -> JobService:
        """Get cached job service; the queue backend is selected here, once."""
        if self._job_service is None:
            celery_app = None
            if self.settings.queue.backend.lower() == "celery":
                from docflow.workers import celery_app

            self._job_service = JobService.from_settings(
                self.settings.queue,
                self.job_processor,
                session_factory=self.session_factory,
                celery_app=celery_app,
            )
        return self._job_service

    @property
    def batch_service(self) -> BatchService:
        if self._batch_service is None:
            self._batch_service = BatchService(self.job_service)
        return self._batch_service

    async def init_database(self) -> None:
        """Create the durable tables when the database is enabled."""
        if self.engine is None:
            logger.info(f"{__name__}:init_database - Database disabled, running in memory")
            return
        await create_all_tables(self.engine)
        logger.info(f"{__name__}:init_database - Database tables ready")

    async def aclose(self) -> None:
        """Dispose of the engine if this container created it."""
        if self._engine is not None and self._owns_engine:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None


_service_container: ServiceContainer | None = None


def get_service_container() -> ServiceContainer:
    """Get the process-wide service container, built from get_settings() on first use."""
    global _service_container
    if _service_container is None:
        _service_container = ServiceContainer(get_settings())
    return _service_container
