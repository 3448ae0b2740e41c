"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory SQLite engine/session factory, embedding and vector
store fixtures, temp file helpers
Dependencies: pytest, pytest_asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import tempfile
from pathlib import Path

import pytest
import pytest_asyncio


@pytest_asyncio.fixture
async def db_engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine shared through a single static connection
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    from docflow.boundary.db.connection import create_all_tables

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all_tables(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """Session factory bound to the test engine."""
    from docflow.boundary.db.connection import get_async_session_factory

    return get_async_session_factory(db_engine)


@pytest.fixture
def embedding_task():
    """Embedding task without a live provider (deterministic fallback only)."""
    from docflow.core.document_processing.tasks.embedding_task import EmbeddingTask

    return EmbeddingTask()


@pytest.fixture
def memory_store():
    """Fresh in-process chunk store."""
    from docflow.boundary.vdb.memory_store import MemoryChunkStore

    return MemoryChunkStore()


@pytest.fixture
def memory_vector_store(memory_store, embedding_task):
    """Vector store backed only by the in-process tier."""
    from docflow.boundary.vdb.failover import FailoverChunkStore
    from docflow.boundary.vdb.vector_store import VectorStore

    return VectorStore(FailoverChunkStore(None, memory_store), embedding_task)


@pytest.fixture
def temp_dir():
    """
    Create a temporary directory for test files.

    Yields:
        Path: Path to temporary directory
    """
    temp_path = Path(tempfile.mkdtemp(prefix="docflow_test_"))
    yield temp_path

    import shutil
    if temp_path.exists():
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def make_text_file(temp_dir):
    """Factory writing a UTF-8 text file into temp_dir and returning its path."""

    def _make(name: str, content: str) -> Path:
        path = temp_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _make


@pytest.fixture
def make_file_descriptor():
    """Factory for FileDescriptor payload entries."""
    from docflow.models.job import FileDescriptor

    def _make(path, mime_type: str = "text/plain", file_id: str | None = None) -> FileDescriptor:
        path = Path(path)
        return FileDescriptor(
            file_id=file_id or f"file-{path.stem}",
            original_name=path.name,
            file_path=str(path),
            file_size=path.stat().st_size if path.exists() else 0,
            mime_type=mime_type,
        )

    return _make
