"""
Test suite for JobCRUD against in-memory SQLite.

Covers creation, batch lookup, status transitions, counting and pruning.

System role: Verification of job persistence for the Celery backend
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from docflow.boundary.db.CRUD.job_crud import JobCRUD
from docflow.models.job import JobStatus, JobType


@pytest.fixture
def job_crud() -> JobCRUD:
    """Provide JobCRUD instance for testing."""
    return JobCRUD()


async def _create_job(session, job_crud: JobCRUD, batch_id: str | None = None, **fields):
    job = await job_crud.create(
        session,
        type=JobType.PROCESS_BATCH_DOCUMENTS,
        batch_id=batch_id,
        status=fields.pop("status", JobStatus.WAITING),
        payload=fields.pop("payload", {"type": "process_batch_documents", "files": []}),
        **fields,
    )
    await session.commit()
    return job


class TestJobCRUDCreate:
    """Test suite for JobCRUD.create()."""

    @pytest.mark.asyncio
    async def test_create_should_set_defaults(self, session_factory, job_crud: JobCRUD) -> None:
        """Test created job gets id, timestamps and zero progress."""
        async with session_factory() as session:
            job = await _create_job(session, job_crud, batch_id="batch-1")

        assert isinstance(job.id, uuid.UUID)
        assert job.status == JobStatus.WAITING
        assert job.progress == 0
        assert job.created_at is not None
        assert job.result is None


class TestJobCRUDQueries:
    """Test suite for batch and status queries."""

    @pytest.mark.asyncio
    async def test_get_by_batch_id_should_filter(self, session_factory, job_crud: JobCRUD) -> None:
        async with session_factory() as session:
            first = await _create_job(session, job_crud, batch_id="batch-1")
            await _create_job(session, job_crud, batch_id="batch-2")
            second = await _create_job(session, job_crud, batch_id="batch-1")

            jobs = await job_crud.get_by_batch_id(session, "batch-1")

        assert {job.id for job in jobs} == {first.id, second.id}

    @pytest.mark.asyncio
    async def test_count_by_status_should_include_every_status(
        self,
        session_factory,
        job_crud: JobCRUD,
    ) -> None:
        async with session_factory() as session:
            await _create_job(session, job_crud)
            await _create_job(session, job_crud)
            await _create_job(session, job_crud, status=JobStatus.FAILED)

            counts = await job_crud.count_by_status(session)

        assert counts == {
            JobStatus.WAITING: 2,
            JobStatus.ACTIVE: 0,
            JobStatus.COMPLETED: 0,
            JobStatus.FAILED: 1,
        }

    @pytest.mark.asyncio
    async def test_get_by_status_should_respect_limit(self, session_factory, job_crud: JobCRUD) -> None:
        async with session_factory() as session:
            for _ in range(3):
                await _create_job(session, job_crud)

            jobs = await job_crud.get_by_status(session, JobStatus.WAITING, limit=2)

        assert len(jobs) == 2


class TestJobCRUDTransitions:
    """Test suite for status transition helpers."""

    @pytest.mark.asyncio
    async def test_mark_active_sets_processed_on_once(self, session_factory, job_crud: JobCRUD) -> None:
        async with session_factory() as session:
            job = await _create_job(session, job_crud)

            first = await job_crud.mark_active(session, job.id)
            processed_on = first.processed_on
            second = await job_crud.mark_active(session, job.id)
            await session.commit()

        assert first.status == JobStatus.ACTIVE
        assert processed_on is not None
        assert second.processed_on == processed_on

    @pytest.mark.asyncio
    async def test_mark_active_missing_job_returns_none(self, session_factory, job_crud: JobCRUD) -> None:
        async with session_factory() as session:
            assert await job_crud.mark_active(session, uuid.uuid4()) is None

    @pytest.mark.asyncio
    async def test_mark_completed_stores_result(self, session_factory, job_crud: JobCRUD) -> None:
        async with session_factory() as session:
            job = await _create_job(session, job_crud)

            updated = await job_crud.mark_completed(session, job.id, {"totalFiles": 1})
            await session.commit()

        assert updated.status == JobStatus.COMPLETED
        assert updated.progress == 100
        assert updated.result == {"totalFiles": 1}
        assert updated.finished_on is not None

    @pytest.mark.asyncio
    async def test_mark_failed_stores_error(self, session_factory, job_crud: JobCRUD) -> None:
        async with session_factory() as session:
            job = await _create_job(session, job_crud)

            updated = await job_crud.mark_failed(session, job.id, "broker lost")
            await session.commit()

        assert updated.status == JobStatus.FAILED
        assert updated.error == "broker lost"

    @pytest.mark.asyncio
    async def test_update_progress(self, session_factory, job_crud: JobCRUD) -> None:
        async with session_factory() as session:
            job = await _create_job(session, job_crud)

            updated = await job_crud.update_progress(session, job.id, 40)
            await session.commit()

        assert updated.progress == 40


class TestJobCRUDRetention:
    """Test suite for pruning helpers."""

    @pytest.mark.asyncio
    async def test_prune_terminal_keeps_newest(self, session_factory, job_crud: JobCRUD) -> None:
        now = datetime.now(timezone.utc)
        async with session_factory() as session:
            ids = []
            for age in range(4):
                job = await _create_job(
                    session,
                    job_crud,
                    status=JobStatus.COMPLETED,
                    updated_at=now - timedelta(minutes=age),
                )
                ids.append(job.id)

            removed = await job_crud.prune_terminal(session, JobStatus.COMPLETED, keep=2)
            await session.commit()
            remaining = await job_crud.get_by_status(session, JobStatus.COMPLETED)

        assert removed == 2
        assert {job.id for job in remaining} == set(ids[:2])

    @pytest.mark.asyncio
    async def test_delete_older_than(self, session_factory, job_crud: JobCRUD) -> None:
        now = datetime.now(timezone.utc)
        async with session_factory() as session:
            await _create_job(
                session, job_crud, status=JobStatus.FAILED, updated_at=now - timedelta(days=8)
            )
            recent = await _create_job(
                session, job_crud, status=JobStatus.FAILED, updated_at=now - timedelta(days=1)
            )

            removed = await job_crud.delete_older_than(
                session, JobStatus.FAILED, now - timedelta(days=7)
            )
            await session.commit()
            remaining = await job_crud.get_by_status(session, JobStatus.FAILED)

        assert removed == 1
        assert [job.id for job in remaining] == [recent.id]
