"""
Job CRUD operations.

Provides Create, Read, Update, Delete operations for JobModel
with job-specific query methods for status tracking, batch lookup and
retention.

Dependencies: sqlalchemy, docflow.boundary.db.models
System role: Job persistence operations for the Celery backend
"""

from datetime import datetime, timezone
from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from docflow.boundary.db.CRUD.base_crud import BaseCRUD
from docflow.boundary.db.models.job_model import JobModel
from docflow.models.job import JobStatus


class JobCRUD(BaseCRUD[JobModel]):
    """
    CRUD operations for JobModel.

    Extends BaseCRUD with job-specific queries for batch lookup,
    status tracking, progress reporting and pruning.
    """

    def __init__(self) -> None:
        super().__init__(JobModel)

    async def get_by_batch_id(
        self,
        session: AsyncSession,
        batch_id: str,
    ) -> Sequence[JobModel]:
        """
        Retrieve all jobs of a batch, oldest first.

        Args:
            session: Async database session
            batch_id: Batch identifier

        Returns:
            Sequence of JobModels sharing the batch id
        """
        stmt = (
            select(JobModel)
            .where(JobModel.batch_id == batch_id)
            .order_by(JobModel.created_at)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_by_status(
        self,
        session: AsyncSession,
        status: JobStatus,
        limit: int | None = None,
    ) -> Sequence[JobModel]:
        """
        Retrieve jobs by execution status.

        Args:
            session: Async database session
            status: Job execution status to filter by
            limit: Maximum number of jobs to return

        Returns:
            Sequence of JobModels with matching status
        """
        stmt = select(JobModel).where(JobModel.status == status)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_by_status(self, session: AsyncSession) -> dict[JobStatus, int]:
        """
        Count jobs grouped by status.

        Returns:
            Mapping with an entry for every JobStatus (0 when absent)
        """
        stmt = select(JobModel.status, func.count(JobModel.id)).group_by(JobModel.status)
        result = await session.execute(stmt)
        counts = {status: 0 for status in JobStatus}
        for status, count in result.all():
            counts[JobStatus(status)] = count
        return counts

    async def update_progress(
        self,
        session: AsyncSession,
        id: UUID,
        progress: int,
    ) -> JobModel | None:
        """
        Update job progress percentage.

        Args:
            session: Async database session
            id: Job UUID
            progress: Progress percentage (0-100)

        Returns:
            Updated JobModel if found, None otherwise
        """
        return await self.update_by_id(session, id, progress=progress)

    async def mark_active(self, session: AsyncSession, id: UUID) -> JobModel | None:
        """Mark job as active. processed_on is set on the first pickup only."""
        job = await self.get_by_id(session, id)
        if job is None:
            return None
        fields: dict = {"status": JobStatus.ACTIVE, "error": None}
        if job.processed_on is None:
            fields["processed_on"] = datetime.now(timezone.utc)
        return await self.update_by_id(session, id, **fields)

    async def mark_completed(
        self,
        session: AsyncSession,
        id: UUID,
        result_data: dict,
    ) -> JobModel | None:
        """
        Mark job as successfully completed with result.

        Args:
            session: Async database session
            id: Job UUID
            result_data: JobResult wire dict

        Returns:
            Updated JobModel if found, None otherwise
        """
        return await self.update_by_id(
            session,
            id,
            status=JobStatus.COMPLETED,
            progress=100,
            result=result_data,
            finished_on=datetime.now(timezone.utc),
        )

    async def mark_failed(
        self,
        session: AsyncSession,
        id: UUID,
        error: str,
    ) -> JobModel | None:
        """
        Mark job as failed with an error message.

        Args:
            session: Async database session
            id: Job UUID
            error: Failure message

        Returns:
            Updated JobModel if found, None otherwise
        """
        return await self.update_by_id(
            session,
            id,
            status=JobStatus.FAILED,
            error=error,
            finished_on=datetime.now(timezone.utc),
        )

    async def prune_terminal(
        self,
        session: AsyncSession,
        status: JobStatus,
        keep: int,
    ) -> int:
        """
        Delete all but the newest `keep` jobs in a terminal status.

        Args:
            session: Async database session
            status: COMPLETED or FAILED
            keep: Number of most recently updated rows to retain

        Returns:
            Number of rows removed
        """
        keep_ids = (
            select(JobModel.id)
            .where(JobModel.status == status)
            .order_by(JobModel.updated_at.desc())
            .limit(keep)
        )
        stmt = delete(JobModel).where(
            JobModel.status == status,
            JobModel.id.not_in(keep_ids),
        )
        result = await session.execute(stmt)
        return result.rowcount or 0

    async def delete_older_than(
        self,
        session: AsyncSession,
        status: JobStatus,
        cutoff: datetime,
    ) -> int:
        """
        Delete jobs in a status that finished before the cutoff.

        Returns:
            Number of rows removed
        """
        stmt = delete(JobModel).where(
            JobModel.status == status,
            JobModel.updated_at < cutoff,
        )
        result = await session.execute(stmt)
        return result.rowcount or 0


job_crud = JobCRUD()
