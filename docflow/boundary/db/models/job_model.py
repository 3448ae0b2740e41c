"""
Job ORM model.

Tracks Celery task execution for batch document processing. The row id
doubles as the Celery task id.

Dependencies: sqlalchemy, docflow.boundary.db.base
System role: Durable job tracking for the Celery backend
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from docflow.boundary.db.base import Base, TimestampMixin, UUIDMixin
from docflow.models.job import JobStatus, JobType


class JobModel(Base, UUIDMixin, TimestampMixin):
    """
    Job ORM model linking Celery tasks to their status and result.

    Attributes:
        id: UUID primary key, also used as the Celery task id
        type: Job type tag
        batch_id: Optional batch grouping
        status: waiting/active/completed/failed
        progress: Percentage complete (0-100)
        payload: Submitted JobPayload (camelCase JSON)
        result: JobResult JSON once completed
        error: Failure message
        processed_on: When a worker first picked the job up
        finished_on: When the job reached a terminal state

    Workflow:
        1. JobService persists the row (WAITING) and enqueues the task id
        2. Worker marks ACTIVE, updates progress per file
        3. Worker marks COMPLETED with result, or FAILED with error
        4. Callers poll status through JobService
    """

    __tablename__ = "jobs"

    type: Mapped[JobType] = mapped_column(
        Enum(JobType, native_enum=False),
        nullable=False,
    )
    batch_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    status: Mapped[JobStatus] = mapped_column(
        Enum(JobStatus, native_enum=False),
        nullable=False,
        default=JobStatus.WAITING,
    )
    progress: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        doc="Progress percentage (0-100)",
    )
    payload: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    result: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    error: Mapped[str | None] = mapped_column(Text, nullable=True)
    processed_on: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    finished_on: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
