"""
Job queue backends.

- InProcessJobBackend: asyncio FIFO drain loop, ids job_1, job_2, ...
- CeleryJobBackend: jobs table + Celery task, ids are UUID strings
"""

from docflow.application.queue.base import JobBackend, build_status_record, progress_percent
from docflow.application.queue.celery_backend import CeleryJobBackend, is_broker_reachable
from docflow.application.queue.memory_backend import InProcessJobBackend, JobRecord

__all__ = [
    "CeleryJobBackend",
    "InProcessJobBackend",
    "JobBackend",
    "JobRecord",
    "build_status_record",
    "is_broker_reachable",
    "progress_percent",
]
