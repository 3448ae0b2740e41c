"""
Application services.

- DocumentService: document records with database/in-process failover
- JobProcessor: per-file extraction, persistence and vectorization
- JobService: job queue front door (Celery or in-process)
- BatchService: batch submission and aggregated progress
"""

from docflow.application.services.batch_service import BatchService
from docflow.application.services.document_service import DocumentService
from docflow.application.services.job_processor import JobProcessor
from docflow.application.services.job_service import JobService

__all__ = [
    "BatchService",
    "DocumentService",
    "JobProcessor",
    "JobService",
]
