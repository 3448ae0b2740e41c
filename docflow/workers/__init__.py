"""
Celery workers module.

Async task processing for batch document jobs.

Dependencies: celery, docflow.configs
System role: Background task processing
"""

from celery import Celery, signals

from docflow.configs import get_settings
from docflow.observability.logger import configure_logging

settings = get_settings()
queue_config = settings.queue

celery_app = Celery(
    "docflow",
    broker=queue_config.broker_url,
    backend=queue_config.result_backend_url,
    include=["docflow.workers.tasks.document_processing"],
)

celery_app.conf.update(
    task_serializer=queue_config.task_serializer,
    result_serializer=queue_config.result_serializer,
    accept_content=queue_config.accept_content,
    timezone=queue_config.timezone,
    task_acks_late=True,
)


@signals.setup_logging.connect
def setup_worker_logging(**kwargs) -> None:
    """Use the application log format instead of Celery's default handlers."""
    configure_logging(settings.log_level)
