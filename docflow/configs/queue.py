"""
Job queue configuration settings.

Selects the queue backend and configures Celery broker, retry and
retention policies for batch document processing.

Dependencies: pydantic, pydantic_settings
System role: Async task queue configuration for batch processing
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class QueueSettings(BaseSettings):
    """Celery/Redis and in-process queue configuration."""

    model_config = SettingsConfigDict(
        env_prefix="QUEUE_",
        case_sensitive=False,
        extra="ignore",
    )

    backend: str = Field(
        default="memory",
        description="Queue backend: 'celery' (durable) or 'memory' (in-process)",
    )

    broker_url: str = Field(default="redis://localhost:6379/0", description="Celery broker URL")
    result_backend_url: str = Field(
        default="redis://localhost:6379/1",
        description="Celery result backend URL",
    )
    broker_connect_timeout: float = Field(
        default=2.0,
        description="Seconds to wait for the broker during startup detection",
    )

    task_serializer: str = Field(default="json", description="Task serialization format")
    result_serializer: str = Field(default="json", description="Result serialization format")
    accept_content: list[str] = Field(default=["json"], description="Accepted content types")
    timezone: str = Field(default="UTC", description="Celery timezone")

    # Retry policy
    task_attempts: int = Field(default=3, description="Total attempts per job")
    task_retry_backoff: int = Field(default=2, description="Retry backoff base in seconds")
    task_retry_backoff_max: int = Field(default=600, description="Maximum retry backoff in seconds")

    # Retention
    keep_completed: int = Field(default=10, description="Completed job rows kept by the durable backend")
    keep_failed: int = Field(default=5, description="Failed job rows kept by the durable backend")
    completed_max_age_hours: int = Field(default=24, description="Cleanup age for completed jobs")
    failed_max_age_hours: int = Field(default=24 * 7, description="Cleanup age for failed jobs")
