"""
Observability module.

Provides logging configuration and structured logging helpers.
"""

from docflow.observability.logger import configure_logging, get_logger
from docflow.observability.log_utils import log_exception_with_context, log_with_context

__all__ = [
    "configure_logging",
    "get_logger",
    "log_with_context",
    "log_exception_with_context",
]
