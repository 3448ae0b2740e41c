"""
Exception hierarchy for docflow.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DocflowException(Exception):
    """Base exception for all docflow errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(DocflowException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class DocumentProcessingError(DocflowException):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            document_id: ID of the document that failed
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class ParsingError(DocumentProcessingError):
    """Raised when document text extraction fails."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        mime_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize parsing error.

        Args:
            message: Error message
            file_path: Path of the file that failed parsing
            mime_type: Declared mime type of the file
            details: Additional context
        """
        details = details or {}
        if file_path:
            details["file_path"] = file_path
        if mime_type:
            details["mime_type"] = mime_type
        super().__init__(message, details=details)


class EmbeddingError(DocumentProcessingError):
    """Raised when the live embedding backend returns an unusable response."""

    pass


class VectorStoreError(DocflowException):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (save, search, delete, stats)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class DocumentStoreError(DocflowException):
    """Raised when the durable document table cannot be used."""

    pass


class QueueError(DocflowException):
    """Raised when a queue backend cannot accept or report on a job."""

    def __init__(
        self,
        message: str,
        job_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize queue error.

        Args:
            message: Error message
            job_id: Job the failure relates to
            details: Additional context
        """
        details = details or {}
        if job_id:
            details["job_id"] = job_id
        super().__init__(message, details)
