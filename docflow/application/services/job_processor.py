"""
Per-file job processing.

Extracts text from each file of a job payload, records a document, runs
vectorization when requested and collects per-file outcomes. A failure of
one file never stops the rest of the job.

Dependencies: docflow.core.document_processing, docflow.application.services.document_service
System role: Work performed by both queue backends
"""

import logging
import os
from typing import Awaitable, Callable

from docflow.application.queue.base import progress_percent
from docflow.application.services.document_service import DocumentService
from docflow.core.document_processing.tasks.parsing_task import ParsingTask
from docflow.core.document_processing.vectorizer import DocumentVectorizer
from docflow.models.document import DocumentCreate
from docflow.models.job import (
    FileDescriptor,
    FileResult,
    FileResultStatus,
    JobPayload,
    JobResult,
)
from docflow.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, str | None], Awaitable[None]]


async def _ignore_progress(progress: int, current_file: str | None) -> None:
    return None


class JobProcessor:
    """Process every file of a job payload in order."""

    def __init__(
        self,
        parsing_task: ParsingTask,
        document_service: DocumentService,
        vectorizer: DocumentVectorizer,
    ) -> None:
        """
        Initialize job processor.

        Args:
            parsing_task: Text extractor
            document_service: Document record store
            vectorizer: Chunk/embed/store pipeline
        """
        self._parsing_task = parsing_task
        self._document_service = document_service
        self._vectorizer = vectorizer

    async def process(
        self,
        payload: JobPayload,
        progress_callback: ProgressCallback | None = None,
    ) -> JobResult:
        """
        Process all files of a job.

        Progress is reported as i / total * 100, halves rounded up, before
        file i and 100 once every file was attempted.

        Args:
            payload: Job payload
            progress_callback: Awaited with (progress, current file name)

        Returns:
            JobResult: Per-file outcomes and counts
        """
        report = progress_callback or _ignore_progress
        files = payload.files
        results: list[FileResult] = []

        for i, file in enumerate(files):
            await report(progress_percent(i, len(files)), file.original_name)
            try:
                results.append(await self._process_file(payload, file))
            except Exception as e:
                log_exception_with_context(
                    logger,
                    f"{__name__}:process - Failed to process file {file.original_name}",
                    e,
                    file_id=file.file_id,
                    batch_id=payload.batch_id,
                )
                results.append(
                    FileResult(
                        file_id=file.file_id,
                        original_name=file.original_name,
                        status=FileResultStatus.FAILED,
                        error=str(e),
                    )
                )

        await report(100, None)

        processed = sum(1 for r in results if r.status == FileResultStatus.COMPLETED)
        failed = sum(1 for r in results if r.status == FileResultStatus.FAILED)
        logger.info(
            f"{__name__}:process - Job for batch {payload.batch_id} done: "
            f"{processed} processed, {failed} failed of {len(files)}"
        )
        return JobResult(
            batch_id=payload.batch_id,
            total_files=len(files),
            processed_files=processed,
            failed_files=failed,
            results=results,
        )

    async def _process_file(self, payload: JobPayload, file: FileDescriptor) -> FileResult:
        extracted = await self._parsing_task.aextract(file.file_path, file.mime_type)

        document = await self._document_service.create_document(
            DocumentCreate(
                file_id=file.file_id,
                original_name=file.original_name,
                file_size=file.file_size,
                page_count=extracted.page_count,
                text_content=extracted.text_content,
                file_path=file.file_path,
                user_id=payload.user_id,
            )
        )

        result = FileResult(
            file_id=file.file_id,
            original_name=file.original_name,
            status=FileResultStatus.COMPLETED,
            document={
                "id": document.id,
                "file_id": document.file_id,
                "page_count": document.page_count,
                "file_size": document.file_size,
            },
        )

        if payload.options.vectorize and extracted.text_content:
            result.vectorized = await self._vectorizer.vectorize(
                document.id, extracted.text_content
            )

        if payload.options.delete_after_processing:
            try:
                os.remove(file.file_path)
            except OSError as e:
                log_exception_with_context(
                    logger,
                    f"{__name__}:_process_file - Failed to delete source file",
                    e,
                    level=logging.WARNING,
                    file_path=file.file_path,
                )

        return result
