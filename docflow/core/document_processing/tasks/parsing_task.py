"""
Text extraction task.

Turns an uploaded file into plain text and a page count. PDFs are read with
LangChain PyPDFLoader, plain text files are read directly, any other mime
type yields empty text.

Dependencies: langchain_community.document_loaders
System role: Upstream of document vectorization in job processing
"""

import asyncio
import logging
from pathlib import Path

from langchain_community.document_loaders import PyPDFLoader

from docflow.core.exceptions import ParsingError
from docflow.models.document import ExtractedText

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
TEXT_MIME_TYPE = "text/plain"


class ParsingTask:
    """Extract text from uploaded PDF and plain-text files."""

    def extract(self, file_path: str, mime_type: str) -> ExtractedText:
        """
        Extract text content and page count.

        Args:
            file_path: Path to the uploaded file
            mime_type: Declared mime type

        Returns:
            ExtractedText: Text and page count (empty text, 1 page for unsupported types)

        Raises:
            ParsingError: When the file is missing or cannot be parsed
        """
        if mime_type == PDF_MIME_TYPE:
            return self._extract_pdf(file_path)
        if mime_type == TEXT_MIME_TYPE:
            return self._extract_text(file_path)

        logger.info(
            f"{__name__}:extract - Unsupported mime type {mime_type}, no text extracted"
        )
        return ExtractedText(text_content="", page_count=1)

    async def aextract(self, file_path: str, mime_type: str) -> ExtractedText:
        """Extract in a worker thread so the event loop is not blocked."""
        return await asyncio.to_thread(self.extract, file_path, mime_type)

    def _extract_pdf(self, file_path: str) -> ExtractedText:
        path = Path(file_path)
        if not path.exists():
            raise ParsingError(f"File not found: {file_path}", file_path, PDF_MIME_TYPE)

        try:
            pages = PyPDFLoader(str(path)).load()
        except Exception as e:
            raise ParsingError(f"Failed to parse PDF: {e}", file_path, PDF_MIME_TYPE) from e

        text_content = "\n".join(page.page_content for page in pages)
        return ExtractedText(text_content=text_content, page_count=max(len(pages), 1))

    def _extract_text(self, file_path: str) -> ExtractedText:
        try:
            text_content = Path(file_path).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise ParsingError(f"Failed to read text file: {e}", file_path, TEXT_MIME_TYPE) from e
        return ExtractedText(text_content=text_content, page_count=1)
