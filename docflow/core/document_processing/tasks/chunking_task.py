"""
Text chunking task.

Splits document text into overlapping character windows, snapping each
window end back to the nearest sentence, line or word boundary.

Dependencies: docflow.models
System role: First stage of document vectorization
"""

from docflow.models.chunk import ChunkPreview

BOUNDARY_CHARACTERS = (".", "\n", " ")


class ChunkingTask:
    """Split text into overlapping chunks with boundary snapping."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
    ) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            chunk_size: Target chunk size in characters
            chunk_overlap: Overlap between consecutive chunks

        Raises:
            ValueError: Unless chunk_size > chunk_overlap >= 0
        """
        if chunk_overlap < 0:
            raise ValueError("chunk_overlap cannot be negative")
        if chunk_size <= chunk_overlap:
            raise ValueError("chunk_size must be greater than chunk_overlap")

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    def split(self, text: str) -> list[str]:
        """
        Split text into ordered, overlapping, non-empty chunks.

        A window that does not reach the end of the text is cut just after
        the last '.', newline or space at or before its right edge, provided
        that boundary lies past the middle of the window.

        Args:
            text: Document text (may be empty)

        Returns:
            list[str]: Trimmed chunks in document order
        """
        if not text:
            return []

        chunks: list[str] = []
        text_length = len(text)
        start = 0

        while start < text_length:
            end = start + self.chunk_size

            if end < text_length:
                break_point = max(text.rfind(char, 0, end + 1) for char in BOUNDARY_CHARACTERS)
                if break_point > start + self.chunk_size * 0.5:
                    end = break_point + 1

            chunk = text[start:end].strip()
            if chunk:
                chunks.append(chunk)

            if end >= text_length:
                break

            start = max(end - self.chunk_overlap, start + 1)

        return chunks

    def preview(self, text: str) -> list[ChunkPreview]:
        """
        Describe how text would be chunked.

        Args:
            text: Text to split

        Returns:
            list[ChunkPreview]: Index, content and length of each chunk
        """
        return [
            ChunkPreview(index=index, content=chunk, length=len(chunk))
            for index, chunk in enumerate(self.split(text))
        ]
