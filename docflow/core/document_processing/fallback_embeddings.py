"""
Deterministic offline embeddings.

Produces a fixed-length vector from character codes and a handful of
structural text features. Used whenever the live embedding API is not
configured or fails, so vectorization always completes and tests are
reproducible.

Dependencies: langchain_core
System role: Local embedding fallback
"""

import math
import re
from typing import List

from langchain_core.embeddings import Embeddings

_WHITESPACE = re.compile(r"\s+")
_DIGIT = re.compile(r"[0-9]")
_UPPERCASE = re.compile(r"[A-Z]")
_PUNCTUATION = re.compile(r"[.,!?;:]")


class DeterministicEmbeddings(Embeddings):
    """
    LangChain Embeddings implementation that never calls out of process.

    Identical input always yields a bit-for-bit identical, L2-normalized
    vector of the configured dimension.
    """

    def __init__(self, dimension: int = 1536) -> None:
        """
        Initialize fallback embeddings.

        Args:
            dimension: Output vector length (at least 5 feature slots)
        """
        if dimension < 5:
            raise ValueError("dimension must be at least 5")
        self.dimension = dimension

    def embed_documents(self, texts: List[str]) -> List[List[float]]:
        """Embed each text."""
        return [self.embed_query(text) for text in texts]

    def embed_query(self, text: str) -> List[float]:
        """
        Embed a single text.

        Args:
            text: Input text

        Returns:
            List[float]: Normalized vector (all zeros if the raw vector is zero)
        """
        embedding = [0.0] * self.dimension

        for position, char in enumerate(text[: self.dimension]):
            embedding[position] = math.sin(ord(char) * (position + 1)) * 0.1

        # First five dimensions carry structural features
        embedding[0] = math.tanh(len(text) / 1000)
        embedding[1] = math.tanh(len(_WHITESPACE.split(text)) / 100)
        embedding[2] = 0.5 if _DIGIT.search(text) else -0.5
        embedding[3] = 0.5 if _UPPERCASE.search(text) else -0.5
        embedding[4] = 0.5 if _PUNCTUATION.search(text) else -0.5

        norm = math.sqrt(sum(value * value for value in embedding))
        if norm == 0:
            return [0.0] * self.dimension
        return [value / norm for value in embedding]
