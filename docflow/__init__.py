"""
docflow: document vectorization pipeline and batch job queue.

Parses uploaded documents, splits them into overlapping chunks, embeds and
stores them with a durable/in-memory failover policy, and runs multi-document
batches through a Celery or in-process job queue.
"""

__version__ = "0.1.0"
