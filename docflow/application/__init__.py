"""Application layer: document, job and batch orchestration."""
