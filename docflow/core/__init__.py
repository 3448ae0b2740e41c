"""Core business logic: exceptions and the document processing pipeline."""
