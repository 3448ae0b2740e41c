"""Boundary layer: relational storage and chunk/vector storage tiers."""
