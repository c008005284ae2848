"""Boundary layer: persistence, vector search, model providers, and document sources."""
