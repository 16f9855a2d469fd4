"""Ingestion and retrieval services built on the embedding and vector index clients."""
