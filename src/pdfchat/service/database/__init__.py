"""Database configuration and connection management for RavenDB.

This package provides the vector index used by ingestion and retrieval:
- Connection defaults from RAVENDB_URL and RAVENDB_DATABASE
- Document store creation and vector index management
- Record upserts with stable ids
- Vector search operations
- RavenVectorIndex, the client injected into the coordinators

Usage:
    from pdfchat.service.database import RavenVectorIndex

    index = RavenVectorIndex(dimensions=768)
    index.ensure_collection()
    hits = index.query("DocumentChunks", query_vector, k=2)
"""

from pdfchat.service.database.index import RavenVectorIndex, VectorIndex
from pdfchat.service.database.models import DocumentChunk, record_id
from pdfchat.service.database.operations import (
    count_documents,
    create_database,
    create_document_store,
    database_exists,
    delete_database,
    ensure_index_exists,
    get_collections,
    get_index_dimensions,
    vector_search,
)
from pdfchat.service.database.storage import upsert_chunks
from pdfchat.service.database.utils import cosine_similarity

__all__ = [
    # Config
    # Index client
    "RavenVectorIndex",
    "VectorIndex",
    # Models
    "DocumentChunk",
    "record_id",
    # Operations
    "create_document_store",
    "ensure_index_exists",
    "get_index_dimensions",
    "database_exists",
    "create_database",
    "delete_database",
    "count_documents",
    "get_collections",
    "vector_search",
    # Storage
    "upsert_chunks",
    # Utils
    "cosine_similarity",
]
