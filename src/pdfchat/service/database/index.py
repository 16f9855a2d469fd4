"""Vector index client backed by RavenDB."""

import logging
from typing import Any, Protocol

from ravendb import DocumentStore

from pdfchat.service.database.models import DocumentChunk
from pdfchat.service.database.operations import (
    count_documents,
    create_document_store,
    ensure_index_exists,
    get_index_dimensions,
    vector_search,
)
from pdfchat.service.database.storage import upsert_chunks

logger = logging.getLogger(__name__)


class VectorIndex(Protocol):
    """What the coordinators need from a vector index."""

    def upsert(self, collection: str, records: list[DocumentChunk]) -> int: ...

    def query(self, collection: str, vector: list[float], k: int) -> list[dict[str, Any]]: ...


class RavenVectorIndex:
    """RavenDB-backed vector index.

    The document store is opened lazily and shared by all calls; RavenDB
    handles concurrent writers, so several ingestion jobs may upsert into
    the same collection at once.
    """

    def __init__(
        self,
        dimensions: int,
        url: str | None = None,
        database: str | None = None,
        store: DocumentStore | None = None,
    ) -> None:
        self.dimensions = dimensions
        self.url = url
        self.database = database
        self._store = store

    @property
    def store(self) -> DocumentStore:
        if self._store is None:
            self._store = create_document_store(self.url, self.database)
        return self._store

    def ensure_collection(self) -> None:
        """Create the vector index with the configured dimensions if missing."""
        ensure_index_exists(self.store, self.dimensions)

    def dimensions_declared(self) -> int | None:
        """Vector length the index was created with (None if unknown)."""
        return get_index_dimensions(self.store)

    def upsert(self, collection: str, records: list[DocumentChunk]) -> int:
        written = upsert_chunks(self.store, collection, records)
        logger.debug(f"Upserted {written} records into '{collection}'")
        return written

    def query(self, collection: str, vector: list[float], k: int) -> list[dict[str, Any]]:
        return vector_search(self.store, collection, vector, k)

    def count(self, collection: str) -> int:
        return count_documents(self.store, collection)

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
            self._store = None
