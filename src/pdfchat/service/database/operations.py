"""Database operations for RavenDB - CRUD, indexing, and queries."""

import logging
from typing import Any

import requests
from ravendb import DocumentStore
from ravendb.documents.indexes.definitions import (
    FieldIndexing,
    FieldStorage,
    IndexDefinition,
    IndexFieldOptions,
)
from ravendb.documents.indexes.vector.options import VectorOptions
from ravendb.documents.operations.indexes import (
    GetIndexNamesOperation,
    GetIndexOperation,
    PutIndexesOperation,
)
from ravendb.serverwide.operations.common import DeleteDatabaseOperation

from pdfchat.constants import get_ravendb_database, get_ravendb_url
from pdfchat.service.database.utils import format_result, result_score

logger = logging.getLogger(__name__)

VECTOR_INDEX_NAME = "DocumentChunks/ByEmbedding"


def create_document_store(url: str | None = None, database: str | None = None) -> DocumentStore:
    """Create and initialize a DocumentStore instance.

    Args:
        url: RavenDB server URL (defaults to value from get_ravendb_url())
        database: Database name (defaults to value from get_ravendb_database())

    Returns:
        DocumentStore: Initialized DocumentStore instance
    """
    if url is None:
        url = get_ravendb_url()
    if database is None:
        database = get_ravendb_database()

    store = DocumentStore([url], database)
    store.initialize()
    return store


def ensure_index_exists(store: DocumentStore, dimensions: int) -> bool:
    """Ensure the vector search index exists in RavenDB.

    Creates a static index with vector search over the embedding field,
    declared with a fixed number of dimensions.

    Args:
        store: Initialized DocumentStore instance
        dimensions: Vector length of the embedding model

    Returns:
        bool: True if the index was created, False if it already existed
    """
    existing_indexes = store.maintenance.send(GetIndexNamesOperation(0, 100))
    if VECTOR_INDEX_NAME in existing_indexes:
        return False

    index_definition = IndexDefinition()
    index_definition.name = VECTOR_INDEX_NAME
    index_definition.maps = {
        """from chunk in docs
        where chunk.embedding != null
        select new {
            source_filename = chunk.source_filename,
            chunk_index = chunk.chunk_index,
            text = chunk.text,
            collection = chunk.collection,
            embedding = CreateField("embedding", chunk.embedding, new CreateFieldOptions { Storage = FieldStorage.Yes, Indexing = FieldIndexing.No })
        }"""
    }
    index_definition.fields = {
        "embedding": IndexFieldOptions(
            storage=FieldStorage.YES,
            indexing=FieldIndexing.NO,
            vector=VectorOptions(dimensions=dimensions),
        )
    }

    store.maintenance.send(PutIndexesOperation(index_definition))
    logger.info(f"✅ Created vector index {VECTOR_INDEX_NAME} ({dimensions} dimensions)")
    return True


def get_index_dimensions(store: DocumentStore) -> int | None:
    """Read the vector length declared by the vector index.

    Returns:
        int | None: Declared dimensions, or None if the index or its vector
            options are missing
    """
    definition = store.maintenance.send(GetIndexOperation(VECTOR_INDEX_NAME))
    if definition is None or not definition.fields:
        return None

    field_options = definition.fields.get("embedding")
    vector_options = getattr(field_options, "vector", None)
    dimensions = getattr(vector_options, "dimensions", None)
    return int(dimensions) if dimensions else None


def database_exists(url: str | None = None, database: str | None = None) -> bool:
    """Check if a database exists in RavenDB.

    Args:
        url: RavenDB server URL (defaults to value from get_ravendb_url())
        database: Database name (defaults to value from get_ravendb_database())

    Returns:
        bool: True if database exists, False otherwise
    """
    if url is None:
        url = get_ravendb_url()
    if database is None:
        database = get_ravendb_database()

    try:
        response = requests.get(f"{url}/databases/{database}/stats", timeout=10)
    except requests.RequestException as e:
        logger.warning(f"⚠️ RavenDB unreachable at {url}: {e}")
        return False
    return response.status_code == 200


def create_database(url: str | None = None, database: str | None = None) -> None:
    """Create a new database in RavenDB.

    Args:
        url: RavenDB server URL (defaults to value from get_ravendb_url())
        database: Database name (defaults to value from get_ravendb_database())
    """
    if url is None:
        url = get_ravendb_url()
    if database is None:
        database = get_ravendb_database()

    payload = {"DatabaseName": database, "Settings": {}, "Disabled": False}
    response = requests.put(f"{url}/admin/databases", json=payload, timeout=30)
    response.raise_for_status()


def delete_database(url: str | None = None, database: str | None = None) -> None:
    """Delete a database from RavenDB.

    WARNING: This operation is irreversible and will delete all data in the database.
    """
    if url is None:
        url = get_ravendb_url()
    if database is None:
        database = get_ravendb_database()

    store = DocumentStore([url], database)
    try:
        store.initialize()
        operation = DeleteDatabaseOperation(database_name=database, hard_delete=True)
        store.maintenance.server.send(operation)
    finally:
        store.close()


def count_documents(store: DocumentStore, collection: str) -> int:
    """Count the index records stored in a collection."""
    with store.open_session() as session:
        results = list(session.advanced.raw_query(f"from '{collection}'", object_type=dict))
        return len(results)


def get_collections(url: str | None = None, database: str | None = None) -> list[str]:
    """Get a sorted list of collection names from the database.

    Uses RavenDB's REST API to fetch collection statistics.
    """
    if url is None:
        url = get_ravendb_url()
    if database is None:
        database = get_ravendb_database()

    try:
        response = requests.get(f"{url}/databases/{database}/collections/stats", timeout=10)
        response.raise_for_status()
    except requests.RequestException:
        return []

    return sorted(response.json().get("Collections", {}).keys())


def vector_search(
    store: DocumentStore,
    collection: str,
    query_embedding: list[float],
    top_k: int,
) -> list[dict[str, Any]]:
    """Top-k similarity search in one collection.

    Args:
        store: Initialized DocumentStore instance
        collection: Collection to search
        query_embedding: Query vector (same model as the stored vectors)
        top_k: Number of results to return

    Returns:
        list[dict]: Results ordered by descending score
    """
    with store.open_session() as session:
        hits = list(
            session.query_collection(collection, object_type=dict)
            .vector_search("embedding", query_embedding)
            .order_by_score()
            .take(top_k)
        )

    scored = [(result_score(hit, query_embedding), hit) for hit in hits]
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [format_result(hit, score) for score, hit in scored[:top_k]]
