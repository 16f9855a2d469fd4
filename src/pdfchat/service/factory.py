"""Build service clients and coordinators from environment configuration."""

import logging

from dotenv import load_dotenv

from pdfchat.constants import (
    INGEST_EMBEDDING_RETRIES,
    INGEST_EMBEDDING_TIMEOUT,
    QUERY_EMBEDDING_RETRIES,
    QUERY_EMBEDDING_TIMEOUT,
    get_collection_name,
    get_embedding_dimensions,
    get_embedding_model,
    get_embedding_service_name,
)
from pdfchat.llm import get_llm_service
from pdfchat.service.database import RavenVectorIndex
from pdfchat.service.embeddings import EmbeddingClient
from pdfchat.service.ingestion import IngestionCoordinator
from pdfchat.service.retrieval import AnswerCoordinator

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def build_embedding_client(for_query: bool = False) -> EmbeddingClient:
    """Create the embedding client for the ingestion or the query path.

    Both paths use the same model and dimensions; only the retry budget and
    timeout differ.
    """
    service_name = get_embedding_service_name()
    if for_query:
        retries, timeout = QUERY_EMBEDDING_RETRIES, QUERY_EMBEDDING_TIMEOUT
    else:
        retries, timeout = INGEST_EMBEDDING_RETRIES, INGEST_EMBEDDING_TIMEOUT

    service = get_llm_service({"service": service_name, "timeout": timeout})
    return EmbeddingClient(
        service=service,
        model=get_embedding_model(service_name),
        dimensions=get_embedding_dimensions(service_name),
        max_retries=retries,
    )


def build_vector_index() -> RavenVectorIndex:
    """Create the RavenDB vector index client with the configured dimensions."""
    return RavenVectorIndex(dimensions=get_embedding_dimensions())


def verify_embedding_setup(embedder: EmbeddingClient, index: RavenVectorIndex) -> None:
    """Fail fast if the embedding model does not match the vector index.

    Creates the vector index when it does not exist yet.

    Raises:
        ConfigurationError: On a dimension mismatch
    """
    index.ensure_collection()
    embedder.check_dimensions(index.dimensions_declared())


def build_ingestion_coordinator(verify: bool = True) -> IngestionCoordinator:
    """Wire an IngestionCoordinator from environment configuration."""
    embedder = build_embedding_client()
    index = build_vector_index()
    if verify:
        verify_embedding_setup(embedder, index)
    return IngestionCoordinator(embedder=embedder, index=index, collection=get_collection_name())


def build_answer_coordinator(verify: bool = True) -> AnswerCoordinator:
    """Wire an AnswerCoordinator from environment configuration."""
    embedder = build_embedding_client(for_query=True)
    index = build_vector_index()
    if verify:
        verify_embedding_setup(embedder, index)

    generator = get_llm_service()
    return AnswerCoordinator(
        embedder=embedder,
        index=index,
        generator=generator,
        collection=get_collection_name(),
    )
