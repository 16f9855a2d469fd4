"""Application-wide constants and defaults for pdfchat.

This module provides a single source of truth for configuration defaults,
magic numbers, and other constants used throughout the application.
"""

import os

# =============================================================================
# File Upload Limits
# =============================================================================
MAX_UPLOAD_SIZE_BYTES = 50 * 1024 * 1024  # 50MB
PDF_MAGIC_BYTES = b"%PDF-"
DEFAULT_UPLOAD_FOLDER = "uploads"

# =============================================================================
# Chunking
# =============================================================================
DEFAULT_CHUNK_SIZE = 800  # characters
DEFAULT_CHUNK_OVERLAP = 100  # characters
DEFAULT_SEPARATOR = "\n"

# =============================================================================
# Retrieval & Generation
# =============================================================================
DEFAULT_TOP_K = 2
DEFAULT_TEMPERATURE = 0.8
DEFAULT_TOP_P = 0.7
DEFAULT_MAX_NEW_TOKENS = 300
ANSWER_CUE = "Assistant:"
NO_RESPONSE_PLACEHOLDER = "No response"
PROMPT_PREAMBLE = (
    "You are a helpful AI Assistant. Use the following context to answer the user's query."
)

# =============================================================================
# Embedding request budgets (retries, timeout in seconds)
# =============================================================================
INGEST_EMBEDDING_RETRIES = 3
INGEST_EMBEDDING_TIMEOUT = 30.0
QUERY_EMBEDDING_RETRIES = 5
QUERY_EMBEDDING_TIMEOUT = 40.0
GENERATION_TIMEOUT = 60.0

# =============================================================================
# Display Settings
# =============================================================================
CONTENT_PREVIEW_LENGTH = 200  # Characters to show in content previews

# =============================================================================
# Default URLs, Hosts and Names
# =============================================================================
DEFAULT_LLM_SERVICE = "huggingface"
DEFAULT_HF_API_URL = "https://api-inference.huggingface.co"
DEFAULT_OLLAMA_HOST = "http://localhost:11434"
DEFAULT_RAVENDB_URL = "http://localhost:8080"
DEFAULT_RAVENDB_DATABASE = "pdfchat"
DEFAULT_COLLECTION = "DocumentChunks"
DEFAULT_REDIS_URL = "redis://localhost:6379/0"

# =============================================================================
# Job queue
# =============================================================================
QUEUE_NAME = "file-upload-queue"
JOB_NAME = "file-ready"
DEFAULT_WORKER_CONCURRENCY = 4
DEFAULT_JOB_MAX_RETRIES = 0

# =============================================================================
# Model Defaults
# =============================================================================
LLM_DEFAULTS = {
    "huggingface": "mistralai/Mixtral-8x7B-Instruct-v0.1",
    "ollama": "llama3",
    "gemini": "gemini-2.5-flash",
}

EMBEDDING_DEFAULTS = {
    "huggingface": "sentence-transformers/all-mpnet-base-v2",
    "ollama": "nomic-embed-text",
    "gemini": "text-embedding-004",
}

# Vector lengths produced by the default embedding models
EMBEDDING_DIMENSION_DEFAULTS = {
    "huggingface": 768,
    "ollama": 768,
    "gemini": 768,
}

DEFAULT_EMBEDDING_DIMENSIONS = 768


def get_llm_service_name() -> str:
    """Get the configured generation provider (LLM_SERVICE env var)."""
    return os.getenv("LLM_SERVICE", DEFAULT_LLM_SERVICE)


def get_embedding_service_name() -> str:
    """Get the configured embedding provider.

    Falls back to the generation provider so a single LLM_SERVICE setting
    configures both paths.
    """
    return os.getenv("EMBEDDING_SERVICE") or get_llm_service_name()


def get_embedding_model(service: str | None = None) -> str:
    """Get the embedding model for a given service.

    Checks the EMBEDDING_MODEL environment variable first, then falls back
    to service-specific defaults.

    Args:
        service: The embedding service name ("huggingface", "ollama" or "gemini").
                If None, uses EMBEDDING_SERVICE / LLM_SERVICE.

    Returns:
        str: The embedding model name to use.
    """
    env_model = os.getenv("EMBEDDING_MODEL")
    if env_model:
        return env_model

    if service is None:
        service = get_embedding_service_name()

    return EMBEDDING_DEFAULTS.get(service, EMBEDDING_DEFAULTS[DEFAULT_LLM_SERVICE])


def get_embedding_dimensions(service: str | None = None) -> int:
    """Get the declared embedding vector length (EMBEDDING_DIMENSIONS env var)."""
    env_dimensions = os.getenv("EMBEDDING_DIMENSIONS")
    if env_dimensions:
        return int(env_dimensions)

    if service is None:
        service = get_embedding_service_name()

    return EMBEDDING_DIMENSION_DEFAULTS.get(service, DEFAULT_EMBEDDING_DIMENSIONS)


def get_collection_name() -> str:
    """Get the vector index collection name (VECTOR_COLLECTION env var)."""
    return os.getenv("VECTOR_COLLECTION", DEFAULT_COLLECTION)


def get_ravendb_url() -> str:
    """Get the RavenDB server URL (RAVENDB_URL env var)."""
    return os.getenv("RAVENDB_URL", DEFAULT_RAVENDB_URL)


def get_ravendb_database() -> str:
    """Get the RavenDB database name (RAVENDB_DATABASE env var)."""
    return os.getenv("RAVENDB_DATABASE", DEFAULT_RAVENDB_DATABASE)
