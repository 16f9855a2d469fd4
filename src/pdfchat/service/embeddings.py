"""Embedding client with a bounded retry budget and dimension checks."""

import logging

from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from pdfchat.errors import ConfigurationError, EmbeddingServiceError
from pdfchat.llm.base import LLMService

logger = logging.getLogger(__name__)

PROBE_TEXT = "dimension probe"


class EmbeddingClient:
    """Embeds chunks and queries with one model.

    Ingestion and query paths must share the model, or similarity scores
    between their vectors are meaningless; both build their client from the
    same EMBEDDING_MODEL / EMBEDDING_DIMENSIONS configuration.
    """

    def __init__(
        self,
        service: LLMService,
        model: str,
        dimensions: int,
        max_retries: int = 3,
        retry_wait: float = 1.0,
    ) -> None:
        """Initialize the embedding client.

        Args:
            service: Provider implementing generate_embeddings
            model: Embedding model name
            dimensions: Expected vector length
            max_retries: Additional attempts per request after the first failure
            retry_wait: Base delay in seconds for exponential backoff (0 disables waiting)
        """
        self.service = service
        self.model = model
        self.dimensions = dimensions
        self.max_retries = max_retries
        self.retry_wait = retry_wait

    def _request(self, text: str) -> list[float]:
        retrying = Retrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_exponential(multiplier=self.retry_wait, max=10),
            retry=retry_if_exception_type(EmbeddingServiceError),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.warning(
                        f"⚠️ Retrying embedding request "
                        f"(attempt {attempt.retry_state.attempt_number}/{self.max_retries + 1})"
                    )
                return self.service.generate_embeddings([text], self.model)[0]
        raise EmbeddingServiceError(f"Embedding with {self.model} returned no vector")

    def _checked(self, vector: list[float]) -> list[float]:
        if len(vector) != self.dimensions:
            raise EmbeddingServiceError(
                f"{self.model} returned a {len(vector)}-dimensional vector, "
                f"expected {self.dimensions}"
            )
        return vector

    def embed_query(self, text: str) -> list[float]:
        """Embed a single query string."""
        return self._checked(self._request(text))

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """Embed texts one request at a time, preserving order.

        Raises:
            EmbeddingServiceError: As soon as any text exhausts its retry budget
        """
        embeddings = [self._checked(self._request(text)) for text in texts]
        logger.info(f"✅ Generated {len(embeddings)} embeddings with {self.model}")
        return embeddings

    def check_dimensions(self, index_dimensions: int | None = None) -> int:
        """Verify the model output length against configuration and the index.

        Args:
            index_dimensions: Vector length declared by the vector index, if known

        Returns:
            int: The verified dimension

        Raises:
            ConfigurationError: If the model, configuration and index disagree
        """
        if index_dimensions is not None and index_dimensions != self.dimensions:
            raise ConfigurationError(
                f"Vector index expects {index_dimensions}-dimensional vectors but "
                f"EMBEDDING_DIMENSIONS is {self.dimensions}"
            )

        actual = len(self._request(PROBE_TEXT))
        if actual != self.dimensions:
            raise ConfigurationError(
                f"Embedding model {self.model} produces {actual}-dimensional vectors but "
                f"EMBEDDING_DIMENSIONS is {self.dimensions}"
            )

        logger.info(f"✅ Embedding model {self.model} matches {self.dimensions} dimensions")
        return actual
