"""Ollama LLM service implementation."""

import logging

import httpx
import ollama

from pdfchat.constants import GENERATION_TIMEOUT, get_embedding_model
from pdfchat.errors import EmbeddingServiceError, GenerationServiceError

logger = logging.getLogger(__name__)


class OllamaService:
    """Ollama LLM service implementation.

    This service uses the Ollama API to generate responses and embeddings
    from local models.
    """

    def __init__(self, host: str, model: str, timeout: float = GENERATION_TIMEOUT) -> None:
        """Initialize the Ollama service.

        Args:
            host: The Ollama server host URL (e.g., "http://localhost:11434")
            model: The model name to use (e.g., "llama3")
            timeout: Per-request timeout in seconds
        """
        self.host = host
        self.model = model
        logger.info(f"🤖 Initializing OllamaService: host={host}, model={model}")
        self.client = ollama.Client(host=host, timeout=timeout)

    def generate_text(
        self,
        prompt: str,
        temperature: float,
        top_p: float,
        max_new_tokens: int,
    ) -> str:
        """Generate a completion using Ollama's generate endpoint."""
        logger.info(f"🗣️  Generating response with {self.model}")
        try:
            response = self.client.generate(
                model=self.model,
                prompt=prompt,
                options={
                    "temperature": temperature,
                    "top_p": top_p,
                    "num_predict": max_new_tokens,
                },
            )
        except ollama.ResponseError as e:
            logger.error(f"❌ Ollama API error: {e}")
            raise GenerationServiceError(
                "Ollama generation failed", details=e.error, status_code=e.status_code
            ) from e
        except (ConnectionError, httpx.HTTPError) as e:
            logger.error(f"❌ Ollama unreachable at {self.host}: {e}")
            raise GenerationServiceError("Ollama generation failed", details=str(e)) from e

        content = response.response or ""
        logger.info(f"✅ Response generated: {len(content)} characters")
        return content

    def generate_embeddings(self, texts: list[str], model: str | None = None) -> list[list[float]]:
        """Generate embeddings for a list of texts using Ollama.

        Args:
            texts: List of text strings to embed
            model: Optional embedding model name. If None, uses EMBEDDING_MODEL env var
                   or service-specific default.

        Returns:
            list[list[float]]: List of embedding vectors
        """
        embedding_model = model or get_embedding_model("ollama")
        embeddings = []

        for text in texts:
            try:
                response = self.client.embed(model=embedding_model, input=text)
            except ollama.ResponseError as e:
                raise EmbeddingServiceError(
                    f"Ollama embedding with {embedding_model} failed",
                    details=e.error,
                    status_code=e.status_code,
                ) from e
            except (ConnectionError, httpx.HTTPError) as e:
                raise EmbeddingServiceError(
                    f"Ollama unreachable at {self.host}", details=str(e)
                ) from e
            embeddings.append(list(response["embeddings"][0]))

        logger.debug(f"Generated {len(embeddings)} embeddings with {embedding_model}")
        return embeddings
