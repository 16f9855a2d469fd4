"""Google Gemini LLM service implementation."""

import logging

import httpx
from google import genai
from google.genai import errors as genai_errors

from pdfchat.constants import GENERATION_TIMEOUT, get_embedding_model
from pdfchat.errors import EmbeddingServiceError, GenerationServiceError

logger = logging.getLogger(__name__)


def _error_details(error: genai_errors.APIError) -> str:
    if error.details:
        return str(error.details)
    return error.message or str(error)


class GeminiService:
    """Google Gemini LLM service implementation.

    The API key is automatically retrieved from the GEMINI_API_KEY environment variable.
    """

    def __init__(self, model: str, timeout: float = GENERATION_TIMEOUT) -> None:
        """Initialize the Gemini service.

        Args:
            model: The model name to use (e.g., "gemini-2.5-flash")
            timeout: Per-request timeout in seconds
        """
        self.model = model
        logger.info(f"🤖 Initializing GeminiService: model={model}")
        self.client = genai.Client(
            http_options=genai.types.HttpOptions(timeout=int(timeout * 1000))
        )

    def generate_text(
        self,
        prompt: str,
        temperature: float,
        top_p: float,
        max_new_tokens: int,
    ) -> str:
        """Generate a completion using Gemini."""
        logger.info(f"🗣️  Generating response with {self.model}")
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=genai.types.GenerateContentConfig(
                    temperature=temperature,
                    top_p=top_p,
                    max_output_tokens=max_new_tokens,
                ),
            )
        except genai_errors.APIError as e:
            logger.error(f"❌ Gemini API error: {e}")
            raise GenerationServiceError(
                "Gemini generation failed", details=_error_details(e), status_code=e.code
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"❌ Gemini request failed: {e}")
            raise GenerationServiceError("Gemini generation failed", details=str(e)) from e

        content = response.text or ""
        logger.info(f"✅ Response generated: {len(content)} characters")
        return content

    def generate_embeddings(self, texts: list[str], model: str | None = None) -> list[list[float]]:
        """Generate embeddings for a list of texts using Gemini.

        Args:
            texts: List of text strings to embed
            model: Optional embedding model name. If None, uses EMBEDDING_MODEL env var
                   or service-specific default.

        Returns:
            list[list[float]]: List of embedding vectors
        """
        embedding_model = model or get_embedding_model("gemini")
        embeddings = []

        for text in texts:
            try:
                response = self.client.models.embed_content(model=embedding_model, contents=[text])
            except genai_errors.APIError as e:
                raise EmbeddingServiceError(
                    f"Gemini embedding with {embedding_model} failed",
                    details=_error_details(e),
                    status_code=e.code,
                ) from e
            except httpx.HTTPError as e:
                raise EmbeddingServiceError(
                    f"Gemini embedding with {embedding_model} failed", details=str(e)
                ) from e
            embeddings.append(list(response.embeddings[0].values))

        logger.debug(f"Generated {len(embeddings)} embeddings with {embedding_model}")
        return embeddings
