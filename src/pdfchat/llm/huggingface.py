"""Hugging Face Inference API service implementation."""

import logging
import os
from typing import Any

import requests

from pdfchat.constants import DEFAULT_HF_API_URL, GENERATION_TIMEOUT, get_embedding_model
from pdfchat.errors import EmbeddingServiceError, GenerationServiceError, ShapeError
from pdfchat.service.pooling import pool_embedding

logger = logging.getLogger(__name__)


class HuggingFaceService:
    """Hugging Face Inference API service implementation.

    Text generation goes through the model endpoint, embeddings through the
    feature-extraction pipeline. The API token is read from HF_TOKEN unless
    passed explicitly.
    """

    def __init__(
        self,
        model: str,
        api_url: str = DEFAULT_HF_API_URL,
        token: str | None = None,
        timeout: float = GENERATION_TIMEOUT,
    ) -> None:
        """Initialize the Hugging Face service.

        Args:
            model: Text-generation model id (e.g., "mistralai/Mixtral-8x7B-Instruct-v0.1")
            api_url: Inference API base URL
            token: API token (default: HF_TOKEN env var)
            timeout: Per-request timeout in seconds
        """
        self.model = model
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        logger.info(f"🤖 Initializing HuggingFaceService: model={model}")
        self.session = requests.Session()
        token = token if token is not None else os.getenv("HF_TOKEN")
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def generate_text(
        self,
        prompt: str,
        temperature: float,
        top_p: float,
        max_new_tokens: int,
    ) -> str:
        """Generate text with the Inference API.

        The API echoes the prompt in generated_text by default, so callers
        extract the answer after the final cue.
        """
        logger.info(f"🗣️  Generating response with {self.model}")
        payload = {
            "inputs": prompt,
            "parameters": {
                "temperature": temperature,
                "top_p": top_p,
                "max_new_tokens": max_new_tokens,
            },
        }

        try:
            response = self.session.post(
                f"{self.api_url}/models/{self.model}", json=payload, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"❌ Hugging Face request failed: {e}")
            raise GenerationServiceError("Hugging Face API failed", details=str(e)) from e

        if not response.ok:
            logger.error(f"❌ Hugging Face API error {response.status_code}: {response.text[:200]}")
            raise GenerationServiceError(
                "Hugging Face API failed",
                details=response.text,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            logger.warning(f"⚠️  Hugging Face returned a non-JSON body: {response.text[:200]!r}")
            data = None

        content = _generated_text(data)
        logger.info(f"✅ Response generated: {len(content)} characters")
        return content

    def generate_embeddings(self, texts: list[str], model: str | None = None) -> list[list[float]]:
        """Generate embeddings with the feature-extraction pipeline.

        Token-level outputs are mean pooled into one vector per text.
        """
        embedding_model = model or get_embedding_model("huggingface")
        url = f"{self.api_url}/pipeline/feature-extraction/{embedding_model}"
        embeddings = []

        for text in texts:
            try:
                response = self.session.post(
                    url,
                    json={"inputs": text, "options": {"wait_for_model": True}},
                    timeout=self.timeout,
                )
            except requests.RequestException as e:
                raise EmbeddingServiceError(
                    f"Embedding request to {embedding_model} failed", details=str(e)
                ) from e

            if not response.ok:
                raise EmbeddingServiceError(
                    f"Embedding request to {embedding_model} failed",
                    details=response.text,
                    status_code=response.status_code,
                )

            try:
                embeddings.append(pool_embedding(response.json()))
            except (ShapeError, TypeError, ValueError) as e:
                raise EmbeddingServiceError(
                    f"Unexpected embedding payload from {embedding_model}", details=str(e)
                ) from e

        logger.debug(f"Generated {len(embeddings)} embeddings with {embedding_model}")
        return embeddings


def _generated_text(data: Any) -> str:
    """Pull generated_text out of the Inference API response body."""
    if isinstance(data, list) and data and isinstance(data[0], dict):
        return data[0].get("generated_text") or ""
    if isinstance(data, dict):
        return data.get("generated_text") or ""
    return ""
