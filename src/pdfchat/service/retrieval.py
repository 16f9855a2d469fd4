"""Retrieval/answer coordinator: embed the query, retrieve context, generate an answer."""

import logging
from typing import Any

from pdfchat.constants import (
    ANSWER_CUE,
    DEFAULT_MAX_NEW_TOKENS,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_K,
    DEFAULT_TOP_P,
    NO_RESPONSE_PLACEHOLDER,
    PROMPT_PREAMBLE,
)
from pdfchat.errors import BadRequestError
from pdfchat.llm.base import LLMService
from pdfchat.service.database.index import VectorIndex
from pdfchat.service.embeddings import EmbeddingClient
from pdfchat.service.models import Answer

logger = logging.getLogger(__name__)


def format_context(docs: list[dict[str, Any]]) -> str:
    """Enumerate retrieved chunks as "Context 1:", "Context 2:", ..."""
    return "\n\n".join(
        f"Context {i}:\n{doc.get('content', '')}" for i, doc in enumerate(docs, 1)
    )


def build_prompt(query: str, docs: list[dict[str, Any]]) -> str:
    """Assemble the grounding prompt.

    With no retrieved chunks the context block is simply empty; the query and
    the assistant cue are always present.
    """
    return f"{PROMPT_PREAMBLE}\n\n{format_context(docs)}\n\nUser: {query}\n\n{ANSWER_CUE}"


def extract_answer(generated: str | None) -> str:
    """Take the text after the last assistant cue.

    Falls back to the whole generated text when the cue is absent, and to a
    fixed placeholder when nothing usable came back.
    """
    if not generated or not generated.strip():
        return NO_RESPONSE_PLACEHOLDER

    _, cue, answer = generated.rpartition(ANSWER_CUE)
    if cue and answer.strip():
        return answer.strip()
    if cue:
        return NO_RESPONSE_PLACEHOLDER
    return generated.strip()


class AnswerCoordinator:
    """Synchronous per-request question answering over the vector index."""

    def __init__(
        self,
        embedder: EmbeddingClient,
        index: VectorIndex,
        generator: LLMService,
        collection: str,
        top_k: int = DEFAULT_TOP_K,
        temperature: float = DEFAULT_TEMPERATURE,
        top_p: float = DEFAULT_TOP_P,
        max_new_tokens: int = DEFAULT_MAX_NEW_TOKENS,
    ) -> None:
        self.embedder = embedder
        self.index = index
        self.generator = generator
        self.collection = collection
        self.top_k = top_k
        self.temperature = temperature
        self.top_p = top_p
        self.max_new_tokens = max_new_tokens

    def search(self, query: str | None, top_k: int | None = None) -> list[dict[str, Any]]:
        """Embed the query and return the top-k chunks by descending relevance.

        Raises:
            BadRequestError: If the query is missing or blank
            EmbeddingServiceError: If the query could not be embedded
        """
        if not query or not query.strip():
            raise BadRequestError("Missing user query")

        vector = self.embedder.embed_query(query)
        docs = self.index.query(self.collection, vector, top_k or self.top_k)
        logger.info(f"✅ Retrieved {len(docs)} chunks")
        return docs

    def answer(self, query: str | None) -> Answer:
        """Answer a user query grounded on the retrieved chunks.

        Raises:
            BadRequestError: If the query is missing or blank
            EmbeddingServiceError: If the query could not be embedded
            GenerationServiceError: If the generation service failed
        """
        docs = self.search(query)
        prompt = build_prompt(query, docs)

        logger.info(f"🤖 Generating answer with {len(docs)} context chunks...")
        generated = self.generator.generate_text(
            prompt,
            temperature=self.temperature,
            top_p=self.top_p,
            max_new_tokens=self.max_new_tokens,
        )
        return Answer(message=extract_answer(generated), docs=docs)
