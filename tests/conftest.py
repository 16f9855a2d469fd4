"""Pytest configuration and shared fixtures for the test suite."""

import re
from pathlib import Path
from typing import Any

import fitz  # PyMuPDF
import pytest
import requests

from pdfchat.errors import EmbeddingServiceError, GenerationServiceError
from pdfchat.service.database.utils import cosine_similarity
from pdfchat.service.embeddings import EmbeddingClient
from pdfchat.service.ingestion import IngestionCoordinator
from pdfchat.service.retrieval import AnswerCoordinator

FAKE_DIMENSIONS = 64
TEST_COLLECTION = "TestChunks"


# Service availability checks
def ollama_available() -> bool:
    """Check if Ollama server is running and accessible."""
    try:
        response = requests.get("http://localhost:11434/api/tags", timeout=2)
        return response.status_code == 200
    except requests.RequestException:
        return False


def ravendb_available() -> bool:
    """Check if RavenDB server is running and accessible."""
    try:
        response = requests.get("http://localhost:8080/databases", timeout=2)
        return response.status_code in (200, 401)  # Auth required is OK
    except requests.RequestException:
        return False


class BagOfWordsProvider:
    """Deterministic embedding provider: one dimension per distinct word.

    Words get dimensions in order of first appearance, so a small test
    vocabulary never collides.
    """

    def __init__(self, dimensions: int = FAKE_DIMENSIONS, failures: int = 0):
        self.dimensions = dimensions
        self.failures = failures
        self.vocabulary: dict[str, int] = {}
        self.calls = 0

    def generate_embeddings(self, texts: list[str], model: str | None = None) -> list[list[float]]:
        self.calls += 1
        if self.failures:
            self.failures -= 1
            raise EmbeddingServiceError("embedding backend unavailable", details="503")
        return [self._embed(text) for text in texts]

    def _embed(self, text: str) -> list[float]:
        vector = [0.0] * self.dimensions
        for word in re.findall(r"[a-z0-9]+", text.lower()):
            index = self.vocabulary.setdefault(word, len(self.vocabulary) % self.dimensions)
            vector[index] += 1.0
        return vector


class InMemoryVectorIndex:
    """Vector index keeping records in a dict, ranked by cosine similarity."""

    def __init__(self):
        self.records: dict[tuple[str, str], Any] = {}
        self.upsert_calls = 0
        self.query_calls = 0

    def upsert(self, collection: str, records: list) -> int:
        self.upsert_calls += 1
        for record in records:
            self.records[(collection, record.Id)] = record
        return len(records)

    def query(self, collection: str, vector: list[float], k: int) -> list[dict[str, Any]]:
        self.query_calls += 1
        scored = [
            (cosine_similarity(vector, record.embedding), record)
            for (name, _), record in self.records.items()
            if name == collection
        ]
        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [
            {
                "id": record.Id,
                "source": record.source_filename,
                "content": record.text,
                "chunk_index": record.chunk_index,
                "score": score,
                "metadata": record.metadata,
                "collection": collection,
            }
            for score, record in scored[:k]
        ]

    def count(self, collection: str) -> int:
        return sum(1 for name, _ in self.records if name == collection)


class FakeGenerator:
    """Text generator returning a canned completion (or raising)."""

    def __init__(self, completion: str = "Assistant: Hello from the model.", error=None):
        self.completion = completion
        self.error = error
        self.prompts: list[str] = []
        self.parameters: list[dict] = []

    def generate_text(self, prompt, temperature, top_p, max_new_tokens):
        self.prompts.append(prompt)
        self.parameters.append(
            {"temperature": temperature, "top_p": top_p, "max_new_tokens": max_new_tokens}
        )
        if self.error is not None:
            raise self.error
        return self.completion


class FakeQueue:
    """Job queue recording enqueued jobs."""

    def __init__(self, error: Exception | None = None):
        self.jobs = []
        self.error = error

    def enqueue(self, job) -> str:
        if self.error is not None:
            raise self.error
        self.jobs.append(job)
        return f"job-{len(self.jobs)}"


@pytest.fixture
def provider() -> BagOfWordsProvider:
    return BagOfWordsProvider()


@pytest.fixture
def embedder(provider) -> EmbeddingClient:
    return EmbeddingClient(
        service=provider, model="fake-embed", dimensions=FAKE_DIMENSIONS, retry_wait=0
    )


@pytest.fixture
def vector_index() -> InMemoryVectorIndex:
    return InMemoryVectorIndex()


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def failing_generator() -> FakeGenerator:
    return FakeGenerator(
        error=GenerationServiceError(
            "Hugging Face API failed", details='{"error":"Model is overloaded"}', status_code=503
        )
    )


@pytest.fixture
def job_queue() -> FakeQueue:
    return FakeQueue()


@pytest.fixture
def ingestion_coordinator(embedder, vector_index) -> IngestionCoordinator:
    """Coordinator with small chunks so short test documents still split."""
    return IngestionCoordinator(
        embedder=embedder,
        index=vector_index,
        collection=TEST_COLLECTION,
        chunk_size=200,
        chunk_overlap=20,
    )


@pytest.fixture
def answer_coordinator(embedder, vector_index, generator) -> AnswerCoordinator:
    return AnswerCoordinator(
        embedder=embedder, index=vector_index, generator=generator, collection=TEST_COLLECTION
    )


@pytest.fixture
def make_pdf(tmp_path):
    """Factory fixture writing a PDF with one text block per page.

    Returns:
        Function (name, pages) -> Path of the written PDF
    """

    def _make_pdf(name: str, pages: list[str]) -> Path:
        path = tmp_path / name
        doc = fitz.open()
        for text in pages:
            page = doc.new_page()
            if text:
                page.insert_text((72, 72), text, fontsize=11)
        doc.save(path)
        doc.close()
        return path

    return _make_pdf


# Service fixtures with skip markers
@pytest.fixture
def ollama_service():
    """Provide OllamaService instance, skip if Ollama not available."""
    if not ollama_available():
        pytest.skip("Ollama server not running on localhost:11434")

    from pdfchat.llm import OllamaService

    return OllamaService(host="http://localhost:11434", model="llama3")


@pytest.fixture
def raven_index(tmp_path):
    """Provide a RavenVectorIndex on a scratch database, skip if RavenDB not available."""
    if not ravendb_available():
        pytest.skip("RavenDB server not running on localhost:8080")

    from pdfchat.service.database import RavenVectorIndex, create_database, delete_database

    database = f"test_pdfchat_{tmp_path.name}"
    create_database(database=database)
    index = RavenVectorIndex(dimensions=FAKE_DIMENSIONS, database=database)
    yield index
    index.close()
    delete_database(database=database)
