"""Data models for the ingestion and retrieval pipelines."""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pdfchat.errors import LoadError


@dataclass(frozen=True)
class TextChunk:
    """An ordered text segment cut from a larger text.

    Attributes:
        text: The chunk text, including its overlap prefix
        source_offset: Character offset of the chunk start in the source text
        overlap_with_previous: Leading characters repeated from the previous chunk
    """

    text: str
    source_offset: int = 0
    overlap_with_previous: int = 0

    @property
    def new_text(self) -> str:
        """Text contributed by this chunk, without the overlap prefix."""
        return self.text[self.overlap_with_previous :]


@dataclass(frozen=True)
class IngestionJob:
    """A queued unit of work: one uploaded document waiting to be indexed."""

    filename: str
    destination: str
    path: str

    @classmethod
    def from_payload(cls, payload: dict[str, Any] | str) -> "IngestionJob":
        """Build a job from a queue payload (dict or JSON string).

        Raises:
            LoadError: If the payload is not valid JSON or carries no path
        """
        if isinstance(payload, str):
            try:
                payload = json.loads(payload)
            except json.JSONDecodeError as e:
                raise LoadError(f"Job payload is not valid JSON: {e}") from e

        if not isinstance(payload, dict) or not payload.get("path"):
            raise LoadError("Missing file path in job data")

        return cls(
            filename=payload.get("filename") or "",
            destination=payload.get("destination") or "",
            path=payload["path"],
        )

    def to_payload(self) -> dict[str, str]:
        return {"filename": self.filename, "destination": self.destination, "path": self.path}


class JobState(str, Enum):
    """Ingestion job lifecycle."""

    RECEIVED = "received"
    LOADED = "loaded"
    SPLIT = "split"
    EMBEDDED = "embedded"
    INDEXED = "indexed"
    DONE = "done"
    FAILED = "failed"


@dataclass
class IngestionResult:
    """Outcome of one ingestion job run."""

    job: IngestionJob
    state: JobState = JobState.RECEIVED
    chunk_count: int = 0
    error: str | None = None


@dataclass
class Answer:
    """Generated answer plus the chunks used to ground it."""

    message: str
    docs: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "docs": self.docs}
