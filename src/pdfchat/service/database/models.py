"""Data models for RavenDB document storage."""

from dataclasses import dataclass, field
from typing import Any

from pdfchat.constants import DEFAULT_COLLECTION


def record_id(stored_name: str, chunk_index: int) -> str:
    """Stable index-record id for one chunk of one stored document.

    Re-running ingestion for the same document yields the same ids, so
    records are overwritten rather than duplicated.
    """
    return f"{stored_name}_chunk_{chunk_index}"


@dataclass(eq=False)
class DocumentChunk:
    """A document chunk with embedding for vector search.

    Note: eq=False ensures each instance is unique and hashable by identity,
    which is required for RavenDB's session entity tracking.

    Attributes:
        Id: Record id (see record_id)
        source_filename: Original document filename
        chunk_index: Index of this chunk in the document
        text: The text content of the chunk
        embedding: Vector embedding of the text
        metadata: Additional metadata (page_number, stored_name, etc.)
        collection: Collection name for grouping documents
    """

    Id: str | None = None
    source_filename: str = ""
    chunk_index: int = 0
    text: str = ""
    embedding: list[float] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    collection: str = DEFAULT_COLLECTION

    def __hash__(self) -> int:
        """Hash by object identity for RavenDB session tracking."""
        return id(self)
