"""PDF ingestion pipeline for extracting and chunking documents."""

import logging
from pathlib import Path
from typing import Any

import fitz  # PyMuPDF

from pdfchat.constants import DEFAULT_CHUNK_OVERLAP, DEFAULT_CHUNK_SIZE, DEFAULT_SEPARATOR
from pdfchat.errors import LoadError
from pdfchat.service.models import TextChunk

logger = logging.getLogger(__name__)


def load_pdf(pdf_path: Path | str) -> tuple[list[str], dict[str, Any]]:
    """Read a PDF file into per-page text plus file metadata.

    Args:
        pdf_path: Path to the PDF file

    Returns:
        Tuple of (page texts in page order, metadata dict)

    Raises:
        LoadError: If the path does not exist or the file is not a readable PDF
    """
    pdf_path = Path(pdf_path)
    if not pdf_path.is_file():
        raise LoadError(f"Document not found: {pdf_path}")

    try:
        doc = fitz.open(pdf_path, filetype="pdf")
    except RuntimeError as e:  # fitz.FileDataError and friends
        raise LoadError(f"Cannot parse {pdf_path.name} as PDF: {e}") from e

    try:
        pages = [page.get_text() for page in doc]

        file_stat = pdf_path.stat()
        metadata: dict[str, Any] = {
            "file_size": file_stat.st_size,
            "modification_date": file_stat.st_mtime,
            "page_count": len(doc),
        }

        pdf_metadata = doc.metadata
        if pdf_metadata:
            if pdf_metadata.get("title"):
                metadata["title"] = pdf_metadata["title"]
            if pdf_metadata.get("author"):
                metadata["author"] = pdf_metadata["author"]
            if pdf_metadata.get("creationDate"):
                metadata["pdf_creation_date"] = pdf_metadata["creationDate"]
    finally:
        doc.close()

    return pages, metadata


def extract_text_from_pdf(pdf_path: Path | str) -> str:
    """Extract all text from a PDF file.

    Args:
        pdf_path: Path to the PDF file

    Returns:
        str: Concatenated text from all pages
    """
    pages, _ = load_pdf(pdf_path)
    return "".join(pages)


def _segments(text: str, separator: str) -> list[str]:
    """Cut text on separator, keeping the separator at the end of each segment."""
    if not separator:
        return list(text)

    parts = text.split(separator)
    segments = [part + separator for part in parts[:-1]]
    if parts[-1]:
        segments.append(parts[-1])
    return segments


def split_text(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
    separator: str = DEFAULT_SEPARATOR,
    hard_split: bool = False,
) -> list[TextChunk]:
    """Split text into overlapping chunks aligned on separator boundaries.

    New content is packed segment by segment (a segment being one
    separator-delimited piece, separator included) until the next segment
    would exceed chunk_size. Every chunk after the first is prefixed with the
    last chunk_overlap characters of its predecessor; the prefix shrinks only
    when the predecessor is shorter or the next segment would not fit.

    Dropping each chunk's overlap prefix and concatenating gives back the
    input exactly.

    Args:
        text: The text to chunk
        chunk_size: Maximum characters per chunk (default: 800)
        chunk_overlap: Characters repeated between consecutive chunks (default: 100)
        separator: Boundary to split on; "" splits between any two characters
        hard_split: Cut segments longer than chunk_size into chunk_size pieces
            instead of emitting them whole as oversized chunks

    Returns:
        list[TextChunk]: Ordered chunks (empty for empty text)

    Raises:
        ValueError: If the size parameters are inconsistent
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if chunk_overlap < 0:
        raise ValueError(f"chunk_overlap must not be negative, got {chunk_overlap}")
    if chunk_overlap >= chunk_size:
        raise ValueError(
            f"chunk_overlap ({chunk_overlap}) must be smaller than chunk_size ({chunk_size})"
        )

    if not text:
        return []

    segments = _segments(text, separator)
    if hard_split:
        segments = [
            segment[start : start + chunk_size]
            for segment in segments
            for start in range(0, len(segment), chunk_size)
        ]

    chunks: list[TextChunk] = []
    offset = 0
    i = 0

    while i < len(segments):
        segment = segments[i]

        if len(segment) > chunk_size:
            # Undividable segment: pass it through on its own
            chunks.append(TextChunk(text=segment, source_offset=offset))
            offset += len(segment)
            i += 1
            continue

        overlap = 0
        prefix = ""
        if chunks and chunk_overlap:
            previous = chunks[-1].text
            overlap = min(chunk_overlap, len(previous), chunk_size - len(segment))
            prefix = previous[len(previous) - overlap :]

        body = [segment]
        length = overlap + len(segment)
        i += 1
        while i < len(segments) and length + len(segments[i]) <= chunk_size:
            body.append(segments[i])
            length += len(segments[i])
            i += 1

        new_text = "".join(body)
        chunks.append(
            TextChunk(
                text=prefix + new_text,
                source_offset=offset - overlap,
                overlap_with_previous=overlap,
            )
        )
        offset += len(new_text)

    return chunks


def chunk_pages(
    pages: list[str],
    filename: str,
    file_metadata: dict[str, Any] | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
    separator: str = DEFAULT_SEPARATOR,
) -> list[dict[str, Any]]:
    """Chunk each page separately; chunk_index runs across pages in document order.

    Returns:
        list[dict]: Chunk dictionaries with text, source_filename,
                   chunk_index, and metadata
    """
    file_metadata = file_metadata or {}
    chunks: list[dict[str, Any]] = []
    for page_number, page_text in enumerate(pages, 1):
        for text_chunk in split_text(page_text, chunk_size, chunk_overlap, separator):
            metadata = dict(file_metadata)
            metadata.update(
                {
                    "page_number": page_number,
                    "source_offset": text_chunk.source_offset,
                    "overlap_with_previous": text_chunk.overlap_with_previous,
                }
            )
            chunks.append(
                {
                    "text": text_chunk.text,
                    "source_filename": filename,
                    "chunk_index": len(chunks),
                    "metadata": metadata,
                }
            )

    return chunks


def extract_chunks_from_pdf(
    pdf_path: Path | str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
    separator: str = DEFAULT_SEPARATOR,
    source_filename: str | None = None,
) -> list[dict[str, Any]]:
    """Extract text chunks from a PDF file without generating embeddings.

    Args:
        pdf_path: Path to the PDF file
        chunk_size: Maximum characters per chunk
        chunk_overlap: Characters repeated between consecutive chunks
        separator: Boundary to align chunks on
        source_filename: Name to record as the chunk source (default: file name)

    Returns:
        list[dict]: Chunk dictionaries with text, source_filename,
                   chunk_index, and metadata

    Raises:
        LoadError: If the PDF cannot be read
    """
    pdf_path = Path(pdf_path)
    filename = source_filename or pdf_path.name
    logger.info(f"Extracting chunks from {pdf_path.name}...")

    pages, file_metadata = load_pdf(pdf_path)
    logger.info(f"  Extracted {sum(len(page) for page in pages)} characters")

    chunks = chunk_pages(pages, filename, file_metadata, chunk_size, chunk_overlap, separator)
    logger.info(f"  ✓ Extracted {len(chunks)} chunks from {filename}")
    return chunks
