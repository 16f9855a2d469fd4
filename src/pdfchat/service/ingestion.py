"""Ingestion coordinator: load, split, embed and index one uploaded document."""

import logging
from pathlib import Path
from typing import Any

from pdfchat.client.ingest import chunk_pages, load_pdf
from pdfchat.constants import DEFAULT_CHUNK_OVERLAP, DEFAULT_CHUNK_SIZE, DEFAULT_SEPARATOR
from pdfchat.service.database.index import VectorIndex
from pdfchat.service.database.models import DocumentChunk, record_id
from pdfchat.service.embeddings import EmbeddingClient
from pdfchat.service.models import IngestionJob, IngestionResult, JobState

logger = logging.getLogger(__name__)


class IngestionCoordinator:
    """Runs one ingestion job through RECEIVED -> LOADED -> SPLIT -> EMBEDDED -> INDEXED -> DONE.

    Any failure moves the job to FAILED and is re-raised; nothing is written
    to the index unless every chunk was embedded.
    """

    def __init__(
        self,
        embedder: EmbeddingClient,
        index: VectorIndex,
        collection: str,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
        separator: str = DEFAULT_SEPARATOR,
    ) -> None:
        self.embedder = embedder
        self.index = index
        self.collection = collection
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.separator = separator

    def run(self, job: IngestionJob | dict[str, Any] | str) -> IngestionResult:
        """Process one job.

        Args:
            job: The job, or its raw queue payload

        Returns:
            IngestionResult: Final state (DONE) and chunk count

        Raises:
            LoadError: If the payload has no path or the document cannot be read
            EmbeddingServiceError: If any chunk could not be embedded
        """
        if not isinstance(job, IngestionJob):
            try:
                job = IngestionJob.from_payload(job)
            except Exception as e:
                logger.error(f"❌ Job failed at {JobState.RECEIVED.value}: {e} (job: {job})")
                raise

        result = IngestionResult(job=job)
        logger.info(f"📥 Received job: {job.to_payload()}")

        try:
            pages, file_metadata = load_pdf(job.path)
            self._advance(result, JobState.LOADED)

            stored_name = Path(job.path).name
            file_metadata["stored_name"] = stored_name
            chunks = chunk_pages(
                pages,
                job.filename or stored_name,
                file_metadata,
                self.chunk_size,
                self.chunk_overlap,
                self.separator,
            )
            result.chunk_count = len(chunks)
            self._advance(result, JobState.SPLIT)

            if chunks:
                embeddings = self.embedder.embed_documents([chunk["text"] for chunk in chunks])
                self._advance(result, JobState.EMBEDDED)

                records = [
                    DocumentChunk(
                        Id=record_id(stored_name, chunk["chunk_index"]),
                        source_filename=chunk["source_filename"],
                        chunk_index=chunk["chunk_index"],
                        text=chunk["text"],
                        embedding=embedding,
                        metadata=chunk["metadata"],
                        collection=self.collection,
                    )
                    for chunk, embedding in zip(chunks, embeddings)
                ]
                self.index.upsert(self.collection, records)
                self._advance(result, JobState.INDEXED)
            else:
                logger.warning(f"⚠️ No text extracted from {job.filename or stored_name}")

        except Exception as e:
            failed_at = result.state
            result.state = JobState.FAILED
            result.error = str(e)
            logger.error(f"❌ Job failed after {failed_at.value}: {e} (job: {job.to_payload()})")
            raise

        self._advance(result, JobState.DONE)
        logger.info(f"✅ Successfully added {result.chunk_count} chunks to vector store")
        return result

    @staticmethod
    def _advance(result: IngestionResult, state: JobState) -> None:
        logger.debug(f"Job {result.job.path}: {result.state.value} -> {state.value}")
        result.state = state
