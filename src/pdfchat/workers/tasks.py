"""Document ingestion Celery task.

Task "file-ready"(filename, destination, path)
Flow: load -> split -> embed -> upsert
"""

import logging
import os
from functools import lru_cache

from pdfchat.constants import DEFAULT_JOB_MAX_RETRIES, JOB_NAME
from pdfchat.errors import EmbeddingServiceError
from pdfchat.service.ingestion import IngestionCoordinator
from pdfchat.service.models import IngestionJob
from pdfchat.workers import celery_app

logger = logging.getLogger(__name__)

RETRY_BACKOFF_SECONDS = 60
RETRY_BACKOFF_MAX_SECONDS = 600


def get_job_max_retries() -> int:
    """Job-level retries for embedding failures (JOB_MAX_RETRIES env var, default 0)."""
    return int(os.getenv("JOB_MAX_RETRIES", str(DEFAULT_JOB_MAX_RETRIES)))


@lru_cache(maxsize=1)
def get_coordinator() -> IngestionCoordinator:
    """Ingestion coordinator shared by all jobs of this worker process."""
    from pdfchat.service.factory import build_ingestion_coordinator

    return build_ingestion_coordinator(verify=False)


@celery_app.task(bind=True, name=JOB_NAME)
def process_file(self, filename: str, destination: str, path: str) -> dict:
    """Ingest one uploaded document.

    Args:
        filename: Original upload filename
        destination: Directory the upload was stored in
        path: Full path of the stored file

    Returns:
        dict: Final job state and chunk count

    Raises:
        LoadError: Never retried; the operator must resubmit
        EmbeddingServiceError: Retried with exponential backoff while
            JOB_MAX_RETRIES allows, then raised
    """
    job = IngestionJob(filename=filename, destination=destination, path=path)

    try:
        result = get_coordinator().run(job)
    except EmbeddingServiceError as e:
        max_retries = get_job_max_retries()
        if self.request.retries < max_retries:
            countdown = min(
                RETRY_BACKOFF_SECONDS * 2**self.request.retries, RETRY_BACKOFF_MAX_SECONDS
            )
            logger.warning(
                f"⚠️ Retrying {filename} in {countdown}s "
                f"(retry {self.request.retries + 1}/{max_retries})"
            )
            raise self.retry(exc=e, countdown=countdown, max_retries=max_retries)
        raise

    return {"state": result.state.value, "chunks": result.chunk_count, "path": path}
