"""Publishing ingestion jobs to the worker queue."""

import logging

from celery import Celery

from pdfchat.constants import JOB_NAME, QUEUE_NAME
from pdfchat.service.models import IngestionJob

logger = logging.getLogger(__name__)


class JobQueue:
    """Enqueues "file-ready" jobs for the ingestion worker."""

    def __init__(self, app: Celery | None = None, queue: str = QUEUE_NAME) -> None:
        if app is None:
            from pdfchat.workers import celery_app as app
        self.app = app
        self.queue = queue

    def enqueue(self, job: IngestionJob) -> str:
        """Publish a job and return its task id."""
        result = self.app.send_task(JOB_NAME, kwargs=job.to_payload(), queue=self.queue)
        logger.info(f"📤 Enqueued {JOB_NAME} job {result.id} for {job.filename}")
        return result.id
