"""Celery workers module.

Async task processing for document ingestion: the upload endpoint publishes
a "file-ready" job, a worker process runs the ingestion coordinator on it.

Delivery is at-least-once (late acks); ingestion is idempotent because
index record ids are derived from the stored document name and chunk index.
"""

import logging
import os

from celery import Celery
from dotenv import load_dotenv

from pdfchat.constants import DEFAULT_REDIS_URL, DEFAULT_WORKER_CONCURRENCY, QUEUE_NAME

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def get_worker_concurrency() -> int:
    """Number of jobs one worker processes at once (WORKER_CONCURRENCY env var)."""
    return int(os.getenv("WORKER_CONCURRENCY", str(DEFAULT_WORKER_CONCURRENCY)))


def create_celery_app(broker_url: str | None = None) -> Celery:
    """Create the Celery application bound to the Redis broker.

    Args:
        broker_url: Broker and result backend URL (default: REDIS_URL env var)

    Returns:
        Celery: Configured application with the ingestion task registered
    """
    broker_url = broker_url or os.getenv("REDIS_URL", DEFAULT_REDIS_URL)

    app = Celery(
        "pdfchat",
        broker=broker_url,
        backend=broker_url,
        include=["pdfchat.workers.tasks"],
    )
    app.conf.update(
        task_serializer="json",
        result_serializer="json",
        accept_content=["json"],
        timezone="UTC",
        task_default_queue=QUEUE_NAME,
        task_acks_late=True,
        task_reject_on_worker_lost=True,
        worker_prefetch_multiplier=1,
        worker_concurrency=get_worker_concurrency(),
    )
    return app


celery_app = create_celery_app()


def main() -> None:
    """Entry point for the ingestion worker."""
    from pdfchat.service.factory import build_ingestion_coordinator

    log_level = os.getenv("LOG_LEVEL", "INFO")
    concurrency = get_worker_concurrency()

    print("🚀 Starting pdfchat ingestion worker...")
    # Fail fast on a model / index dimension mismatch before taking jobs
    build_ingestion_coordinator(verify=True)
    print(f"📦 Queue: {QUEUE_NAME}, concurrency: {concurrency}")

    celery_app.worker_main(
        [
            "worker",
            f"--loglevel={log_level}",
            f"--concurrency={concurrency}",
            f"--queues={QUEUE_NAME}",
        ]
    )
