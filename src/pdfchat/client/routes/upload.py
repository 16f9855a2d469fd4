"""Upload API route: persist a PDF and enqueue its ingestion."""

import logging
import time
import uuid

from flask import Blueprint, jsonify, request
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from pdfchat.client.routes.config import get_config
from pdfchat.constants import PDF_MAGIC_BYTES
from pdfchat.service.models import IngestionJob

logger = logging.getLogger(__name__)

upload_bp = Blueprint("upload", __name__)


def allowed_file(filename: str, allowed_extensions: set[str]) -> bool:
    """Check if the file extension is allowed.

    Args:
        filename: The filename to check
        allowed_extensions: Lower-case extensions without the dot

    Returns:
        True if extension is allowed, False otherwise
    """
    return "." in filename and filename.rsplit(".", 1)[1].lower() in allowed_extensions


def has_pdf_header(file: FileStorage) -> bool:
    """Check the %PDF- magic bytes without consuming the stream."""
    header = file.stream.read(len(PDF_MAGIC_BYTES))
    file.stream.seek(0)
    return header == PDF_MAGIC_BYTES


def stored_filename(original: str) -> str:
    """Unique on-disk name: <millis>-<random>-<sanitized original>."""
    safe_name = secure_filename(original) or "document.pdf"
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex}-{safe_name}"


@upload_bp.route("/upload/pdf", methods=["POST"])
def upload_pdf():
    """Persist an uploaded PDF and enqueue a "file-ready" ingestion job.

    Expects multipart form data with a single file in the "pdf" field.
    The response is returned as soon as the job is enqueued; ingestion
    happens in the worker.

    Response:
        {"message": "uploaded", "job_id": "..."}

    Returns:
        JSON response with upload status
    """
    config = get_config()
    logger.info("📤 Received document upload request")

    file = request.files.get("pdf")
    if file is None or not file.filename:
        logger.warning("❌ No file in request")
        return jsonify({"error": "No file uploaded"}), 400

    if not allowed_file(file.filename, config.allowed_extensions):
        logger.warning(f"❌ Rejected non-PDF upload: {file.filename}")
        return jsonify({"error": "File type not allowed. Only PDF files are accepted."}), 400

    if not has_pdf_header(file):
        logger.warning(f"❌ Rejected upload without PDF header: {file.filename}")
        return jsonify({"error": "Uploaded file is not a valid PDF"}), 400

    destination = config.upload_folder
    destination.mkdir(parents=True, exist_ok=True)
    filepath = destination / stored_filename(file.filename)
    file.save(filepath)
    logger.info(f"💾 Saved file: {filepath}")

    job = IngestionJob(filename=file.filename, destination=str(destination), path=str(filepath))
    try:
        job_id = config.job_queue.enqueue(job)
    except Exception as e:
        logger.error(f"❌ Failed to enqueue ingestion job for {filepath}: {e}", exc_info=True)
        filepath.unlink(missing_ok=True)
        return jsonify({"error": "Failed to enqueue ingestion job", "details": str(e)}), 500

    return jsonify({"message": "uploaded", "job_id": job_id})
