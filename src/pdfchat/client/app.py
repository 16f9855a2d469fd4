"""Flask web application for PDF upload and RAG-based chat.

This module provides the REST API: PDF uploads are persisted and handed to
the ingestion worker through the job queue, and chat queries are answered
synchronously by the answer coordinator.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from pdfchat.client.routes import RouteConfig, chat_bp, health_bp, init_config, upload_bp
from pdfchat.constants import DEFAULT_UPLOAD_FOLDER, MAX_UPLOAD_SIZE_BYTES

# Configure logging
log_level = os.getenv("LOG_LEVEL", "INFO")
logging.basicConfig(
    level=getattr(logging, log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()
logger.debug("Environment variables loaded")


def get_upload_folder() -> Path:
    """Directory uploaded PDFs are stored in (UPLOAD_FOLDER env var)."""
    return Path(os.getenv("UPLOAD_FOLDER", DEFAULT_UPLOAD_FOLDER)).resolve()


def initialize_services() -> RouteConfig:
    """Build the answer coordinator and job queue from the environment.

    Runs the embedding dimension check against the vector index, so a
    misconfigured deployment fails on startup instead of on the first query.
    """
    from pdfchat.service.factory import build_answer_coordinator
    from pdfchat.workers.queue import JobQueue

    logger.info("🔧 Initializing services...")

    answerer = build_answer_coordinator(verify=True)
    logger.info("✅ Answer coordinator initialized successfully")

    job_queue = JobQueue()
    logger.info(f"✅ Job queue configured: {job_queue.queue}")

    return RouteConfig(answerer=answerer, job_queue=job_queue, upload_folder=get_upload_folder())


def create_app(config: RouteConfig | None = None) -> Flask:
    """Factory function for creating the Flask application.

    This function is used by WSGI servers like gunicorn to create the app.

    Args:
        config: Route dependencies; built from the environment when omitted

    Returns:
        Flask: The configured Flask application instance
    """
    if config is None:
        config = initialize_services()
    if config.upload_folder is None:
        config.upload_folder = get_upload_folder()
    config.upload_folder.mkdir(parents=True, exist_ok=True)

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = MAX_UPLOAD_SIZE_BYTES
    init_config(app, config)

    app.register_blueprint(health_bp)
    app.register_blueprint(upload_bp)
    app.register_blueprint(chat_bp)
    logger.debug("Flask app created")
    return app


def main() -> None:
    """Entry point for the Flask application command-line interface."""
    print("🚀 Starting pdfchat server...")

    print("📦 Initializing services...")
    app = create_app()
    print("✅ Services initialized successfully")

    host = os.getenv("FLASK_HOST", "0.0.0.0")
    port = int(os.getenv("FLASK_PORT", "8000"))
    debug = os.getenv("FLASK_ENV", "production") == "development"

    print(f"🌐 Starting Flask server on http://{host}:{port}")
    print(f"🔧 Debug mode: {debug}")
    print("📝 Press CTRL+C to quit")

    app.run(host=host, port=port, debug=debug, threaded=True)


if __name__ == "__main__":
    main()
