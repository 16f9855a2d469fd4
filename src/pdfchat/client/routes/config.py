"""Shared configuration for route modules."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from flask import current_app

EXTENSION_KEY = "pdfchat"


@dataclass
class RouteConfig:
    """Configuration container for Flask route dependencies.

    One instance is attached to each application by create_app, so tests can
    inject fakes for the answer coordinator and the job queue.
    """

    answerer: Any = None
    job_queue: Any = None
    upload_folder: Path | None = None
    allowed_extensions: set[str] = field(default_factory=lambda: {"pdf"})


def init_config(app, config: RouteConfig) -> None:
    """Attach the route configuration to a Flask application."""
    app.extensions[EXTENSION_KEY] = config


def get_config() -> RouteConfig:
    """Get the route configuration of the current application.

    Returns:
        RouteConfig instance with current settings
    """
    return current_app.extensions[EXTENSION_KEY]
