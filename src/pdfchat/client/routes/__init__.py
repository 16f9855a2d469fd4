"""Flask route blueprints for the pdfchat server."""

from pdfchat.client.routes.chat import chat_bp
from pdfchat.client.routes.config import RouteConfig, get_config, init_config
from pdfchat.client.routes.health import health_bp
from pdfchat.client.routes.upload import upload_bp

__all__ = [
    "chat_bp",
    "health_bp",
    "upload_bp",
    "RouteConfig",
    "init_config",
    "get_config",
]
