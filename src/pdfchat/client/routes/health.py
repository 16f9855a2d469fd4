"""Health check routes."""

from flask import Blueprint, jsonify

health_bp = Blueprint("health", __name__)


@health_bp.route("/", methods=["GET"])
@health_bp.route("/health", methods=["GET"])
def health():
    """Liveness check; touches no external service.

    Returns:
        JSON with a fixed status
    """
    return jsonify({"status": "OK"})
