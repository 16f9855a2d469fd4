"""Chat API route using the RAG pipeline."""

import logging

from flask import Blueprint, jsonify, request

from pdfchat.client.routes.config import get_config
from pdfchat.errors import BadRequestError, EmbeddingServiceError, GenerationServiceError

logger = logging.getLogger(__name__)

chat_bp = Blueprint("chat", __name__)


@chat_bp.route("/chat", methods=["GET"])
def chat():
    """Answer a question grounded on the indexed documents.

    Request:
        GET /chat?message=What is quantum entanglement?

    Response:
        {
            "message": "Quantum entanglement is...",
            "docs": [
                {"source": "paper.pdf", "chunk_index": 0, "content": "...", "score": 0.82},
                ...
            ]
        }

    Returns:
        JSON response with the answer and the retrieved chunks
    """
    config = get_config()
    logger.info("📨 Received chat request")

    user_query = request.args.get("message", "")
    try:
        logger.info(f"🔍 Query: '{user_query[:100]}'")
        answer = config.answerer.answer(user_query)
        logger.info("✅ Chat request completed successfully")
        return jsonify(answer.to_dict())

    except BadRequestError as e:
        logger.warning(f"❌ {e}")
        return jsonify({"error": str(e)}), 400
    except EmbeddingServiceError as e:
        logger.error(f"❌ Embedding service failed: {e}")
        return jsonify({"error": "Embedding service failed", "details": e.details or str(e)}), 500
    except GenerationServiceError as e:
        logger.error(f"❌ Generation service failed: {e}")
        return jsonify({"error": "Generation service failed", "details": e.details or str(e)}), 500
    except Exception as e:
        logger.error(f"❌ Error processing chat request: {e}", exc_info=True)
        return jsonify({"error": f"Internal server error: {str(e)}"}), 500
