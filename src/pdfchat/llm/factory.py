"""Factory function for creating LLM service instances."""

import logging
import os

from dotenv import load_dotenv

from pdfchat.constants import (
    DEFAULT_HF_API_URL,
    DEFAULT_OLLAMA_HOST,
    GENERATION_TIMEOUT,
    LLM_DEFAULTS,
    get_llm_service_name,
)
from pdfchat.llm.base import LLMService
from pdfchat.llm.gemini import GeminiService
from pdfchat.llm.huggingface import HuggingFaceService
from pdfchat.llm.ollama import OllamaService

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def get_llm_service(config: dict | None = None) -> LLMService:
    """Factory function to create an LLM service instance.

    Args:
        config: Optional configuration dictionary. If None, uses environment variables.
                Expected keys:
                - 'service': Service type (default: from LLM_SERVICE env, or "huggingface")
                - 'model': Model name (default: from LLM_MODEL env)
                - 'host': Ollama host URL (default: from OLLAMA_HOST env)
                - 'api_url': Hugging Face API URL (default: from HF_API_URL env)
                - 'timeout': Per-request timeout in seconds

    Returns:
        LLMService: An instance implementing the LLMService protocol.
    """
    if config is None:
        config = {}

    service_type = config.get("service") or get_llm_service_name()
    timeout = config.get("timeout", GENERATION_TIMEOUT)

    if service_type not in LLM_DEFAULTS:
        raise ValueError(f"Unsupported service type: {service_type}")

    model = config.get("model") or os.getenv("LLM_MODEL") or LLM_DEFAULTS[service_type]

    if service_type == "huggingface":
        api_url = config.get("api_url", os.getenv("HF_API_URL", DEFAULT_HF_API_URL))
        return HuggingFaceService(model=model, api_url=api_url, timeout=timeout)

    if service_type == "ollama":
        host = config.get("host", os.getenv("OLLAMA_HOST", DEFAULT_OLLAMA_HOST))
        return OllamaService(host=host, model=model, timeout=timeout)

    return GeminiService(model=model, timeout=timeout)
