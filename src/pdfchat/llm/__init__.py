"""LLM service abstraction layer for pdfchat.

This package provides a unified interface for multiple LLM providers:
- HuggingFaceService: Hugging Face Inference API
- OllamaService: Local LLM via Ollama
- GeminiService: Google Gemini API

All services implement the LLMService protocol (text generation and embeddings).

Usage:
    from pdfchat.llm import get_llm_service, LLMService

    # Create service from environment config
    service = get_llm_service()

    # Or with explicit config
    service = get_llm_service({"service": "ollama", "model": "llama3"})
"""

from pdfchat.llm.base import LLMService
from pdfchat.llm.factory import get_llm_service
from pdfchat.llm.gemini import GeminiService
from pdfchat.llm.huggingface import HuggingFaceService
from pdfchat.llm.ollama import OllamaService

__all__ = [
    "LLMService",
    "HuggingFaceService",
    "OllamaService",
    "GeminiService",
    "get_llm_service",
]
