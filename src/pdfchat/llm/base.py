"""Base protocol for LLM services."""

from typing import Protocol


class LLMService(Protocol):
    """Protocol defining the interface for LLM services.

    This protocol ensures type safety and allows for multiple LLM provider
    implementations while maintaining a consistent interface. Implementations
    translate SDK failures into GenerationServiceError / EmbeddingServiceError.
    """

    def generate_text(
        self,
        prompt: str,
        temperature: float,
        top_p: float,
        max_new_tokens: int,
    ) -> str:
        """Generate a completion for a raw prompt string.

        Args:
            prompt: The full prompt, including any instruction preamble
            temperature: Sampling temperature
            top_p: Nucleus sampling threshold
            max_new_tokens: Upper bound on generated tokens

        Returns:
            str: The generated text ("" if the service returned nothing).

        Raises:
            GenerationServiceError: On a non-success response from the service
        """
        ...

    def generate_embeddings(self, texts: list[str], model: str | None = None) -> list[list[float]]:
        """Generate embeddings for a list of texts.

        Args:
            texts: List of text strings to embed
            model: Optional embedding model name. If None, uses a default for the service.

        Returns:
            list[list[float]]: List of embedding vectors

        Raises:
            EmbeddingServiceError: If the request fails
        """
        ...
