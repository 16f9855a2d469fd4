"""Exception types shared by the ingestion and query paths."""


class PdfChatError(Exception):
    """Base class for all pdfchat errors."""


class BadRequestError(PdfChatError):
    """A required input is missing; reported to the caller as a 400."""


class LoadError(PdfChatError):
    """The document path is missing or the file is not a parseable document."""


class ShapeError(PdfChatError, ValueError):
    """Malformed numeric input to the pooler."""


class ConfigurationError(PdfChatError):
    """Embedding model and vector index disagree (e.g. vector dimension)."""


class UpstreamServiceError(PdfChatError):
    """An external service call failed.

    Attributes:
        details: Diagnostic body returned by the upstream service, if any
        status_code: HTTP status of the upstream response, if any
    """

    def __init__(self, message: str, details: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.details = details
        self.status_code = status_code


class EmbeddingServiceError(UpstreamServiceError):
    """The embedding service failed after exhausting its retry budget."""


class GenerationServiceError(UpstreamServiceError):
    """The text-generation service returned a non-success response."""
