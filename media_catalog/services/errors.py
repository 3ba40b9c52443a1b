"""Domain errors raised by the engine, its stores and its embedding provider. Mapped to HTTP codes in main."""


class CatalogError(Exception):
    """Base class for catalog errors. `cause` keeps the underlying exception without leaking it."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class NotFoundError(CatalogError):
    """A referenced record id does not exist."""


class MissingEmbeddingError(CatalogError):
    """A referenced record exists but has no embedding."""


class ProviderError(CatalogError):
    """The embedding provider, vector store or record store failed."""


class InvalidInputError(CatalogError, ValueError):
    """Caller input is malformed (no ids, vector dimension mismatch, unknown strategy)."""
