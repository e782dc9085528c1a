"""
Exception hierarchy for the Clarity Bridge core.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class ClarityBridgeError(Exception):
    """Base exception for all Clarity Bridge errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(ClarityBridgeError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class EmbeddingError(ClarityBridgeError):
    """Raised when embedding generation fails or returns malformed vectors."""


class VectorStoreError(ClarityBridgeError):
    """Raised when vector provider operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, search, fetch, delete)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class DimensionMismatchError(VectorStoreError):
    """Raised when two vectors of different length are compared or stored."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Embedding dimension mismatch: expected {expected}, got {actual}",
            operation="compare",
            details={"expected": expected, "actual": actual},
        )


class ProviderUnavailableError(VectorStoreError):
    """Raised when a provider cannot be initialized."""


class RetrievalNotInitializedError(ClarityBridgeError):
    """Raised when the retrieval service is used before initialize()."""

    def __init__(self) -> None:
        super().__init__("Retrieval service used before a provider was selected")


class SpecificationNotFoundError(ClarityBridgeError):
    """Raised when a specification or its latest version cannot be found."""

    def __init__(self, specification_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["specification_id"] = specification_id
        super().__init__(f"Specification not found: {specification_id}", details)


class ViewGenerationError(ClarityBridgeError):
    """Raised when a view generator fails."""

    def __init__(
        self,
        message: str,
        view_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if view_type:
            details["view_type"] = view_type
        super().__init__(message, details)


class ViewParseError(ViewGenerationError):
    """Raised when generator output cannot be parsed into the view schema."""


class QualityCheckError(ClarityBridgeError):
    """Raised when a quality check cannot be completed."""
