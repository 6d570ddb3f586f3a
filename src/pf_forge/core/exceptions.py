"""Custom exception hierarchy for the pf_forge rules engine.

All exceptions inherit from PfForgeError, so callers at the application
boundary can catch a single type while still receiving domain-specific
context in ``details``.

Read-time aggregation (derived stats) degrades gracefully on unknown catalog
ids; write-time selection (skills, feats, equipment) raises
UnknownCatalogIdError instead of admitting the reference.

Example:
    >>> from pf_forge.core.exceptions import OutOfRangeError
    >>> raise OutOfRangeError("Score outside point-buy table", value=19, minimum=7, maximum=18)
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class PfForgeError(Exception):
    """Base exception for all pf_forge errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Rules Domain Exceptions
# =============================================================================


class DomainErrorKind(StrEnum):
    """Classification of rules-domain failures."""

    OUT_OF_RANGE = "out_of_range"
    UNKNOWN_CATALOG_ID = "unknown_catalog_id"


class DomainError(PfForgeError):
    """Base exception for rules-domain violations.

    Attributes:
        kind: Which class of domain failure occurred.
    """

    kind: DomainErrorKind

    def __init__(
        self,
        message: str,
        *,
        kind: DomainErrorKind,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize domain error with its kind.

        Args:
            message: Human-readable error description.
            kind: Classification of the failure.
            details: Optional dictionary containing additional error context.
        """
        self.kind = kind
        combined_details = details or {}
        combined_details["kind"] = kind.value
        super().__init__(message, details=combined_details)


class OutOfRangeError(DomainError):
    """Raised when a value falls outside an authoritative rules table.

    Point-buy costs are only defined for scores 7 through 18; values
    outside that range are never clamped or extrapolated.
    """

    def __init__(
        self,
        message: str,
        *,
        value: int | None = None,
        minimum: int | None = None,
        maximum: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize out-of-range error with bounds context.

        Args:
            message: Human-readable error description.
            value: The offending value.
            minimum: Lowest accepted value.
            maximum: Highest accepted value.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if value is not None:
            combined_details["value"] = value
        if minimum is not None:
            combined_details["minimum"] = minimum
        if maximum is not None:
            combined_details["maximum"] = maximum
        super().__init__(message, kind=DomainErrorKind.OUT_OF_RANGE, details=combined_details)


class UnknownCatalogIdError(DomainError):
    """Raised when a referenced id is absent from its reference catalog."""

    def __init__(
        self,
        message: str,
        *,
        catalog: str | None = None,
        item_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize unknown-id error with catalog context.

        Args:
            message: Human-readable error description.
            catalog: Name of the catalog that was searched.
            item_id: The id that could not be resolved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if catalog:
            combined_details["catalog"] = catalog
        if item_id:
            combined_details["item_id"] = item_id
        super().__init__(
            message, kind=DomainErrorKind.UNKNOWN_CATALOG_ID, details=combined_details
        )


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(PfForgeError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(PfForgeError):
    """Raised when character or catalog data fails validation.

    Malformed persisted characters are rejected on load rather than
    repaired; only optional fields and timestamps are defaulted.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


# =============================================================================
# Storage Exceptions
# =============================================================================


class StorageError(PfForgeError):
    """Raised when the character store cannot read or write."""

    def __init__(
        self,
        message: str,
        *,
        character_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize storage error with character context.

        Args:
            message: Human-readable error description.
            character_id: Identifier of the character involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if character_id:
            combined_details["character_id"] = character_id
        super().__init__(message, details=combined_details)


__all__ = [
    "PfForgeError",
    "DomainErrorKind",
    "DomainError",
    "OutOfRangeError",
    "UnknownCatalogIdError",
    "ConfigurationError",
    "ValidationError",
    "StorageError",
]
