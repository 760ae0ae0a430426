"""Central application exception hierarchy.

This module defines the base application exception ``AppError`` and the
specialized subclasses used by the page pipeline to represent its failure
modes (configuration and knowledge-base data quality). Using a centralized
hierarchy makes error handling and testing consistent.
"""

from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    """Base exception for all application-level errors.

    Parameters
    ----------
    code : str
        Machine-readable error code (e.g., ``'DATA_VALIDATION_ERROR'``).
    message : str
        Human-readable message describing the error.
    context : Mapping[str, Any] | None, optional
        Optional structured context for logging.

    Attributes
    ----------
    code : str
        Stable machine-readable error code.
    message : str
        Human-readable message.
    context : dict
        Structured, non-sensitive context for logging.

    Examples
    --------
    >>> e = AppError('CODE', 'message', context={'k': 'v'})
    >>> e.code
    'CODE'
    """

    __slots__ = ("code", "message", "context")

    def __init__(
        self,
        code: str,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.context = dict(context or {})

    def __str__(self) -> str:
        """Return a compact string representation of the error."""
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Return a log-safe dictionary representation of the error."""
        return {
            "error_code": self.code,
            "message": self.message,
            "context": self.context,
        }


class ConfigurationError(AppError):
    """Raised for invalid or missing configuration (paths, templates)."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__("CONFIGURATION_ERROR", message, context=context)


class DataValidationError(AppError):
    """Raised for knowledge-base content that breaks a page guarantee."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        code: str = "DATA_VALIDATION_ERROR",
    ) -> None:
        super().__init__(code, message, context=context)


class UnresolvedReferenceError(DataValidationError):
    """Raised when a cross-reference id has no record to link to."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            message, context=context, code="UNRESOLVED_REFERENCE_ERROR"
        )


class InvalidTitleError(DataValidationError):
    """Raised when a record title cannot be rendered as a page title."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(message, context=context, code="INVALID_TITLE_ERROR")
