"""
Exception handling for Consult-Scribe.

This module provides custom exception classes for the application and
infrastructure layers. Domain rule violations live in ``domain.errors``.
"""

from typing import Any, Dict, Optional


class ConsultScribeException(Exception):
    """Base exception class for Consult-Scribe."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ConsultScribeException):
    """Raised when there's a configuration error."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, "CONFIG_ERROR", details)


class ExternalServiceError(ConsultScribeException):
    """Raised when there's an external service error."""

    def __init__(
        self, service: str, message: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.service = service
        full_message = f"{service} service error: {message}"
        super().__init__(full_message, "EXTERNAL_SERVICE_ERROR", details)


class OpenAIError(ExternalServiceError):
    """Raised when there's an OpenAI API error."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("OpenAI", message, details)


class SpeakerCorrectionError(ConsultScribeException):
    """Raised when an LLM speaker correction is unusable."""

    def __init__(self, reason: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.reason = reason
        super().__init__(f"Speaker correction rejected: {reason}", "SPEAKER_CORRECTION_REJECTED", details)
