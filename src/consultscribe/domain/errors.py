"""
Domain-specific error types for speaker attribution rule violations.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base domain error."""

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


class InvalidSpeakerLabelError(DomainError):
    """Label outside the trusted Doctor/Patient set."""

    def __init__(self, label: str) -> None:
        message = f"Invalid speaker label: '{label}'. Expected 'Doctor' or 'Patient'"
        super().__init__(message, "INVALID_SPEAKER_LABEL", {"label": label})

