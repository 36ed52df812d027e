from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates attendance rules."""

    def __init__(self, message: str, *, reason: str = "invalid"):
        super().__init__(message)
        self.reason = reason


class ConfigurationError(Exception):
    """Raised at startup when required settings are missing or malformed."""


class UpstreamError(Exception):
    """Raised when the spreadsheet backend or its identity provider fails."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class UpstreamAuthError(UpstreamError):
    """The backend rejected our credentials (401 / token acquisition failed)."""


class UpstreamPermissionError(UpstreamError):
    """Credentials are valid but lack access to the spreadsheet (403)."""


class UpstreamNotFoundError(UpstreamError):
    """The spreadsheet, sheet or range does not exist (404)."""
