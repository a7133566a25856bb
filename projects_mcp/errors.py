from __future__ import annotations


class ProjectsMCPError(Exception):
    """Base exception for all tool errors."""
    pass


class ProjectsMCPClientError(ProjectsMCPError):
    """Caller-side errors - bad input or unknown upstream entities."""
    pass


class ProjectsMCPServerError(ProjectsMCPError):
    """Errors raised while talking to the GraphQL API."""
    pass


class ValidationError(ProjectsMCPClientError):
    """A required parameter is missing or a parameter has the wrong type."""
    pass


class ResolutionError(ProjectsMCPClientError):
    """A lookup query returned no usable node ID."""
    pass


class RemoteOperationError(ProjectsMCPServerError):
    """The GraphQL query or mutation failed (network, auth or remote validation)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def error_kind(exc: BaseException) -> str:
    """Short machine-readable tag used by logs and the audit trail."""
    if isinstance(exc, ValidationError):
        return "validation_error"
    if isinstance(exc, ResolutionError):
        return "resolution_error"
    if isinstance(exc, RemoteOperationError):
        return "remote_error"
    return "internal_error"
