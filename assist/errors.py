"""Error kinds raised while serving an assist request.

Each carries the HTTP status and the message that is safe to return to
the caller; the underlying detail only goes to the log.
"""

from __future__ import annotations

GENERIC_FAILURE = "Failed to process AI request"


class AssistError(Exception):
    """Base class for assist request failures."""

    status_code = 500
    public_message = GENERIC_FAILURE


class ValidationError(AssistError):
    """The request is missing its prompt."""

    status_code = 400
    public_message = "Prompt is required"

    def __init__(self, message: str = public_message) -> None:
        super().__init__(message)


class UpstreamError(AssistError):
    """The provider call failed or returned a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.upstream_status = status_code


class ParseError(AssistError):
    """The request body could not be understood."""
