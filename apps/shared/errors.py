"""
Secure Error Handling

Typed, client-facing errors for the portfolio API plus utilities for handling
unexpected errors securely without leaking sensitive information.

Every PortfolioError carries:
- code: machine-readable identifier, exposed as a GraphQL error extension
- status_code: HTTP status used by the REST endpoints
- category: error category used in REST error payloads
"""

import logging
import uuid
from typing import Optional

logger = logging.getLogger(__name__)


class PortfolioError(Exception):
    """Base class for errors whose message is safe to show to the client."""

    code = "INTERNAL_SERVER_ERROR"
    status_code = 500
    category = "server_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def extensions(self) -> dict:
        return {"code": self.code}


class BadRequestError(PortfolioError):
    """Validation failures: malformed input, bad MIME type, oversized file."""

    code = "BAD_REQUEST"
    status_code = 400
    category = "client_error"


class AuthenticationError(PortfolioError):
    code = "UNAUTHENTICATED"
    status_code = 401
    category = "security"


class ForbiddenError(PortfolioError):
    code = "FORBIDDEN"
    status_code = 403
    category = "security"


class NotFoundError(PortfolioError):
    code = "NOT_FOUND"
    status_code = 404
    category = "client_error"


class ConflictError(PortfolioError):
    code = "CONFLICT"
    status_code = 409
    category = "client_error"


class TooManyAttemptsError(PortfolioError):
    code = "TOO_MANY_REQUESTS"
    status_code = 429
    category = "security"


class InternalError(PortfolioError):
    """Wraps an unexpected failure after it has been logged and sanitized."""

    def __init__(self, message: str, error_id: str):
        super().__init__(message)
        self.error_id = error_id

    @property
    def extensions(self) -> dict:
        return {"code": self.code, "errorId": self.error_id}


def log_and_sanitize_error(
    error: Exception,
    context: str,
    user_message: Optional[str] = None
) -> tuple[str, str]:
    """
    Log full error details server-side and return sanitized message for client.

    Args:
        error: The exception that occurred
        context: Description of what operation failed (e.g., "Resolving projects")
        user_message: Optional custom message to show user. If None, uses generic message.

    Returns:
        Tuple of (sanitized_message, error_id) for client response
    """
    # Generate unique error ID for correlation
    error_id = str(uuid.uuid4())[:8]

    # Log full error server-side
    logger.error(
        f"{context} failed [{error_id}]: {type(error).__name__}: {str(error)}",
        exc_info=error
    )

    # Return sanitized message for client
    if user_message:
        sanitized = f"{user_message} (Error ID: {error_id})"
    else:
        sanitized = f"{context} failed. Please try again later. (Error ID: {error_id})"

    return sanitized, error_id
