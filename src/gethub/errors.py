"""Error types for release lookups."""
import logging
from typing import Any, Dict, Optional
from mcp.types import (
    ErrorData,
    INVALID_REQUEST,
    INVALID_PARAMS,
    INTERNAL_ERROR
)

logger = logging.getLogger(__name__)

def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None
) -> None:
    """Log an error with context."""
    logger = logger or logging.getLogger(__name__)

    error_info = {
        "error_type": error.__class__.__name__,
        "error_message": str(error)
    }
    if context:
        error_info["context"] = context
    if isinstance(error, GetHubError):
        error_info["code"] = error.code
        error_info["details"] = error.details

    logger.error("Release lookup failed", extra={"data": error_info})


class GetHubError(Exception):
    """Base error class for release lookups."""
    retryable = False

    def __init__(
        self,
        message: str,
        code: int = INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.code = code
        self.details = details or {}

    def to_error_data(self) -> ErrorData:
        """Convert to ErrorData format."""
        return ErrorData(
            code=self.code,
            message=str(self),
            data=self.details
        )


class InvalidRepositoryError(GetHubError):
    """Repository input that is not a GitHub owner/repo reference."""
    def __init__(self, value: str, reason: str):
        super().__init__(
            f"Invalid repository '{value}': {reason}",
            code=INVALID_PARAMS,
            details={"repository": value}
        )


class ReleaseSourceError(GetHubError):
    """Releases could not be fetched from GitHub."""
    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        code: int = INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        details = dict(details or {})
        if status is not None:
            details["status"] = status
        super().__init__(message, code=code, details=details)
        self.status = status


class RateLimitError(ReleaseSourceError):
    """GitHub API quota exhausted; retry with a token."""
    retryable = True

    def __init__(self, status: int, reset: Optional[int] = None):
        super().__init__(
            "GitHub API rate limit exceeded. Please authenticate to continue.",
            status=status,
            code=INVALID_REQUEST,
            details={"reset": reset}
        )
        self.reset = reset


class RepositoryNotFoundError(ReleaseSourceError):
    """Owner/repo does not exist or is not visible."""
    def __init__(self, owner: str, repo: str):
        super().__init__(
            "Repository not found. Please check the owner and repository name.",
            status=404,
            code=INVALID_PARAMS,
            details={"owner": owner, "repo": repo}
        )
