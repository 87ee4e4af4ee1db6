"""Error types raised by the Toggl tools and their MCP error codes."""

from typing import List, Optional

from mcp.types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    ErrorData,
)


class TogglMCPError(Exception):
    """Base class for every error the tool layer reports to the caller."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_error_data(self) -> ErrorData:
        return ErrorData(code=self.code, message=self.message)


class ValidationError(TogglMCPError):
    """Tool arguments did not match the declared input shape."""

    code = INVALID_PARAMS

    def __init__(self, violations: List[str]):
        self.violations = list(violations)
        super().__init__(f"Invalid parameters: {', '.join(self.violations)}")


class DomainError(TogglMCPError):
    """An operation precondition failed (e.g. stopping with no timer running)."""


class AuthenticationError(TogglMCPError):
    """Toggl rejected the API token."""

    code = INVALID_REQUEST

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "Invalid Toggl API key. Check your TOGGL_API_KEY environment variable."
        )


class RemoteError(TogglMCPError):
    """Any other failed request to Toggl, including transport failures."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class UnknownOperationError(TogglMCPError):
    """The requested tool is not in the catalog."""

    code = METHOD_NOT_FOUND

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ConfigurationError(TogglMCPError):
    """Required configuration is missing at startup."""
