"""Exception hierarchy with error codes for anchoredit.

Every failure of a replace call surfaces as one of these types; the engine
never returns a partially spliced text.
"""

from dataclasses import dataclass, field
from typing import Any

# Standard error codes shared with the tool protocol
E_NOT_FOUND = "E_NOT_FOUND"
E_NOT_UNIQUE = "E_NOT_UNIQUE"
E_VALIDATION = "E_VALIDATION"
E_PERMISSIONS = "E_PERMISSIONS"
E_DEGENERATE = "E_DEGENERATE"
E_TOOL_UNKNOWN = "E_TOOL_UNKNOWN"


@dataclass
class AnchorEditException(Exception):  # noqa: N818
    """Base exception for all anchoredit errors.

    Carries an error code and free-form metadata so callers can report
    failures consistently.
    """

    message: str
    error_code: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return human-readable error message."""
        return self.message

    def __post_init__(self) -> None:
        """Initialize the exception with the message."""
        super().__init__(self.message)


@dataclass
class SnippetNotFoundError(AnchorEditException):
    """No fragment of the snippet anchors a start or end in the text.

    Raised when neither the whole snippet nor any of its subdivisions occurs
    exactly once in the source text.
    """

    snippet_length: int = 0
    fragment_count: int = 0

    def __post_init__(self) -> None:
        """Initialize with matching metadata."""
        if not self.error_code:
            self.error_code = E_NOT_FOUND
        if self.snippet_length:
            self.metadata["snippet_length"] = self.snippet_length
        if self.fragment_count:
            self.metadata["fragment_count"] = self.fragment_count
        super().__post_init__()


@dataclass
class DegenerateInputError(AnchorEditException):
    """Empty snippet or empty search target.

    Raised before any scan so an empty needle never reaches the counter.
    """

    argument: str = ""

    def __post_init__(self) -> None:
        """Initialize with the offending argument name."""
        if not self.error_code:
            self.error_code = E_DEGENERATE
        if self.argument:
            self.metadata["argument"] = self.argument
        super().__post_init__()


@dataclass
class StructuralInvariantError(AnchorEditException):
    """A fragment split does not partition its parent exactly."""

    depth: int = 0
    snippet_start: int = 0

    def __post_init__(self) -> None:
        if not self.error_code:
            self.error_code = E_VALIDATION
        self.metadata["depth"] = self.depth
        self.metadata["snippet_start"] = self.snippet_start
        super().__post_init__()


@dataclass
class WorkspaceSecurityError(AnchorEditException):
    """Error when workspace constraints are violated.

    Raised for path traversal attempts, access outside the workspace root,
    and unresolvable file names.
    """

    path: str = ""
    reason: str = ""

    def __post_init__(self) -> None:
        """Initialize with security-specific metadata."""
        if not self.error_code:
            self.error_code = E_PERMISSIONS
        if self.path:
            self.metadata["path"] = self.path
        if self.reason:
            self.metadata["reason"] = self.reason
        super().__post_init__()


@dataclass
class ConfigurationError(AnchorEditException):
    """Error in engine configuration.

    Raised for invalid config values or unreadable configuration files.
    """

    key: str = ""
    reason: str = ""

    def __post_init__(self) -> None:
        """Initialize with configuration-specific metadata."""
        if not self.error_code:
            self.error_code = E_VALIDATION
        if self.key:
            self.metadata["config_key"] = self.key
        if self.reason:
            self.metadata["reason"] = self.reason
        super().__post_init__()


def format_error_for_user(exception: AnchorEditException) -> str:
    """Format exception for user-friendly display.

    Args:
        exception: The anchoredit exception to format

    Returns:
        Human-readable error message without internal details
    """
    if isinstance(exception, SnippetNotFoundError):
        return f"Could not apply edit: {exception.message}"

    if isinstance(exception, DegenerateInputError):
        if exception.argument:
            return f"Invalid input '{exception.argument}': {exception.message}"
        return f"Invalid input: {exception.message}"

    if isinstance(exception, WorkspaceSecurityError):
        if exception.path:
            return f"Workspace error with path '{exception.path}': {exception.message}"
        return f"Workspace error: {exception.message}"

    if isinstance(exception, ConfigurationError):
        if exception.key:
            return f"Configuration error '{exception.key}': {exception.message}"
        return f"Configuration error: {exception.message}"

    return str(exception.message)


def format_error_for_log(exception: AnchorEditException) -> dict[str, Any]:
    """Format exception for structured logging.

    Args:
        exception: The anchoredit exception to format

    Returns:
        Dictionary with structured error information for logs
    """
    log_data: dict[str, Any] = {
        "error_type": type(exception).__name__,
        "message": exception.message,
        "error_code": exception.error_code,
    }

    if exception.metadata:
        log_data["metadata"] = exception.metadata

    if isinstance(exception, SnippetNotFoundError):
        log_data["snippet_length"] = exception.snippet_length
        log_data["fragment_count"] = exception.fragment_count

    elif isinstance(exception, WorkspaceSecurityError):
        if exception.path:
            log_data["path"] = exception.path
        if exception.reason:
            log_data["reason"] = exception.reason

    elif isinstance(exception, ConfigurationError):
        if exception.key:
            log_data["config_key"] = exception.key
        if exception.reason:
            log_data["reason"] = exception.reason

    return log_data
