"""Core modules for anchoredit.

Exceptions, structured logging, configuration, the tool protocol and
workspace path handling used around the engine.
"""

from .exceptions import (
    # Error codes
    E_DEGENERATE,
    E_NOT_FOUND,
    E_NOT_UNIQUE,
    E_PERMISSIONS,
    E_TOOL_UNKNOWN,
    E_VALIDATION,
    AnchorEditException,
    ConfigurationError,
    DegenerateInputError,
    SnippetNotFoundError,
    StructuralInvariantError,
    WorkspaceSecurityError,
    format_error_for_log,
    format_error_for_user,
)
from .logger import AnchorEditLogger
from .tool_protocol import ToolCall, ToolDefinition, ToolResult
from .workspace import Workspace

__all__ = [
    # Error codes
    "E_DEGENERATE",
    "E_NOT_FOUND",
    "E_NOT_UNIQUE",
    "E_PERMISSIONS",
    "E_TOOL_UNKNOWN",
    "E_VALIDATION",
    # Exception classes
    "AnchorEditException",
    "ConfigurationError",
    "DegenerateInputError",
    "SnippetNotFoundError",
    "StructuralInvariantError",
    "WorkspaceSecurityError",
    # Error formatting utilities
    "format_error_for_log",
    "format_error_for_user",
    # Other core components
    "AnchorEditLogger",
    "ToolCall",
    "ToolDefinition",
    "ToolResult",
    "Workspace",
]
