"""Tool protocol core types and helpers."""

from dataclasses import dataclass, field
from typing import Any

from anchoredit.core.exceptions import (
    E_DEGENERATE,
    E_NOT_FOUND,
    E_NOT_UNIQUE,
    E_PERMISSIONS,
    E_TOOL_UNKNOWN,
    E_VALIDATION,
)

__all__ = [
    "E_DEGENERATE",
    "E_NOT_FOUND",
    "E_NOT_UNIQUE",
    "E_PERMISSIONS",
    "E_TOOL_UNKNOWN",
    "E_VALIDATION",
    "ToolCall",
    "ToolDefinition",
    "ToolResult",
    "validate_tool_schema",
]


@dataclass
class ToolCall:
    """Represents a tool call request."""

    id: str
    name: str
    arguments: dict[str, Any]


@dataclass
class ToolResult:
    """Result from tool execution."""

    success: bool
    output: str | None = None
    error: str | None = None
    error_code: str | None = None
    data: dict[str, Any] | None = None
    diffs: list[dict[str, Any]] | None = None
    files_changed: list[str] | None = None


@dataclass
class ToolDefinition:
    """Tool definition with JSON Schema and safety flags."""

    name: str
    description: str
    parameters: dict[str, Any]  # JSON Schema
    safety: dict[str, bool] = field(default_factory=dict)  # requires_confirmation

    def __post_init__(self) -> None:
        """Validate tool definition structure."""
        if not isinstance(self.parameters, dict):
            raise ValueError("Tool parameters must be a dictionary")
        if "type" not in self.parameters:
            raise ValueError("Tool parameters must specify 'type'")

        self.safety.setdefault("requires_confirmation", False)


def validate_tool_schema(tool_def: ToolDefinition) -> bool:
    """Validate tool definition JSON Schema.

    Checked by ToolRegistry.register before a tool is accepted.

    Returns:
        True if valid, False otherwise
    """
    try:
        params = tool_def.parameters

        if not isinstance(params.get("type"), str):
            return False

        if params["type"] == "object":
            if not isinstance(params.get("properties"), dict):
                return False
            required = params.get("required", [])
            if not isinstance(required, list):
                return False
            # Every required argument must be declared
            if any(name not in params["properties"] for name in required):
                return False

        for prop_def in params.get("properties", {}).values():
            if not isinstance(prop_def, dict) or "type" not in prop_def:
                return False

        return True

    except (KeyError, TypeError, AttributeError):
        return False
