"""Tool implementations for anchoredit."""

from anchoredit.tools.base import BaseTool, ToolContext, ToolRegistry
from anchoredit.tools.snippet_edit import SnippetEditTool

__all__ = [
    # Base classes
    "BaseTool",
    "ToolContext",
    "ToolRegistry",
    # File editing
    "SnippetEditTool",
]
