"""Snippet-anchored file editing tool.

Implements SnippetEditTool: locates an approximate snippet in a file and
replaces the region it refers to.
"""

import difflib
from pathlib import Path

from anchoredit.core.exceptions import (
    E_NOT_FOUND,
    E_VALIDATION,
    AnchorEditException,
    WorkspaceSecurityError,
)
from anchoredit.core.tool_protocol import ToolCall, ToolDefinition, ToolResult
from anchoredit.engine import locate_snippet, splice
from anchoredit.tools.base import BaseTool, ToolContext


def _generate_unified_diff(old_content: str, new_content: str, filepath: str) -> list[str]:
    """Generate unified diff between old and new content.

    Args:
        old_content: Original content
        new_content: Modified content
        filepath: Path for diff headers

    Returns:
        List of diff lines
    """
    old_lines = old_content.splitlines(keepends=True)
    new_lines = new_content.splitlines(keepends=True)

    return list(
        difflib.unified_diff(
            old_lines,
            new_lines,
            fromfile=f"a/{filepath}",
            tofile=f"b/{filepath}",
            lineterm="",
        )
    )


def _read_preserving_newlines(path: Path) -> str:
    """Read text without newline translation, so offsets match the file on disk."""
    with path.open(newline="") as f:
        return f.read()


def _write_preserving_newlines(path: Path, content: str) -> None:
    with path.open("w", newline="") as f:
        f.write(content)


class SnippetEditTool(BaseTool):
    """Replace the region of a file that an approximate snippet refers to."""

    async def execute(self, call: ToolCall, context: ToolContext) -> ToolResult:
        """Locate the snippet in the file, splice in the replacement and write back.

        Args:
            call: Tool call with file_path, snippet, replacement, dry_run
            context: Tool execution context

        Returns:
            ToolResult with diff and resolved span on success
        """
        try:
            file_path = call.arguments["file_path"]
            snippet = call.arguments["snippet"]
            replacement = call.arguments["replacement"]
            dry_run = bool(call.arguments.get("dry_run", False))
        except KeyError as e:
            return ToolResult(
                success=False,
                error=f"Missing required argument: {e}",
                error_code=E_VALIDATION,
            )

        if not isinstance(snippet, str) or not isinstance(replacement, str):
            return ToolResult(
                success=False,
                error="snippet and replacement must be strings",
                error_code=E_VALIDATION,
            )

        try:
            abs_path = context.workspace.resolve_existing(file_path)
        except WorkspaceSecurityError as e:
            return ToolResult(success=False, error=str(e), error_code=e.error_code)

        path_obj = Path(abs_path)
        display_path = context.workspace.get_relative(abs_path)

        try:
            old_content = _read_preserving_newlines(path_obj)
        except (OSError, UnicodeDecodeError) as e:
            return ToolResult(
                success=False,
                error=f"Failed to read file: {e}",
                error_code=E_VALIDATION,
            )

        config = context.config
        try:
            with context.logger.operation("replace_snippet", file_path=display_path):
                start, end = locate_snippet(
                    old_content,
                    snippet,
                    target_depth=config.target_depth,
                    max_workers=config.workers_for(len(snippet)),
                )
        except AnchorEditException as e:
            context.logger.failure("Snippet could not be anchored", e, file_path=display_path)
            return ToolResult(
                success=False,
                error=f"Could not apply edit to {display_path}: {e}",
                error_code=e.error_code or E_NOT_FOUND,
                data=e.metadata or None,
            )

        new_content = splice(old_content, start, end, replacement)
        span = {"start": start, "end": end, "replaced_text": old_content[start:end]}

        if not dry_run:
            try:
                if config.write_backup:
                    backup = path_obj.with_name(path_obj.name + ".orig")
                    _write_preserving_newlines(backup, old_content)
                _write_preserving_newlines(path_obj, new_content)
            except OSError as e:
                return ToolResult(
                    success=False,
                    error=f"Failed to write file: {e}",
                    error_code=E_VALIDATION,
                )

        diff_lines = _generate_unified_diff(old_content, new_content, display_path)

        context.logger.info(
            "Snippet replaced", file_path=display_path, start=start, end=end, dry_run=dry_run
        )

        return ToolResult(
            success=True,
            output=(
                f"Dry run, {display_path} left unchanged"
                if dry_run
                else f"File {display_path} has been edited."
            ),
            data=span,
            diffs=[{"path": display_path, "diff": "\n".join(diff_lines)}],
            files_changed=[] if dry_run else [display_path],
        )

    def get_definition(self) -> ToolDefinition:
        return ToolDefinition(
            name="replace_snippet",
            description=(
                "Replace the part of a file that an approximate snippet refers to. "
                "The snippet's first and last characters should be copied faithfully."
            ),
            parameters={
                "type": "object",
                "properties": {
                    "file_path": {"type": "string", "description": "Path to file"},
                    "snippet": {
                        "type": "string",
                        "description": "Approximate copy of the region to replace",
                    },
                    "replacement": {
                        "type": "string",
                        "description": "New content for that region",
                    },
                    "dry_run": {
                        "type": "boolean",
                        "default": False,
                        "description": "Compute the diff without writing the file",
                    },
                },
                "required": ["file_path", "snippet", "replacement"],
            },
            safety={"requires_confirmation": False},
        )
