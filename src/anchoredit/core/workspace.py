"""Workspace sandboxing and path resolution.

Keeps every file the edit tool touches inside one root directory, and
resolves bare file names by searching the tree when they are not found
where given.
"""

from pathlib import Path

from anchoredit.core.exceptions import (
    E_NOT_FOUND,
    E_NOT_UNIQUE,
    E_PERMISSIONS,
    E_VALIDATION,
    WorkspaceSecurityError,
)

IGNORED_DIRECTORIES = frozenset({"node_modules", ".git", "__pycache__"})


class Workspace:
    """Manages workspace sandboxing and path validation."""

    def __init__(self, root_path: str) -> None:
        """Initialize workspace with root path.

        Args:
            root_path: Absolute path to workspace root directory

        Raises:
            WorkspaceSecurityError: If root_path is not absolute
        """
        path_obj = Path(root_path)
        if not path_obj.is_absolute():
            raise WorkspaceSecurityError(
                f"Workspace root must be absolute: {root_path}",
                path=root_path,
                reason="not_absolute",
                error_code=E_VALIDATION,
            )

        self.root_path = path_obj.resolve()
        self.root_path.mkdir(parents=True, exist_ok=True)

        # Resolved again so a symlinked root compares correctly
        self._real_root = self.root_path.resolve()

    def resolve_path(self, path: str) -> str:
        """Convert relative/absolute path to absolute within workspace root.

        Raises:
            WorkspaceSecurityError: If resolved path is outside workspace
        """
        if not path:
            raise WorkspaceSecurityError(
                "Empty path not allowed", path=path, error_code=E_VALIDATION
            )

        if path.startswith("~"):
            raise WorkspaceSecurityError(
                "Home directory paths not allowed",
                path=path,
                reason="home_expansion",
                error_code=E_PERMISSIONS,
            )

        path_obj = Path(path)

        if path_obj.is_absolute():
            resolved = path_obj.resolve()
        else:
            resolved = (self.root_path / path_obj).resolve()

        if not self.is_path_safe(str(resolved)):
            raise WorkspaceSecurityError(
                f"Path outside workspace: {path} -> {resolved}",
                path=path,
                reason="outside_workspace",
                error_code=E_PERMISSIONS,
            )

        return str(resolved)

    def resolve_existing(self, path: str) -> str:
        """Resolve a path to an existing file, searching the workspace if needed.

        Single quotes are stripped first and a leading ``/`` that points outside
        the workspace is dropped. When the path does not exist as
        given, ``**/<path>`` is globbed under the root; exactly one hit is
        accepted.

        Returns:
            Absolute path to an existing file

        Raises:
            WorkspaceSecurityError: If the path escapes the workspace, matches
                several files (E_NOT_UNIQUE) or none (E_NOT_FOUND)
        """
        cleaned = path.replace("'", "")
        if cleaned.startswith("/") and not self.is_path_safe(cleaned):
            # Rooted paths from callers are taken as workspace-relative
            cleaned = cleaned.lstrip("/")
        resolved = self.resolve_path(cleaned)

        if Path(resolved).is_file():
            return resolved

        candidates = [] if Path(cleaned).is_absolute() else self.find_files(cleaned)

        if len(candidates) == 1:
            return candidates[0]

        if len(candidates) > 1:
            raise WorkspaceSecurityError(
                f"Multiple files found for {path}",
                path=path,
                reason="ambiguous",
                error_code=E_NOT_UNIQUE,
                metadata={"candidates": [self.get_relative(c) for c in candidates]},
            )

        raise WorkspaceSecurityError(
            f"File not found: {path}",
            path=path,
            reason="not_found",
            error_code=E_NOT_FOUND,
        )

    def find_files(self, name: str) -> list[str]:
        """Find files matching ``**/<name>`` under the root, skipping ignored directories."""
        results = []
        try:
            for item in self.root_path.glob(f"**/{name}"):
                relative_parts = item.relative_to(self.root_path).parts
                if IGNORED_DIRECTORIES.intersection(relative_parts):
                    continue
                if item.is_file() and self.is_path_safe(str(item)):
                    results.append(str(item.resolve()))
        except (OSError, ValueError):
            return []
        return sorted(results)

    def is_path_safe(self, abs_path: str) -> bool:
        """Check if absolute path is within workspace root."""
        if not abs_path:
            return False

        try:
            Path(abs_path).resolve().relative_to(self._real_root)
            return True
        except (OSError, ValueError):
            return False

    def get_relative(self, abs_path: str) -> str:
        """Get workspace-relative path for display.

        Raises:
            WorkspaceSecurityError: If path is outside workspace
        """
        if not self.is_path_safe(abs_path):
            raise WorkspaceSecurityError(
                f"Path outside workspace: {abs_path}",
                path=abs_path,
                reason="outside_workspace",
                error_code=E_PERMISSIONS,
            )

        return str(Path(abs_path).resolve().relative_to(self._real_root))
