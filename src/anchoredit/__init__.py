"""
anchoredit

Fuzzy snippet anchor-and-replace: find the exact span of a file that an
approximate, possibly corrupted copy refers to, and replace it.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from anchoredit.core.config import EngineConfig, load_config
from anchoredit.core.exceptions import (
    AnchorEditException,
    ConfigurationError,
    DegenerateInputError,
    SnippetNotFoundError,
    StructuralInvariantError,
    WorkspaceSecurityError,
)
from anchoredit.core.workspace import Workspace
from anchoredit.engine import (
    count_occurrences,
    locate_snippet,
    replace_snippet_in_text,
)
from anchoredit.tools import SnippetEditTool

__all__ = [
    # Version
    "__version__",
    # Engine
    "count_occurrences",
    "locate_snippet",
    "replace_snippet_in_text",
    # Configuration
    "EngineConfig",
    "load_config",
    # Exceptions
    "AnchorEditException",
    "ConfigurationError",
    "DegenerateInputError",
    "SnippetNotFoundError",
    "StructuralInvariantError",
    "WorkspaceSecurityError",
    # Collaborators
    "SnippetEditTool",
    "Workspace",
]
