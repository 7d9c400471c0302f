"""Public entry points of the anchor-and-replace engine.

Each call builds its own fragment tree, annotates it against the text,
selects the two anchors and splices. Nothing is kept between calls.
"""

import logging

from anchoredit.engine.boundaries import select_boundaries
from anchoredit.engine.fragments import DEFAULT_TARGET_DEPTH, build_tree
from anchoredit.engine.matcher import annotate
from anchoredit.engine.splice import splice

logger = logging.getLogger(__name__)


def locate_snippet(
    text: str,
    snippet: str,
    target_depth: int = DEFAULT_TARGET_DEPTH,
    max_workers: int | None = None,
) -> tuple[int, int]:
    """Resolve the span of ``text`` that an approximate snippet refers to.

    Args:
        text: Full original text
        snippet: Approximate copy of a region of ``text``
        target_depth: Maximum subdivision depth
        max_workers: Threads used for fragment matching (None for sequential)

    Returns:
        (start, end) absolute offsets in ``text``

    Raises:
        DegenerateInputError: If snippet is empty
        SnippetNotFoundError: If no fragment anchors the span
    """
    tree = build_tree(snippet, target_depth)
    matches = annotate(tree, text, max_workers=max_workers)
    boundaries = select_boundaries(tree, matches)

    logger.debug(
        "Snippet located",
        extra={
            "kv": {
                "start_offset": boundaries.start_offset,
                "end_offset": boundaries.end_offset,
                "start_depth": boundaries.start.fragment.depth,
                "end_depth": boundaries.end.fragment.depth,
            }
        },
    )
    return boundaries.start_offset, boundaries.end_offset


def replace_snippet_in_text(
    text: str,
    snippet: str,
    replacement: str,
    target_depth: int = DEFAULT_TARGET_DEPTH,
    max_workers: int | None = None,
) -> str:
    """Replace the region of ``text`` that ``snippet`` approximates.

    Either returns the fully spliced text or raises; never a partial result.

    Raises:
        DegenerateInputError: If snippet is empty
        SnippetNotFoundError: If no fragment anchors the span
    """
    start, end = locate_snippet(text, snippet, target_depth=target_depth, max_workers=max_workers)
    return splice(text, start, end, replacement)
