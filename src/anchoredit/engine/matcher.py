"""Annotate every fragment with whether it occurs exactly once in the source."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from anchoredit.engine.fragments import Fragment, FragmentTree
from anchoredit.engine.occurrences import count_occurrences

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FragmentMatch:
    """Match annotation for one fragment.

    ``match_start``/``match_end`` are absolute offsets in the source text and
    only meaningful when ``has_unique_match`` is true.
    """

    has_unique_match: bool = False
    match_start: int = 0
    match_end: int = 0


NO_MATCH = FragmentMatch()


def match_fragment(fragment: Fragment, source_text: str) -> FragmentMatch:
    """Test a single fragment against the source text."""
    result = count_occurrences(source_text, fragment.text)
    if not result.is_unique or result.position is None:
        return NO_MATCH
    return FragmentMatch(
        has_unique_match=True,
        match_start=result.position,
        match_end=result.position + len(fragment.text),
    )


def annotate(
    tree: FragmentTree, source_text: str, max_workers: int | None = None
) -> list[FragmentMatch]:
    """Match every fragment of the tree against the source text.

    Fragments are independent, so with ``max_workers`` > 1 the work is spread
    over a thread pool. Output order always follows the tree's arena order.

    Args:
        tree: Fragment tree built from the snippet
        source_text: Full original text
        max_workers: Thread count, or None/1 for a sequential scan

    Returns:
        One FragmentMatch per fragment, aligned with ``tree.fragments``
    """
    fragments = tree.flatten()

    if max_workers is not None and max_workers > 1 and len(fragments) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            matches = list(pool.map(lambda f: match_fragment(f, source_text), fragments))
    else:
        matches = [match_fragment(fragment, source_text) for fragment in fragments]

    logger.debug(
        "Fragments annotated",
        extra={
            "kv": {
                "fragments": len(fragments),
                "unique": sum(1 for m in matches if m.has_unique_match),
                "max_workers": max_workers,
            }
        },
    )
    return matches
