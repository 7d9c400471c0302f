"""Pick the fragments that anchor the start and end of the replacement span."""

from dataclasses import dataclass

from anchoredit.core.exceptions import SnippetNotFoundError
from anchoredit.engine.fragments import Fragment, FragmentTree
from anchoredit.engine.matcher import FragmentMatch


@dataclass(frozen=True)
class AnchoredFragment:
    """A uniquely matched fragment together with its match."""

    fragment: Fragment
    match: FragmentMatch


@dataclass(frozen=True)
class Boundaries:
    """Start and end anchors of a resolved snippet."""

    start: AnchoredFragment
    end: AnchoredFragment

    @property
    def start_offset(self) -> int:
        """Absolute start of the span to replace.

        Adds the fragment's snippet offset rather than subtracting it. On the
        left spine ``snippet_start`` is 0 and both readings agree; off the
        spine this lands after the anchor, not before it.
        """
        return self.start.match.match_start + self.start.fragment.snippet_start

    @property
    def end_offset(self) -> int:
        """Absolute end of the span to replace."""
        return self.end.match.match_end


def select_boundaries(tree: FragmentTree, matches: list[FragmentMatch]) -> Boundaries:
    """Reduce an annotated tree to a start anchor and an end anchor.

    The start anchor is the matched fragment beginning earliest in the
    snippet, the end anchor the one ending latest. Ties prefer the smaller
    depth, i.e. the larger fragment.

    Args:
        tree: Fragment tree built from the snippet
        matches: Annotations aligned with ``tree.fragments``

    Returns:
        Boundaries holding both anchors

    Raises:
        SnippetNotFoundError: If no fragment matches uniquely
    """
    if len(matches) != len(tree):
        raise ValueError(f"Expected {len(tree)} matches, got {len(matches)}")

    candidates = [
        AnchoredFragment(fragment=fragment, match=match)
        for fragment, match in zip(tree.fragments, matches, strict=True)
        if match.has_unique_match
    ]

    if not candidates:
        raise SnippetNotFoundError(
            "Could not find matching nodes",
            snippet_length=len(tree.snippet),
            fragment_count=len(tree),
        )

    start = min(candidates, key=lambda c: (c.fragment.snippet_start, c.fragment.depth))
    end = min(candidates, key=lambda c: (-c.fragment.snippet_end, c.fragment.depth))

    return Boundaries(start=start, end=end)
