"""Recursive bisection of a snippet into a fragment tree.

The tree is stored as an arena of immutable Fragment records laid out in
pre-order, with children referenced by index. Split points are plain
character offsets; the subdivision knows nothing about words or tokens.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from anchoredit.core.exceptions import DegenerateInputError, StructuralInvariantError

logger = logging.getLogger(__name__)

DEFAULT_TARGET_DEPTH = 8


@dataclass(frozen=True)
class Fragment:
    """A contiguous piece of the snippet with its offsets inside the snippet."""

    text: str
    snippet_start: int
    snippet_end: int
    depth: int
    left: int | None = None
    right: int | None = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None


@dataclass
class FragmentTree:
    """Arena of fragments; index 0 is the root and the list is in pre-order."""

    snippet: str
    fragments: list[Fragment]

    @property
    def root(self) -> Fragment:
        return self.fragments[0]

    def __len__(self) -> int:
        return len(self.fragments)

    def __iter__(self) -> Iterator[Fragment]:
        return iter(self.fragments)

    def children(self, fragment: Fragment) -> tuple[Fragment, Fragment] | None:
        """Return the (left, right) children of a fragment, or None for a leaf."""
        if fragment.left is None or fragment.right is None:
            return None
        return self.fragments[fragment.left], self.fragments[fragment.right]

    def flatten(self) -> list[Fragment]:
        """Return every fragment in pre-order."""
        return list(self.fragments)

    @property
    def max_depth(self) -> int:
        return max(fragment.depth for fragment in self.fragments)


def split_in_half(text: str) -> tuple[str, str] | None:
    """Split text at ``len(text) // 2``.

    Returns:
        (left, right), or None when the text is shorter than 2 characters
    """
    if len(text) < 2:
        return None
    half = len(text) // 2
    return text[:half], text[half:]


def likely_max_depth(length: int, target_depth: int) -> int:
    """Predict how deep halving can go before fragments drop below 2 characters.

    Simulates repeated halving of ``length`` and stops at the first step whose
    halved length would be under 2. Never exceeds ``target_depth``.

    Args:
        length: Snippet length
        target_depth: Upper bound on the tree depth

    Returns:
        Depth cap to hand to the builder
    """
    for n in range(target_depth):
        length //= 2
        if length < 2:
            return n
    return target_depth


def build_tree(snippet: str, target_depth: int = DEFAULT_TARGET_DEPTH) -> FragmentTree:
    """Bisect a snippet into a fragment tree.

    Args:
        snippet: Approximate copy of the region to replace
        target_depth: Maximum number of splits along any root-to-leaf path

    Returns:
        FragmentTree rooted at the whole snippet

    Raises:
        DegenerateInputError: If snippet is empty
        StructuralInvariantError: If a split does not partition its parent
    """
    if not snippet:
        raise DegenerateInputError("Snippet must not be empty", argument="snippet")
    if target_depth < 0:
        raise DegenerateInputError(
            f"target_depth must be >= 0, got {target_depth}", argument="target_depth"
        )

    depth_cap = likely_max_depth(len(snippet), target_depth)
    arena: list[Fragment | None] = []

    def build(text: str, snippet_start: int, depth: int) -> int:
        index = len(arena)
        arena.append(None)  # reserved so the arena stays in pre-order

        left_index = right_index = None
        if depth < depth_cap:
            halves = split_in_half(text)
            if halves is None:
                logger.debug(
                    "Stopped fragment tree creation",
                    extra={"kv": {"depth": depth, "snippet_start": snippet_start}},
                )
            else:
                left_text, right_text = halves
                if left_text + right_text != text:
                    raise StructuralInvariantError(
                        "Fragment split does not partition its parent",
                        depth=depth,
                        snippet_start=snippet_start,
                    )
                left_index = build(left_text, snippet_start, depth + 1)
                right_index = build(right_text, snippet_start + len(left_text), depth + 1)

        arena[index] = Fragment(
            text=text,
            snippet_start=snippet_start,
            snippet_end=snippet_start + len(text),
            depth=depth,
            left=left_index,
            right=right_index,
        )
        return index

    build(snippet, 0, 0)

    fragments = [fragment for fragment in arena if fragment is not None]
    logger.debug(
        "Fragment tree built",
        extra={
            "kv": {
                "snippet_length": len(snippet),
                "depth_cap": depth_cap,
                "fragments": len(fragments),
            }
        },
    )
    return FragmentTree(snippet=snippet, fragments=fragments)
