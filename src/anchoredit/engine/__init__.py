"""Fuzzy snippet anchor-and-replace engine.

Resolves an approximate copy of a region of a text to an exact span by
bisecting it into fragments and anchoring on those that occur exactly once.
"""

from anchoredit.engine.boundaries import AnchoredFragment, Boundaries, select_boundaries
from anchoredit.engine.fragments import (
    DEFAULT_TARGET_DEPTH,
    Fragment,
    FragmentTree,
    build_tree,
    likely_max_depth,
)
from anchoredit.engine.matcher import FragmentMatch, annotate
from anchoredit.engine.occurrences import OccurrenceCount, count_occurrences
from anchoredit.engine.replace import locate_snippet, replace_snippet_in_text
from anchoredit.engine.splice import splice

__all__ = [
    "DEFAULT_TARGET_DEPTH",
    # Occurrence counting
    "OccurrenceCount",
    "count_occurrences",
    # Subdivision
    "Fragment",
    "FragmentTree",
    "build_tree",
    "likely_max_depth",
    # Matching
    "FragmentMatch",
    "annotate",
    # Boundary selection
    "AnchoredFragment",
    "Boundaries",
    "select_boundaries",
    # Splicing
    "splice",
    # Entry points
    "locate_snippet",
    "replace_snippet_in_text",
]
