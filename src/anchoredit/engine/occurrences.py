"""Overlapping exact-substring counting."""

from dataclasses import dataclass

from anchoredit.core.exceptions import DegenerateInputError


@dataclass(frozen=True)
class OccurrenceCount:
    """Result of scanning a source for a target substring.

    ``position`` is only set when ``count == 1``.
    """

    count: int
    position: int | None = None

    @property
    def is_unique(self) -> bool:
        return self.count == 1


def count_occurrences(source: str, target: str) -> OccurrenceCount:
    """Count every index at which ``target`` occurs in ``source``.

    Occurrences may overlap: after a hit at ``i`` the scan resumes at ``i + 1``,
    so ``count_occurrences("aaa", "aa")`` reports two.

    Args:
        source: Text to scan
        target: Non-empty substring to look for

    Returns:
        OccurrenceCount with the total and, if unique, the start index

    Raises:
        DegenerateInputError: If target is empty
    """
    if not target:
        raise DegenerateInputError("Cannot count occurrences of an empty string", argument="target")

    count = 0
    first_position = source.find(target)
    position = first_position

    while position != -1:
        count += 1
        position = source.find(target, position + 1)

    return OccurrenceCount(count=count, position=first_position if count == 1 else None)
