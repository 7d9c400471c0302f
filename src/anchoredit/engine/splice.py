"""Substitute a replacement over an absolute span of the source text."""


def splice(source_text: str, start_offset: int, end_offset: int, replacement: str) -> str:
    """Return ``source_text`` with ``[start_offset:end_offset]`` replaced.

    Offsets are trusted as produced by boundary selection; no clamping.
    """
    return source_text[:start_offset] + replacement + source_text[end_offset:]
