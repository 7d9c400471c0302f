"""Unit tests for overlapping occurrence counting."""

import pytest

from anchoredit.core.exceptions import E_DEGENERATE, DegenerateInputError
from anchoredit.engine.occurrences import OccurrenceCount, count_occurrences


def test_no_match():
    """Test a missing target reports zero and no position."""
    result = count_occurrences("hello world", "x")
    assert result.count == 0
    assert result.position is None
    assert result.is_unique is False


def test_unique_match_in_middle():
    result = count_occurrences("hello world", "world")
    assert result == OccurrenceCount(count=1, position=6)
    assert result.is_unique is True


def test_unique_match_at_start():
    """Test a unique match at index 0 still reports its position."""
    result = count_occurrences("hello world", "hello")
    assert result.count == 1
    assert result.position == 0


def test_whole_source_matches():
    result = count_occurrences("hello world", "hello world")
    assert result.count == 1
    assert result.position == 0


def test_multiple_matches_have_no_position():
    result = count_occurrences("hello world", "o")
    assert result.count == 2
    assert result.position is None


def test_overlapping_matches_are_counted():
    """Test the scan resumes one character after each hit."""
    assert count_occurrences("aaa", "aa").count == 2
    assert count_occurrences("aaaa", "aa").count == 3
    assert count_occurrences("abababa", "aba").count == 3


def test_target_longer_than_source():
    result = count_occurrences("abc", "abcd")
    assert result.count == 0
    assert result.position is None


def test_empty_source():
    assert count_occurrences("", "a").count == 0


def test_empty_target_rejected():
    """Test an empty target is rejected instead of scanning forever."""
    with pytest.raises(DegenerateInputError) as exc_info:
        count_occurrences("hello", "")

    assert exc_info.value.error_code == E_DEGENERATE
    assert exc_info.value.argument == "target"


@pytest.mark.parametrize(
    "source,target,position",
    [
        ("line one\nline two\n", "two", 14),
        ("def foo():\n    pass\n", "pass", 15),
        ("αβγδ", "γ", 2),
    ],
)
def test_unique_position_matches_str_find(source, target, position):
    result = count_occurrences(source, target)
    assert result.count == 1
    assert result.position == position == source.find(target)
