"""
Pytest tests for the delta calculator.

Sequences are newest-first, so the oldest release has the largest index and
the range runs from final (newer) down to initial (older).
"""

from __future__ import annotations

import pytest

from release_delta.core.exceptions import InvalidRangeError, VersionNotFoundError
from release_delta.releases.calculator import compute_deltas
from release_delta.releases.models import Deltas, ReleaseInfo

A = ReleaseInfo("3.0.0", 300)
B = ReleaseInfo("2.0.0", 200)
C = ReleaseInfo("1.0.0", 100)
RELEASES = [A, B, C]


def test_full_range_newest_pair_first():
    deltas = compute_deltas(RELEASES, initial_version="1.0.0", final_version="3.0.0")
    assert deltas == [
        Deltas(current="3.0.0", previous="2.0.0", delta=100),
        Deltas(current="2.0.0", previous="1.0.0", delta=100),
    ]


def test_partial_range():
    assert compute_deltas(RELEASES, "2.0.0", "3.0.0") == [Deltas("3.0.0", "2.0.0", 100)]
    assert compute_deltas(RELEASES, "1.0.0", "2.0.0") == [Deltas("2.0.0", "1.0.0", 100)]


def test_same_version_is_empty():
    assert compute_deltas(RELEASES, "2.0.0", "2.0.0") == []


def test_initial_newer_than_final_is_range_error():
    with pytest.raises(InvalidRangeError) as exc_info:
        compute_deltas(RELEASES, initial_version="3.0.0", final_version="1.0.0")
    message = str(exc_info.value)
    assert "'3.0.0'" in message
    assert "'1.0.0'" in message
    assert message.startswith("invalid range:")
    assert exc_info.value.initial_version == "3.0.0"
    assert exc_info.value.final_version == "1.0.0"


def test_negative_delta_when_release_shrinks():
    releases = [ReleaseInfo("1.1.0", 80), ReleaseInfo("1.0.0", 100)]
    assert compute_deltas(releases, "1.0.0", "1.1.0") == [Deltas("1.1.0", "1.0.0", -20)]


def test_deltas_only_between_adjacent_entries():
    # 2.0.0 was filtered out upstream; 3.0.0 is compared directly with 1.0.0
    releases = [A, C]
    assert compute_deltas(releases, "1.0.0", "3.0.0") == [Deltas("3.0.0", "1.0.0", 200)]


# --- Unknown versions default to the newest release (index 0) ---


def test_unknown_initial_with_final_at_index_zero_is_empty():
    assert compute_deltas(RELEASES, "9.9.9", "3.0.0") == compute_deltas(RELEASES, "3.0.0", "3.0.0")
    assert compute_deltas(RELEASES, "9.9.9", "3.0.0") == []


def test_unknown_initial_with_older_final_is_range_error():
    with pytest.raises(InvalidRangeError):
        compute_deltas(RELEASES, "v1.0.0", "2.0.0")


def test_unknown_final_spans_to_newest():
    deltas = compute_deltas(RELEASES, "1.0.0", "typo")
    assert deltas == compute_deltas(RELEASES, "1.0.0", "3.0.0")
    assert len(deltas) == 2


def test_both_unknown_is_empty():
    assert compute_deltas(RELEASES, "x", "y") == []


def test_empty_sequence_is_empty():
    assert compute_deltas([], "1.0.0", "2.0.0") == []


def test_duplicate_version_last_occurrence_wins():
    releases = [ReleaseInfo("2.0.0", 250), ReleaseInfo("2.0.0", 200), C]
    assert compute_deltas(releases, "1.0.0", "2.0.0") == [Deltas("2.0.0", "1.0.0", 100)]


# --- Strict lookup ---


def test_strict_unknown_version_raises():
    with pytest.raises(VersionNotFoundError) as exc_info:
        compute_deltas(RELEASES, "9.9.9", "3.0.0", strict=True)
    assert exc_info.value.version == "9.9.9"
    assert "not found" in str(exc_info.value)


def test_strict_unknown_final_raises():
    with pytest.raises(VersionNotFoundError, match="'0.0.1'"):
        compute_deltas(RELEASES, "1.0.0", "0.0.1", strict=True)


def test_strict_known_versions_match_default_mode():
    assert compute_deltas(RELEASES, "1.0.0", "3.0.0", strict=True) == compute_deltas(
        RELEASES, "1.0.0", "3.0.0"
    )
