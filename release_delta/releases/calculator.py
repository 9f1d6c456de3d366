"""
Delta calculator — size differences between adjacent releases in a version range.

The release sequence is newest-first (index 0 = most recent), so an older
release has a larger index. The range runs from final_version (newer, smaller
index) down to initial_version (older, larger index).
"""

from __future__ import annotations

from release_delta.core.exceptions import InvalidRangeError, VersionNotFoundError
from release_delta.releases.models import Deltas, ReleaseInfo


def _index_of(releases: list[ReleaseInfo], version: str, strict: bool) -> int:
    """Index of the last release with this exact version; 0 when absent unless strict."""
    found = None
    for index, release in enumerate(releases):
        if release.version == version:
            found = index
    if found is None:
        if strict:
            raise VersionNotFoundError(version)
        # Unknown versions resolve to the newest release
        return 0
    return found


def compute_deltas(
    releases: list[ReleaseInfo],
    initial_version: str,
    final_version: str,
    *,
    strict: bool = False,
) -> list[Deltas]:
    """
    Return one Deltas per adjacent pair between final_version and initial_version.

    Pairs are ordered newest-first. Equal positions give an empty list.

    Raises:
        InvalidRangeError: initial_version is newer than final_version.
        VersionNotFoundError: strict is set and a version is not in releases.
    """
    begin = _index_of(releases, initial_version, strict)
    end = _index_of(releases, final_version, strict)

    if begin < end:
        raise InvalidRangeError(initial_version, final_version)

    deltas: list[Deltas] = []
    for i in range(end + 1, begin + 1):
        curr = releases[i - 1]
        prev = releases[i]
        deltas.append(
            Deltas(current=curr.version, previous=prev.version, delta=curr.size - prev.size)
        )
    return deltas
