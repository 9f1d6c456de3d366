"""
Application-level exceptions.

The API server maps these to status codes: FetchError -> 500,
InvalidRangeError -> 400, VersionNotFoundError -> 404.
"""

from __future__ import annotations


class ReleaseDeltaError(Exception):
    """Base class for all Release Delta errors."""


class FetchError(ReleaseDeltaError):
    """Upstream release listing failed (network, auth, rate limit, malformed payload)."""


class InvalidRangeError(ReleaseDeltaError):
    """Initial version is newer than the final version in the release sequence."""

    def __init__(self, initial_version: str, final_version: str) -> None:
        self.initial_version = initial_version
        self.final_version = final_version
        super().__init__(
            f"invalid range: initial version '{initial_version}' "
            f"must be older than final version '{final_version}'"
        )


class VersionNotFoundError(ReleaseDeltaError):
    """A requested version is not in the filtered release set (strict lookup only)."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"version '{version}' not found in release set")
