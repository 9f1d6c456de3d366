"""
Release fetching and size-delta computation.
"""

from release_delta.releases.calculator import compute_deltas
from release_delta.releases.fetcher import AssetMatcher, fetch_releases, is_valid_tag
from release_delta.releases.models import Deltas, ReleaseInfo

__all__ = [
    "AssetMatcher",
    "Deltas",
    "ReleaseInfo",
    "compute_deltas",
    "fetch_releases",
    "is_valid_tag",
]
