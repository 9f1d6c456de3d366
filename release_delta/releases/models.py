"""
Data models for release listing and size deltas.

- ReleaseInfo / Deltas: immutable domain records passed between fetcher,
  calculator and API server.
- GithubRelease / GithubReleaseAsset: validation of the GitHub releases
  listing; unknown fields are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class ReleaseInfo:
    """A release with a strict numeric tag and the byte size of its source archive."""

    version: str
    size: int


@dataclass(frozen=True)
class Deltas:
    """Size difference between two adjacent releases: delta = size(current) - size(previous)."""

    current: str
    previous: str
    delta: int


class GithubReleaseAsset(BaseModel):
    """A single downloadable asset attached to a GitHub release."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    size: int | None = None


class GithubRelease(BaseModel):
    """One entry of GET /repos/{owner}/{repo}/releases."""

    model_config = ConfigDict(extra="ignore")

    tag_name: str | None = None
    assets: list[GithubReleaseAsset] = Field(default_factory=list)
