"""
Release fetcher — GitHub releases listing, tag filter and archive size extraction.

Responsibilities:
- Fetch one page (newest-first) of releases for owner/repo.
- Keep releases whose tag is exactly MAJOR.MINOR.PATCH.
- Take the size of the first asset matching the archive naming convention;
  drop the release when nothing matches or the size is not positive.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

import httpx
from pydantic import TypeAdapter, ValidationError

from release_delta.config.env import (
    DEFAULT_ASSET_PROJECT,
    DEFAULT_ASSET_SUFFIX,
    MAX_PER_PAGE,
)
from release_delta.core.exceptions import FetchError
from release_delta.delta_logging import get_logger
from release_delta.releases.models import GithubRelease, ReleaseInfo

logger = get_logger(__name__)

# ASCII digits only; \d would also accept other Unicode decimal digits
SEMVER_TAG_RE = re.compile(r"^[0-9]+\.[0-9]+\.[0-9]+$")

# (asset_name, version) -> True when the asset is the release's source archive
AssetPredicate = Callable[[str, str], bool]

_RELEASES_ADAPTER = TypeAdapter(list[GithubRelease])


def is_valid_tag(tag: str | None) -> bool:
    """True iff tag is exactly three dot-separated non-negative integers (no 'v', no suffix)."""
    if not tag:
        return False
    return SEMVER_TAG_RE.fullmatch(tag) is not None


@dataclass(frozen=True)
class AssetMatcher:
    """
    Matches assets named like '<project>-<version><suffix>'.

    The name only has to contain that pattern, so 'apache_airflow-2.9.1.tar.gz'
    and 'dist/apache_airflow-2.9.1.tar.gz' both match version 2.9.1.
    """

    project: str = DEFAULT_ASSET_PROJECT
    suffix: str = DEFAULT_ASSET_SUFFIX

    def pattern(self, version: str) -> str:
        return f"{self.project}-{version}{self.suffix}"

    def __call__(self, asset_name: str, version: str) -> bool:
        return self.pattern(version) in asset_name


def select_asset_size(release: GithubRelease, version: str, matcher: AssetPredicate) -> int:
    """Return the size of the first matching asset, or 0 when none matches."""
    for asset in release.assets:
        if asset.name is None or asset.size is None:
            continue
        if matcher(asset.name, version):
            return asset.size
    return 0


def filter_releases(
    releases: list[GithubRelease],
    matcher: AssetPredicate | None = None,
) -> list[ReleaseInfo]:
    """Reduce raw releases to ReleaseInfo, preserving upstream (newest-first) order."""
    matcher = matcher or AssetMatcher()
    out: list[ReleaseInfo] = []
    for release in releases:
        tag = release.tag_name
        if not is_valid_tag(tag):
            continue
        size = select_asset_size(release, tag, matcher)
        if size > 0:
            out.append(ReleaseInfo(version=tag, size=size))
    return out


def _upstream_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return ""
    if isinstance(body, dict):
        return str(body.get("message") or "")
    return ""


def _status_error(resp: httpx.Response) -> FetchError:
    """Describe a non-2xx releases response; rate limiting is called out with its reset time."""
    url = f"{resp.request.method} {resp.request.url}"
    if resp.status_code in (403, 429) and resp.headers.get("X-RateLimit-Remaining") == "0":
        reset = resp.headers.get("X-RateLimit-Reset", "")
        when = ""
        if reset.isdigit():
            when = " until " + datetime.fromtimestamp(int(reset), tz=timezone.utc).isoformat()
        return FetchError(f"{url}: {resp.status_code} API rate limit exceeded{when}")
    message = _upstream_message(resp)
    detail = f"{resp.status_code} {message}".strip() if message else f"{resp.status_code} {resp.reason_phrase}"
    return FetchError(f"{url}: {detail}")


async def list_github_releases(
    client: httpx.AsyncClient,
    owner: str,
    repo: str,
    *,
    per_page: int = MAX_PER_PAGE,
) -> list[GithubRelease]:
    """GET /repos/{owner}/{repo}/releases (single page); raise FetchError on any failure."""
    path = f"/repos/{owner}/{repo}/releases"
    try:
        resp = await client.get(path, params={"per_page": per_page})
    except httpx.HTTPError as e:
        raise FetchError(f"GET {path}: {e}") from e
    if resp.is_error:
        raise _status_error(resp)
    try:
        payload: Any = resp.json()
    except ValueError as e:
        raise FetchError(f"GET {path}: invalid JSON in response: {e}") from e
    try:
        return _RELEASES_ADAPTER.validate_python(payload)
    except ValidationError as e:
        raise FetchError(f"GET {path}: unexpected releases payload: {e}") from e


async def fetch_releases(
    client: httpx.AsyncClient,
    owner: str,
    repo: str,
    *,
    per_page: int = MAX_PER_PAGE,
    matcher: AssetPredicate | None = None,
) -> list[ReleaseInfo]:
    """
    Fetch the most recent releases of owner/repo and keep the measurable ones.

    Args:
        client: httpx client whose base_url points at the GitHub REST API.
        owner, repo: repository identity; not validated locally.
        per_page: number of releases requested (single page, no pagination).
        matcher: asset predicate; defaults to the configured-project AssetMatcher().

    Returns:
        ReleaseInfo list, newest-first, each with size > 0.

    Raises:
        FetchError: transport, status or payload failure. Not retried.
    """
    raw = await list_github_releases(client, owner, repo, per_page=per_page)
    releases = filter_releases(raw, matcher)
    logger.info(
        "releases_fetched",
        owner=owner,
        repo=repo,
        received=len(raw),
        kept=len(releases),
    )
    return releases
