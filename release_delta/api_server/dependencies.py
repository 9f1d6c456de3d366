"""
FastAPI dependencies: settings snapshot and the per-request GitHub client.
"""

from __future__ import annotations

from typing import AsyncIterator

import httpx
from fastapi import Depends

from release_delta import __version__
from release_delta.config import Settings, get_settings

GITHUB_API_VERSION = "2022-11-28"


def get_app_settings() -> Settings:
    """Dependency: settings read from env for this request."""
    return get_settings()


def build_github_headers(settings: Settings) -> dict[str, str]:
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": GITHUB_API_VERSION,
        "User-Agent": f"release-delta/{__version__}",
    }
    if settings.github_token:
        headers["Authorization"] = f"Bearer {settings.github_token}"
    return headers


async def get_github_client(
    settings: Settings = Depends(get_app_settings),
) -> AsyncIterator[httpx.AsyncClient]:
    """Dependency: GitHub API client scoped to one request; closed when the response is sent."""
    async with httpx.AsyncClient(
        base_url=settings.api_url,
        headers=build_github_headers(settings),
        timeout=httpx.Timeout(settings.timeout_sec),
    ) as client:
        yield client
