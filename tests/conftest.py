"""
Pytest fixtures for Release Delta tests. The GitHub API is replaced by an
httpx.MockTransport so tests run without network access.
"""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

FAKE_API_URL = "https://api.github.test"

_ENV_VARS = (
    "GITHUB_TOKEN",
    "RELEASE_DELTA_API_URL",
    "RELEASE_DELTA_TIMEOUT_SEC",
    "RELEASE_DELTA_PER_PAGE",
    "RELEASE_DELTA_ASSET_PROJECT",
    "RELEASE_DELTA_ASSET_SUFFIX",
    "RELEASE_DELTA_STRICT",
    "API_HOST",
    "API_PORT",
)


def make_release(
    tag: str | None,
    size: int | None = None,
    *,
    project: str = "apache_airflow",
    assets: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """GitHub-shaped release dict; with size given, carries one '<project>-<tag>.tar.gz' asset."""
    if assets is None:
        assets = []
        if size is not None:
            assets.append({"name": f"{project}-{tag}.tar.gz", "size": size})
    return {"tag_name": tag, "name": tag, "draft": False, "assets": assets}


class FakeGitHub:
    """Records requests; answers with `releases` as JSON unless `respond` is set."""

    def __init__(self) -> None:
        self.releases: list[dict[str, Any]] = []
        self.requests: list[httpx.Request] = []
        self.respond: Callable[[httpx.Request], httpx.Response] | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.respond is not None:
            return self.respond(request)
        return httpx.Response(200, json=self.releases)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=FAKE_API_URL, transport=httpx.MockTransport(self.handler))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test from default settings."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def airflow_releases() -> list[dict[str, Any]]:
    """Newest-first listing with a pre-release and an untagged-format release mixed in."""
    return [
        make_release("2.10.0", 300),
        make_release("2.10.0rc1", 290),
        make_release("2.9.3", 200),
        make_release("v2.9.2", 190),
        make_release("2.9.1", 100),
    ]


@pytest.fixture
def client(fake_github):
    """FastAPI TestClient with the GitHub client dependency routed to fake_github."""
    from fastapi.testclient import TestClient

    from release_delta.api_server.dependencies import get_github_client
    from release_delta.api_server.server import app

    async def _fake_client():
        async with fake_github.client() as c:
            yield c

    app.dependency_overrides[get_github_client] = _fake_client
    try:
        with TestClient(app) as tc:
            yield tc
    finally:
        app.dependency_overrides.clear()
