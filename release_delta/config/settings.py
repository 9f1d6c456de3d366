"""
Application settings.

A frozen snapshot of the environment taken per call, so tests and
deployments can change variables without a restart of the import graph.
"""

from __future__ import annotations

from dataclasses import dataclass

from release_delta.config import env


@dataclass(frozen=True)
class Settings:
    """Typed service configuration (upstream API, asset naming, bind address)."""

    api_url: str
    github_token: str | None
    timeout_sec: float
    per_page: int
    asset_project: str
    asset_suffix: str
    strict: bool
    api_host: str
    api_port: int


def get_settings() -> Settings:
    """Return the current application settings read from env / .env."""
    return Settings(
        api_url=env.get_api_url(),
        github_token=env.get_github_token(),
        timeout_sec=env.get_timeout_sec(),
        per_page=env.get_per_page(),
        asset_project=env.get_asset_project(),
        asset_suffix=env.get_asset_suffix(),
        strict=env.is_strict_default(),
        api_host=env.get_api_host(),
        api_port=env.get_api_port(),
    )
