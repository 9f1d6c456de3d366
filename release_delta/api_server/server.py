"""
FastAPI server — release size deltas over the GitHub releases API.

Exposes GET /{owner}/{repo}/delta?initial=<version>&final=<version> returning
the size difference of each adjacent release pair in the range. Errors are
plain text; successful responses are a JSON array of {Current, Previous, Delta}.
"""

from __future__ import annotations

import asyncio
import contextlib
from contextlib import asynccontextmanager
from typing import Any, Awaitable, TypeVar

import httpx
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel, Field

from release_delta import __version__
from release_delta.api_server.dependencies import get_app_settings, get_github_client
from release_delta.api_server.middleware import RequestLoggingMiddleware
from release_delta.config import Settings, get_settings
from release_delta.config.env import parse_bool
from release_delta.core.exceptions import FetchError, InvalidRangeError, VersionNotFoundError
from release_delta.delta_logging import get_logger
from release_delta.releases.calculator import compute_deltas
from release_delta.releases.fetcher import AssetMatcher, fetch_releases
from release_delta.releases.models import Deltas

logger = get_logger(__name__)

T = TypeVar("T")

# How often the handler checks whether the caller went away during the upstream call
DISCONNECT_POLL_SEC = 0.1
# nginx convention: client closed request
STATUS_CLIENT_CLOSED_REQUEST = 499

MISSING_VERSIONS_DETAIL = "Missing query parameters 'initial' or 'final'"


class ClientDisconnected(Exception):
    """The caller closed the connection before the response was ready."""


# -----------------------------------------------------------------------------
# Response models
# -----------------------------------------------------------------------------


class DeltaResponse(BaseModel):
    """One element of the GET /{owner}/{repo}/delta response array."""

    current: str = Field(..., serialization_alias="Current", description="Newer release version")
    previous: str = Field(..., serialization_alias="Previous", description="Older adjacent release version")
    delta: int = Field(..., serialization_alias="Delta", description="size(current) - size(previous) in bytes")

    @classmethod
    def from_deltas(cls, d: Deltas) -> "DeltaResponse":
        return cls(current=d.current, previous=d.previous, delta=d.delta)


# -----------------------------------------------------------------------------
# Client disconnect handling
# -----------------------------------------------------------------------------


async def _wait_for_disconnect(request: Request) -> None:
    while not await request.is_disconnected():
        await asyncio.sleep(DISCONNECT_POLL_SEC)


async def run_until_disconnect(request: Request, work: Awaitable[T]) -> T:
    """Await work; cancel it and raise ClientDisconnected if the caller disconnects first."""
    task = asyncio.ensure_future(work)
    watcher = asyncio.ensure_future(_wait_for_disconnect(request))
    try:
        await asyncio.wait({task, watcher}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        raise
    finally:
        watcher.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await watcher
    if task.done():
        return task.result()
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task
    raise ClientDisconnected()


# -----------------------------------------------------------------------------
# App and routes
# -----------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(
        "api_ready",
        api_url=settings.api_url,
        authenticated=settings.github_token is not None,
        asset_project=settings.asset_project,
        asset_suffix=settings.asset_suffix,
        strict=settings.strict,
        timeout_sec=settings.timeout_sec,
    )
    yield
    logger.info("api_stopped")


app = FastAPI(
    title="Release Delta API",
    description="Size deltas between consecutive semantic-versioned GitHub releases.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness probe: API is up."""
    return {"status": "ok"}


@app.get("/{owner}/{repo}/delta", response_model=list[DeltaResponse])
async def get_delta(
    request: Request,
    owner: str,
    repo: str,
    initial: str | None = None,
    final: str | None = None,
    strict: str | None = None,
    project: str | None = None,
    settings: Settings = Depends(get_app_settings),
    client: httpx.AsyncClient = Depends(get_github_client),
) -> Response:
    """
    Return the size delta of each adjacent release pair from final (newer) down to initial (older).

    Query:
        initial, final: required release versions; unknown versions resolve to the
            newest release unless strict lookup is on.
        strict: optional bool; reject versions missing from the release set (404).
        project: optional override of the asset archive project name.
    """
    if not initial or not final:
        raise HTTPException(status_code=400, detail=MISSING_VERSIONS_DETAIL)

    strict_lookup = parse_bool(strict, default=settings.strict)
    matcher = AssetMatcher(
        project=(project or "").strip() or settings.asset_project,
        suffix=settings.asset_suffix,
    )

    try:
        releases = await run_until_disconnect(
            request,
            fetch_releases(client, owner, repo, per_page=settings.per_page, matcher=matcher),
        )
    except ClientDisconnected:
        logger.info("delta_client_disconnected", owner=owner, repo=repo)
        return Response(status_code=STATUS_CLIENT_CLOSED_REQUEST)

    deltas = compute_deltas(releases, initial, final, strict=strict_lookup)
    logger.info(
        "deltas_computed",
        owner=owner,
        repo=repo,
        initial=initial,
        final=final,
        count=len(deltas),
    )

    try:
        return JSONResponse(
            status_code=200,
            content=[DeltaResponse.from_deltas(d).model_dump(by_alias=True) for d in deltas],
        )
    except (TypeError, ValueError) as e:
        logger.exception("delta_encode_failed", error=str(e))
        return PlainTextResponse(f"Failed to encode response: {e}", status_code=500)


# -----------------------------------------------------------------------------
# Error responses (plain text)
# -----------------------------------------------------------------------------


@app.exception_handler(FetchError)
def fetch_error_handler(request: Request, exc: FetchError) -> PlainTextResponse:
    logger.error("releases_fetch_failed", path=request.url.path, error=str(exc))
    return PlainTextResponse(f"Failed to fetch releases: {exc}", status_code=500)


@app.exception_handler(InvalidRangeError)
def invalid_range_handler(request: Request, exc: InvalidRangeError) -> PlainTextResponse:
    logger.warning(
        "delta_range_error",
        initial=exc.initial_version,
        final=exc.final_version,
    )
    return PlainTextResponse(str(exc), status_code=400)


@app.exception_handler(VersionNotFoundError)
def version_not_found_handler(request: Request, exc: VersionNotFoundError) -> PlainTextResponse:
    logger.warning("delta_version_not_found", version=exc.version)
    return PlainTextResponse(str(exc), status_code=404)


@app.exception_handler(HTTPException)
def http_exception_handler(request: Any, exc: HTTPException) -> PlainTextResponse:
    """Plain text error body for HTTPException, matching the domain error responses."""
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)
