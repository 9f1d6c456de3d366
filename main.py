"""
Main entrypoint: Release Delta API server (uvicorn).

Env: API_HOST, API_PORT (default 0.0.0.0:8080), GITHUB_TOKEN, RELEASE_DELTA_* settings,
LOG_LEVEL, LOG_FORMAT. See release_delta/config/env.py.

Equivalent: uvicorn release_delta.api_server.app:app --host 0.0.0.0 --port 8080
"""

import os

# Configure structured JSON logging before other imports that may log
from release_delta.delta_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Run the FastAPI server in the main thread."""
    from release_delta.config import get_settings

    settings = get_settings()

    from release_delta.api_server.app import app
    import uvicorn

    logger.info("server_starting", host=settings.api_host, port=settings.api_port)
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
        # keep the JSON handler installed by delta_logging; http_request lines replace access logs
        log_config=None,
        access_log=False,
    )


if __name__ == "__main__":
    main()
