"""
FastAPI/ASGI application entrypoint.

Run with: uvicorn release_delta.api_server.app:app --host 0.0.0.0 --port 8080
"""

from release_delta.api_server.server import app

__all__ = ["app"]
