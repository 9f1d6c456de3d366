"""
Structured logging for Release Delta.

JSON logs with timestamp, level, event_type and request_id, for both
application and uvicorn loggers.
"""

from release_delta.delta_logging.logger import (
    bind_request,
    clear_request,
    configure_logging,
    get_logger,
)

__all__ = ["bind_request", "clear_request", "configure_logging", "get_logger"]
