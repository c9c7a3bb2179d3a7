"""Structured logging infrastructure for the API layer.

Provides JSON-formatted logging for production and human-readable
logging for development, plus a StoryLogger helper for generation events.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

# Extra record attributes copied into JSON output when present
STRUCTURED_FIELDS = (
    "request_id",
    "stage",
    "duration",
    "page_number",
    "page_count",
    "error_type",
)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in STRUCTURED_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def configure_logging(json_format: bool = True, level: int = logging.INFO) -> None:
    """Configure structured logging for the application."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    root_logger.addHandler(handler)


class StoryLogger:
    """Logger for story generation requests with structured fields."""

    def __init__(self):
        self.logger = logging.getLogger("story_generation")

    def generation_started(self, request_id: str, prompt: str) -> None:
        self.logger.info(
            f"Story generation started: {prompt[:100]}",
            extra={"request_id": request_id, "stage": "started"},
        )

    def stage_completed(self, request_id: str, stage: str, duration: Optional[float] = None) -> None:
        extra = {"request_id": request_id, "stage": stage}
        if duration is not None:
            extra["duration"] = round(duration, 2)
        self.logger.info(f"Stage completed: {stage}", extra=extra)

    def page_fallback(self, request_id: str, page_number: int, error: Exception) -> None:
        self.logger.warning(
            f"Page {page_number} illustration failed, using fallback URL: {error}",
            extra={
                "request_id": request_id,
                "stage": "illustration",
                "page_number": page_number,
                "error_type": type(error).__name__,
            },
            exc_info=error,
        )

    def generation_completed(self, request_id: str, page_count: int, duration: float) -> None:
        self.logger.info(
            "Story generation completed",
            extra={
                "request_id": request_id,
                "stage": "completed",
                "page_count": page_count,
                "duration": round(duration, 2),
            },
        )

    def generation_failed(self, request_id: str, error: Exception, stage: Optional[str] = None) -> None:
        extra = {"request_id": request_id, "stage": stage or "failed", "error_type": type(error).__name__}
        self.logger.error(f"Story generation failed: {error}", extra=extra, exc_info=error)

    def request_rejected(self, request_id: str, reason: str) -> None:
        self.logger.warning(
            f"Request rejected: {reason}",
            extra={"request_id": request_id, "stage": "validation"},
        )


# Global story logger instance
story_logger = StoryLogger()
