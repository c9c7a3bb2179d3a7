"""Pydantic models for API requests and responses."""

from .requests import GenerateStoryRequest
from .responses import (
    StoryResponse,
    StoryPageResponse,
    ErrorResponse,
    FalTestResponse,
    FalTestErrorResponse,
)

__all__ = [
    "GenerateStoryRequest",
    "StoryResponse",
    "StoryPageResponse",
    "ErrorResponse",
    "FalTestResponse",
    "FalTestErrorResponse",
]
