"""Pydantic models for API requests."""

from typing import Optional

from pydantic import BaseModel, Field


class GenerateStoryRequest(BaseModel):
    """Request body for generating a story.

    ``prompt`` is optional at the schema level so that a missing prompt is
    answered with the API's own 400 error rather than a validation error.
    """

    prompt: Optional[str] = Field(
        default=None,
        description="Story idea from the user",
        examples=["A boy finds a portal to another planet"],
    )
