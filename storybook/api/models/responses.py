"""Pydantic models for API responses.

Field names are camelCase on the wire.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ...core.types import Story


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StoryPageResponse(CamelModel):
    """A single illustrated page."""

    page_number: int
    text: str
    image_prompt: str
    image_url: Optional[str] = None


class StoryResponse(CamelModel):
    """A complete illustrated story."""

    title: str
    prompt: str
    pages: list[StoryPageResponse]

    @classmethod
    def from_story(cls, story: Story) -> "StoryResponse":
        return cls(
            title=story.title,
            prompt=story.prompt,
            pages=[
                StoryPageResponse(
                    page_number=page.page_number,
                    text=page.text,
                    image_prompt=page.image_prompt,
                    image_url=page.image_url,
                )
                for page in story.pages
            ],
        )


class ErrorResponse(BaseModel):
    """Error body returned for any failed request."""

    error: str


class FalTestResponse(CamelModel):
    """Result of the image generation diagnostic."""

    success: bool = True
    image_url: str
    message: str


class FalTestErrorResponse(BaseModel):
    """Failure of the image generation diagnostic."""

    error: str
    details: Optional[str] = None
