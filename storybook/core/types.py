"""
Centralized domain types for the Storybook Generator.

Stories travel over the wire in camelCase (``pageNumber``, ``imagePrompt``,
``imageUrl``), which is also the shape the text model is asked to produce.
The dataclasses here use snake_case and convert at the edges.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Optional


def _page_number(value: Any, default: int) -> int:
    """Read a page number, using the default when it is absent or not numeric."""
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


# =============================================================================
# Story Types
# =============================================================================


@dataclass
class StoryPage:
    """A single page of the storybook."""

    page_number: int  # 1-based reading order
    text: str  # 2-3 sentences of narrative
    image_prompt: str  # Illustration description, distinct from text
    image_url: Optional[str] = None  # Set by the illustration step

    @classmethod
    def from_dict(cls, data: dict[str, Any], default_number: int = 0) -> "StoryPage":
        """
        Build a page from the model's JSON.

        A missing, null or non-numeric pageNumber falls back to default_number.

        Raises:
            ValueError: If text or imagePrompt is missing or empty
        """
        text = data.get("text")
        image_prompt = data.get("imagePrompt")
        if not isinstance(text, str) or not text.strip():
            raise ValueError("Page is missing its text")
        if not isinstance(image_prompt, str) or not image_prompt.strip():
            raise ValueError("Page is missing its imagePrompt")

        return cls(
            page_number=_page_number(data.get("pageNumber"), default_number),
            text=text,
            image_prompt=image_prompt,
            image_url=data.get("imageUrl"),
        )

    def with_image(self, image_url: str) -> "StoryPage":
        """Return a copy of this page with its illustration URL set."""
        return replace(self, image_url=image_url)

    def to_dict(self) -> dict[str, Any]:
        data = {
            "pageNumber": self.page_number,
            "text": self.text,
            "imagePrompt": self.image_prompt,
        }
        if self.image_url is not None:
            data["imageUrl"] = self.image_url
        return data


@dataclass
class Story:
    """A complete story: title, originating prompt and ordered pages."""

    title: str
    prompt: str
    pages: list[StoryPage] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any], prompt: str) -> "Story":
        """
        Build a story skeleton from the model's JSON.

        The ``prompt`` argument always wins over any prompt echoed by the model.

        Raises:
            ValueError: If the title or pages are missing or malformed
        """
        if not isinstance(data, dict):
            raise ValueError("Story JSON must be an object")

        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            raise ValueError("Story is missing its title")

        raw_pages = data.get("pages")
        if not isinstance(raw_pages, list) or not raw_pages:
            raise ValueError("Story has no pages")

        pages = []
        for position, raw_page in enumerate(raw_pages, start=1):
            if not isinstance(raw_page, dict):
                raise ValueError("Page must be an object")
            pages.append(StoryPage.from_dict(raw_page, default_number=position))

        return cls(title=title, prompt=prompt, pages=pages)

    @property
    def is_illustrated(self) -> bool:
        """True when every page has an illustration URL."""
        return all(page.image_url for page in self.pages)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "prompt": self.prompt,
            "pages": [page.to_dict() for page in self.pages],
        }
