"""Provider-facing modules: story writing and page illustration."""

from .story_writer import StoryWriter, extract_story_json
from .page_illustrator import PageIllustrator, fallback_image_url

__all__ = [
    "StoryWriter",
    "extract_story_json",
    "PageIllustrator",
    "fallback_image_url",
]
