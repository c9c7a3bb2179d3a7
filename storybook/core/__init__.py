"""Core story generation pipeline."""

from .errors import StoryGenerationError
from .types import Story, StoryPage

__all__ = ["Story", "StoryPage", "StoryGenerationError"]
