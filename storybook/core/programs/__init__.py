"""End-to-end story generation programs."""

from .story_generator import StoryGenerator

__all__ = ["StoryGenerator"]
