"""
Configuration module for the Storybook Generator.

Re-exports provider and story configuration.
"""

from .llm import TEXT_CONSTANTS, LLM_TIMEOUT, get_text_client, get_text_model
from .story import STORY_CONSTANTS
from .image import (
    IMAGE_CONSTANTS,
    IMAGE_TIMEOUT,
    get_image_client,
    extract_image_url,
)

__all__ = [
    # LLM
    "TEXT_CONSTANTS",
    "LLM_TIMEOUT",
    "get_text_client",
    "get_text_model",
    # Story
    "STORY_CONSTANTS",
    # Image
    "IMAGE_CONSTANTS",
    "IMAGE_TIMEOUT",
    "get_image_client",
    "extract_image_url",
]
