"""FastAPI dependency injection for provider clients and the generator.

Clients are built once per credential set and reused across requests.
Dependencies return None when a credential is missing; routes check the
settings first and answer with a configuration error.
"""

from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends

from ..config import get_image_client, get_text_client
from ..core.modules import PageIllustrator, StoryWriter
from ..core.programs import StoryGenerator
from .config import ProviderSettings, get_provider_settings


@lru_cache(maxsize=4)
def build_page_illustrator(fal_key: str) -> PageIllustrator:
    """Build the page illustrator for a fal.ai key."""
    return PageIllustrator(get_image_client(fal_key))


@lru_cache(maxsize=4)
def build_story_generator(openai_api_key: str, fal_key: str) -> StoryGenerator:
    """Build the story generator for a pair of provider keys."""
    return StoryGenerator(
        writer=StoryWriter(get_text_client(openai_api_key)),
        illustrator=build_page_illustrator(fal_key),
    )


# Settings - read per request
Settings = Annotated[ProviderSettings, Depends(get_provider_settings)]


def get_page_illustrator(settings: Settings) -> Optional[PageIllustrator]:
    """Get the shared PageIllustrator, or None without a fal.ai key."""
    if not settings.fal_key:
        return None
    return build_page_illustrator(settings.fal_key)


def get_story_generator(settings: Settings) -> Optional[StoryGenerator]:
    """Get the shared StoryGenerator, or None if a key is missing."""
    if not settings.openai_api_key or not settings.fal_key:
        return None
    return build_story_generator(settings.openai_api_key, settings.fal_key)


# Type aliases for cleaner route signatures
Illustrator = Annotated[Optional[PageIllustrator], Depends(get_page_illustrator)]
Generator = Annotated[Optional[StoryGenerator], Depends(get_story_generator)]
