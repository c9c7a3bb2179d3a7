"""
Story generation pipeline.

Writes the story skeleton once, then illustrates every page concurrently.
Text failures are fatal; illustration failures degrade to a fallback URL
for the affected page only.
"""

import asyncio
import time
from typing import Optional

from storybook.api.logging import StoryLogger, story_logger as default_story_logger
from ..modules.page_illustrator import PageIllustrator, fallback_image_url
from ..modules.story_writer import StoryWriter
from ..types import Story, StoryPage

# Request id used when the caller does not supply one (e.g. the CLI)
UNTRACKED_REQUEST = "-"


class StoryGenerator:
    """
    Orchestrate story writing and page illustration.

    Usage:
        generator = StoryGenerator(writer=StoryWriter(text_client),
                                   illustrator=PageIllustrator(image_client))
        story = await generator.generate("A boy finds a portal to another planet")
    """

    def __init__(
        self,
        writer: StoryWriter,
        illustrator: PageIllustrator,
        story_logger: Optional[StoryLogger] = None,
    ):
        self.writer = writer
        self.illustrator = illustrator
        self.story_logger = story_logger or default_story_logger

    async def _illustrate_page(self, page: StoryPage, request_id: str) -> str:
        """Illustrate one page; any escaping exception yields the fallback URL."""
        try:
            return await self.illustrator.generate_image(page.image_prompt)
        except Exception as e:
            self.story_logger.page_fallback(request_id, page.page_number, e)
            return fallback_image_url(page.image_prompt)

    async def illustrate(self, story: Story, request_id: str = UNTRACKED_REQUEST) -> Story:
        """
        Illustrate all pages of a story skeleton.

        All pages are requested at once and joined; results are merged back
        by position, so page count and order are unchanged.

        Returns:
            A new Story with every page's image_url set
        """
        image_urls = await asyncio.gather(
            *(self._illustrate_page(page, request_id) for page in story.pages)
        )
        pages = [page.with_image(url) for page, url in zip(story.pages, image_urls)]
        return Story(title=story.title, prompt=story.prompt, pages=pages)

    async def generate(self, prompt: str, request_id: str = UNTRACKED_REQUEST) -> Story:
        """
        Generate a fully illustrated story.

        Args:
            prompt: Free-text story idea from the user
            request_id: Correlates the log events of one request

        Returns:
            Story with every page illustrated (real or fallback URL)

        Raises:
            StoryGenerationError: If the story text could not be generated
        """
        start_time = time.time()
        skeleton = await self.writer.generate_story(prompt)
        self.story_logger.stage_completed(request_id, "story_text", time.time() - start_time)

        illustration_start = time.time()
        story = await self.illustrate(skeleton, request_id)
        self.story_logger.stage_completed(request_id, "illustration", time.time() - illustration_start)
        return story
