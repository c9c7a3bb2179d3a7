"""Unit tests for the StoryGenerator pipeline."""

import asyncio
import pytest
from unittest.mock import AsyncMock, MagicMock

from storybook.api.logging import StoryLogger
from storybook.core.errors import StoryGenerationError
from storybook.core.modules import PageIllustrator, StoryWriter, fallback_image_url
from storybook.core.programs import StoryGenerator
from storybook.core.types import Story, StoryPage


PROMPT = "A boy finds a portal to another planet"


def _skeleton(page_count):
    return Story(
        title="Counting Stars",
        prompt=PROMPT,
        pages=[
            StoryPage(page_number=n, text=f"Page {n} text.", image_prompt=f"Scene number {n}")
            for n in range(1, page_count + 1)
        ],
    )


def _generator(skeleton, illustrator):
    writer = AsyncMock(spec=StoryWriter)
    writer.generate_story.return_value = skeleton
    return StoryGenerator(writer=writer, illustrator=illustrator), writer


class TestGenerate:
    """Tests for StoryGenerator.generate()."""

    @pytest.mark.asyncio
    async def test_every_page_gets_provider_url(self, story_generator, mock_image_client):
        story = await story_generator.generate(PROMPT)

        assert story.prompt == PROMPT
        assert story.title
        assert len(story.pages) == 2
        assert all(page.image_url == "https://fal.media/files/generated.png" for page in story.pages)
        assert mock_image_client.run.await_count == 2

    @pytest.mark.asyncio
    async def test_writer_called_once(self, story_generator, mock_text_client):
        await story_generator.generate(PROMPT)

        assert mock_text_client.chat.completions.create.await_count == 1

    @pytest.mark.asyncio
    async def test_image_failure_degrades_to_fallback(self, story_writer, failing_image_client):
        generator = StoryGenerator(writer=story_writer, illustrator=PageIllustrator(failing_image_client))

        story = await generator.generate(PROMPT)

        assert len(story.pages) == 2
        for page in story.pages:
            assert page.image_url == fallback_image_url(page.image_prompt)

    @pytest.mark.asyncio
    async def test_text_failure_propagates_without_illustration(self):
        writer = AsyncMock(spec=StoryWriter)
        writer.generate_story.side_effect = StoryGenerationError()
        illustrator = AsyncMock(spec=PageIllustrator)
        generator = StoryGenerator(writer=writer, illustrator=illustrator)

        with pytest.raises(StoryGenerationError):
            await generator.generate(PROMPT)

        illustrator.generate_image.assert_not_called()


class TestIllustrate:
    """Tests for the per-page fan-out and merge."""

    @pytest.mark.asyncio
    async def test_preserves_page_count_and_order(self):
        illustrator = AsyncMock(spec=PageIllustrator)
        illustrator.generate_image.side_effect = lambda prompt: f"https://img/{prompt.replace(' ', '-')}"
        generator, _ = _generator(_skeleton(6), illustrator)

        story = await generator.generate(PROMPT)

        assert [p.page_number for p in story.pages] == [1, 2, 3, 4, 5, 6]
        assert [p.image_url for p in story.pages] == [
            f"https://img/Scene-number-{n}" for n in range(1, 7)
        ]

    @pytest.mark.asyncio
    async def test_unexpected_exception_only_affects_its_page(self):
        async def flaky(prompt):
            if prompt == "Scene number 2":
                raise RuntimeError("socket closed")
            return f"https://img/{prompt[-1]}"

        illustrator = MagicMock(spec=PageIllustrator)
        illustrator.generate_image = flaky
        generator, _ = _generator(_skeleton(3), illustrator)

        story = await generator.generate(PROMPT)

        assert story.pages[0].image_url == "https://img/1"
        assert story.pages[1].image_url == fallback_image_url("Scene number 2")
        assert story.pages[2].image_url == "https://img/3"

    @pytest.mark.asyncio
    async def test_pages_are_requested_concurrently(self):
        in_flight = 0
        max_in_flight = 0

        async def slow(prompt):
            nonlocal in_flight, max_in_flight
            in_flight += 1
            max_in_flight = max(max_in_flight, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return "https://img/x"

        illustrator = MagicMock(spec=PageIllustrator)
        illustrator.generate_image = slow
        generator, _ = _generator(_skeleton(5), illustrator)

        await generator.generate(PROMPT)

        assert max_in_flight == 5

    @pytest.mark.asyncio
    async def test_skeleton_is_not_mutated(self):
        skeleton = _skeleton(2)
        illustrator = AsyncMock(spec=PageIllustrator)
        illustrator.generate_image.return_value = "https://img/x"
        generator, _ = _generator(skeleton, illustrator)

        story = await generator.generate(PROMPT)

        assert story.is_illustrated
        assert all(page.image_url is None for page in skeleton.pages)


class TestGenerationEvents:
    """Tests for the log events emitted while generating."""

    @pytest.mark.asyncio
    async def test_failed_page_logs_fallback_with_request_id(self):
        illustrator = AsyncMock(spec=PageIllustrator)
        illustrator.generate_image.side_effect = RuntimeError("socket closed")
        writer = AsyncMock(spec=StoryWriter)
        writer.generate_story.return_value = _skeleton(2)
        story_logger = MagicMock(spec=StoryLogger)
        generator = StoryGenerator(writer=writer, illustrator=illustrator, story_logger=story_logger)

        await generator.generate(PROMPT, request_id="ab12cd34")

        logged_pages = sorted(call.args[1] for call in story_logger.page_fallback.call_args_list)
        assert logged_pages == [1, 2]
        for call in story_logger.page_fallback.call_args_list:
            assert call.args[0] == "ab12cd34"
            assert isinstance(call.args[2], RuntimeError)

    @pytest.mark.asyncio
    async def test_stages_are_logged_in_order(self):
        illustrator = AsyncMock(spec=PageIllustrator)
        illustrator.generate_image.return_value = "https://img/x"
        writer = AsyncMock(spec=StoryWriter)
        writer.generate_story.return_value = _skeleton(2)
        story_logger = MagicMock(spec=StoryLogger)
        generator = StoryGenerator(writer=writer, illustrator=illustrator, story_logger=story_logger)

        await generator.generate(PROMPT, request_id="ab12cd34")

        stages = [(call.args[0], call.args[1]) for call in story_logger.stage_completed.call_args_list]
        assert stages == [("ab12cd34", "story_text"), ("ab12cd34", "illustration")]
        story_logger.page_fallback.assert_not_called()

    @pytest.mark.asyncio
    async def test_untracked_request_id_by_default(self):
        illustrator = AsyncMock(spec=PageIllustrator)
        illustrator.generate_image.side_effect = RuntimeError("socket closed")
        writer = AsyncMock(spec=StoryWriter)
        writer.generate_story.return_value = _skeleton(1)
        story_logger = MagicMock(spec=StoryLogger)
        generator = StoryGenerator(writer=writer, illustrator=illustrator, story_logger=story_logger)

        await generator.generate(PROMPT)

        assert story_logger.page_fallback.call_args.args[0] == "-"
