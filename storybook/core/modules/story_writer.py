"""
Module for writing story skeletons with an OpenAI chat model.

The model is asked for a strict JSON document (title plus pages of text and
illustration prompts). The first brace-delimited object in the reply is
extracted and parsed into a Story with no image URLs.
"""

import json
import logging
import re
from typing import Any, Optional

from openai import AsyncOpenAI

from storybook.config import STORY_CONSTANTS, TEXT_CONSTANTS, get_text_model
from ..errors import StoryGenerationError
from ..types import Story

logger = logging.getLogger(__name__)

# Greedy: first "{" through the last "}" in the reply.
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")

STORY_PROMPT_TEMPLATE = """
Create a {min_pages}-{max_pages} page children's storybook based on this prompt: "{prompt}"

Generate the story in this exact JSON format:
{{
  "title": "Story Title",
  "pages": [
    {{
      "pageNumber": 1,
      "text": "Page 1 story text ({sentences} sentences)",
      "imagePrompt": "Detailed description for generating an illustration for this page"
    }},
    {{
      "pageNumber": 2,
      "text": "Page 2 story text ({sentences} sentences)",
      "imagePrompt": "Detailed description for generating an illustration for this page"
    }}
    // ... continue for {min_pages}-{max_pages} pages
  ]
}}

Make the story engaging, age-appropriate, and ensure each page flows naturally to the next.
Keep text concise but descriptive. Make image prompts detailed and specific for good illustrations.
Return ONLY the JSON object, no additional text.
"""


def build_story_prompt(prompt: str) -> str:
    """Fill the user instruction template for a story prompt."""
    return STORY_PROMPT_TEMPLATE.format(
        prompt=prompt,
        min_pages=STORY_CONSTANTS["min_pages"],
        max_pages=STORY_CONSTANTS["max_pages"],
        sentences=STORY_CONSTANTS["sentences_per_page"],
    )


def extract_story_json(text: str) -> dict[str, Any]:
    """
    Extract and parse the JSON object embedded in a model reply.

    Args:
        text: Raw model output, possibly with prose around the JSON

    Returns:
        The parsed JSON value

    Raises:
        ValueError: If no brace-delimited object is found or it fails to parse
    """
    match = JSON_OBJECT_PATTERN.search(text)
    if not match:
        raise ValueError("Failed to parse story JSON")

    # json.JSONDecodeError is a ValueError subclass
    return json.loads(match.group(0))


class StoryWriter:
    """
    Write story skeletons with a chat-completion model.

    The client is injected so that one instance can be shared for the
    lifetime of the process and replaced with a mock in tests.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ):
        self.client = client
        self.model = model or get_text_model()
        self.temperature = TEXT_CONSTANTS["temperature"] if temperature is None else temperature
        self.max_tokens = max_tokens or TEXT_CONSTANTS["max_tokens"]

    def _build_messages(self, prompt: str) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": TEXT_CONSTANTS["system_prompt"]},
            {"role": "user", "content": build_story_prompt(prompt)},
        ]

    async def _complete(self, prompt: str) -> Optional[str]:
        """Run the chat completion and return the reply text, if any."""
        completion = await self.client.chat.completions.create(
            model=self.model,
            messages=self._build_messages(prompt),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        if not completion.choices:
            return None
        return completion.choices[0].message.content

    async def generate_story(self, prompt: str) -> Story:
        """
        Generate a story skeleton for a prompt.

        Args:
            prompt: Free-text story idea from the user

        Returns:
            Story whose pages have text and image prompts but no image URLs

        Raises:
            StoryGenerationError: If the provider call fails, returns no
                content, or the reply holds no valid story JSON
        """
        try:
            text = await self._complete(prompt)
            if not text:
                raise ValueError("No response from OpenAI")

            story_data = extract_story_json(text)
            story = Story.from_dict(story_data, prompt=prompt)
        except Exception as e:
            logger.error(
                f"Error generating story: {e}",
                extra={"stage": "story_text", "error_type": type(e).__name__},
                exc_info=True,
            )
            raise StoryGenerationError() from e

        logger.info(
            f"Story skeleton written: '{story.title}' ({len(story.pages)} pages)",
            extra={"stage": "story_text"},
        )
        return story
