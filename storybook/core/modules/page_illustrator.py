"""
Module for illustrating story pages with fal.ai.

Illustration is best-effort and never raises for provider failures:

1. Primary model (Ideogram v2a turbo) with the children's-book style template
2. Secondary model (Ideogram v2a) with the same template
3. A deterministic stock-photo search URL built from the raw prompt

Each step runs only when the previous one failed.
"""

import logging
from typing import Optional
from urllib.parse import quote

import fal_client

from storybook.config import IMAGE_CONSTANTS, extract_image_url

logger = logging.getLogger(__name__)

# Characters left unescaped by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


def fallback_image_url(prompt: str) -> str:
    """Build the stock-photo search URL used when illustration is unavailable."""
    return f"{IMAGE_CONSTANTS['fallback_url_base']}?{quote(prompt, safe=_URI_COMPONENT_SAFE)}"


def build_illustration_prompt(prompt: str) -> str:
    """Wrap an illustration prompt in the children's-book style template."""
    return IMAGE_CONSTANTS["style_template"].format(prompt=prompt)


class PageIllustrator:
    """
    Generate page illustrations with a two-model fallback chain.

    The fal.ai client is injected so a single instance can be shared across
    requests and mocked in tests.
    """

    def __init__(
        self,
        client: fal_client.AsyncClient,
        primary_model: Optional[str] = None,
        secondary_model: Optional[str] = None,
    ):
        self.client = client
        self.primary_model = primary_model or IMAGE_CONSTANTS["primary_model"]
        self.secondary_model = secondary_model or IMAGE_CONSTANTS["secondary_model"]

    async def _run_model(self, model: str, prompt: str) -> str:
        """Run one model and return the first image URL.

        Raises:
            ValueError: If the result contains no image URL
        """
        result = await self.client.run(model, arguments={"prompt": prompt})
        return extract_image_url(result)

    async def generate_image(self, prompt: str) -> str:
        """
        Generate an illustration and return its URL.

        Args:
            prompt: The page's illustration prompt (untemplated)

        Returns:
            A generated image URL, or the stock-photo fallback URL when both
            models fail
        """
        styled_prompt = build_illustration_prompt(prompt)
        logger.debug(f"Generating image for prompt: {prompt[:100]}")

        try:
            image_url = await self._run_model(self.primary_model, styled_prompt)
            logger.info(f"Generated image with {self.primary_model}")
            return image_url
        except Exception as e:
            logger.warning(
                f"Primary image model {self.primary_model} failed: {e}",
                extra={"stage": "illustration", "error_type": type(e).__name__},
            )

        try:
            image_url = await self._run_model(self.secondary_model, styled_prompt)
            logger.info(f"Generated image with alternate model {self.secondary_model}")
            return image_url
        except Exception as e:
            logger.warning(
                f"Alternate image model {self.secondary_model} also failed: {e}",
                extra={"stage": "illustration", "error_type": type(e).__name__},
            )

        fallback_url = fallback_image_url(prompt)
        logger.info(f"Using fallback URL: {fallback_url}")
        return fallback_url

    async def test_connection(self) -> bool:
        """Run the primary model once with a trivial prompt; report success."""
        try:
            await self._run_model(
                self.primary_model, IMAGE_CONSTANTS["connection_test_prompt"]
            )
        except Exception as e:
            logger.error(f"fal.ai connection test failed: {e}")
            return False

        logger.info("fal.ai connection test successful")
        return True
