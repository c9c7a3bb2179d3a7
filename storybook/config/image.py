"""
Image generation configuration for the Storybook Generator.

Uses fal.ai Ideogram models for page illustrations, with a turbo variant
as the primary model and the standard variant as the alternate.
"""

import os
from typing import Any, Optional

import fal_client
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Timeout for a single image request (seconds)
IMAGE_TIMEOUT = 120.0

IMAGE_CONSTANTS = {
    "primary_model": "fal-ai/ideogram/v2a/turbo",
    "secondary_model": "fal-ai/ideogram/v2a",
    "fallback_url_base": "https://source.unsplash.com/1024x1024/",
    "style_template": (
        "Create a beautiful, colorful children's book illustration: {prompt}. "
        "Style: whimsical, magical, child-friendly, vibrant colors, "
        "detailed but simple enough for children."
    ),
    "connection_test_prompt": "A simple test image of a red circle",
    "diagnostic_prompt": "A magical forest with glowing mushrooms and fairy lights",
}


def get_image_client(api_key: Optional[str] = None) -> fal_client.AsyncClient:
    """
    Get the async fal.ai client for illustration generation.

    Uses FAL_KEY from environment when no key is given.
    """
    api_key = api_key or os.getenv("FAL_KEY")
    if not api_key:
        raise ValueError("FAL_KEY not found in environment. Set it in .env file.")

    return fal_client.AsyncClient(key=api_key, default_timeout=IMAGE_TIMEOUT)


def extract_image_url(result: Any) -> str:
    """
    Extract the first image URL from a fal.ai result.

    Args:
        result: The JSON result returned by AsyncClient.run()

    Returns:
        The URL of the first generated image

    Raises:
        ValueError: If the result holds no image with a URL
    """
    images = result.get("images") if isinstance(result, dict) else None
    if not images:
        raise ValueError("No image generated")

    url = images[0].get("url") if isinstance(images[0], dict) else None
    if not url:
        raise ValueError("No image generated")

    return url
