"""
Text-generation configuration for the Storybook Generator.

Uses the OpenAI chat completions API to write the story skeleton.

Includes a per-call timeout so a hanging connection fails the request
instead of holding it open.
"""

import logging
import os
from typing import Callable, Optional, TypeVar

from dotenv import load_dotenv
from openai import AsyncOpenAI

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

T = TypeVar("T", int, float)

# Timeout for LLM calls (seconds)
LLM_TIMEOUT = 120


def env_number(name: str, default: T, cast: Callable[[str], T]) -> T:
    """Read a numeric environment variable, keeping the default if it is malformed."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}; using default {default}")
        return default


TEXT_CONSTANTS = {
    "model": os.getenv("OPENAI_MODEL", "gpt-4"),
    "temperature": env_number("OPENAI_TEMPERATURE", 0.8, float),
    "max_tokens": env_number("OPENAI_MAX_TOKENS", 2000, int),
    "system_prompt": (
        "You are a creative children's story writer. "
        "Always respond with valid JSON only."
    ),
}


def get_text_client(api_key: Optional[str] = None) -> AsyncOpenAI:
    """
    Get the async OpenAI client used for story writing.

    Falls back to OPENAI_API_KEY from the environment when no key is given.
    """
    api_key = api_key or os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise ValueError("OPENAI_API_KEY not found in environment. Set it in .env file.")

    # The SDK retries transient errors by default; generation is single-shot.
    return AsyncOpenAI(api_key=api_key, timeout=LLM_TIMEOUT, max_retries=0)


def get_text_model() -> str:
    """Get the chat model name used for story writing."""
    return TEXT_CONSTANTS["model"]
