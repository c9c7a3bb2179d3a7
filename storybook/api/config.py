"""API configuration.

Provider credentials are read from the environment on every call so that a
missing key is reported per request rather than at startup.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

# Load .env from project root (find_dotenv searches parent directories)
load_dotenv(find_dotenv())

# Error messages returned to clients
PROMPT_REQUIRED = "Prompt is required"
OPENAI_KEY_MISSING = "OpenAI API key not configured"
FAL_KEY_MISSING = "Fal AI key not configured"
GENERATION_FAILED = "Failed to generate story"
FAL_TEST_FAILED = "Fal AI test failed"

# Logging
LOG_JSON = os.getenv("LOG_FORMAT", "json").lower() != "text"
LOG_LEVEL = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)


@dataclass(frozen=True)
class ProviderSettings:
    """Credentials for the text and image providers."""

    openai_api_key: Optional[str] = None
    fal_key: Optional[str] = None


def get_provider_settings() -> ProviderSettings:
    """Read provider credentials from the environment."""
    return ProviderSettings(
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        fal_key=os.getenv("FAL_KEY") or None,
    )
