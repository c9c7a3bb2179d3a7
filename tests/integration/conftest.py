"""Pytest configuration for live provider tests."""

import os
import pytest
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


@pytest.fixture(scope="session")
def openai_api_available():
    """Check if the OpenAI API is available."""
    return bool(os.getenv("OPENAI_API_KEY"))


@pytest.fixture(scope="session")
def fal_api_available():
    """Check if the fal.ai API is available."""
    return bool(os.getenv("FAL_KEY"))


@pytest.fixture(autouse=True)
def skip_if_no_openai_api(request, openai_api_available):
    """Skip tests marked with requires_openai_api if key not set."""
    if request.node.get_closest_marker("requires_openai_api"):
        if not openai_api_available:
            pytest.skip("OPENAI_API_KEY not set")


@pytest.fixture(autouse=True)
def skip_if_no_fal_api(request, fal_api_available):
    """Skip tests marked with requires_fal_api if key not set."""
    if request.node.get_closest_marker("requires_fal_api"):
        if not fal_api_available:
            pytest.skip("FAL_KEY not set")
