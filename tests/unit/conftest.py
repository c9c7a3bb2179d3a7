"""Pytest fixtures for unit and API tests."""

import json
import pytest
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

from storybook.api.main import app
from storybook.api.dependencies import get_page_illustrator, get_story_generator
from storybook.core.modules import PageIllustrator, StoryWriter
from storybook.core.programs import StoryGenerator


@pytest.fixture
def two_page_story_data():
    """Story JSON as the text model is asked to produce it."""
    return {
        "title": "Max and the Purple Planet",
        "pages": [
            {
                "pageNumber": 1,
                "text": "Max found a glowing door behind the garden shed. It hummed like a sleepy bee.",
                "imagePrompt": "A curious boy opening a glowing blue portal behind a wooden garden shed",
            },
            {
                "pageNumber": 2,
                "text": "On the other side, the grass was purple and the sky had two suns. Max laughed and waved hello.",
                "imagePrompt": "A boy waving on a purple meadow under a sky with two suns",
            },
        ],
    }


def _completion(content):
    """Create a fake chat completion whose first choice has the given content."""
    completion = MagicMock()
    completion.choices = [MagicMock()]
    completion.choices[0].message.content = content
    return completion


@pytest.fixture
def make_completion():
    """Factory for fake chat completions."""
    return _completion


@pytest.fixture
def mock_text_client(two_page_story_data):
    """Mock AsyncOpenAI client replying with the two-page story."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock(
        return_value=_completion(json.dumps(two_page_story_data))
    )
    return client


@pytest.fixture
def mock_image_client():
    """Mock fal.ai AsyncClient that always returns one image."""
    client = MagicMock()
    client.run = AsyncMock(
        return_value={"images": [{"url": "https://fal.media/files/generated.png"}]}
    )
    return client


@pytest.fixture
def failing_image_client():
    """Mock fal.ai AsyncClient whose every call raises."""
    client = MagicMock()
    client.run = AsyncMock(side_effect=ConnectionError("fal.ai unreachable"))
    return client


@pytest.fixture
def story_writer(mock_text_client):
    return StoryWriter(mock_text_client)


@pytest.fixture
def page_illustrator(mock_image_client):
    return PageIllustrator(mock_image_client)


@pytest.fixture
def story_generator(story_writer, page_illustrator):
    return StoryGenerator(writer=story_writer, illustrator=page_illustrator)


@pytest.fixture
def provider_keys(monkeypatch):
    """Configure both provider credentials."""
    monkeypatch.setenv("OPENAI_API_KEY", "test-openai-key")
    monkeypatch.setenv("FAL_KEY", "test-fal-key")


@pytest.fixture
def mock_generator():
    """Mock StoryGenerator for endpoint tests."""
    return AsyncMock(spec=StoryGenerator)


@pytest.fixture
def mock_illustrator():
    """Mock PageIllustrator for endpoint tests."""
    return AsyncMock(spec=PageIllustrator)


@pytest.fixture
def client_with_mocks(provider_keys, mock_generator, mock_illustrator):
    """TestClient with mocked generator and illustrator, keys configured."""
    app.dependency_overrides[get_story_generator] = lambda: mock_generator
    app.dependency_overrides[get_page_illustrator] = lambda: mock_illustrator

    with TestClient(app) as client:
        yield client, mock_generator, mock_illustrator

    app.dependency_overrides.clear()


@pytest.fixture
def client_factory(provider_keys):
    """Build a TestClient whose generator uses the given provider clients."""
    clients = []

    def _make(text_client, image_client):
        generator = StoryGenerator(
            writer=StoryWriter(text_client),
            illustrator=PageIllustrator(image_client),
        )
        app.dependency_overrides[get_story_generator] = lambda: generator
        client = TestClient(app)
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()
    app.dependency_overrides.clear()
