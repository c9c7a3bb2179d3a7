"""Story generation endpoint."""

import logging
import time
import uuid

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from ...core.errors import StoryGenerationError
from ..config import (
    FAL_KEY_MISSING,
    GENERATION_FAILED,
    OPENAI_KEY_MISSING,
    PROMPT_REQUIRED,
)
from ..dependencies import Generator, Settings
from ..logging import story_logger
from ..models import ErrorResponse, GenerateStoryRequest, StoryResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build an ``{"error": ...}`` response."""
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "/generate-story",
    response_model=StoryResponse,
    summary="Generate an illustrated story",
    description="Write a story for the prompt and illustrate every page. "
    "Pages whose illustration fails get a stock-photo fallback URL.",
    responses={
        400: {"model": ErrorResponse, "description": "Prompt missing"},
        500: {"model": ErrorResponse, "description": "Configuration or generation failure"},
    },
)
async def generate_story(
    request: GenerateStoryRequest,
    settings: Settings,
    generator: Generator,
):
    """Generate a fully illustrated story from a prompt."""
    request_id = uuid.uuid4().hex[:8]
    prompt = request.prompt

    if not prompt or not prompt.strip():
        story_logger.request_rejected(request_id, PROMPT_REQUIRED)
        return error_response(status.HTTP_400_BAD_REQUEST, PROMPT_REQUIRED)

    # Check provider credentials before any generation work
    if not settings.openai_api_key:
        story_logger.request_rejected(request_id, OPENAI_KEY_MISSING)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, OPENAI_KEY_MISSING)

    if not settings.fal_key:
        story_logger.request_rejected(request_id, FAL_KEY_MISSING)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, FAL_KEY_MISSING)

    start_time = time.time()
    story_logger.generation_started(request_id, prompt)

    try:
        story = await generator.generate(prompt, request_id=request_id)
    except StoryGenerationError as e:
        story_logger.generation_failed(request_id, e, stage="story_text")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERATION_FAILED)
    except Exception as e:
        story_logger.generation_failed(request_id, e)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERATION_FAILED)

    story_logger.generation_completed(request_id, len(story.pages), time.time() - start_time)
    return StoryResponse.from_story(story)
