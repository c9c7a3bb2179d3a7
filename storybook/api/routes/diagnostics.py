"""Image provider diagnostic endpoint."""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from ...config import IMAGE_CONSTANTS
from ..config import FAL_KEY_MISSING, FAL_TEST_FAILED
from ..dependencies import Illustrator, Settings
from ..models import FalTestErrorResponse, FalTestResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/test-fal",
    response_model=FalTestResponse,
    summary="Test image generation",
    description="Generate one image with a fixed prompt to verify the fal.ai integration.",
    responses={
        500: {"model": FalTestErrorResponse, "description": "Missing key or failure"},
    },
)
async def run_fal_test(settings: Settings, illustrator: Illustrator):
    """Run the image generation client once with a fixed prompt."""
    if not settings.fal_key:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": FAL_KEY_MISSING},
        )

    logger.info("Testing fal.ai image generation...")

    try:
        image_url = await illustrator.generate_image(IMAGE_CONSTANTS["diagnostic_prompt"])
    except Exception as e:
        logger.error(f"fal.ai test failed: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": FAL_TEST_FAILED, "details": str(e) or "Unknown error"},
        )

    return FalTestResponse(
        image_url=image_url,
        message="Fal AI image generation test successful",
    )
