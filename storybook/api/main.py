"""FastAPI application for the Storybook Generator."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import LOG_JSON, LOG_LEVEL, PROMPT_REQUIRED
from .logging import configure_logging
from .routes import diagnostics, stories

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    configure_logging(json_format=LOG_JSON, level=LOG_LEVEL)
    logger.info("Storybook Generator API started")
    yield


app = FastAPI(
    title="Storybook Generator API",
    description="""
Turn a short prompt into an illustrated children's storybook.

## Workflow
1. POST `/api/generate-story` with `{"prompt": "..."}`
2. The response holds the title and 5-6 pages, each with text and an illustration URL
    """,
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for web frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Unreadable bodies are reported the same way as a missing prompt."""
    logger.warning(f"Invalid request body for {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": PROMPT_REQUIRED},
    )


# Include routers
app.include_router(stories.router, prefix="/api", tags=["Stories"])
app.include_router(diagnostics.router, prefix="/api", tags=["Diagnostics"])


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
