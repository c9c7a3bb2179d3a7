"""Exceptions raised by the story generation pipeline."""

GENERIC_GENERATION_ERROR = "Failed to generate story"


class StoryGenerationError(RuntimeError):
    """Text generation failed; the story cannot be built.

    The message is always the generic one. The underlying cause is chained
    via ``__cause__`` and only ever logged.
    """

    def __init__(self, message: str = GENERIC_GENERATION_ERROR):
        super().__init__(message)
