#!/usr/bin/env python3
"""
CLI for generating illustrated children's stories.

Usage:
    python cli/generate_story.py "A boy finds a portal to another planet"
    python cli/generate_story.py "a dragon who is afraid of the dark" --output dragon.json
    python cli/generate_story.py --check-images
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from storybook.api.config import get_provider_settings  # noqa: E402
from storybook.api.logging import configure_logging  # noqa: E402
from storybook.config import get_image_client, get_text_client  # noqa: E402
from storybook.core import StoryGenerationError  # noqa: E402
from storybook.core.modules import PageIllustrator, StoryWriter  # noqa: E402
from storybook.core.programs import StoryGenerator  # noqa: E402

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate an illustrated children's storybook from a prompt",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python cli/generate_story.py "A boy finds a portal to another planet"
    python cli/generate_story.py "a kitten learns to share" --output kitten.json
    python cli/generate_story.py --check-images
        """,
    )

    parser.add_argument(
        "prompt",
        type=str,
        nargs="?",
        help="The story idea",
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Write the story JSON to this file instead of stdout",
    )

    parser.add_argument(
        "--check-images",
        action="store_true",
        help="Only test the fal.ai connection and exit",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print progress information",
    )

    return parser


async def check_images(fal_key: str) -> int:
    illustrator = PageIllustrator(get_image_client(fal_key))
    ok = await illustrator.test_connection()
    print("fal.ai connection OK" if ok else "fal.ai connection FAILED", file=sys.stderr)
    return 0 if ok else 1


async def generate(prompt: str, openai_api_key: str, fal_key: str, output: str = None) -> int:
    generator = StoryGenerator(
        writer=StoryWriter(get_text_client(openai_api_key)),
        illustrator=PageIllustrator(get_image_client(fal_key)),
    )

    try:
        story = await generator.generate(prompt)
    except StoryGenerationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.error(f"Story generation failed: {e}", exc_info=True)
        print(f"Error: Failed to generate story ({type(e).__name__})", file=sys.stderr)
        return 1

    formatted = json.dumps(story.to_dict(), indent=2, ensure_ascii=False)

    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(formatted + "\n", encoding="utf-8")
        print(f"Story saved to: {output_path}", file=sys.stderr)
    else:
        print(formatted)

    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(json_format=False, level=logging.INFO if args.verbose else logging.WARNING)
    settings = get_provider_settings()

    if not settings.fal_key:
        print("Error: Fal AI key not configured (set FAL_KEY)", file=sys.stderr)
        return 1

    if args.check_images:
        return asyncio.run(check_images(settings.fal_key))

    if not args.prompt or not args.prompt.strip():
        parser.error("a prompt is required unless --check-images is given")

    if not settings.openai_api_key:
        print("Error: OpenAI API key not configured (set OPENAI_API_KEY)", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Generating story for prompt: {args.prompt}", file=sys.stderr)

    return asyncio.run(generate(args.prompt, settings.openai_api_key, settings.fal_key, args.output))


if __name__ == "__main__":
    sys.exit(main())
