"""
Story shape constants for the Storybook Generator.

Short read-aloud books: a handful of pages, a few sentences each.
"""

STORY_CONSTANTS = {
    "min_pages": 5,
    "max_pages": 6,
    "sentences_per_page": "2-3",
}
