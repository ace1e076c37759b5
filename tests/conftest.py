"""Shared fixtures for the RSVP reader tests."""

import pytest

from rsvp_reader.config import get_settings
from rsvp_reader.models.document import Section
from rsvp_reader.models.token import TimedToken, Token
from rsvp_reader.services.assembler import time_token
from rsvp_reader.services.parser import parse_text
from rsvp_reader.services.tokenizer import tokenize


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so environment changes in a test take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def tokenize_markdown():
    """Parse and tokenize Markdown text in one call."""

    def _tokenize(text: str):
        return tokenize(parse_text(text))

    return _tokenize


@pytest.fixture
def make_timed_tokens():
    """Build plain timed tokens (200ms each at 300 WPM) from words."""

    def _make(*words: str, wpm: int = 300) -> list[TimedToken]:
        return [time_token(Token(word), wpm) for word in words]

    return _make


@pytest.fixture
def sample_tokens(make_timed_tokens):
    """Thirty short words, w0 to w29."""
    return make_timed_tokens(*[f"w{i}" for i in range(30)])


@pytest.fixture
def sample_sections():
    """Three sections starting at tokens 0, 10 and 20."""
    return [
        Section(title="Intro", level=1, token_start=0, token_end=1),
        Section(title="Middle", level=2, token_start=10, token_end=11),
        Section(title="End", level=2, token_start=20, token_end=21),
    ]


SAMPLE_MARKDOWN = """# Getting Started

This is the **first** paragraph.

## Lists

- Item one
- Item two

> A wise quote.
"""


@pytest.fixture
def sample_markdown():
    return SAMPLE_MARKDOWN
