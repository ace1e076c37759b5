"""
Tokenizer package for RSVP reading.

This package turns a parse tree into timed reading units:
- tokenizer: DocumentTokenizer, the parse tree -> tokens/sections reducer
- orp: Optimal Recognition Point placement
- timing: timing hints and display durations
- text_utils: word splitting and tree text helpers
- constants: timing, ORP and word-splitting constants

Primary usage:
    >>> from rsvp_reader.services.tokenizer import tokenize, calculate_duration
    >>> result = tokenize(tree)
    >>> durations = [calculate_duration(t, 300) for t in result.tokens]
"""

from .constants import (
    BLOCK_START_MS,
    HEADING_START_MS,
    MAJOR_PAUSE_MS,
    MIN_DURATION_MS,
    MINOR_PAUSE_MS,
    PARAGRAPH_END_MS,
    TOKENIZER_VERSION,
)
from .orp import calculate_orp, split_for_display
from .text_utils import collect_text, detect_callout_type, split_into_words
from .timing import (
    calculate_base_duration_ms,
    calculate_duration,
    estimate_reading_time_ms,
    format_reading_time,
    generate_timing_hint,
)
from .tokenizer import DocumentTokenizer, TokenizerResult, tokenize


def get_tokenizer_version() -> str:
    """Return the current tokenizer version string."""
    return TOKENIZER_VERSION


__all__ = [
    # Tokenizer
    "DocumentTokenizer",
    "TokenizerResult",
    "tokenize",
    "get_tokenizer_version",
    # ORP
    "calculate_orp",
    "split_for_display",
    # Timing
    "generate_timing_hint",
    "calculate_duration",
    "calculate_base_duration_ms",
    "estimate_reading_time_ms",
    "format_reading_time",
    # Text helpers
    "split_into_words",
    "detect_callout_type",
    "collect_text",
    # Constants
    "TOKENIZER_VERSION",
    "MIN_DURATION_MS",
    "MAJOR_PAUSE_MS",
    "MINOR_PAUSE_MS",
    "PARAGRAPH_END_MS",
    "HEADING_START_MS",
    "BLOCK_START_MS",
]
