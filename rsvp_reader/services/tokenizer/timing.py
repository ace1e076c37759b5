"""
Timing calculations for RSVP reading.

Timing is split in two steps. At tokenization time each word gets a
:class:`TimingHint` of additive millisecond modifiers (word length, trailing
punctuation, structural break) that does not depend on the reading speed.
At display time :func:`calculate_duration` adds the hint to the base duration
derived from the current WPM.
"""

from collections.abc import Iterable

from rsvp_reader.models.enums import BlockKind
from rsvp_reader.models.token import BlockContext, TimedToken, TimingHint, Token

from .constants import (
    BLOCK_START_MS,
    HEADING_START_MS,
    LONG_CHAR_PENALTY_MS,
    LONG_WORD_LENGTH,
    MAJOR_PAUSE_MS,
    MAJOR_PAUSE_PUNCTUATION,
    MEDIUM_CHAR_PENALTY_MS,
    MIN_DURATION_MS,
    MINOR_PAUSE_MS,
    MINOR_PAUSE_PUNCTUATION,
    MS_PER_MINUTE,
    PARAGRAPH_END_MS,
    SHORT_WORD_LENGTH,
)

# Blocks whose first word gets the generic new-block pause
_PAUSED_BLOCK_KINDS = {
    BlockKind.LIST_ITEM,
    BlockKind.QUOTE,
    BlockKind.CALLOUT,
    BlockKind.TABLE_CELL,
}


def word_length_modifier(word: str) -> int:
    """
    Extra milliseconds for long words.

    Piecewise linear in the character count: nothing up to 6 characters,
    20ms per character up to 10, then 40ms per character beyond 10.

    Examples:
        >>> word_length_modifier("hello")
        0
        >>> word_length_modifier("wonderful")  # 9 chars
        60
        >>> word_length_modifier("extraordinary")  # 13 chars
        200
    """
    length = len(word)
    if length <= SHORT_WORD_LENGTH:
        return 0
    if length <= LONG_WORD_LENGTH:
        return (length - SHORT_WORD_LENGTH) * MEDIUM_CHAR_PENALTY_MS
    return (
        (LONG_WORD_LENGTH - SHORT_WORD_LENGTH) * MEDIUM_CHAR_PENALTY_MS
        + (length - LONG_WORD_LENGTH) * LONG_CHAR_PENALTY_MS
    )


def punctuation_modifier(word: str) -> int:
    """Extra milliseconds for the word's final character (only the last one counts)."""
    if not word:
        return 0
    last_char = word[-1]
    if last_char in MAJOR_PAUSE_PUNCTUATION:
        return MAJOR_PAUSE_MS
    if last_char in MINOR_PAUSE_PUNCTUATION:
        return MINOR_PAUSE_MS
    return 0


def structure_modifier(
    is_paragraph_end: bool,
    is_new_block: bool,
    block: BlockContext | None = None,
) -> int:
    """
    Extra milliseconds for structural breaks. The cases are exclusive.

    A paragraph end wins; otherwise the first word of a heading gets the
    section pause and the first word of a list item, quote, callout or table
    cell gets the shorter block pause.
    """
    if is_paragraph_end:
        return PARAGRAPH_END_MS
    if not is_new_block or block is None:
        return 0
    if block.kind == BlockKind.HEADING:
        return HEADING_START_MS
    if block.kind in _PAUSED_BLOCK_KINDS:
        return BLOCK_START_MS
    return 0


def generate_timing_hint(
    word: str,
    is_paragraph_end: bool,
    is_new_block: bool,
    block: BlockContext | None = None,
) -> TimingHint:
    """
    Build the WPM-independent timing hint for a word.

    Args:
        word: The word as displayed.
        is_paragraph_end: Whether the word closes a paragraph.
        is_new_block: Whether the word is the first one after entering a block.
        block: The block the word belongs to; decides which new-block pause applies.

    Returns:
        TimingHint with the three additive modifiers.

    Examples:
        >>> generate_timing_hint("end.", True, False)
        TimingHint(word_length_modifier=0, punctuation_modifier=200, structure_modifier=300)
    """
    return TimingHint(
        word_length_modifier=word_length_modifier(word),
        punctuation_modifier=punctuation_modifier(word),
        structure_modifier=structure_modifier(is_paragraph_end, is_new_block, block),
    )


def calculate_base_duration_ms(wpm: int) -> int:
    """
    Calculate the base word display duration from WPM (words per minute).

    Raises:
        ValueError: If wpm is not positive.

    Examples:
        >>> calculate_base_duration_ms(300)
        200
    """
    if wpm <= 0:
        raise ValueError(f"WPM must be positive, got {wpm}")

    return MS_PER_MINUTE // wpm


def calculate_duration(token: Token | TimingHint, wpm: int) -> int:
    """
    Calculate how long a token stays on screen at the given WPM.

    The base duration plus all hint modifiers, floored at 50ms so the
    display loop never schedules a near-zero wait.

    Args:
        token: The token (or its timing hint).
        wpm: Reading speed in words per minute.

    Returns:
        Display duration in milliseconds.

    Examples:
        >>> calculate_duration(TimingHint(), 300)
        200
        >>> calculate_duration(TimingHint(punctuation_modifier=200), 300)
        400
    """
    hint = token.timing_hint if isinstance(token, Token) else token
    return max(calculate_base_duration_ms(wpm) + hint.total, MIN_DURATION_MS)


def estimate_reading_time_ms(tokens: Iterable[Token | TimedToken], wpm: int) -> int:
    """
    Estimate the total reading time of a token sequence at the given WPM.

    Examples:
        >>> estimate_reading_time_ms([Token("one"), Token("two")], 300)
        400
    """
    total = 0
    for item in tokens:
        token = item.token if isinstance(item, TimedToken) else item
        total += calculate_duration(token, wpm)
    return total


def format_reading_time(total_ms: int) -> str:
    """
    Format a duration as a short reading-time label.

    Returns:
        Formatted string like "5 min" or "1 hr 23 min" (never below "1 min").

    Examples:
        >>> format_reading_time(90_000)
        '1 min'
        >>> format_reading_time(4_980_000)
        '1 hr 23 min'
    """
    total_minutes = int(total_ms / 1000 / 60)

    if total_minutes < 60:
        return f"{max(1, total_minutes)} min"

    hours = total_minutes // 60
    minutes = total_minutes % 60

    if minutes == 0:
        return f"{hours} hr"

    return f"{hours} hr {minutes} min"
