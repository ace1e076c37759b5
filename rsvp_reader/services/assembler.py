"""
Document assembler: tokenizer output + WPM -> playback-ready document.

Each token gets its ORP index and a display duration computed from the seed
WPM. The duration is an estimate used for reading-time totals; playback
recomputes it from the live WPM when the token is shown.
"""

import logging

from rsvp_reader.config import get_settings
from rsvp_reader.models.document import Document, Section
from rsvp_reader.models.enums import SourceType
from rsvp_reader.models.token import TimedToken, Token
from rsvp_reader.services.playback.constants import MAX_WPM, MIN_WPM
from rsvp_reader.services.tokenizer.orp import calculate_orp
from rsvp_reader.services.tokenizer.timing import calculate_duration
from rsvp_reader.services.tokenizer.tokenizer import TokenizerResult

logger = logging.getLogger(__name__)


def clamp_wpm(wpm: int) -> int:
    """Clamp a WPM value into the supported playback range."""
    return min(max(wpm, MIN_WPM), MAX_WPM)


def time_token(token: Token, wpm: int) -> TimedToken:
    """
    Attach duration and ORP index to a single token.

    Raises:
        ValueError: If the ORP index falls outside the word.
    """
    orp_position = calculate_orp(token.word)
    if not 0 <= orp_position < len(token.word):
        raise ValueError(f"orp_position out of bounds: word={token.word!r} orp={orp_position}")

    return TimedToken(
        token=token,
        duration_ms=calculate_duration(token, wpm),
        orp_position=orp_position,
    )


def assemble(
    result: TokenizerResult,
    wpm: int | None = None,
    *,
    title: str | None = None,
    source_type: SourceType = SourceType.MARKDOWN,
) -> Document:
    """
    Assemble tokenizer output into a :class:`Document`.

    Args:
        result: Tokens and sections from the tokenizer.
        wpm: Seed reading speed; ``Settings.default_wpm`` when omitted.
            Values outside the playback range are clamped.
        title: Document title; defaults to the first section title.
        source_type: Kind of source the tokens came from.

    Returns:
        Document with timed tokens and sections, possibly empty.
    """
    requested = get_settings().default_wpm if wpm is None else wpm
    seed_wpm = clamp_wpm(requested)
    if seed_wpm != requested:
        logger.warning(
            "WPM %d outside [%d, %d], using %d",
            requested,
            MIN_WPM,
            MAX_WPM,
            seed_wpm,
            extra={"extra_data": {"wpm": seed_wpm}},
        )

    tokens = tuple(time_token(token, seed_wpm) for token in result.tokens)
    sections: tuple[Section, ...] = tuple(result.sections)

    if title is None:
        title = sections[0].title if sections else ""

    if not tokens:
        logger.warning("Document %r produced no tokens", title)
    else:
        logger.debug(
            "Assembled %d tokens and %d sections",
            len(tokens),
            len(sections),
            extra={"extra_data": {"wpm": seed_wpm}},
        )

    return Document(
        tokens=tokens,
        sections=sections,
        wpm=seed_wpm,
        title=title,
        source_type=source_type,
    )
