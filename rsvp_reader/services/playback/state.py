"""
Playback state machine for RSVP reading.

:class:`PlaybackState` owns the cursor, reading speed and view flags for one
reading session. Every operation is total: indices are clamped into range
instead of being rejected, so there is no error channel.
"""

from collections.abc import Iterator, Sequence

from rsvp_reader.models.document import Document, Section
from rsvp_reader.models.enums import ViewMode
from rsvp_reader.models.token import TimedToken
from rsvp_reader.services.tokenizer.timing import calculate_base_duration_ms, calculate_duration

from .constants import DEFAULT_WPM, MAX_WPM, MIN_WPM, SENTENCE_JUMP, WPM_STEP


class TokenWindow(Sequence):
    """Read-only view of ``tokens[start:stop]`` that does not copy anything."""

    __slots__ = ("_tokens", "_start", "_stop")

    def __init__(self, tokens: Sequence[TimedToken], start: int, stop: int) -> None:
        self._tokens = tokens
        self._start = start
        self._stop = max(start, stop)

    def __len__(self) -> int:
        return self._stop - self._start

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError("token window index out of range")
        return self._tokens[self._start + index]

    def __iter__(self) -> Iterator[TimedToken]:
        for index in range(self._start, self._stop):
            yield self._tokens[index]

    @property
    def start(self) -> int:
        """Index of the first token of the window in the full sequence."""
        return self._start

    def __repr__(self) -> str:
        return f"TokenWindow(start={self._start}, stop={self._stop})"


class PlaybackState:
    """
    Cursor, speed and view state for one reading session.

    ``view_mode``, ``paused`` and ``help_visible`` are independent flags: the
    outline can be open while paused, help can be shown over either view.

    Example usage:
        >>> state = PlaybackState.from_document(document)
        >>> state.advance()
        >>> state.current_token().word
        'world'
    """

    def __init__(
        self,
        tokens: Sequence[TimedToken],
        sections: Sequence[Section],
        wpm: int = DEFAULT_WPM,
    ) -> None:
        self._tokens: tuple[TimedToken, ...] = tuple(tokens)
        self._sections: tuple[Section, ...] = tuple(sections)
        # _hint_suffix[i] is the sum of timing hint totals from token i to the end
        self._hint_suffix = [0] * (len(self._tokens) + 1)
        for index in range(len(self._tokens) - 1, -1, -1):
            hint_total = self._tokens[index].token.timing_hint.total
            self._hint_suffix[index] = self._hint_suffix[index + 1] + hint_total
        self.position = 0
        self.wpm = min(max(wpm, MIN_WPM), MAX_WPM)
        self.paused = False
        self.view_mode = ViewMode.READING
        self.outline_selection = 0
        self.help_visible = False

    @classmethod
    def from_document(cls, document: Document) -> "PlaybackState":
        """Start a session at the document's seed WPM."""
        return cls(document.tokens, document.sections, wpm=document.wpm)

    # ------------------------------------------------------------------
    # Read-only projections
    # ------------------------------------------------------------------

    @property
    def tokens(self) -> tuple[TimedToken, ...]:
        return self._tokens

    @property
    def sections(self) -> tuple[Section, ...]:
        return self._sections

    def current_token(self) -> TimedToken | None:
        """Token under the cursor, or None for an empty document."""
        if not self._tokens:
            return None
        return self._tokens[self.position]

    def current_duration_ms(self) -> int | None:
        """Display time of the current token at the live WPM."""
        current = self.current_token()
        if current is None:
            return None
        return calculate_duration(current.token, self.wpm)

    def context_tokens(self, before: int, after: int) -> tuple[TokenWindow, TokenWindow]:
        """
        Tokens around the cursor for context display.

        Args:
            before: Maximum number of tokens preceding the cursor.
            after: Maximum number of tokens following the cursor.

        Returns:
            (before_window, after_window), each clamped to the sequence edges.
        """
        before = max(before, 0)
        after = max(after, 0)
        start = max(self.position - before, 0)
        stop = min(self.position + after + 1, len(self._tokens))

        return (
            TokenWindow(self._tokens, start, self.position),
            TokenWindow(self._tokens, min(self.position + 1, stop), stop),
        )

    def current_section_index(self) -> int | None:
        """Index of the last section starting at or before the cursor."""
        for index in range(len(self._sections) - 1, -1, -1):
            if self._sections[index].token_start <= self.position:
                return index
        return None

    def current_section_title(self) -> str | None:
        """Title of the section being read, or None before the first heading."""
        index = self.current_section_index()
        if index is None:
            return None
        return self._sections[index].title

    def section_span(self, index: int) -> tuple[int, int]:
        """
        Token range covered by a section's content.

        Runs from the heading to the start of the next section (or the end of
        the document). Out-of-range indices give an empty span at the end.
        """
        if not 0 <= index < len(self._sections):
            return (len(self._tokens), len(self._tokens))
        start = self._sections[index].token_start
        if index + 1 < len(self._sections):
            return (start, self._sections[index + 1].token_start)
        return (start, len(self._tokens))

    def progress(self) -> float:
        """Fraction of the document before the cursor, 0.0 when empty."""
        if not self._tokens:
            return 0.0
        return self.position / len(self._tokens)

    def remaining_ms(self) -> int:
        """
        Estimated time to read from the cursor to the end at the live WPM.

        Constant time: the base duration never drops below 75ms inside the WPM
        range and hints are non-negative, so the 50ms floor never applies.
        """
        remaining = len(self._tokens) - self.position
        return remaining * calculate_base_duration_ms(self.wpm) + self._hint_suffix[self.position]

    # ------------------------------------------------------------------
    # Reading controls
    # ------------------------------------------------------------------

    def advance(self) -> None:
        if self.position < len(self._tokens) - 1:
            self.position += 1

    def toggle_pause(self) -> None:
        self.paused = not self.paused

    def increase_wpm(self) -> None:
        self.wpm = min(self.wpm + WPM_STEP, MAX_WPM)

    def decrease_wpm(self) -> None:
        self.wpm = max(self.wpm - WPM_STEP, MIN_WPM)

    def rewind_sentence(self) -> None:
        self.position = self._clamp_position(self.position - SENTENCE_JUMP)

    def skip_sentence(self) -> None:
        self.position = self._clamp_position(self.position + SENTENCE_JUMP)

    def toggle_help(self) -> None:
        self.help_visible = not self.help_visible

    # ------------------------------------------------------------------
    # Outline
    # ------------------------------------------------------------------

    def toggle_outline(self) -> None:
        if self.view_mode == ViewMode.READING:
            self.view_mode = ViewMode.OUTLINE
        else:
            self.view_mode = ViewMode.READING

    def outline_up(self) -> None:
        if self._sections:
            self.outline_selection = max(self.outline_selection - 1, 0)

    def outline_down(self) -> None:
        if self._sections:
            self.outline_selection = min(self.outline_selection + 1, len(self._sections) - 1)

    def jump_to_section(self) -> None:
        """Move the cursor to the selected heading and return to reading."""
        if not 0 <= self.outline_selection < len(self._sections):
            return
        section = self._sections[self.outline_selection]
        self.position = self._clamp_position(section.token_start)
        self.view_mode = ViewMode.READING

    def _clamp_position(self, position: int) -> int:
        return min(max(position, 0), max(len(self._tokens) - 1, 0))
