"""
Single-threaded playback loop.

One loop alternates between waiting for input (bounded by the time left on the
current word) and handling at most one intent, then advances the cursor when
the word's display time has elapsed. The event source's ``poll`` call is the
only place the loop blocks; there is no other concurrency.
"""

import logging
import time
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from rsvp_reader.config import get_settings
from rsvp_reader.models.enums import Intent, ViewMode

from .state import PlaybackState

logger = logging.getLogger(__name__)

# Assumed display time when there is no token to show
_IDLE_DURATION_MS = 200


class EventSource(Protocol):
    """Source of already-classified user intents."""

    def poll(self, timeout: float) -> Intent | None:
        """Wait up to ``timeout`` seconds for the next intent."""
        ...


_GLOBAL_ACTIONS: dict[Intent, Callable[[PlaybackState], None]] = {
    Intent.TOGGLE_HELP: PlaybackState.toggle_help,
}

_READING_ACTIONS: dict[Intent, Callable[[PlaybackState], None]] = {
    Intent.TOGGLE_PAUSE: PlaybackState.toggle_pause,
    Intent.WPM_UP: PlaybackState.increase_wpm,
    Intent.WPM_DOWN: PlaybackState.decrease_wpm,
    Intent.REWIND: PlaybackState.rewind_sentence,
    Intent.SKIP: PlaybackState.skip_sentence,
    Intent.TOGGLE_OUTLINE: PlaybackState.toggle_outline,
}

_OUTLINE_ACTIONS: dict[Intent, Callable[[PlaybackState], None]] = {
    Intent.OUTLINE_UP: PlaybackState.outline_up,
    Intent.OUTLINE_DOWN: PlaybackState.outline_down,
    Intent.JUMP: PlaybackState.jump_to_section,
    Intent.TOGGLE_OUTLINE: PlaybackState.toggle_outline,
}


def apply_intent(state: PlaybackState, intent: Intent) -> bool:
    """
    Apply an intent to the state according to the current view.

    Returns:
        True if the intent changed something it applies to, False if it was
        ignored in this view. QUIT is never applied here.
    """
    if intent in _GLOBAL_ACTIONS:
        _GLOBAL_ACTIONS[intent](state)
        return True

    actions = _READING_ACTIONS if state.view_mode == ViewMode.READING else _OUTLINE_ACTIONS
    action = actions.get(intent)
    if action is None:
        return False
    action(state)
    return True


@dataclass
class TimingLog:
    """Record of every automatic advance: (position, word, duration_ms)."""

    entries: list[tuple[int, str, int]] = field(default_factory=list)

    def record(self, position: int, word: str, duration_ms: int) -> None:
        self.entries.append((position, word, duration_ms))

    def by_decile(self) -> dict[int, tuple[int, int, int]]:
        """
        Average and maximum duration per tenth of the positions read.

        Returns:
            {decile (0-10): (average_ms, max_ms, word_count)}
        """
        if not self.entries:
            return {}

        max_position = max(position for position, _, _ in self.entries)
        buckets: dict[int, list[int]] = defaultdict(list)
        for position, _, duration in self.entries:
            decile = position * 10 // max_position if max_position > 0 else 0
            buckets[decile].append(duration)

        return {
            decile: (sum(durations) // len(durations), max(durations), len(durations))
            for decile, durations in sorted(buckets.items())
        }

    def slowest(self, count: int = 10) -> list[tuple[int, str, int]]:
        """The ``count`` longest-displayed words, slowest first."""
        return sorted(self.entries, key=lambda entry: entry[2], reverse=True)[:count]


class PlaybackLoop:
    """
    Drive a :class:`PlaybackState` from an event source until QUIT.

    Args:
        state: The session state; mutated only by this loop.
        events: Intent source; ``poll`` is the single blocking call.
        render: Called with the state once per iteration.
        clock: Monotonic clock in seconds.
        poll_interval_ms: Wait used while paused, in the outline or with no
            tokens; ``Settings.poll_interval_ms`` when omitted.
    """

    def __init__(
        self,
        state: PlaybackState,
        events: EventSource,
        render: Callable[[PlaybackState], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
        poll_interval_ms: int | None = None,
    ) -> None:
        self.state = state
        self.events = events
        self.render = render
        self.clock = clock
        if poll_interval_ms is None:
            poll_interval_ms = get_settings().poll_interval_ms
        self.poll_interval_ms = poll_interval_ms
        self.timing_log = TimingLog()
        self._anchor = clock()

    def is_playing(self) -> bool:
        """Whether words are advancing on their own right now."""
        return (
            not self.state.paused
            and self.state.view_mode == ViewMode.READING
            and self.state.current_token() is not None
        )

    def next_timeout_ms(self, duration_ms: int) -> int:
        """Milliseconds to wait for input before the next advance check."""
        if not self.is_playing():
            return self.poll_interval_ms
        return max(duration_ms - self._elapsed_ms(), 0)

    def step(self) -> bool:
        """
        Run one iteration: render, wait for input, maybe advance.

        Returns:
            False once QUIT has been received, True otherwise.
        """
        if self.render is not None:
            self.render(self.state)

        duration_ms = self.state.current_duration_ms() or _IDLE_DURATION_MS
        timeout_ms = self.next_timeout_ms(duration_ms)

        intent = self.events.poll(timeout_ms / 1000)
        if intent == Intent.QUIT:
            return False
        if intent is not None:
            apply_intent(self.state, intent)

        if not self.is_playing():
            # Paused or outline time does not count toward the current word
            self._anchor = self.clock()
        elif self._elapsed_ms() >= duration_ms:
            if self.state.position < len(self.state.tokens) - 1:
                current = self.state.current_token()
                self.timing_log.record(self.state.position, current.word, duration_ms)
                self.state.advance()
            # On the last token only the timer restarts, keeping the wait bounded
            self._anchor = self.clock()

        return True

    def _elapsed_ms(self) -> int:
        # Whole milliseconds since the last advance
        return round((self.clock() - self._anchor) * 1000)

    def run(self) -> TimingLog:
        """Loop until QUIT and return the timing log."""
        self._anchor = self.clock()
        while self.step():
            pass

        logger.debug(
            "Playback finished at position %d",
            self.state.position,
            extra={
                "extra_data": {
                    "wpm": self.state.wpm,
                    "advances": len(self.timing_log.entries),
                    "by_decile": self.timing_log.by_decile(),
                    "slowest": self.timing_log.slowest(),
                }
            },
        )
        return self.timing_log
