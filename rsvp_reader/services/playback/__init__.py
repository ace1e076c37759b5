"""Playback engine: cursor state machine and the single-threaded reading loop."""

from .constants import DEFAULT_WPM, MAX_WPM, MIN_WPM, SENTENCE_JUMP, WPM_STEP
from .loop import EventSource, PlaybackLoop, TimingLog, apply_intent
from .state import PlaybackState, TokenWindow

__all__ = [
    "DEFAULT_WPM",
    "MAX_WPM",
    "MIN_WPM",
    "SENTENCE_JUMP",
    "WPM_STEP",
    "EventSource",
    "PlaybackLoop",
    "PlaybackState",
    "TimingLog",
    "TokenWindow",
    "apply_intent",
]
