"""RSVP reader engine: document tokenization, timing, ORP placement and playback."""

__version__ = "0.1.0"
