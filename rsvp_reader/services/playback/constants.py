"""Playback limits and step sizes."""

DEFAULT_WPM = 300
MIN_WPM = 100
MAX_WPM = 800
WPM_STEP = 25

# "A sentence" for rewind/skip is approximated as a fixed number of words
SENTENCE_JUMP = 10
