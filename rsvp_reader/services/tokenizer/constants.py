"""
Tokenizer constants for ORP placement, word timing and word splitting.

All durations are integer milliseconds.
"""

# Tokenizer version - increment when logic changes
TOKENIZER_VERSION = "2.0.0"

# -----------------------------------------------------------------------------
# ORP (Optimal Recognition Point)
# -----------------------------------------------------------------------------

# (max word length, ORP index) - first matching row wins; longer words use ORP_MAX_INDEX
ORP_LENGTH_TABLE = (
    (3, 0),
    (6, 1),
    (9, 2),
)
ORP_MAX_INDEX = 3

# -----------------------------------------------------------------------------
# Timing
# -----------------------------------------------------------------------------

MS_PER_MINUTE = 60_000

# Display time never drops below this, whatever the modifiers add up to
MIN_DURATION_MS = 50

# Word length: no penalty up to SHORT_WORD_LENGTH characters, a per-character
# penalty up to LONG_WORD_LENGTH, and a steeper one beyond it.
SHORT_WORD_LENGTH = 6
LONG_WORD_LENGTH = 10
MEDIUM_CHAR_PENALTY_MS = 20
LONG_CHAR_PENALTY_MS = 40

# Trailing punctuation (only the final character is inspected)
MAJOR_PAUSE_PUNCTUATION = {'.', '!', '?'}
MINOR_PAUSE_PUNCTUATION = {',', ':', ';'}
MAJOR_PAUSE_MS = 200
MINOR_PAUSE_MS = 150

# Structural breaks (mutually exclusive)
PARAGRAPH_END_MS = 300
HEADING_START_MS = 400
BLOCK_START_MS = 150

# -----------------------------------------------------------------------------
# Word splitting
# -----------------------------------------------------------------------------

# Dashes that separate words even without surrounding whitespace
WORD_SEPARATOR_DASHES = ('—', '–')  # em dash, en dash

# Hyphenated words split only when some portion is longer than this
HYPHEN_SPLIT_MIN_PORTION = 3

# Callout marker at the start of a blockquote, e.g. "[!note]"
CALLOUT_PATTERN = r'^\s*\[!([^\]]+)\]'
