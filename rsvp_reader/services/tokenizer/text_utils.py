"""
Shared text processing utilities for the tokenizer and the parsers.
"""

import re

from rsvp_reader.models.document import DocNode
from rsvp_reader.models.enums import NodeKind

from .constants import CALLOUT_PATTERN, HYPHEN_SPLIT_MIN_PORTION, WORD_SEPARATOR_DASHES

_DASH_PATTERN = re.compile("|".join(re.escape(d) for d in WORD_SEPARATOR_DASHES))
_CALLOUT_RE = re.compile(CALLOUT_PATTERN)
_WHITESPACE_RE = re.compile(r"\s+")

# Subtrees whose text is never read
_SILENT_KINDS = {NodeKind.CODE_BLOCK, NodeKind.IMAGE, NodeKind.HTML}


def split_into_words(text: str) -> list[str]:
    """
    Split text into display words.

    Whitespace and em/en dashes separate words; long hyphenated words are
    broken up by :func:`split_hyphenated_word`.

    Examples:
        >>> split_into_words("Hello   world\\ntest")
        ['Hello', 'world', 'test']
        >>> split_into_words("Hello—world")
        ['Hello', 'world']
    """
    words: list[str] = []
    for part in text.split():
        for piece in _DASH_PATTERN.split(part):
            if "-" in piece:
                words.extend(split_hyphenated_word(piece))
            else:
                words.append(piece)
    return [w for w in words if w]


def split_hyphenated_word(word: str) -> list[str]:
    """
    Split a hyphenated word when any portion is longer than 3 characters.

    Each portion except the last keeps its trailing hyphen.

    Examples:
        >>> split_hyphenated_word("well-known")
        ['well-', 'known']
        >>> split_hyphenated_word("co-op")
        ['co-op']
        >>> split_hyphenated_word("mother-in-law")
        ['mother-', 'in-', 'law']
    """
    portions = word.split("-")
    if len(portions) < 2:
        return [word]

    if not any(len(p) > HYPHEN_SPLIT_MIN_PORTION for p in portions):
        return [word]

    result = [f"{p}-" for p in portions[:-1]]
    result.append(portions[-1])
    return [w for w in result if w]


def detect_callout_type(text: str) -> str | None:
    """
    Detect a callout marker such as ``[!note]`` at the start of text.

    Returns:
        The lower-cased callout type, or None.

    Examples:
        >>> detect_callout_type("[!Warning] Hot surface")
        'warning'
        >>> detect_callout_type("Just a quote") is None
        True
    """
    match = _CALLOUT_RE.match(text)
    if not match:
        return None
    return match.group(1).strip().lower() or None


def callout_marker_length(text: str) -> int:
    """Number of leading characters of ``text`` taken up by a callout marker (0 if none)."""
    match = _CALLOUT_RE.match(text)
    return match.end() if match else 0


def collect_text(node: DocNode) -> str:
    """
    Flatten all readable text below a node.

    Text and inline code are concatenated, line breaks count as a single
    space, and code blocks, images and raw HTML are skipped. Runs of
    whitespace are collapsed and the result is trimmed.
    """
    parts: list[str] = []
    _collect(node, parts)
    return _WHITESPACE_RE.sub(" ", "".join(parts)).strip()


def _collect(node: DocNode, parts: list[str]) -> None:
    if node.kind in _SILENT_KINDS:
        return
    if node.kind in (NodeKind.TEXT, NodeKind.CODE_INLINE):
        parts.append(node.text)
    elif node.kind == NodeKind.BREAK:
        parts.append(" ")
    for child in node.children:
        _collect(child, parts)
