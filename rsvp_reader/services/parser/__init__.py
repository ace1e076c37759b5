"""
Document parsers for the RSVP reader.

Parsers turn source text into the parse tree consumed by the tokenizer:
- markdown: CommonMark + tables via markdown-it-py
- html: HTML/XHTML via BeautifulSoup
- epub: EPUB containers via EbookLib, chapters joined with title headings

Primary usage:
    >>> from rsvp_reader.services.parser import load_document
    >>> document = load_document("notes.md", wpm=350)
"""

import logging
from pathlib import Path

from rsvp_reader.errors import ParseError
from rsvp_reader.models.document import DocNode, Document
from rsvp_reader.models.enums import SourceType
from rsvp_reader.services.assembler import assemble
from rsvp_reader.services.tokenizer.tokenizer import tokenize

from .epub import EpubParser
from .html import HtmlParser
from .markdown import MarkdownParser

logger = logging.getLogger(__name__)

_HTML_SUFFIXES = {".html", ".htm", ".xhtml"}


def detect_source_type(path: str | Path) -> SourceType:
    """Pick the source type from a file extension (Markdown by default)."""
    suffix = Path(path).suffix.lower()
    if suffix == ".epub":
        return SourceType.EPUB
    if suffix in _HTML_SUFFIXES:
        return SourceType.HTML
    return SourceType.MARKDOWN


def parse_text(text: str, source_type: SourceType = SourceType.MARKDOWN) -> DocNode:
    """
    Parse in-memory Markdown or HTML text into a parse tree.

    Raises:
        ValueError: For EPUB, which can only be read from a file.
    """
    if source_type == SourceType.MARKDOWN:
        return MarkdownParser().parse(text)
    if source_type == SourceType.HTML:
        return HtmlParser().parse(text)
    raise ValueError("EPUB documents can only be parsed from a file")


def parse_file(path: str | Path) -> tuple[DocNode, SourceType]:
    """
    Parse a file into a parse tree, choosing the parser by extension.

    Raises:
        ParseError: If the file cannot be read or decoded.
    """
    path = Path(path)
    source_type = detect_source_type(path)

    if source_type == SourceType.EPUB:
        return EpubParser().parse_file(path), source_type

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseError(f"Failed to read {path}: {exc}") from exc

    return parse_text(text, source_type), source_type


def load_document(path: str | Path, wpm: int | None = None) -> Document:
    """
    Read, tokenize and assemble a document from disk.

    Args:
        path: Markdown, HTML or EPUB file.
        wpm: Seed reading speed (``Settings.default_wpm`` when omitted).

    Returns:
        The assembled Document, titled after its first heading or the file stem.

    Raises:
        ParseError: If the file cannot be read or parsed.
    """
    path = Path(path)
    tree, source_type = parse_file(path)
    result = tokenize(tree)

    title = result.sections[0].title if result.sections else path.stem
    logger.info("Loaded %s (%s, %d words)", path.name, source_type.value, result.total_words)
    return assemble(result, wpm, title=title, source_type=source_type)


__all__ = [
    "EpubParser",
    "HtmlParser",
    "MarkdownParser",
    "detect_source_type",
    "load_document",
    "parse_file",
    "parse_text",
]
