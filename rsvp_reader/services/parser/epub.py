"""EPUB parser: EPUB container -> one parse tree with chapter headings."""

import logging
import zipfile
from pathlib import Path

import ebooklib
from ebooklib import epub

from rsvp_reader.errors import ParseError
from rsvp_reader.models.document import DocNode
from rsvp_reader.models.enums import NodeKind

from .html import HtmlParser

logger = logging.getLogger(__name__)


class EpubParser:
    """
    Read EPUB spine documents in order and concatenate their parse trees.

    A chapter whose title is listed in the table of contents is preceded by a
    level-1 heading carrying that title, so every titled chapter becomes an
    outline section.
    """

    def __init__(self, html_parser: HtmlParser | None = None) -> None:
        self._html_parser = html_parser or HtmlParser()

    def parse_file(self, path: str | Path) -> DocNode:
        """
        Parse an EPUB file.

        Args:
            path: Location of the ``.epub`` file.

        Returns:
            A ``DOCUMENT`` node with all chapters in reading order.

        Raises:
            ParseError: If the container cannot be opened or a chapter is
                malformed XHTML.
        """
        book = self._open(Path(path))
        titles = self._toc_titles(book.toc)

        children: list[DocNode] = []
        chapter_count = 0
        for index, item in enumerate(self._spine_documents(book)):
            name = item.get_name()
            title = self._chapter_title(name, titles)
            content = item.get_content().decode("utf-8", errors="replace")

            if "<parsererror" in content:
                raise ParseError(
                    f"Failed to parse chapter {title or f'chapter {index + 1}'}: malformed XHTML"
                )

            if title:
                children.append(
                    DocNode(
                        NodeKind.HEADING,
                        children=[DocNode(NodeKind.TEXT, text=title)],
                        level=1,
                    )
                )
            children.extend(self._html_parser.parse(content).children)
            chapter_count += 1

        logger.debug("Parsed EPUB %s with %d chapters", path, chapter_count)
        return DocNode(NodeKind.DOCUMENT, children=children)

    def _open(self, path: Path) -> epub.EpubBook:
        try:
            return epub.read_epub(str(path))
        except (OSError, KeyError, zipfile.BadZipFile, epub.EpubException) as exc:
            raise ParseError(f"Failed to open EPUB {path}: {exc}") from exc

    def _spine_documents(self, book: epub.EpubBook):
        for entry in book.spine:
            idref = entry[0] if isinstance(entry, tuple) else entry
            item = book.get_item_with_id(idref)
            if item is None or item.get_type() != ebooklib.ITEM_DOCUMENT:
                continue
            yield item

    def _toc_titles(self, toc) -> dict[str, str]:
        """Map TOC hrefs (without fragments) to titles, first entry wins."""
        titles: dict[str, str] = {}
        for entry in toc:
            if isinstance(entry, tuple):
                section, nested = entry
                self._add_title(titles, section)
                for href, title in self._toc_titles(nested).items():
                    titles.setdefault(href, title)
            else:
                self._add_title(titles, entry)
        return titles

    def _add_title(self, titles: dict[str, str], entry) -> None:
        href = getattr(entry, "href", None)
        title = (getattr(entry, "title", None) or "").strip()
        if href and title:
            titles.setdefault(href.split("#", 1)[0], title)

    def _chapter_title(self, name: str, titles: dict[str, str]) -> str | None:
        if name in titles:
            return titles[name]
        # TOC hrefs are relative to the navigation document, item names to the package
        for href, title in titles.items():
            if name.endswith(href) or href.endswith(name):
                return title
        return None
