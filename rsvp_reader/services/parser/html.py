"""HTML parser: HTML/XHTML -> parse tree for the tokenizer."""

import re

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import Comment, Declaration, Doctype, ProcessingInstruction

from rsvp_reader.models.document import DocNode
from rsvp_reader.models.enums import NodeKind

_HEADING_TAG = re.compile(r"^h([1-6])$")

_TAG_KINDS = {
    "p": NodeKind.PARAGRAPH,
    "ul": NodeKind.LIST,
    "ol": NodeKind.LIST,
    "li": NodeKind.LIST_ITEM,
    "blockquote": NodeKind.BLOCKQUOTE,
    "table": NodeKind.TABLE,
    "tr": NodeKind.TABLE_ROW,
    "td": NodeKind.TABLE_CELL,
    "th": NodeKind.TABLE_CELL,
    "strong": NodeKind.STRONG,
    "b": NodeKind.STRONG,
    "em": NodeKind.EMPHASIS,
    "i": NodeKind.EMPHASIS,
    "img": NodeKind.IMAGE,
    "hr": NodeKind.RULE,
    "br": NodeKind.BREAK,
}

# Elements whose content is never read
_SKIPPED_TAGS = {"head", "title", "script", "style", "noscript", "template", "svg"}

_NON_TEXT_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


class HtmlParser:
    """Parse HTML (including EPUB XHTML chapters) into a :class:`DocNode` tree."""

    def parse(self, html: str) -> DocNode:
        """
        Parse an HTML document or fragment.

        Only ``<body>`` is read when the document has one.

        Args:
            html: HTML source.

        Returns:
            A ``DOCUMENT`` node holding the converted nodes.
        """
        soup = BeautifulSoup(html, "html.parser")
        root = soup.body or soup
        return DocNode(NodeKind.DOCUMENT, children=self._convert_children(root))

    def _convert_children(self, element: Tag) -> list[DocNode]:
        children: list[DocNode] = []
        for child in element.children:
            node = self._convert(child)
            if node is not None:
                children.append(node)
        return children

    def _convert(self, element) -> DocNode | None:
        if isinstance(element, _NON_TEXT_STRINGS):
            return None
        if isinstance(element, NavigableString):
            return DocNode(NodeKind.TEXT, text=str(element))
        if not isinstance(element, Tag):
            return None

        name = (element.name or "").lower()

        if name in _SKIPPED_TAGS:
            return DocNode(NodeKind.HTML)
        if name == "pre":
            return DocNode(NodeKind.CODE_BLOCK, text=element.get_text())
        if name == "code":
            return DocNode(NodeKind.CODE_INLINE, text=element.get_text())

        heading = _HEADING_TAG.match(name)
        if heading:
            return DocNode(
                NodeKind.HEADING,
                children=self._convert_children(element),
                level=int(heading.group(1)),
            )

        if name == "a" and element.get("href"):
            return DocNode(
                NodeKind.LINK,
                children=self._convert_children(element),
                url=str(element.get("href")),
            )

        kind = _TAG_KINDS.get(name, NodeKind.CONTAINER)
        return DocNode(kind, children=self._convert_children(element))
