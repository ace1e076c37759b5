"""Markdown parser: Markdown text -> parse tree for the tokenizer."""

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from rsvp_reader.models.document import DocNode
from rsvp_reader.models.enums import NodeKind
from rsvp_reader.services.tokenizer.text_utils import callout_marker_length, detect_callout_type

# markdown-it node types that map one-to-one onto parse tree kinds
_NODE_KINDS = {
    "paragraph": NodeKind.PARAGRAPH,
    "bullet_list": NodeKind.LIST,
    "ordered_list": NodeKind.LIST,
    "list_item": NodeKind.LIST_ITEM,
    "strong": NodeKind.STRONG,
    "em": NodeKind.EMPHASIS,
    "table": NodeKind.TABLE,
    "tr": NodeKind.TABLE_ROW,
    "th": NodeKind.TABLE_CELL,
    "td": NodeKind.TABLE_CELL,
    "image": NodeKind.IMAGE,
    "hr": NodeKind.RULE,
    "softbreak": NodeKind.BREAK,
    "hardbreak": NodeKind.BREAK,
}


class MarkdownParser:
    """Parse CommonMark (plus GFM tables) into a :class:`DocNode` tree."""

    def __init__(self) -> None:
        self._md = MarkdownIt("commonmark").enable("table")

    def parse(self, text: str) -> DocNode:
        """
        Parse Markdown text.

        Args:
            text: Markdown source.

        Returns:
            A ``DOCUMENT`` node holding the converted block nodes.
        """
        tree = SyntaxTreeNode(self._md.parse(text))
        return DocNode(NodeKind.DOCUMENT, children=self._convert_children(tree))

    def _convert_children(self, node: SyntaxTreeNode) -> list[DocNode]:
        children: list[DocNode] = []
        for child in node.children:
            children.extend(self._convert(child))
        return children

    def _convert(self, node: SyntaxTreeNode) -> list[DocNode]:
        node_type = node.type

        # Inline containers are transparent
        if node_type in ("inline", "thead", "tbody"):
            return self._convert_children(node)

        if node_type == "text":
            return [DocNode(NodeKind.TEXT, text=node.content)]
        if node_type == "code_inline":
            return [DocNode(NodeKind.CODE_INLINE, text=node.content)]
        if node_type in ("fence", "code_block"):
            return [DocNode(NodeKind.CODE_BLOCK, text=node.content)]
        if node_type in ("html_block", "html_inline"):
            return [DocNode(NodeKind.HTML, text=node.content)]

        if node_type == "heading":
            level = min(max(int(node.tag[1:]), 1), 6)
            return [DocNode(NodeKind.HEADING, children=self._convert_children(node), level=level)]
        if node_type == "link":
            href = node.attrs.get("href")
            return [
                DocNode(
                    NodeKind.LINK,
                    children=self._convert_children(node),
                    url=str(href) if href is not None else None,
                )
            ]
        if node_type == "blockquote":
            return [self._convert_blockquote(node)]

        kind = _NODE_KINDS.get(node_type, NodeKind.CONTAINER)
        return [DocNode(kind, children=self._convert_children(node))]

    def _convert_blockquote(self, node: SyntaxTreeNode) -> DocNode:
        """Convert a blockquote, recognising ``> [!kind]`` callouts."""
        children = self._convert_children(node)
        if not children or children[0].kind != NodeKind.PARAGRAPH:
            return DocNode(NodeKind.BLOCKQUOTE, children=children)

        leading: list[DocNode] = []
        for child in children[0].children:
            if child.kind != NodeKind.TEXT:
                break
            leading.append(child)

        head = "".join(child.text for child in leading)
        callout = detect_callout_type(head)
        if callout is None:
            return DocNode(NodeKind.BLOCKQUOTE, children=children)

        # Drop the marker text so it is never read
        remaining = callout_marker_length(head)
        for child in leading:
            cut = min(remaining, len(child.text))
            child.text = child.text[cut:]
            remaining -= cut

        return DocNode(NodeKind.CALLOUT, children=children, callout=callout)
