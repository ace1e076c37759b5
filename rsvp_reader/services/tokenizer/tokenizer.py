"""
Document tokenizer for RSVP reading.

This module reduces a parse tree (:class:`~rsvp_reader.models.document.DocNode`)
to the ordered sequence of reading tokens plus the outline sections built from
its headings.

The walk is depth-first. Everything that is scoped to a subtree (inline style,
block context, code/image suppression, list and quote depth, whether the
subtree closes a paragraph) travels down the recursion in an immutable
``_Scope``; only the output lists and the pending "new block" flag live in the
``_TokenSink`` shared by the whole walk.

Example usage:
    >>> from rsvp_reader.services.parser import parse_text
    >>> result = tokenize(parse_text("# Title\\n\\nHello **world**."))
    >>> [t.word for t in result.tokens]
    ['Title', 'Hello', 'world.']
"""

import logging
from dataclasses import dataclass, field, replace

from rsvp_reader.models.document import DocNode, Section
from rsvp_reader.models.enums import BlockKind, NodeKind
from rsvp_reader.models.token import BlockContext, Token, TokenStyle

from .constants import TOKENIZER_VERSION
from .text_utils import collect_text, split_into_words
from .timing import generate_timing_hint

logger = logging.getLogger(__name__)

# Nodes that never produce words and are not descended into
_SILENT_KINDS = {NodeKind.BREAK, NodeKind.RULE, NodeKind.HTML}


@dataclass
class TokenizerResult:
    """Result of tokenizing a parse tree.

    Attributes:
        tokens: Reading tokens in document order.
        sections: Outline sections in document order.
        total_words: Number of tokens.
        tokenizer_version: Version of the tokenizer used.
    """

    tokens: list[Token]
    sections: list[Section]
    total_words: int
    tokenizer_version: str = TOKENIZER_VERSION


@dataclass(frozen=True)
class _Scope:
    """State inherited by a subtree; replaced, never mutated."""

    style: TokenStyle = TokenStyle()
    block: BlockContext = BlockContext()
    code_depth: int = 0
    in_image: bool = False
    list_depth: int = 0
    quote_depth: int = 0
    closes_paragraph: bool = False

    @property
    def suppressed(self) -> bool:
        return self.code_depth > 0 or self.in_image


@dataclass
class _TokenSink:
    """Output of the walk."""

    tokens: list[Token] = field(default_factory=list)
    sections: list[Section] = field(default_factory=list)
    # The first word of the document counts as starting a block
    new_block_pending: bool = True

    def emit(self, word: str, scope: _Scope, is_paragraph_end: bool) -> None:
        hint = generate_timing_hint(
            word,
            is_paragraph_end=is_paragraph_end,
            is_new_block=self.new_block_pending,
            block=scope.block,
        )
        self.tokens.append(Token(word=word, style=scope.style, block=scope.block, timing_hint=hint))
        self.new_block_pending = False


class DocumentTokenizer:
    """
    Reduce a parse tree to reading tokens and outline sections.

    The tokenizer has no error channel: every structurally valid tree
    produces a result, possibly an empty one.
    """

    def tokenize(self, root: DocNode) -> TokenizerResult:
        """
        Tokenize a parse tree.

        Args:
            root: Root of the tree, usually a ``DOCUMENT`` node.

        Returns:
            TokenizerResult with tokens and sections.
        """
        sink = _TokenSink()
        self._walk(root, _Scope(), sink)

        logger.debug(
            "Tokenized document",
            extra={
                "extra_data": {
                    "tokens": len(sink.tokens),
                    "sections": len(sink.sections),
                }
            },
        )
        return TokenizerResult(
            tokens=sink.tokens,
            sections=sink.sections,
            total_words=len(sink.tokens),
        )

    def _walk(self, node: DocNode, scope: _Scope, sink: _TokenSink, column: int = 0) -> None:
        kind = node.kind

        if kind in _SILENT_KINDS:
            return
        if kind == NodeKind.TEXT:
            self._emit_text(node.text, scope, sink)
            return
        if kind == NodeKind.CODE_INLINE:
            self._emit_inline_code(node.text, scope, sink)
            return
        if kind == NodeKind.HEADING:
            self._walk_heading(node, scope, sink)
            return

        self._walk_children(node, self._enter(node, scope, sink, column), sink)

    def _enter(self, node: DocNode, scope: _Scope, sink: _TokenSink, column: int) -> _Scope:
        """Return the scope for the children of ``node``, marking block entries."""
        kind = node.kind

        if kind == NodeKind.CODE_BLOCK:
            return replace(scope, code_depth=scope.code_depth + 1, closes_paragraph=False)
        if kind == NodeKind.IMAGE:
            return replace(scope, in_image=True, closes_paragraph=False)

        if kind == NodeKind.STRONG:
            return replace(scope, style=scope.style.combine(TokenStyle.bold()))
        if kind == NodeKind.EMPHASIS:
            return replace(scope, style=scope.style.combine(TokenStyle.italic()))
        if kind == NodeKind.LINK:
            return replace(scope, style=scope.style.combine(TokenStyle.link(node.url or "")))

        if kind == NodeKind.LIST:
            return replace(scope, list_depth=scope.list_depth + 1)

        if kind == NodeKind.PARAGRAPH:
            self._mark_new_block(scope, sink)
            # Paragraphs inside containers keep the container's context
            if scope.block.kind != BlockKind.PARAGRAPH:
                return scope
            return replace(scope, block=BlockContext.paragraph(), closes_paragraph=True)

        block: BlockContext | None = None
        quote_depth = scope.quote_depth
        if kind == NodeKind.LIST_ITEM:
            block = BlockContext.list_item(max(scope.list_depth, 1))
        elif kind == NodeKind.BLOCKQUOTE:
            quote_depth += 1
            block = BlockContext.quote(quote_depth)
        elif kind == NodeKind.CALLOUT:
            quote_depth += 1
            block = BlockContext.callout(node.callout or "note")
        elif kind == NodeKind.TABLE_CELL:
            block = BlockContext.table_cell(column)

        if block is None:
            return scope

        self._mark_new_block(scope, sink)
        return replace(scope, block=block, quote_depth=quote_depth, closes_paragraph=False)

    def _walk_children(self, node: DocNode, scope: _Scope, sink: _TokenSink) -> None:
        children = node.children
        closing_index = -1
        inner = scope
        if scope.closes_paragraph:
            closing_index = self._last_speaking_child(children)
            inner = replace(scope, closes_paragraph=False)

        column = 0
        for index, child in enumerate(children):
            child_scope = scope if index == closing_index else inner
            if node.kind == NodeKind.TABLE_ROW and child.kind == NodeKind.TABLE_CELL:
                self._walk(child, child_scope, sink, column)
                column += 1
            else:
                self._walk(child, child_scope, sink)

    def _walk_heading(self, node: DocNode, scope: _Scope, sink: _TokenSink) -> None:
        if scope.suppressed:
            return

        level = min(max(node.level, 1), 6)
        title = collect_text(node)
        token_start = len(sink.tokens)

        self._mark_new_block(scope, sink)
        heading_scope = replace(scope, block=BlockContext.heading(level), closes_paragraph=False)
        self._walk_children(node, heading_scope, sink)

        sink.sections.append(
            Section(
                title=title,
                level=level,
                token_start=token_start,
                token_end=len(sink.tokens),
            )
        )

    def _emit_text(self, text: str, scope: _Scope, sink: _TokenSink) -> None:
        if scope.suppressed:
            return

        words = split_into_words(text)
        last_index = len(words) - 1
        for index, word in enumerate(words):
            sink.emit(word, scope, is_paragraph_end=scope.closes_paragraph and index == last_index)

    def _emit_inline_code(self, code: str, scope: _Scope, sink: _TokenSink) -> None:
        # Inline code is shown whole, never split into words
        word = code.strip()
        if scope.suppressed or not word:
            return
        code_scope = replace(scope, style=scope.style.combine(TokenStyle.code()))
        sink.emit(word, code_scope, is_paragraph_end=scope.closes_paragraph)

    def _mark_new_block(self, scope: _Scope, sink: _TokenSink) -> None:
        if not scope.suppressed:
            sink.new_block_pending = True

    def _last_speaking_child(self, children: list[DocNode]) -> int:
        """Index of the last child that would emit at least one word, or -1."""
        for index in range(len(children) - 1, -1, -1):
            if self._speaks(children[index]):
                return index
        return -1

    def _speaks(self, node: DocNode) -> bool:
        kind = node.kind
        if kind in _SILENT_KINDS or kind in (NodeKind.CODE_BLOCK, NodeKind.IMAGE):
            return False
        if kind == NodeKind.TEXT:
            return bool(split_into_words(node.text))
        if kind == NodeKind.CODE_INLINE:
            return bool(node.text.strip())
        return any(self._speaks(child) for child in node.children)


def tokenize(root: DocNode) -> TokenizerResult:
    """
    Tokenize a parse tree with a default :class:`DocumentTokenizer`.

    Args:
        root: Root of the parse tree.

    Returns:
        TokenizerResult with all tokens and sections.
    """
    return DocumentTokenizer().tokenize(root)
