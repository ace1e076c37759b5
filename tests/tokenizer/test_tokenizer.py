"""Tests for the document tokenizer.

Most cases go through the Markdown parser, which is how documents reach the
tokenizer in practice; a few build parse trees by hand to pin down behaviour
the parsers never produce.
"""

import pytest

from rsvp_reader.models.document import DocNode, Section
from rsvp_reader.models.enums import BlockKind, NodeKind, StyleKind
from rsvp_reader.models.token import BlockContext, TokenStyle
from rsvp_reader.services.tokenizer import DocumentTokenizer, TokenizerResult, get_tokenizer_version
from rsvp_reader.services.tokenizer.constants import TOKENIZER_VERSION


def words(result: TokenizerResult) -> list[str]:
    return [token.word for token in result.tokens]


def text(value: str) -> DocNode:
    return DocNode(NodeKind.TEXT, text=value)


# =============================================================================
# Basic Tokenization
# =============================================================================


class TestBasicTokenization:
    """Tests for words, result metadata and empty input."""

    def test_heading_and_paragraph(self, tokenize_markdown):
        result = tokenize_markdown("# Title\n\nParagraph")

        assert words(result) == ["Title", "Paragraph"]
        assert result.sections == [Section(title="Title", level=1, token_start=0, token_end=1)]
        assert result.tokens[0].block == BlockContext.heading(1)
        assert result.tokens[1].block == BlockContext.paragraph()

    def test_result_metadata(self, tokenize_markdown):
        result = tokenize_markdown("One two three")

        assert result.total_words == 3
        assert result.tokenizer_version == TOKENIZER_VERSION
        assert get_tokenizer_version() == TOKENIZER_VERSION

    @pytest.mark.parametrize("source", ["", "   \n\n  ", "<!-- only a comment -->"])
    def test_empty_input(self, tokenize_markdown, source):
        result = tokenize_markdown(source)

        assert result.tokens == []
        assert result.sections == []
        assert result.total_words == 0

    def test_line_breaks_do_not_produce_words(self, tokenize_markdown):
        result = tokenize_markdown("line one\nline two  \nline three")
        assert words(result) == ["line", "one", "line", "two", "line", "three"]

    def test_hyphenated_words_are_split(self, tokenize_markdown):
        result = tokenize_markdown("This is well-known text")
        assert words(result) == ["This", "is", "well-", "known", "text"]

    def test_every_token_has_a_word(self, tokenize_markdown, sample_markdown):
        for token in tokenize_markdown(sample_markdown).tokens:
            assert token.word.strip()

    def test_tokenizer_instance_is_reusable(self):
        tokenizer = DocumentTokenizer()
        tree = DocNode(NodeKind.DOCUMENT, children=[DocNode(NodeKind.PARAGRAPH, children=[text("Hi")])])

        assert words(tokenizer.tokenize(tree)) == words(tokenizer.tokenize(tree)) == ["Hi"]


# =============================================================================
# Inline Styles
# =============================================================================


class TestInlineStyles:
    """Tests for bold, italic, code and link styles."""

    def test_bold(self, tokenize_markdown):
        result = tokenize_markdown("This is **bold** text")

        assert words(result) == ["This", "is", "bold", "text"]
        assert [t.style.kind for t in result.tokens] == [
            StyleKind.NORMAL,
            StyleKind.NORMAL,
            StyleKind.BOLD,
            StyleKind.NORMAL,
        ]

    def test_italic(self, tokenize_markdown):
        result = tokenize_markdown("an *italic* word")
        assert result.tokens[1].style == TokenStyle.italic()

    def test_bold_italic(self, tokenize_markdown):
        result = tokenize_markdown("***both***")
        assert result.tokens[0].style == TokenStyle.bold_italic()

    def test_italic_inside_bold(self, tokenize_markdown):
        result = tokenize_markdown("**bold *both* bold**")
        assert [t.style.kind for t in result.tokens] == [
            StyleKind.BOLD,
            StyleKind.BOLD_ITALIC,
            StyleKind.BOLD,
        ]

    def test_link(self, tokenize_markdown):
        result = tokenize_markdown("See [the docs](https://example.com) now")

        assert words(result) == ["See", "the", "docs", "now"]
        assert result.tokens[1].style == TokenStyle.link("https://example.com")
        assert result.tokens[2].style.url == "https://example.com"
        assert result.tokens[3].style == TokenStyle.normal()

    def test_inline_code_is_one_token(self, tokenize_markdown):
        result = tokenize_markdown("Run `pip install x` now")

        assert words(result) == ["Run", "pip install x", "now"]
        assert result.tokens[1].style == TokenStyle.code()

    def test_style_does_not_leak_past_its_span(self, tokenize_markdown):
        result = tokenize_markdown("**one**\n\ntwo")
        assert result.tokens[1].style == TokenStyle.normal()


# =============================================================================
# Suppressed Content
# =============================================================================


class TestSuppressedContent:
    """Tests for content that is never read."""

    def test_fenced_code_is_skipped(self, tokenize_markdown):
        result = tokenize_markdown("Before\n\n```python\ncode here\n```\n\nAfter")
        assert words(result) == ["Before", "After"]

    def test_indented_code_is_skipped(self, tokenize_markdown):
        result = tokenize_markdown("Before\n\n    indented code\n\nAfter")
        assert words(result) == ["Before", "After"]

    def test_image_alt_text_is_skipped(self, tokenize_markdown):
        result = tokenize_markdown("Before ![alt text](image.png) after")
        assert words(result) == ["Before", "after"]

    def test_heading_inside_code_block_is_not_a_section(self):
        tree = DocNode(
            NodeKind.DOCUMENT,
            children=[
                DocNode(
                    NodeKind.CODE_BLOCK,
                    children=[DocNode(NodeKind.HEADING, level=1, children=[text("Hidden")])],
                ),
                DocNode(NodeKind.PARAGRAPH, children=[text("Visible")]),
            ],
        )
        result = DocumentTokenizer().tokenize(tree)

        assert words(result) == ["Visible"]
        assert result.sections == []

    def test_rules_and_html_are_silent(self, tokenize_markdown):
        result = tokenize_markdown("One\n\n---\n\n<div>\nraw\n</div>\n\nTwo")
        assert words(result) == ["One", "Two"]


# =============================================================================
# Block Context
# =============================================================================


class TestBlockContext:
    """Tests for list, quote, callout and table contexts."""

    def test_list_items(self, tokenize_markdown):
        result = tokenize_markdown("- Item one\n- Item two")

        assert words(result) == ["Item", "one", "Item", "two"]
        assert all(t.block == BlockContext.list_item(1) for t in result.tokens)

    def test_nested_list_depth(self, tokenize_markdown):
        result = tokenize_markdown("- outer\n  - inner\n- back")

        depths = {t.word: t.block.depth for t in result.tokens}
        assert depths == {"outer": 1, "inner": 2, "back": 1}

    def test_ordered_list(self, tokenize_markdown):
        result = tokenize_markdown("1. first\n2. second")
        assert all(t.block.kind == BlockKind.LIST_ITEM for t in result.tokens)

    def test_quotes_reset_between_blocks(self, tokenize_markdown):
        result = tokenize_markdown("> Quote 1\n\n> Quote 2")

        assert words(result) == ["Quote", "1", "Quote", "2"]
        assert all(t.block == BlockContext.quote(1) for t in result.tokens)

    def test_nested_quote_depth(self, tokenize_markdown):
        result = tokenize_markdown("> outer\n>\n> > deep")

        assert result.tokens[0].block == BlockContext.quote(1)
        assert result.tokens[1].block == BlockContext.quote(2)

    def test_context_returns_to_paragraph(self, tokenize_markdown):
        result = tokenize_markdown("- item\n\n> quoted\n\nplain")

        assert result.tokens[-1].word == "plain"
        assert result.tokens[-1].block == BlockContext.paragraph()

    def test_callout(self, tokenize_markdown):
        result = tokenize_markdown("> [!warning] Hot surface\n> Do not touch")

        assert words(result) == ["Hot", "surface", "Do", "not", "touch"]
        assert all(t.block == BlockContext.callout("warning") for t in result.tokens)

    def test_callout_marker_alone_on_first_line(self, tokenize_markdown):
        result = tokenize_markdown("> [!NOTE]\n> Remember this")

        assert words(result) == ["Remember", "this"]
        assert result.tokens[0].block.callout_type == "note"

    def test_table_cells(self, tokenize_markdown):
        result = tokenize_markdown("| A | B |\n| --- | --- |\n| one | two |")

        assert words(result) == ["A", "B", "one", "two"]
        assert [t.block for t in result.tokens] == [
            BlockContext.table_cell(0),
            BlockContext.table_cell(1),
            BlockContext.table_cell(0),
            BlockContext.table_cell(1),
        ]

    def test_list_inside_quote(self, tokenize_markdown):
        result = tokenize_markdown("> - quoted item")
        assert result.tokens[0].block == BlockContext.list_item(1)


# =============================================================================
# Sections
# =============================================================================


class TestSections:
    """Tests for outline sections built from headings."""

    def test_sections_in_document_order(self, tokenize_markdown, sample_markdown):
        result = tokenize_markdown(sample_markdown)

        assert result.sections == [
            Section(title="Getting Started", level=1, token_start=0, token_end=2),
            Section(title="Lists", level=2, token_start=7, token_end=8),
        ]
        assert result.tokens[7].word == "Lists"

    def test_heading_levels(self, tokenize_markdown):
        result = tokenize_markdown("### Three\n\n###### Six")
        assert [s.level for s in result.sections] == [3, 6]

    def test_section_title_uses_plain_text(self, tokenize_markdown):
        result = tokenize_markdown("## Using `pip` **well** ![logo](logo.png)")

        assert result.sections[0].title == "Using pip well"
        assert words(result) == ["Using", "pip", "well"]

    def test_heading_without_words(self):
        tree = DocNode(
            NodeKind.DOCUMENT,
            children=[
                DocNode(NodeKind.PARAGRAPH, children=[text("before")]),
                DocNode(NodeKind.HEADING, level=2),
            ],
        )
        result = DocumentTokenizer().tokenize(tree)

        assert result.sections == [Section(title="", level=2, token_start=1, token_end=1)]

    def test_heading_level_is_clamped(self):
        tree = DocNode(NodeKind.DOCUMENT, children=[DocNode(NodeKind.HEADING, level=9, children=[text("Deep")])])
        result = DocumentTokenizer().tokenize(tree)

        assert result.sections[0].level == 6
        assert result.tokens[0].block == BlockContext.heading(6)

    def test_sections_point_at_their_first_word(self, tokenize_markdown, sample_markdown):
        result = tokenize_markdown(sample_markdown)
        for section in result.sections:
            assert result.tokens[section.token_start].word == section.title.split()[0]


# =============================================================================
# Timing Hints
# =============================================================================


class TestStructuralTiming:
    """Tests for paragraph-end and new-block hints assigned during the walk."""

    def test_heading_then_paragraph(self, tokenize_markdown):
        result = tokenize_markdown("# Title\n\nParagraph")

        assert result.tokens[0].timing_hint.structure_modifier == 400
        assert result.tokens[1].timing_hint.structure_modifier == 300

    def test_only_first_heading_word_pauses(self, tokenize_markdown):
        result = tokenize_markdown("## Getting Started")
        assert [t.timing_hint.structure_modifier for t in result.tokens] == [400, 0]

    def test_paragraph_end_on_last_word_only(self, tokenize_markdown):
        result = tokenize_markdown("One two.\n\nThree four")
        hints = [t.timing_hint for t in result.tokens]

        assert [h.structure_modifier for h in hints] == [0, 300, 0, 300]
        assert hints[1].punctuation_modifier == 200

    def test_paragraph_end_inside_inline_style(self, tokenize_markdown):
        result = tokenize_markdown("Hello **world**")
        assert result.tokens[-1].timing_hint.structure_modifier == 300

    def test_paragraph_end_skips_trailing_image(self, tokenize_markdown):
        result = tokenize_markdown("Hello ![img](x.png)")
        assert result.tokens[-1].timing_hint.structure_modifier == 300

    def test_paragraph_end_on_trailing_inline_code(self, tokenize_markdown):
        result = tokenize_markdown("Run `make`")
        assert result.tokens[-1].timing_hint.structure_modifier == 300

    def test_list_items_pause_on_first_word(self, tokenize_markdown):
        result = tokenize_markdown("- First item\n- Second item")
        assert [t.timing_hint.structure_modifier for t in result.tokens] == [150, 0, 150, 0]

    def test_quote_and_table_cells_pause(self, tokenize_markdown):
        quote = tokenize_markdown("> This is a quote")
        table = tokenize_markdown("| A | B |\n| --- | --- |\n| one | two |")

        assert [t.timing_hint.structure_modifier for t in quote.tokens] == [150, 0, 0, 0]
        assert all(t.timing_hint.structure_modifier == 150 for t in table.tokens)

    def test_word_length_and_punctuation(self, tokenize_markdown):
        result = tokenize_markdown("An extraordinary, plain line")
        hint = result.tokens[1].timing_hint

        assert hint.word_length_modifier == 240
        assert hint.punctuation_modifier == 150
        assert hint.structure_modifier == 0
