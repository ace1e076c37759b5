"""Enums shared by the reader models and services."""

from enum import Enum


class StyleKind(str, Enum):
    """Inline emphasis active when a word was encountered."""

    NORMAL = "normal"
    BOLD = "bold"
    ITALIC = "italic"
    BOLD_ITALIC = "bold_italic"
    CODE = "code"
    LINK = "link"


class BlockKind(str, Enum):
    """Structural container a word belongs to."""

    PARAGRAPH = "paragraph"
    LIST_ITEM = "list_item"
    QUOTE = "quote"
    CALLOUT = "callout"
    HEADING = "heading"
    TABLE_CELL = "table_cell"


class NodeKind(str, Enum):
    """Node kinds of the parse tree handed to the tokenizer."""

    DOCUMENT = "document"
    CONTAINER = "container"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    LIST = "list"
    LIST_ITEM = "list_item"
    BLOCKQUOTE = "blockquote"
    CALLOUT = "callout"
    TABLE = "table"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    STRONG = "strong"
    EMPHASIS = "emphasis"
    CODE_INLINE = "code_inline"
    LINK = "link"
    CODE_BLOCK = "code_block"
    IMAGE = "image"
    TEXT = "text"
    BREAK = "break"
    RULE = "rule"
    HTML = "html"


class SourceType(str, Enum):
    """Enum for document source types."""

    MARKDOWN = "md"
    HTML = "html"
    EPUB = "epub"


class ViewMode(str, Enum):
    """Which screen the playback state is showing."""

    READING = "reading"
    OUTLINE = "outline"


class Intent(str, Enum):
    """Already-classified user intents consumed by the playback loop."""

    TOGGLE_PAUSE = "toggle_pause"
    WPM_UP = "wpm_up"
    WPM_DOWN = "wpm_down"
    REWIND = "rewind"
    SKIP = "skip"
    TOGGLE_OUTLINE = "toggle_outline"
    OUTLINE_UP = "outline_up"
    OUTLINE_DOWN = "outline_down"
    JUMP = "jump"
    TOGGLE_HELP = "toggle_help"
    QUIT = "quit"
