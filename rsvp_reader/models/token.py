"""Token models: the reading units produced by the tokenizer."""

from dataclasses import dataclass

from rsvp_reader.models.enums import BlockKind, StyleKind


@dataclass(frozen=True)
class TokenStyle:
    """Inline style of a token. ``url`` is only set for links."""

    kind: StyleKind = StyleKind.NORMAL
    url: str | None = None

    @classmethod
    def normal(cls) -> "TokenStyle":
        return cls(StyleKind.NORMAL)

    @classmethod
    def bold(cls) -> "TokenStyle":
        return cls(StyleKind.BOLD)

    @classmethod
    def italic(cls) -> "TokenStyle":
        return cls(StyleKind.ITALIC)

    @classmethod
    def bold_italic(cls) -> "TokenStyle":
        return cls(StyleKind.BOLD_ITALIC)

    @classmethod
    def code(cls) -> "TokenStyle":
        return cls(StyleKind.CODE)

    @classmethod
    def link(cls, url: str) -> "TokenStyle":
        return cls(StyleKind.LINK, url)

    def combine(self, inner: "TokenStyle") -> "TokenStyle":
        """
        Return the style active inside ``inner`` when nested in this style.

        Bold inside italic (or the reverse) becomes bold-italic, and
        bold-italic absorbs anything nested in it. Otherwise the inner
        style wins for its subtree.
        """
        emphasis = {StyleKind.BOLD, StyleKind.ITALIC}
        if self.kind == StyleKind.BOLD_ITALIC:
            return self
        if self.kind in emphasis and inner.kind in emphasis and self.kind != inner.kind:
            return TokenStyle.bold_italic()
        return inner


@dataclass(frozen=True)
class BlockContext:
    """
    Structural context of a token.

    Only the field matching ``kind`` is meaningful: ``depth`` for list items
    and quotes, ``level`` for headings, ``column`` for table cells and
    ``callout_type`` for callouts.
    """

    kind: BlockKind = BlockKind.PARAGRAPH
    depth: int = 0
    level: int = 0
    column: int = 0
    callout_type: str | None = None

    @classmethod
    def paragraph(cls) -> "BlockContext":
        return cls(BlockKind.PARAGRAPH)

    @classmethod
    def list_item(cls, depth: int) -> "BlockContext":
        return cls(BlockKind.LIST_ITEM, depth=depth)

    @classmethod
    def quote(cls, depth: int) -> "BlockContext":
        return cls(BlockKind.QUOTE, depth=depth)

    @classmethod
    def callout(cls, callout_type: str) -> "BlockContext":
        return cls(BlockKind.CALLOUT, callout_type=callout_type)

    @classmethod
    def heading(cls, level: int) -> "BlockContext":
        if not 1 <= level <= 6:
            raise ValueError(f"heading level must be between 1 and 6, got {level}")
        return cls(BlockKind.HEADING, level=level)

    @classmethod
    def table_cell(cls, column: int) -> "BlockContext":
        return cls(BlockKind.TABLE_CELL, column=column)


@dataclass(frozen=True)
class TimingHint:
    """Additive display-time modifiers in milliseconds, independent of WPM."""

    word_length_modifier: int = 0
    punctuation_modifier: int = 0
    structure_modifier: int = 0

    @property
    def total(self) -> int:
        return self.word_length_modifier + self.punctuation_modifier + self.structure_modifier


@dataclass(frozen=True)
class Token:
    """One indivisible reading unit.

    Attributes:
        word: The literal text shown, trailing punctuation included.
        style: Inline style active when the word was encountered.
        block: Structural container active at this point.
        timing_hint: Modifiers computed once at tokenization time.
    """

    word: str
    style: TokenStyle = TokenStyle()
    block: BlockContext = BlockContext()
    timing_hint: TimingHint = TimingHint()

    def __post_init__(self) -> None:
        if not self.word or not self.word.strip():
            raise ValueError("token word must not be empty")


@dataclass(frozen=True)
class TimedToken:
    """A token with its display duration and ORP index baked in.

    ``duration_ms`` is computed from the WPM in effect at assembly time; the
    playback state re-derives the live duration from ``token.timing_hint``.
    """

    token: Token
    duration_ms: int
    orp_position: int

    @property
    def word(self) -> str:
        return self.token.word
