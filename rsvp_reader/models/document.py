"""Document models: the parse tree, outline sections and assembled documents."""

from dataclasses import dataclass, field

from rsvp_reader.errors import EmptyDocumentError
from rsvp_reader.models.enums import NodeKind, SourceType
from rsvp_reader.models.token import TimedToken


@dataclass
class DocNode:
    """A node of the parse tree produced by the Markdown/HTML/EPUB parsers.

    Attributes:
        kind: Node kind from the parse-tree taxonomy.
        children: Child nodes in document order.
        text: Literal content of text, inline-code and code-block nodes.
        level: Heading level (1-6) for heading nodes.
        url: Link target for link nodes.
        callout: Lower-cased callout kind for callout nodes.
    """

    kind: NodeKind
    children: list["DocNode"] = field(default_factory=list)
    text: str = ""
    level: int = 0
    url: str | None = None
    callout: str | None = None


@dataclass(frozen=True)
class Section:
    """A heading used for outline navigation.

    ``token_start``/``token_end`` is the half-open range of the heading's own
    words in the token sequence; it is empty for a heading without words.
    """

    title: str
    level: int
    token_start: int
    token_end: int

    def __post_init__(self) -> None:
        if not 1 <= self.level <= 6:
            raise ValueError(f"section level must be between 1 and 6, got {self.level}")
        if not 0 <= self.token_start <= self.token_end:
            raise ValueError(
                "invalid section range: "
                f"token_start={self.token_start} token_end={self.token_end}"
            )


@dataclass(frozen=True)
class Document:
    """An assembled document ready for playback."""

    tokens: tuple[TimedToken, ...]
    sections: tuple[Section, ...]
    wpm: int
    title: str = ""
    source_type: SourceType = SourceType.MARKDOWN

    @property
    def total_words(self) -> int:
        return len(self.tokens)

    @property
    def is_empty(self) -> bool:
        return not self.tokens

    def require_tokens(self) -> "Document":
        """Return self, raising EmptyDocumentError if there is nothing to read."""
        if self.is_empty:
            raise EmptyDocumentError(f"document {self.title!r} produced no words to read")
        return self
