"""Data models for the RSVP reader."""

from rsvp_reader.models.document import DocNode, Document, Section
from rsvp_reader.models.enums import (
    BlockKind,
    Intent,
    NodeKind,
    SourceType,
    StyleKind,
    ViewMode,
)
from rsvp_reader.models.token import (
    BlockContext,
    TimedToken,
    TimingHint,
    Token,
    TokenStyle,
)

__all__ = [
    "BlockContext",
    "BlockKind",
    "DocNode",
    "Document",
    "Intent",
    "NodeKind",
    "Section",
    "SourceType",
    "StyleKind",
    "TimedToken",
    "TimingHint",
    "Token",
    "TokenStyle",
    "ViewMode",
]
