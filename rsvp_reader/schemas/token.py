"""Pydantic schemas for tokens and sections handed to renderers."""

from pydantic import BaseModel, ConfigDict

from rsvp_reader.models.enums import BlockKind, StyleKind
from rsvp_reader.models.token import TimedToken


class SchemaBase(BaseModel):
    """Base schema with attribute support."""

    model_config = ConfigDict(from_attributes=True)


class TokenDTO(SchemaBase):
    """A token as shown by renderers. ``duration_ms`` is estimated at the seed WPM."""

    word: str
    orp_position: int
    duration_ms: int
    style: StyleKind
    url: str | None = None
    block: BlockKind
    block_depth: int = 0
    heading_level: int = 0
    table_column: int = 0
    callout_type: str | None = None

    @classmethod
    def from_timed_token(cls, timed: TimedToken) -> "TokenDTO":
        token = timed.token
        return cls(
            word=token.word,
            orp_position=timed.orp_position,
            duration_ms=timed.duration_ms,
            style=token.style.kind,
            url=token.style.url,
            block=token.block.kind,
            block_depth=token.block.depth,
            heading_level=token.block.level,
            table_column=token.block.column,
            callout_type=token.block.callout_type,
        )


class SectionDTO(SchemaBase):
    title: str
    level: int
    token_start: int
    token_end: int
