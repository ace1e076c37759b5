"""Pydantic schemas consumed by rendering front ends."""

from rsvp_reader.schemas.playback import PlaybackSnapshot
from rsvp_reader.schemas.token import SectionDTO, TokenDTO

__all__ = [
    "PlaybackSnapshot",
    "SectionDTO",
    "TokenDTO",
]
