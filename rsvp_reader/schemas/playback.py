"""Pydantic schema for the per-frame playback snapshot."""

from pydantic import BaseModel, Field

from rsvp_reader.models.enums import ViewMode
from rsvp_reader.schemas.token import SectionDTO, TokenDTO
from rsvp_reader.services.playback.state import PlaybackState
from rsvp_reader.services.tokenizer.timing import format_reading_time


class PlaybackSnapshot(BaseModel):
    """Everything a renderer needs to draw one frame."""

    current: TokenDTO | None
    # Display time of the current word at the live WPM; TokenDTO.duration_ms is
    # the estimate at the seed WPM
    current_duration_ms: int | None = None
    before: list[TokenDTO] = Field(default_factory=list)
    after: list[TokenDTO] = Field(default_factory=list)
    sections: list[SectionDTO] = Field(default_factory=list)
    outline_selection: int = 0
    position: int = 0
    total_words: int = 0
    progress: float = Field(0.0, ge=0.0, le=1.0)
    wpm: int
    paused: bool
    view_mode: ViewMode
    help_visible: bool
    section_title: str | None = None
    remaining: str

    @classmethod
    def from_state(cls, state: PlaybackState, before: int, after: int) -> "PlaybackSnapshot":
        """Project the state into a snapshot with ``before``/``after`` context words."""
        current = state.current_token()
        before_window, after_window = state.context_tokens(before, after)

        return cls(
            current=TokenDTO.from_timed_token(current) if current is not None else None,
            current_duration_ms=state.current_duration_ms(),
            before=[TokenDTO.from_timed_token(t) for t in before_window],
            after=[TokenDTO.from_timed_token(t) for t in after_window],
            sections=[SectionDTO.model_validate(s) for s in state.sections],
            outline_selection=state.outline_selection,
            position=state.position,
            total_words=len(state.tokens),
            progress=state.progress(),
            wpm=state.wpm,
            paused=state.paused,
            view_mode=state.view_mode,
            help_visible=state.help_visible,
            section_title=state.current_section_title(),
            remaining=format_reading_time(state.remaining_ms()),
        )
