"""Clue model."""

from pydantic import Field

from scavenger_hunt.models.base import CamelModel


class Clue(CamelModel):
    """Narrative text guiding a participant to a component."""

    id: int = Field(description="Component ordinal (1-based)")
    title: str = Field(description="Clue title")
    clue: str = Field(description="Clue text")
    hint: str = Field(description="Hint text")
    alternate_clues: list[str] = Field(
        default_factory=list, description="Alternative clue texts"
    )
