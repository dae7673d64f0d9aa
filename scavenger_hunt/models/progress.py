"""Progress milestone model."""

from datetime import datetime, timezone

from pydantic import Field

from scavenger_hunt.models.base import CamelModel


class ProgressRecord(CamelModel):
    """Marker that a participant reached a milestone."""

    registration_id: str = Field(description="Normalized registration ID")
    completed_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Completion time"
    )
