"""QR code model."""

from datetime import datetime, timezone

from pydantic import ConfigDict, Field

from scavenger_hunt.models.base import CamelModel


class QRCode(CamelModel):
    """A scannable token placed at a component's location."""

    id: str = Field(description="Opaque QR identifier")
    component_id: str = Field(description="Component displayed at this code")
    points_to_component_id: str = Field(description="Next component in the sequence")
    clue: str = Field(default="", description="Clue text shown after scanning")
    hint: str = Field(default="", description="Hint text shown after scanning")
    difficulty: str = Field(default="", description="Difficulty label")
    location: str = Field(default="", description="Free-text location")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Creation time"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "componentId": "hedy-lamarr",
                "pointsToComponentId": "emilie-du-chatelet",
                "clue": "In a place where countless feet traverse the same path...",
                "hint": "Look on the middle step of the main staircase...",
                "difficulty": "Easy",
                "location": "Location 1",
                "createdAt": "2026-01-01T00:00:00Z",
            }
        },
    )
