"""Hunt component model."""

from pydantic import ConfigDict, Field

from scavenger_hunt.models.base import CamelModel


class Component(CamelModel):
    """One waypoint in the hunt sequence."""

    id: str = Field(description="Stable component key")
    name: str = Field(description="Display name")
    description: str = Field(default="", description="Short description")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "hedy-lamarr",
                "name": "Hedy Lamarr",
                "description": "Pioneer of wireless communication technologies.",
            }
        },
    )
