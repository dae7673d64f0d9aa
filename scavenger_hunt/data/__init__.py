"""Static hunt data."""

from scavenger_hunt.data.hunt_content import (
    CLUE_SETS,
    CLUES_AND_HINTS,
    DEFAULT_COMPONENTS,
    FIRST_COMPONENT_ID,
    QR_CODE_IDS,
    QR_CODE_MAPPINGS,
)

__all__ = [
    "CLUE_SETS",
    "CLUES_AND_HINTS",
    "DEFAULT_COMPONENTS",
    "FIRST_COMPONENT_ID",
    "QR_CODE_IDS",
    "QR_CODE_MAPPINGS",
]
