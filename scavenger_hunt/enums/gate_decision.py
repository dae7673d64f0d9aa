"""Access gate decision enum."""

from enum import StrEnum


class GateDecision(StrEnum):
    """Outcome of an access gate check."""

    ALLOWED = "allowed"
    DENIED = "denied"
