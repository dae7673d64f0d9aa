"""Response and request models."""

from pydantic import ConfigDict, Field

from scavenger_hunt.models.base import CamelModel
from scavenger_hunt.models.clue import Clue
from scavenger_hunt.models.component import Component
from scavenger_hunt.models.payment import PaymentSummary
from scavenger_hunt.models.qr_code import QRCode
from scavenger_hunt.models.user import UserSummary, VerifiedUserSummary


class HealthResponse(CamelModel):
    """Health check response."""

    status: str = Field(description="Health status")
    version: str = Field(description="Application version")
    database: str = Field(description="Configured database name")


class VerificationStatusResponse(CamelModel):
    """Whether the verification gate is enabled."""

    verification_enabled: bool = Field(description="True if verification is enforced")


class VerificationToggleRequest(CamelModel):
    """Admin request to enable or disable verification."""

    verification_enabled: bool = Field(description="New value of the verification flag")


class VerifyRequest(CamelModel):
    """Registration request submitted by a participant."""

    registration_id: str = Field(min_length=1, description="Registration ID as typed")
    name: str = Field(default="", description="Participant name")
    email: str = Field(default="", description="Participant email")
    phone: str = Field(default="", description="Participant phone")


class VerifyResponse(CamelModel):
    """Verification result."""

    verified: bool = Field(description="Whether the registration ID is verified")
    registration_id: str | None = Field(default=None, description="Normalized registration ID")
    error: str | None = Field(default=None, description="Error code if verification failed")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"verified": True, "registrationId": "AB123449", "error": None}
        },
    )


class ProgressRequest(CamelModel):
    """Milestone request; the registration cookie is used when the ID is omitted."""

    registration_id: str | None = Field(default=None, description="Registration ID")


class ProgressResponse(CamelModel):
    """Progress milestones of a participant."""

    registration_id: str = Field(description="Normalized registration ID")
    three_completed: bool = Field(description="Three components collected")
    full_completed: bool = Field(description="All components collected")


class MilestoneResponse(CamelModel):
    """Result of recording a milestone."""

    success: bool = Field(description="Whether the milestone was stored")
    registration_id: str = Field(description="Normalized registration ID")


class ScanResponse(CamelModel):
    """Content revealed by scanning a QR code."""

    qr_id: str = Field(description="Scanned QR identifier")
    component: Component = Field(description="Component found at this code")
    clue: str = Field(description="Clue towards the next component")
    hint: str = Field(description="Hint towards the next component")
    difficulty: str | None = Field(default=None, description="Difficulty label")
    points_to_component_id: str | None = Field(
        default=None, description="Next component in the sequence"
    )


class ClueResponse(CamelModel):
    """Session clue for a component ordinal."""

    clue: Clue = Field(description="Chosen clue")


class UsersEnvelope(CamelModel):
    """Admin users listing."""

    status: str = Field(default="success", description="Envelope status")
    users: list[UserSummary] = Field(description="Registered users")


class VerifiedUsersEnvelope(CamelModel):
    """Admin verified users listing."""

    status: str = Field(default="success", description="Envelope status")
    users: list[VerifiedUserSummary] = Field(description="Paid participants")


class PaymentsEnvelope(CamelModel):
    """Admin payments listing."""

    status: str = Field(default="success", description="Envelope status")
    payments: list[PaymentSummary] = Field(description="Payments")


class QRCodesEnvelope(CamelModel):
    """Admin QR code listing."""

    status: str = Field(default="success", description="Envelope status")
    qrcodes: list[QRCode] = Field(description="QR codes")
