"""Data models."""

from scavenger_hunt.models.clue import Clue
from scavenger_hunt.models.component import Component
from scavenger_hunt.models.payment import PaymentRecord, PaymentSummary
from scavenger_hunt.models.progress import ProgressRecord
from scavenger_hunt.models.qr_code import QRCode
from scavenger_hunt.models.responses import (
    ClueResponse,
    HealthResponse,
    MilestoneResponse,
    PaymentsEnvelope,
    ProgressRequest,
    ProgressResponse,
    QRCodesEnvelope,
    ScanResponse,
    UsersEnvelope,
    VerificationStatusResponse,
    VerificationToggleRequest,
    VerifiedUsersEnvelope,
    VerifyRequest,
    VerifyResponse,
)
from scavenger_hunt.models.user import UserSummary, VerifiedUser, VerifiedUserSummary

__all__ = [
    "Clue",
    "ClueResponse",
    "Component",
    "HealthResponse",
    "MilestoneResponse",
    "PaymentRecord",
    "PaymentSummary",
    "PaymentsEnvelope",
    "ProgressRecord",
    "ProgressRequest",
    "ProgressResponse",
    "QRCode",
    "QRCodesEnvelope",
    "ScanResponse",
    "UserSummary",
    "UsersEnvelope",
    "VerificationStatusResponse",
    "VerificationToggleRequest",
    "VerifiedUser",
    "VerifiedUserSummary",
    "VerifiedUsersEnvelope",
    "VerifyRequest",
    "VerifyResponse",
]
