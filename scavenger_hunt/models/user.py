"""Participant models."""

from datetime import datetime
from typing import Any, Self

from pydantic import Field

from scavenger_hunt.models.base import CamelModel
from scavenger_hunt.models.payment import (
    amount_or_default,
    registration_id_of,
    text_or_default,
    timestamp_or_now,
)


class VerifiedUser(CamelModel):
    """A participant whose payment has been verified."""

    registration_id: str = Field(description="Normalized registration ID")
    name: str = Field(default="", description="Participant name")
    email: str = Field(default="", description="Participant email")
    phone: str = Field(default="", description="Participant phone")
    verified: bool = Field(default=True, description="Verification flag")
    timestamp: datetime | None = Field(default=None, description="First verification time")
    updated_at: datetime | None = Field(default=None, description="Last update time")


class VerifiedUserSummary(CamelModel):
    """Paid participant as listed in the admin views."""

    registration_id: str = Field(description="Registration ID")
    full_name: str = Field(description="Participant name")
    transaction_id: str = Field(description="Gateway transaction ID")
    amount: float = Field(description="Amount paid")
    banking_name: str = Field(description="Name on the bank account")
    verified: bool = Field(default=True, description="Always true for paid payments")
    timestamp: datetime = Field(description="Payment time")

    @classmethod
    def from_payment_document(cls, document: dict[str, Any]) -> Self:
        """Project a paid payment document into the verified user listing."""
        return cls(
            registration_id=text_or_default(registration_id_of(document)),
            full_name=text_or_default(document.get("name")),
            transaction_id=text_or_default(
                document.get("orderId") or document.get("transactionId")
            ),
            amount=amount_or_default(document.get("amount")),
            banking_name=text_or_default(document.get("bankingName")),
            timestamp=timestamp_or_now(document.get("timestamp")),
        )


class UserSummary(CamelModel):
    """Registered user as listed in the admin views."""

    registration_id: str = Field(description="Registration ID")
    full_name: str = Field(description="Full name")
    email: str = Field(description="Email")
    phone: str = Field(description="Phone")
    verified: bool = Field(description="Whether the user is verified")
    timestamp: datetime = Field(description="Registration time")

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> Self:
        """Project a stored user document, defaulting missing fields."""
        return cls(
            registration_id=text_or_default(registration_id_of(document)),
            full_name=text_or_default(document.get("fullName")),
            email=text_or_default(document.get("email")),
            phone=text_or_default(document.get("phone")),
            verified=document.get("verified") is True,
            timestamp=timestamp_or_now(document.get("timestamp")),
        )
