"""Payment models."""

from datetime import datetime, timezone
from typing import Any, Self

from pydantic import Field

from scavenger_hunt.models.base import CamelModel

NOT_AVAILABLE = "N/A"


def text_or_default(value: Any) -> str:
    """
    Render a stored value as text for admin listings.

    Args:
        value (Any): Raw document value.

    Returns:
        str: The value as a string, or "N/A" when missing or empty.
    """
    if value is None or value == "":
        return NOT_AVAILABLE
    return str(value)


def amount_or_default(value: Any) -> float:
    """
    Coerce a stored amount to a number.

    Args:
        value (Any): Raw document value.

    Returns:
        float: The amount, or 0 when missing or not numeric.
    """
    if isinstance(value, bool):
        return 0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0


def timestamp_or_now(value: Any) -> datetime:
    """
    Use a stored timestamp, falling back to the current time.

    Args:
        value (Any): Raw document value.

    Returns:
        datetime: The stored datetime, or now (UTC) when missing or malformed.
    """
    if isinstance(value, datetime):
        return value
    return datetime.now(timezone.utc)


def text_or_none(value: Any) -> str | None:
    """Render a stored value as text, keeping None."""
    if value is None:
        return None
    return str(value)


def registration_id_of(document: dict[str, Any]) -> str | None:
    """
    Read the registration ID from a document under either field spelling.

    Args:
        document (dict[str, Any]): Raw document.

    Returns:
        str | None: The registration ID, or None if neither field is set.
    """
    return document.get("registrationId") or document.get("registrationid")


class PaymentRecord(CamelModel):
    """A payment as stored in the payments collection."""

    registration_id: str = Field(description="Normalized registration ID")
    status: str = Field(description="Payment status")
    name: str | None = Field(default=None, description="Payer name")
    email: str | None = Field(default=None, description="Payer email")
    phone: str | None = Field(default=None, description="Payer phone")
    amount: float = Field(default=0, description="Amount paid")
    transaction_id: str | None = Field(default=None, description="Gateway transaction ID")
    banking_name: str | None = Field(default=None, description="Name on the bank account")
    timestamp: datetime | None = Field(default=None, description="Payment time")

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> Self:
        """
        Build a payment record from a stored document.

        Older documents spell the key "registrationid" and store the
        transaction under "orderId"; both are folded into the canonical shape.

        Args:
            document (dict[str, Any]): Raw payment document.

        Returns:
            PaymentRecord: The normalized payment record.
        """
        timestamp = document.get("timestamp")
        return cls(
            registration_id=text_or_none(registration_id_of(document)) or "",
            status=str(document.get("status", "")),
            name=text_or_none(document.get("name")),
            email=text_or_none(document.get("email")),
            phone=text_or_none(document.get("phone")),
            amount=amount_or_default(document.get("amount")),
            transaction_id=text_or_none(document.get("transactionId") or document.get("orderId")),
            banking_name=text_or_none(document.get("bankingName")),
            timestamp=timestamp if isinstance(timestamp, datetime) else None,
        )


class PaymentSummary(CamelModel):
    """Payment as listed in the admin views."""

    registration_id: str = Field(description="Registration ID")
    full_name: str = Field(description="Payer name")
    email: str = Field(description="Payer email")
    phone: str = Field(description="Payer phone")
    transaction_id: str = Field(description="Gateway transaction ID")
    amount: float = Field(description="Amount paid")
    banking_name: str = Field(description="Name on the bank account")
    status: str = Field(description="Payment status")
    timestamp: datetime = Field(description="Payment time")

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> Self:
        """Project a stored payment document, defaulting missing fields."""
        return cls(
            registration_id=text_or_default(registration_id_of(document)),
            full_name=text_or_default(document.get("name")),
            email=text_or_default(document.get("email")),
            phone=text_or_default(document.get("phone")),
            transaction_id=text_or_default(
                document.get("transactionId") or document.get("orderId")
            ),
            amount=amount_or_default(document.get("amount")),
            banking_name=text_or_default(document.get("bankingName")),
            status=text_or_default(document.get("status")),
            timestamp=timestamp_or_now(document.get("timestamp")),
        )
