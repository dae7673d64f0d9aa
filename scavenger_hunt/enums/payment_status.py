"""Payment status enum."""

from enum import StrEnum


class PaymentStatus(StrEnum):
    """Payment status values stored on payment records."""

    PAID = "PAID"
