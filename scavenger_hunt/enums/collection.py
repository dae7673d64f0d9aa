"""Collection names in the hunt database."""

from enum import StrEnum


class Collection(StrEnum):
    """Document store collections."""

    COMPONENTS = "components"
    QRCODES = "qrcodes"
    PAYMENTS = "payments"
    VERIFIED_USERS = "verifiedUsers"
    SETTINGS = "settings"
    FULL_COMPLETION = "completionStud"
    THREE_COMPLETION = "threeCompletion"
    USERS = "users"
