"""Verification store - payments, verified users, progress and settings."""

import logging
from datetime import datetime, timezone

from pymongo.collection import Collection as MongoCollection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from scavenger_hunt.core.utils import normalize_registration_id
from scavenger_hunt.enums import Collection, PaymentStatus
from scavenger_hunt.models import (
    PaymentRecord,
    PaymentSummary,
    ProgressRecord,
    UserSummary,
    VerifiedUser,
    VerifiedUserSummary,
)

logger = logging.getLogger(__name__)

VERIFICATION_SETTINGS_ID = "verification_settings"


def paid_payment_query(registration_id: str) -> dict:
    """
    Build the query matching a paid payment under either key spelling.

    Args:
        registration_id (str): Normalized registration ID.

    Returns:
        dict: MongoDB filter document.
    """
    return {
        "$or": [{"registrationId": registration_id}, {"registrationid": registration_id}],
        "status": PaymentStatus.PAID.value,
    }


class VerificationStore:
    """Persistence of payment verification and progress records."""

    def __init__(self, db: Database) -> None:
        """
        Initialize the verification store.

        Args:
            db (Database): Hunt database.
        """
        self.db = db
        self._settings: MongoCollection = db[Collection.SETTINGS]
        self._payments: MongoCollection = db[Collection.PAYMENTS]
        self._verified_users: MongoCollection = db[Collection.VERIFIED_USERS]
        self._three_completion: MongoCollection = db[Collection.THREE_COMPLETION]
        self._full_completion: MongoCollection = db[Collection.FULL_COMPLETION]
        self._users: MongoCollection = db[Collection.USERS]

    def ensure_indexes(self) -> None:
        """Create unique indexes on the per-participant collections."""
        for collection in (self._verified_users, self._three_completion, self._full_completion):
            collection.create_index("registrationId", unique=True)

    def is_verification_enabled(self) -> bool:
        """
        Check whether payment verification is enforced.

        Returns:
            bool: The stored flag, True when unset or when the store fails.
        """
        try:
            document = self._settings.find_one({"id": VERIFICATION_SETTINGS_ID})
        except PyMongoError as e:
            logger.error(f"Error reading verification settings, defaulting to enabled: {e}")
            return True

        if document is None:
            return True
        return bool(document.get("verificationEnabled", True))

    def set_verification_enabled(self, enabled: bool) -> bool:
        """
        Enable or disable payment verification.

        Args:
            enabled (bool): New flag value.

        Returns:
            bool: True if the flag was stored.
        """
        try:
            self._settings.update_one(
                {"id": VERIFICATION_SETTINGS_ID},
                {
                    "$set": {
                        "verificationEnabled": enabled,
                        "updatedAt": datetime.now(timezone.utc),
                    }
                },
                upsert=True,
            )
        except PyMongoError as e:
            logger.error(f"Error storing verification settings: {e}")
            return False

        logger.info(f"Verification {'enabled' if enabled else 'disabled'}")
        return True

    def find_paid_payment(self, registration_id: str) -> PaymentRecord | None:
        """
        Find the paid payment for a registration ID.

        Args:
            registration_id (str): Registration ID, normalized before lookup.

        Returns:
            PaymentRecord | None: The payment, or None if absent or on store failure.
        """
        normalized_id = normalize_registration_id(registration_id)
        try:
            document = self._payments.find_one(paid_payment_query(normalized_id))
        except PyMongoError as e:
            logger.error(f"Error getting payment for {normalized_id}: {e}")
            return None

        logger.debug(f"Paid payment for {normalized_id} found: {document is not None}")
        if document is None:
            return None
        return PaymentRecord.from_document(document)

    def is_verified(self, registration_id: str) -> bool:
        """
        Check whether a registration ID may access the hunt.

        Args:
            registration_id (str): Registration ID, normalized before lookup.

        Returns:
            bool: True if verification is disabled or a paid payment exists.
                False when the store fails.
        """
        if not self.is_verification_enabled():
            return True

        normalized_id = normalize_registration_id(registration_id)
        try:
            document = self._payments.find_one(paid_payment_query(normalized_id))
        except PyMongoError as e:
            logger.error(f"Error checking verification of {normalized_id}: {e}")
            return False

        verified = document is not None
        logger.info(f"Verification check for {normalized_id}: {verified}")
        return verified

    def record_verified_user(
        self,
        registration_id: str,
        name: str = "",
        email: str = "",
        phone: str = "",
    ) -> bool:
        """
        Record that a participant has been verified from their payment.

        An existing record is updated in place, only when it is not yet
        verified, keeping stored contact details where the new ones are empty.

        Args:
            registration_id (str): Registration ID, normalized before storage.
            name (str): Participant name.
            email (str): Participant email.
            phone (str): Participant phone.

        Returns:
            bool: False only if the store fails.
        """
        normalized_id = normalize_registration_id(registration_id)
        try:
            existing = self._verified_users.find_one({"registrationId": normalized_id})
            if existing is not None:
                if not existing.get("verified"):
                    self._verified_users.update_one(
                        {"registrationId": normalized_id},
                        {
                            "$set": {
                                "verified": True,
                                "name": name or existing.get("name", ""),
                                "email": email or existing.get("email", ""),
                                "phone": phone or existing.get("phone", ""),
                                "updatedAt": datetime.now(timezone.utc),
                            }
                        },
                    )
                    logger.info(f"Marked existing user {normalized_id} as verified")
                return True

            user = VerifiedUser(
                registration_id=normalized_id,
                name=name,
                email=email,
                phone=phone,
                verified=True,
                timestamp=datetime.now(timezone.utc),
            )
            self._verified_users.insert_one(user.model_dump(by_alias=True, exclude_none=True))
            logger.info(f"Created verified user {normalized_id}")
            return True
        except DuplicateKeyError:
            logger.debug(f"Verified user {normalized_id} created concurrently")
            return True
        except PyMongoError as e:
            logger.error(f"Error verifying user {normalized_id} from payment: {e}")
            return False

    def record_three_completed(self, registration_id: str) -> bool:
        """Record that a participant collected three components."""
        return self._record_milestone(self._three_completion, registration_id)

    def record_full_completed(self, registration_id: str) -> bool:
        """Record that a participant collected every component."""
        return self._record_milestone(self._full_completion, registration_id)

    def has_three_completed(self, registration_id: str) -> bool:
        """Check whether a participant collected three components."""
        return self._has_milestone(self._three_completion, registration_id)

    def has_full_completed(self, registration_id: str) -> bool:
        """Check whether a participant collected every component."""
        return self._has_milestone(self._full_completion, registration_id)

    def list_all_payments(self) -> list[PaymentSummary]:
        """
        List every payment record for the admin views.

        Returns:
            list[PaymentSummary]: Payments with missing fields defaulted.

        Raises:
            PyMongoError: If the store cannot be read.
        """
        return [PaymentSummary.from_document(document) for document in self._payments.find({})]

    def list_all_verified_users(self) -> list[VerifiedUserSummary]:
        """
        List participants with a paid payment for the admin views.

        Returns:
            list[VerifiedUserSummary]: Paid participants with missing fields defaulted.

        Raises:
            PyMongoError: If the store cannot be read.
        """
        documents = self._payments.find({"status": PaymentStatus.PAID.value})
        return [VerifiedUserSummary.from_payment_document(document) for document in documents]

    def list_all_users(self) -> list[UserSummary]:
        """
        List registered users for the admin views.

        Returns:
            list[UserSummary]: Users with missing fields defaulted.

        Raises:
            PyMongoError: If the store cannot be read.
        """
        return [UserSummary.from_document(document) for document in self._users.find({})]

    def _record_milestone(self, collection: MongoCollection, registration_id: str) -> bool:
        normalized_id = normalize_registration_id(registration_id)
        try:
            if collection.find_one({"registrationId": normalized_id}) is None:
                record = ProgressRecord(registration_id=normalized_id)
                collection.insert_one(record.model_dump(by_alias=True))
                logger.info(f"Recorded milestone '{collection.name}' for {normalized_id}")
            return True
        except DuplicateKeyError:
            logger.debug(f"Milestone '{collection.name}' for {normalized_id} recorded concurrently")
            return True
        except PyMongoError as e:
            logger.error(f"Error recording milestone '{collection.name}' for {normalized_id}: {e}")
            return False

    def _has_milestone(self, collection: MongoCollection, registration_id: str) -> bool:
        normalized_id = normalize_registration_id(registration_id)
        try:
            return collection.find_one({"registrationId": normalized_id}) is not None
        except PyMongoError as e:
            logger.error(f"Error reading milestone '{collection.name}' for {normalized_id}: {e}")
            return False
