"""Business logic services."""

from scavenger_hunt.services.access_gate import (
    AccessGate,
    HttpVerificationClient,
    StoreVerificationClient,
)
from scavenger_hunt.services.clue_catalog import ClueCatalog, ClueSession, ClueSessionStore
from scavenger_hunt.services.qr_service import QRResolutionService
from scavenger_hunt.services.verification_store import VerificationStore

__all__ = [
    "AccessGate",
    "ClueCatalog",
    "ClueSession",
    "ClueSessionStore",
    "HttpVerificationClient",
    "QRResolutionService",
    "StoreVerificationClient",
    "VerificationStore",
]
