"""Enumerations."""

from scavenger_hunt.enums.collection import Collection
from scavenger_hunt.enums.gate_decision import GateDecision
from scavenger_hunt.enums.payment_status import PaymentStatus

__all__ = ["Collection", "GateDecision", "PaymentStatus"]
