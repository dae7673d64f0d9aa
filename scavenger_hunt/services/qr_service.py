"""QR resolution service - maps scanned QR codes to hunt components."""

import logging
from collections.abc import Sequence
from typing import Any

from pymongo.collection import Collection as MongoCollection
from pymongo.database import Database
from pymongo.errors import BulkWriteError, DuplicateKeyError, PyMongoError

from scavenger_hunt.data import (
    CLUES_AND_HINTS,
    DEFAULT_COMPONENTS,
    FIRST_COMPONENT_ID,
    QR_CODE_IDS,
    QR_CODE_MAPPINGS,
)
from scavenger_hunt.enums import Collection
from scavenger_hunt.models import Component, QRCode

logger = logging.getLogger(__name__)


def build_default_qr_codes(components: Sequence[Component]) -> list[QRCode]:
    """
    Build the QR codes for the known tokens.

    The i-th token is shown at the i-th component and points to the next
    component, the last one wrapping around to the first.

    Args:
        components (Sequence[Component]): Components in hunt order.

    Returns:
        list[QRCode]: One QR code per known token.
    """
    count = len(components)
    qr_codes = []
    for index, qr_id in enumerate(QR_CODE_IDS):
        content = CLUES_AND_HINTS[index]
        qr_codes.append(
            QRCode(
                id=qr_id,
                component_id=components[index].id,
                points_to_component_id=components[(index + 1) % count].id,
                clue=content["clue"],
                hint=content["hint"],
                difficulty=content["difficulty"],
                location=f"Location {index + 1}",
            )
        )
    return qr_codes


def component_ordinal(component_id: str) -> int | None:
    """
    Get the 1-based position of a component in the hunt sequence.

    Args:
        component_id (str): Component key.

    Returns:
        int | None: The ordinal, or None for components outside the defaults.
    """
    for index, component in enumerate(DEFAULT_COMPONENTS):
        if component.id == component_id:
            return index + 1
    return None


class QRResolutionService:
    """Service resolving QR tokens against the component and QR code collections."""

    def __init__(self, db: Database) -> None:
        """
        Initialize the QR resolution service.

        Args:
            db (Database): Hunt database.
        """
        self.db = db
        self._components: MongoCollection = db[Collection.COMPONENTS]
        self._qrcodes: MongoCollection = db[Collection.QRCODES]

    def ensure_indexes(self) -> None:
        """Create the unique indexes that keep concurrent seeding duplicate-free."""
        self._components.create_index("id", unique=True)
        self._qrcodes.create_index("id", unique=True)

    def ensure_seeded(self) -> None:
        """
        Insert the default components and QR codes when their collections are empty.

        Safe to call repeatedly and concurrently: a seed that loses the race
        against another request is logged and ignored.
        """
        if self._components.count_documents({}, limit=1) == 0:
            self._insert_defaults(
                collection=self._components,
                documents=[component.model_dump(by_alias=True) for component in DEFAULT_COMPONENTS],
            )

        if self._qrcodes.count_documents({}, limit=1) == 0:
            qr_codes = build_default_qr_codes(self._ordered_components())
            self._insert_defaults(
                collection=self._qrcodes,
                documents=[qr_code.model_dump(by_alias=True) for qr_code in qr_codes],
            )

    def resolve_component(self, qr_id: str) -> Component | None:
        """
        Resolve a scanned QR token to its component.

        Known tokens always resolve: the store is consulted first and the
        static mapping is used when the store misses or fails. Other tokens
        must have a QR code record in the store.

        Args:
            qr_id (str): Scanned QR identifier.

        Returns:
            Component | None: The component, or None if the token is unknown.
        """
        mapped = QR_CODE_MAPPINGS.get(qr_id)
        if mapped is not None:
            return self._resolve_known_component(mapped)

        try:
            qr_document = self._qrcodes.find_one({"id": qr_id})
            if qr_document is None:
                logger.info(f"Unknown QR code scanned: {qr_id}")
                return None
            return self._find_component(qr_document.get("componentId"))
        except PyMongoError as e:
            logger.error(f"Error resolving QR code {qr_id}: {e}")
            return None

    def get_qr_code(self, qr_id: str) -> QRCode | None:
        """
        Get the QR code record for a token, seeding if a known token is missing.

        Args:
            qr_id (str): QR identifier.

        Returns:
            QRCode | None: The QR code, or None if the token is unknown.
        """
        try:
            document = self._qrcodes.find_one({"id": qr_id})
            if document is None and qr_id in QR_CODE_MAPPINGS:
                self.ensure_seeded()
                document = self._qrcodes.find_one({"id": qr_id})
        except PyMongoError as e:
            logger.error(f"Error loading QR code {qr_id}: {e}")
            return self._static_qr_code(qr_id)

        if document is None:
            return None
        return QRCode.model_validate(document)

    def get_first_code(self) -> QRCode | None:
        """
        Get the entry-point QR code, the one shown at the first component.

        Returns:
            QRCode | None: The first QR code.
        """
        query = {"componentId": FIRST_COMPONENT_ID}
        try:
            document = self._qrcodes.find_one(query)
            if document is None:
                self.ensure_seeded()
                document = self._qrcodes.find_one(query)
        except PyMongoError as e:
            logger.error(f"Error loading first QR code: {e}")
            return self._static_qr_code(QR_CODE_IDS[0])

        if document is None:
            return None
        return QRCode.model_validate(document)

    def list_qr_codes(self) -> list[QRCode]:
        """
        List all QR codes, seeding the defaults when there are none.

        Returns:
            list[QRCode]: Stored QR codes.

        Raises:
            PyMongoError: If the store cannot be read.
        """
        documents = list(self._qrcodes.find({}))
        if not documents:
            self.ensure_seeded()
            documents = list(self._qrcodes.find({}))
        return [QRCode.model_validate(document) for document in documents]

    def _resolve_known_component(self, mapped: Component) -> Component:
        try:
            component = self._find_component(mapped.id)
            if component is not None:
                return component
            self._components.insert_one(mapped.model_dump(by_alias=True))
            logger.info(f"Created missing component {mapped.id}")
        except DuplicateKeyError:
            logger.debug(f"Component {mapped.id} created concurrently")
        except PyMongoError as e:
            logger.warning(f"Store unavailable for component {mapped.id}, using static data: {e}")
        return mapped.model_copy()

    def _find_component(self, component_id: Any) -> Component | None:
        if not component_id:
            return None
        document = self._components.find_one({"id": component_id})
        if document is None:
            return None
        return Component.model_validate(document)

    def _ordered_components(self) -> list[Component]:
        stored = {
            document["id"]: Component.model_validate(document)
            for document in self._components.find({})
            if document.get("id")
        }
        return [stored.get(component.id, component) for component in DEFAULT_COMPONENTS]

    def _static_qr_code(self, qr_id: str) -> QRCode | None:
        for qr_code in build_default_qr_codes(DEFAULT_COMPONENTS):
            if qr_code.id == qr_id:
                return qr_code
        return None

    @staticmethod
    def _insert_defaults(collection: MongoCollection, documents: list[dict[str, Any]]) -> None:
        try:
            collection.insert_many(documents, ordered=False)
            logger.info(f"Seeded {len(documents)} documents into '{collection.name}'")
        except BulkWriteError as e:
            logger.warning(f"Seeding '{collection.name}' raced with another writer: {e.details}")
