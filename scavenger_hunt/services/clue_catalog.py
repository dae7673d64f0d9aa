"""Clue catalog - session-sticky random clue selection."""

import logging
import random
import threading
import uuid
from collections import OrderedDict
from collections.abc import Iterable

from scavenger_hunt.data import CLUE_SETS
from scavenger_hunt.models import Clue

logger = logging.getLogger(__name__)

# Probability of serving an alternate clue instead of the primary text
ALTERNATE_CLUE_PROBABILITY = 0.5


class ClueSession:
    """Clues chosen for one participant session, keyed by component ordinal."""

    def __init__(self, session_id: str | None = None) -> None:
        """
        Initialize an empty clue session.

        Args:
            session_id (str | None): Session key, generated when omitted.
        """
        self.session_id = session_id or uuid.uuid4().hex
        self.choices: dict[int, Clue] = {}


class ClueCatalog:
    """Catalog of clue sets with per-session random variant selection."""

    def __init__(
        self,
        clue_sets: Iterable[Clue] = CLUE_SETS,
        rng: random.Random | None = None,
    ) -> None:
        """
        Initialize the catalog.

        Args:
            clue_sets (Iterable[Clue]): Clue sets, one per component ordinal.
            rng (random.Random | None): Random source, a fresh one when omitted.
        """
        self._clue_sets = {clue_set.id: clue_set for clue_set in clue_sets}
        self._rng = rng or random.Random()

    @property
    def ordinals(self) -> list[int]:
        """
        Get the ordinals that have a catalog entry.

        Returns:
            list[int]: Sorted component ordinals.
        """
        return sorted(self._clue_sets)

    def get_clue(self, ordinal: int, session: ClueSession) -> Clue | None:
        """
        Get the clue for a component ordinal within a session.

        The first call for an ordinal picks the primary text or, with equal
        probability, one of the alternates; later calls in the same session
        return that same choice.

        Args:
            ordinal (int): Component ordinal (1-based).
            session (ClueSession): Session holding previous choices.

        Returns:
            Clue | None: The chosen clue, or None if the ordinal is unknown.
        """
        clue_set = self._clue_sets.get(ordinal)
        if clue_set is None:
            return None

        stored = session.choices.get(ordinal)
        if stored is not None:
            return stored

        chosen = clue_set.model_copy(deep=True)
        if clue_set.alternate_clues and self._rng.random() < ALTERNATE_CLUE_PROBABILITY:
            chosen.clue = self._rng.choice(clue_set.alternate_clues)

        session.choices[ordinal] = chosen
        logger.debug(f"Session {session.session_id} chose clue for component {ordinal}")
        return chosen

    def clear_all(self, session: ClueSession) -> None:
        """Forget every clue chosen in the session."""
        session.choices.clear()

    def reset_one(self, session: ClueSession, ordinal: int) -> None:
        """Forget the clue chosen for one ordinal in the session."""
        session.choices.pop(ordinal, None)


class ClueSessionStore:
    """In-memory registry of clue sessions keyed by session cookie."""

    def __init__(self, max_sessions: int = 10000) -> None:
        """
        Initialize the session store.

        Args:
            max_sessions (int): Sessions kept before the oldest is evicted.
        """
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, ClueSession] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, session_id: str | None) -> ClueSession:
        """
        Get the session for a key, creating a new one if unknown.

        Args:
            session_id (str | None): Session key from the client, if any.

        Returns:
            ClueSession: Existing or newly created session.
        """
        with self._lock:
            if session_id and session_id in self._sessions:
                self._sessions.move_to_end(session_id)
                return self._sessions[session_id]

            session = ClueSession()
            self._sessions[session.session_id] = session
            while len(self._sessions) > self._max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                logger.debug(f"Evicted clue session {evicted_id}")
            return session

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
