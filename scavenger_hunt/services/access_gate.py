"""Access gate - decides whether a request may reach protected hunt content."""

import logging
from collections.abc import Awaitable, Callable, Iterable

import httpx
from starlette.concurrency import run_in_threadpool

from scavenger_hunt.enums import GateDecision
from scavenger_hunt.services.verification_store import VerificationStore

logger = logging.getLogger(__name__)

VERIFICATION_STATUS_PATH = "/api/verification-status"
VERIFY_PATH = "/api/verify"

FlagProvider = Callable[[], Awaitable[bool]]
VerifyProvider = Callable[[str], Awaitable[bool]]


class StoreVerificationClient:
    """Answers gate checks in-process from the verification store."""

    def __init__(self, store: VerificationStore) -> None:
        self.store = store

    async def is_verification_enabled(self) -> bool:
        """Read the verification flag without blocking the event loop."""
        return await run_in_threadpool(self.store.is_verification_enabled)

    async def is_verified(self, registration_id: str) -> bool:
        """Check a registration ID without blocking the event loop."""
        return await run_in_threadpool(self.store.is_verified, registration_id)


class HttpVerificationClient:
    """Answers gate checks by calling the verification API over HTTP."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the HTTP verification client.

        Args:
            base_url (str): Base URL of the service exposing the verification API.
            timeout (float): Request timeout in seconds.
            transport (httpx.AsyncBaseTransport | None): Custom transport, if any.
        """
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    async def _get_json(self, path: str, params: dict[str, str] | None = None) -> dict:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            response = await client.get(path, params=params)
            response.raise_for_status()
            data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected response from {path}: {data!r}")
        return data

    async def is_verification_enabled(self) -> bool:
        """
        Fetch the verification flag.

        Returns:
            bool: The flag, True when missing or when the call fails.
        """
        try:
            data = await self._get_json(VERIFICATION_STATUS_PATH)
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error fetching verification status: {e}")
            return True
        except httpx.RequestError as e:
            logger.error(f"Request error fetching verification status: {e}")
            return True
        except Exception as e:
            logger.error(f"Unexpected error fetching verification status: {e}")
            return True
        return bool(data.get("verificationEnabled", True))

    async def is_verified(self, registration_id: str) -> bool:
        """
        Ask the verification API whether a registration ID is verified.

        Args:
            registration_id (str): Registration ID from the session cookie.

        Returns:
            bool: True only if the API answers verified.
        """
        try:
            data = await self._get_json(VERIFY_PATH, params={"registrationId": registration_id})
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error verifying {registration_id}: {e}")
            return False
        except httpx.RequestError as e:
            logger.error(f"Request error verifying {registration_id}: {e}")
            return False
        except Exception as e:
            logger.error(f"Unexpected error verifying {registration_id}: {e}")
            return False
        return data.get("verified") is True


class AccessGate:
    """
    Two-step guard for protected pages.

    Public paths always pass. Otherwise the verification flag is checked and,
    when verification is enforced, the session's registration ID must be
    verified. A failing flag lookup counts as enforced; a failing
    verification lookup counts as not verified.
    """

    def __init__(
        self,
        flag_provider: FlagProvider,
        verify_provider: VerifyProvider,
        public_paths: Iterable[str] = (),
        public_prefixes: Iterable[str] = (),
    ) -> None:
        """
        Initialize the access gate.

        Args:
            flag_provider (FlagProvider): Returns whether verification is enabled.
            verify_provider (VerifyProvider): Returns whether an ID is verified.
            public_paths (Iterable[str]): Paths allowed unconditionally.
            public_prefixes (Iterable[str]): Path prefixes allowed unconditionally.
        """
        self._flag_provider = flag_provider
        self._verify_provider = verify_provider
        self.public_paths = frozenset(public_paths)
        self.public_prefixes = tuple(public_prefixes)

    def is_public(self, path: str) -> bool:
        """
        Check whether a path bypasses the gate.

        Args:
            path (str): Request path.

        Returns:
            bool: True for allow-listed paths.
        """
        if path in self.public_paths:
            return True
        return any(
            path == prefix or path.startswith(prefix.rstrip("/") + "/")
            for prefix in self.public_prefixes
        )

    async def evaluate(self, path: str, registration_id: str | None) -> GateDecision:
        """
        Decide whether a request may proceed.

        Args:
            path (str): Request path.
            registration_id (str | None): Registration ID from the session, if any.

        Returns:
            GateDecision: ALLOWED or DENIED.
        """
        if self.is_public(path):
            return GateDecision.ALLOWED

        try:
            verification_enabled = await self._flag_provider()
        except Exception as e:
            logger.error(f"Verification flag lookup failed, enforcing verification: {e}")
            verification_enabled = True

        if not verification_enabled:
            return GateDecision.ALLOWED

        if not registration_id:
            logger.info(f"Denied {path}: no registration ID in session")
            return GateDecision.DENIED

        try:
            verified = await self._verify_provider(registration_id)
        except Exception as e:
            logger.error(f"Verification lookup failed for {registration_id}: {e}")
            verified = False

        if not verified:
            logger.info(f"Denied {path}: {registration_id} is not verified")
            return GateDecision.DENIED
        return GateDecision.ALLOWED
