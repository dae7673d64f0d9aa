"""Dependency injection providers."""

import secrets
from functools import lru_cache

from fastapi import Depends, HTTPException, Request, Response, Security
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from scavenger_hunt.core.database import get_database
from scavenger_hunt.core.settings import get_settings
from scavenger_hunt.services import (
    AccessGate,
    ClueCatalog,
    ClueSession,
    ClueSessionStore,
    HttpVerificationClient,
    QRResolutionService,
    StoreVerificationClient,
    VerificationStore,
)

# Admin HTTP Basic scheme
admin_basic = HTTPBasic(auto_error=False, realm="Admin Area")


@lru_cache
def get_verification_store() -> VerificationStore:
    """
    Get cached verification store singleton.

        VerificationStore: The verification store instance.
    """
    return VerificationStore(get_database())


@lru_cache
def get_qr_service() -> QRResolutionService:
    """
    Get cached QR resolution service singleton.

        QRResolutionService: The QR resolution service instance.
    """
    return QRResolutionService(get_database())


@lru_cache
def get_clue_catalog() -> ClueCatalog:
    """Get cached clue catalog singleton."""
    return ClueCatalog()


@lru_cache
def get_clue_session_store() -> ClueSessionStore:
    """Get cached clue session registry."""
    return ClueSessionStore(max_sessions=get_settings().hunt.max_clue_sessions)


@lru_cache
def get_access_gate() -> AccessGate:
    """
    Get cached access gate.

    The gate asks the verification API over HTTP when a base URL is
    configured and reads the verification store directly otherwise.

    Returns:
        AccessGate: The access gate instance.
    """
    settings = get_settings()
    client: HttpVerificationClient | StoreVerificationClient
    if settings.gate.api_base_url:
        client = HttpVerificationClient(
            base_url=settings.gate.api_base_url,
            timeout=settings.gate.request_timeout,
        )
    else:
        client = StoreVerificationClient(get_verification_store())

    return AccessGate(
        flag_provider=client.is_verification_enabled,
        verify_provider=client.is_verified,
        public_paths=settings.gate.public_paths,
        public_prefixes=settings.gate.public_prefixes,
    )


def get_clue_session(
    request: Request,
    response: Response,
    sessions: ClueSessionStore = Depends(get_clue_session_store),
) -> ClueSession:
    """
    Get the clue session for the requesting client.

    A new session is started, and its cookie set, when the client has none
    or presents an unknown one.

    Args:
        request (Request): Incoming request.
        response (Response): Outgoing response, used to set the cookie.
        sessions (ClueSessionStore): Clue session registry.

    Returns:
        ClueSession: The client's clue session.
    """
    cookie_name = get_settings().hunt.clue_session_cookie
    session_id = request.cookies.get(cookie_name)
    session = sessions.get(session_id)
    if session.session_id != session_id:
        response.set_cookie(
            key=cookie_name,
            value=session.session_id,
            httponly=True,
            samesite="lax",
            secure=get_settings().api_server.secure_cookies,
        )
    return session


def verify_admin_credentials(
    credentials: HTTPBasicCredentials | None = Security(admin_basic),
) -> str:
    """
    Verify admin credentials from the Basic Auth header.

    Admin access stays closed until a password is configured.

    Args:
        credentials: Credentials from the Authorization header.

    Returns:
        str: The admin username.

    Raises:
        HTTPException: 503 if no admin password is configured, 401 if
            credentials are missing/invalid.
    """
    settings = get_settings()
    configured_password = settings.admin.password

    if configured_password is None:
        raise HTTPException(status_code=503, detail="Admin access not configured")

    unauthorized = HTTPException(
        status_code=401,
        detail="Unauthorized",
        headers={"WWW-Authenticate": 'Basic realm="Admin Area"'},
    )
    if credentials is None:
        raise unauthorized

    username_ok = secrets.compare_digest(
        credentials.username.encode("utf-8"), settings.admin.username.encode("utf-8")
    )
    password_ok = secrets.compare_digest(
        credentials.password.encode("utf-8"), configured_password.encode("utf-8")
    )
    if not (username_ok and password_ok):
        raise unauthorized

    return credentials.username


def clear_dependency_caches() -> None:
    """
    Clear all dependency caches.

    """
    get_verification_store.cache_clear()
    get_qr_service.cache_clear()
    get_clue_catalog.cache_clear()
    get_clue_session_store.cache_clear()
    get_access_gate.cache_clear()
