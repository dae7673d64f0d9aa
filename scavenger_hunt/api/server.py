"""FastAPI application server."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse, Response
from pymongo.errors import PyMongoError
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from scavenger_hunt import __version__
from scavenger_hunt.api.dependencies import (
    get_access_gate,
    get_clue_catalog,
    get_clue_session,
    get_qr_service,
    get_verification_store,
    verify_admin_credentials,
)
from scavenger_hunt.core.database import close_database
from scavenger_hunt.core.settings import get_settings
from scavenger_hunt.core.utils import (
    normalize_registration_id,
    setup_logging,
    validate_registration_id,
)
from scavenger_hunt.enums import GateDecision
from scavenger_hunt.models import (
    ClueResponse,
    HealthResponse,
    MilestoneResponse,
    PaymentsEnvelope,
    ProgressRequest,
    ProgressResponse,
    QRCode,
    QRCodesEnvelope,
    ScanResponse,
    UsersEnvelope,
    VerificationStatusResponse,
    VerificationToggleRequest,
    VerifiedUsersEnvelope,
    VerifyRequest,
    VerifyResponse,
)
from scavenger_hunt.services import (
    AccessGate,
    ClueCatalog,
    ClueSession,
    QRResolutionService,
    VerificationStore,
)
from scavenger_hunt.services.qr_service import component_ordinal

logger = logging.getLogger(__name__)

# Rate limiter instance
limiter = Limiter(key_func=get_remote_address)

Store = Annotated[VerificationStore, Depends(get_verification_store)]
QRService = Annotated[QRResolutionService, Depends(get_qr_service)]
Catalog = Annotated[ClueCatalog, Depends(get_clue_catalog)]
Session = Annotated[ClueSession, Depends(get_clue_session)]
Admin = Annotated[str, Depends(verify_admin_credentials)]


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Add security headers to response."""
        response = await call_next(request)
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = "geolocation=(), microphone=(), camera=()"
        if request.headers.get("X-Forwarded-Proto") == "https":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


class AccessGateMiddleware(BaseHTTPMiddleware):
    """Middleware redirecting unverified participants away from protected pages."""

    def __init__(
        self,
        app: ASGIApp,
        gate_factory: Callable[[], AccessGate],
        cookie_name: str,
        redirect_url: str,
    ) -> None:
        """
        Initialize the middleware.

        Args:
            app (ASGIApp): Wrapped application.
            gate_factory (Callable[[], AccessGate]): Returns the gate to consult.
            cookie_name (str): Cookie carrying the registration ID.
            redirect_url (str): Redirect target for denied requests.
        """
        super().__init__(app)
        self.gate_factory = gate_factory
        self.cookie_name = cookie_name
        self.redirect_url = redirect_url

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Evaluate the gate and redirect denied requests."""
        gate = self.gate_factory()
        decision = await gate.evaluate(
            path=request.url.path,
            registration_id=request.cookies.get(self.cookie_name),
        )
        if decision is GateDecision.DENIED:
            return RedirectResponse(url=self.redirect_url, status_code=307)
        return await call_next(request)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Handle rate limit exceeded errors."""
    return JSONResponse(
        status_code=429,
        content={"detail": "Rate limit exceeded. Please try again later."},
    )


def admin_error(message: str) -> JSONResponse:
    """
    Build the generic admin error envelope.

    Args:
        message (str): Client-facing message, never internal error detail.

    Returns:
        JSONResponse: 500 response with the error envelope.
    """
    return JSONResponse(status_code=500, content={"status": "error", "message": message})


def prepare_database() -> None:
    """
    Create indexes and seed default hunt data.

    Storage failures are logged; the service still starts and seeds lazily.
    """
    try:
        qr_service = get_qr_service()
        qr_service.ensure_indexes()
        get_verification_store().ensure_indexes()
        qr_service.ensure_seeded()
    except PyMongoError as e:
        logger.warning(f"Could not prepare database, data will be seeded on first use: {e}")
        return
    logger.info("Database indexes and default hunt data ready")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Args:
        app (FastAPI): The FastAPI application instance.

    Yields:
        None
    """
    settings = get_settings()

    setup_logging(settings=settings.logging)

    logger.info(f"Starting Scavenger Hunt Service v{__version__}")

    if settings.hunt.seed_on_startup:
        await run_in_threadpool(prepare_database)

    if settings.admin.password is None:
        logger.warning("Admin password not configured, admin endpoints are disabled")

    yield

    logger.info("Shutting down Scavenger Hunt Service")
    close_database()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

        FastAPI: The configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Scavenger Hunt Service",
        description="QR code scavenger hunt with payment verification",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]

    # Innermost: the gate only sees requests that passed the outer middleware
    app.add_middleware(
        AccessGateMiddleware,
        gate_factory=get_access_gate,
        cookie_name=settings.gate.cookie_name,
        redirect_url=settings.gate.redirect_url,
    )

    app.add_middleware(SecurityHeadersMiddleware)

    if settings.api_server.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api_server.cors_allow_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["*"],
        )

    return app


app = create_app()


def registration_id_or_400(request: Request, registration_id: str | None) -> str:
    """
    Pick the registration ID from the request or the session cookie.

    Args:
        request (Request): Incoming request.
        registration_id (str | None): Explicit ID from the query or body.

    Returns:
        str: Normalized registration ID.

    Raises:
        HTTPException: 400 if neither source carries an ID.
    """
    value = registration_id or request.cookies.get(get_settings().gate.cookie_name)
    if not value or not value.strip():
        raise HTTPException(status_code=400, detail="Registration ID required")
    return normalize_registration_id(value)


@app.get("/", include_in_schema=False)
async def index() -> dict[str, str]:
    """Service banner."""
    return {"message": "Scavenger Hunt Service", "docs": "/docs"}


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint (no auth required).

        HealthResponse: Health status including version and database name.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        database=get_settings().mongo.database,
    )


@app.get("/api/verification-status", response_model=VerificationStatusResponse)
def verification_status(store: Store) -> VerificationStatusResponse:
    """
    Report whether payment verification is enforced.

    Returns:
        VerificationStatusResponse: The verification flag.
    """
    return VerificationStatusResponse(verification_enabled=store.is_verification_enabled())


@app.get("/api/verify", response_model=VerifyResponse)
def check_verification(
    store: Store,
    registration_id: Annotated[str, Query(alias="registrationId", min_length=1)],
) -> VerifyResponse:
    """
    Check whether a registration ID is verified.

    Args:
        store (VerificationStore): Injected verification store.
        registration_id (str): Registration ID to check.

    Returns:
        VerifyResponse: Verification result.
    """
    return VerifyResponse(
        verified=store.is_verified(registration_id),
        registration_id=normalize_registration_id(registration_id),
    )


@app.post("/api/verify", response_model=VerifyResponse)
@limiter.limit(lambda: get_settings().api_server.rate_limit)
def register(
    request: Request,
    response: Response,
    payload: VerifyRequest,
    store: Store,
) -> VerifyResponse | JSONResponse:
    """
    Verify a participant from their payment and start their session.

    The registration ID must have the expected format and, while
    verification is enforced, a paid payment. On success the normalized ID
    is stored in the session cookie.

    Args:
        request (Request): The request object (required for rate limiting).
        response (Response): Outgoing response, used to set the cookie.
        payload (VerifyRequest): Registration details.
        store (VerificationStore): Injected verification store.

    Returns:
        VerifyResponse: Verification result.
    """
    if not validate_registration_id(payload.registration_id):
        logger.info(f"Rejected malformed registration ID: {payload.registration_id!r}")
        return JSONResponse(
            status_code=400,
            content=VerifyResponse(verified=False, error="invalid_registration_id").model_dump(
                by_alias=True
            ),
        )

    registration_id = normalize_registration_id(payload.registration_id)

    if store.is_verification_enabled():
        payment = store.find_paid_payment(registration_id)
        if payment is None:
            return JSONResponse(
                status_code=403,
                content=VerifyResponse(
                    verified=False,
                    registration_id=registration_id,
                    error="payment_not_found",
                ).model_dump(by_alias=True),
            )
        store.record_verified_user(
            registration_id,
            name=payload.name or payment.name or "",
            email=payload.email or payment.email or "",
            phone=payload.phone or payment.phone or "",
        )

    settings = get_settings()
    response.set_cookie(
        key=settings.gate.cookie_name,
        value=registration_id,
        httponly=True,
        samesite="lax",
        secure=settings.api_server.secure_cookies,
    )
    return VerifyResponse(verified=True, registration_id=registration_id)


@app.get("/api/progress", response_model=ProgressResponse)
def get_progress(
    request: Request,
    store: Store,
    registration_id: Annotated[str | None, Query(alias="registrationId")] = None,
) -> ProgressResponse:
    """
    Get the milestones reached by a participant.

    Returns:
        ProgressResponse: Milestone flags.
    """
    normalized_id = registration_id_or_400(request, registration_id)
    return ProgressResponse(
        registration_id=normalized_id,
        three_completed=store.has_three_completed(normalized_id),
        full_completed=store.has_full_completed(normalized_id),
    )


@app.post("/api/progress/three-completed", response_model=MilestoneResponse)
def record_three_completed(
    request: Request,
    store: Store,
    payload: ProgressRequest | None = None,
) -> MilestoneResponse:
    """Record that a participant collected three components."""
    normalized_id = registration_id_or_400(request, payload.registration_id if payload else None)
    return MilestoneResponse(
        success=store.record_three_completed(normalized_id),
        registration_id=normalized_id,
    )


@app.post("/api/progress/full-completed", response_model=MilestoneResponse)
def record_full_completed(
    request: Request,
    store: Store,
    payload: ProgressRequest | None = None,
) -> MilestoneResponse:
    """Record that a participant collected every component."""
    normalized_id = registration_id_or_400(request, payload.registration_id if payload else None)
    return MilestoneResponse(
        success=store.record_full_completed(normalized_id),
        registration_id=normalized_id,
    )


@app.get("/api/admin/users", response_model=UsersEnvelope)
def admin_list_users(store: Store, _admin: Admin) -> UsersEnvelope | JSONResponse:
    """
    List registered users.

    Returns:
        UsersEnvelope: Success envelope, or a 500 error envelope.
    """
    try:
        users = store.list_all_users()
    except Exception as e:
        logger.error(f"Error fetching all users: {e}")
        return admin_error("Failed to fetch users")
    return UsersEnvelope(users=users)


@app.get("/api/admin/verified-users", response_model=VerifiedUsersEnvelope)
def admin_list_verified_users(
    store: Store, _admin: Admin
) -> VerifiedUsersEnvelope | JSONResponse:
    """List participants with a paid payment."""
    try:
        users = store.list_all_verified_users()
    except Exception as e:
        logger.error(f"Error fetching verified users: {e}")
        return admin_error("Failed to fetch verified users")
    return VerifiedUsersEnvelope(users=users)


@app.get("/api/admin/payments", response_model=PaymentsEnvelope)
def admin_list_payments(store: Store, _admin: Admin) -> PaymentsEnvelope | JSONResponse:
    """List every payment record."""
    try:
        payments = store.list_all_payments()
    except Exception as e:
        logger.error(f"Error fetching payments: {e}")
        return admin_error("Failed to fetch payments")
    return PaymentsEnvelope(payments=payments)


@app.get("/api/admin/qrcodes", response_model=QRCodesEnvelope)
def admin_list_qr_codes(qr_service: QRService, _admin: Admin) -> QRCodesEnvelope | JSONResponse:
    """List QR codes, seeding the defaults when there are none."""
    try:
        qr_codes = qr_service.list_qr_codes()
    except Exception as e:
        logger.error(f"Error fetching QR codes: {e}")
        return admin_error("Failed to fetch QR codes")
    return QRCodesEnvelope(qrcodes=qr_codes)


@app.put("/api/admin/verification-status", response_model=VerificationStatusResponse)
def admin_set_verification_status(
    payload: VerificationToggleRequest,
    store: Store,
    _admin: Admin,
) -> VerificationStatusResponse | JSONResponse:
    """
    Enable or disable payment verification.

    Args:
        payload (VerificationToggleRequest): New flag value.
        store (VerificationStore): Injected verification store.

    Returns:
        VerificationStatusResponse: The stored flag, or a 500 error envelope.
    """
    if not store.set_verification_enabled(payload.verification_enabled):
        return admin_error("Failed to update verification settings")
    return VerificationStatusResponse(verification_enabled=payload.verification_enabled)


@app.get("/hunt/start", response_model=QRCode)
def hunt_start(qr_service: QRService) -> QRCode:
    """
    Get the entry-point QR code with the first clue.

    Returns:
        QRCode: The first QR code.
    """
    qr_code = qr_service.get_first_code()
    if qr_code is None:
        raise HTTPException(status_code=404, detail="First QR code not found")
    return qr_code


@app.get("/hunt/scan/{qr_id}", response_model=ScanResponse)
def hunt_scan(
    qr_id: str,
    qr_service: QRService,
    catalog: Catalog,
    session: Session,
) -> ScanResponse:
    """
    Resolve a scanned QR code to its component and the clue it carries.

    The clue stored on the QR code is used; when it has none the session's
    catalog clue for the component is served instead.

    Args:
        qr_id (str): Scanned QR identifier.
        qr_service (QRResolutionService): Injected QR resolution service.
        catalog (ClueCatalog): Injected clue catalog.
        session (ClueSession): The client's clue session.

    Returns:
        ScanResponse: Component and clue.
    """
    component = qr_service.resolve_component(qr_id)
    if component is None:
        raise HTTPException(status_code=404, detail="QR code not found")

    qr_code = qr_service.get_qr_code(qr_id)
    clue = qr_code.clue if qr_code else ""
    hint = qr_code.hint if qr_code else ""

    if not clue:
        ordinal = component_ordinal(component.id)
        catalog_clue = catalog.get_clue(ordinal, session) if ordinal is not None else None
        if catalog_clue is not None:
            clue, hint = catalog_clue.clue, catalog_clue.hint

    return ScanResponse(
        qr_id=qr_id,
        component=component,
        clue=clue,
        hint=hint,
        difficulty=qr_code.difficulty if qr_code else None,
        points_to_component_id=qr_code.points_to_component_id if qr_code else None,
    )


@app.get("/hunt/clues/{ordinal}", response_model=ClueResponse)
def hunt_clue(ordinal: int, catalog: Catalog, session: Session) -> ClueResponse:
    """Get the session's clue for a component ordinal."""
    clue = catalog.get_clue(ordinal, session)
    if clue is None:
        raise HTTPException(status_code=404, detail=f"No clue set for component {ordinal}")
    return ClueResponse(clue=clue)


@app.delete("/hunt/clues", status_code=204)
def hunt_clear_clues(catalog: Catalog, session: Session) -> None:
    """Forget every clue chosen in the session."""
    catalog.clear_all(session)


@app.delete("/hunt/clues/{ordinal}", status_code=204)
def hunt_reset_clue(ordinal: int, catalog: Catalog, session: Session) -> None:
    """Forget the clue chosen for one component in the session."""
    catalog.reset_one(session, ordinal)
