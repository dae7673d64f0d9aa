"""Application settings using pydantic-settings."""

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class APIServerSettings(BaseModel):
    """API server configuration."""

    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")
    workers: int = Field(default=1, ge=1, le=32, description="Number of uvicorn workers")
    cors_allow_origins: list[str] = Field(
        default_factory=list, description="CORS allowed origins (empty = no CORS)"
    )
    rate_limit: str = Field(default="10/minute", description="Rate limit for registration endpoint")
    secure_cookies: bool = Field(
        default=False, description="Mark session cookies as Secure (HTTPS only)"
    )


class MongoSettings(BaseModel):
    """Document store configuration."""

    uri: str = Field(default="mongodb://localhost:27017", description="MongoDB connection URI")
    database: str = Field(default="scavenger-hunt", description="Database name")
    server_selection_timeout_ms: int = Field(
        default=5000, ge=100, description="Server selection timeout in milliseconds"
    )

    @field_validator("uri")
    @classmethod
    def validate_uri(cls, v: str) -> str:
        """Validate the connection URI uses a MongoDB scheme."""
        v = v.strip()
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError(f"Invalid MongoDB URI: {v}")
        return v


class GateSettings(BaseModel):
    """Access gate configuration."""

    api_base_url: str | None = Field(
        default=None,
        description="Base URL of the verification API (None = check the store in-process)",
    )
    request_timeout: float = Field(
        default=10.0, gt=0, description="Timeout in seconds for verification API calls"
    )
    cookie_name: str = Field(default="registration_id", description="Session identity cookie")
    redirect_url: str = Field(
        default="/?error=not_verified", description="Where denied requests are redirected"
    )
    public_paths: list[str] = Field(
        default_factory=lambda: ["/", "/verify", "/health", "/docs", "/redoc", "/openapi.json"],
        description="Paths that bypass the gate (exact match)",
    )
    public_prefixes: list[str] = Field(
        default_factory=lambda: [
            "/api",
            "/privacy-policy",
            "/terms-and-conditions",
            "/cancellation-refund",
            "/shipping-delivery",
            "/contact-us",
            "/static",
        ],
        description="Path prefixes that bypass the gate",
    )

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        """Normalize the base URL so paths can be appended."""
        if v is None or not v.strip():
            return None
        return v.strip().rstrip("/")


class AdminSettings(BaseModel):
    """Admin area configuration."""

    username: str = Field(default="admin", description="Admin username")
    password: str | None = Field(
        default=None, description="Admin password (None = admin endpoints disabled)"
    )


class HuntSettings(BaseModel):
    """Hunt content configuration."""

    seed_on_startup: bool = Field(
        default=True, description="Create indexes and seed default data on startup"
    )
    clue_session_cookie: str = Field(
        default="clue_session", description="Cookie holding the clue session key"
    )
    max_clue_sessions: int = Field(
        default=10000, ge=1, description="Maximum clue sessions kept in memory"
    )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    loggers: dict[str, str] = Field(default={}, description="Loggers and their levels")
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(
        default="[%(asctime)s] %(levelname)s [%(name)s] %(message)s",
        description="Log format",
    )
    date_format: str = Field(default="%Y-%m-%d %H:%M:%S", description="Log date format")
    rotate_logs: bool = Field(default=False, description="Rotate logs daily")
    log_file: str | None = Field(default=None, description="Log file to write to")


class AppSettings(BaseSettings):
    """Root application settings."""

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_prefix="HUNT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_server: APIServerSettings = Field(default_factory=APIServerSettings)
    mongo: MongoSettings = Field(default_factory=MongoSettings)
    gate: GateSettings = Field(default_factory=GateSettings)
    admin: AdminSettings = Field(default_factory=AdminSettings)
    hunt: HuntSettings = Field(default_factory=HuntSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
