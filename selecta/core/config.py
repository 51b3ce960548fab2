"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Backend-specific requirements (e.g. DB_NAME for the
database backend) are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url

from selecta.core.constants import (
    DEFAULT_MAX_FILE_SIZE,
    REGISTRATION_BACKEND_DATABASE,
    REGISTRATION_BACKENDS,
)


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    REGISTRATION_BACKEND picks the persistence variant: "database"
    (relational table with duplicate check and lookups) or "file"
    (append-only JSON-lines log plus per-submission snapshots).
    """

    # App
    app_name: str = "Nusafiber Selecta API Server"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3001

    registration_backend: str = "file"

    # Database (registration_backend == "database")
    database_url: str = ""
    db_driver: str = "postgresql+asyncpg"
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = ""
    db_pass: SecretStr = SecretStr("")
    db_name: str = ""
    db_pool_size: int = 10
    db_max_overflow: int = 0
    database_echo: bool = False

    # Filesystem
    upload_dir: str = "uploads"
    data_dir: str = "data"
    max_file_size: int = DEFAULT_MAX_FILE_SIZE

    # CORS
    allowed_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def uses_database(self) -> bool:
        return self.registration_backend == REGISTRATION_BACKEND_DATABASE

    @model_validator(mode="after")
    def validate_backend(self) -> "Settings":
        """Validate the registration backend and its required settings.

        - database: DATABASE_URL, or DB_NAME and DB_USER to build one.
        - file: nothing beyond the data and upload directories.
        """
        self.registration_backend = self.registration_backend.lower()
        if self.registration_backend not in REGISTRATION_BACKENDS:
            raise ValueError(
                f"registration_backend must be one of {sorted(REGISTRATION_BACKENDS)}, "
                f"got: {self.registration_backend!r}"
            )
        if self.uses_database and not self.database_url:
            if not self.db_name or not self.db_user:
                raise ValueError(
                    "DB_NAME and DB_USER are required when registration_backend is "
                    "'database' (or set DATABASE_URL). Set in environment or .env file."
                )
        if self.max_file_size <= 0:
            raise ValueError("max_file_size must be positive")
        return self

    def sqlalchemy_url(self) -> URL:
        """Return the async SQLAlchemy URL (DATABASE_URL wins over DB_* parts)."""
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_pass.get_secret_value() or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
