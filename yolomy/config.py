"""
Yolomy Products Backend — Application Configuration
=====================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a module-level `settings` object.
Who:   Imported by the app factory, middleware, and services.
When:  Loaded once at import time.

Deployment contract: MONGODB_URI selects the database, PORT the listening
port.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# MongoDB stores a whole document (image bytes included) under a 16 MiB cap;
# leave headroom for the remaining product fields.
MAX_DOCUMENT_IMAGE_BYTES = 15 * 1024 * 1024


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults matching the docker-compose deployment
    (FerretDB reachable as `app-ferretdb`).
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Format: mongodb://host:port/dbname (MongoDB or FerretDB)
    mongodb_uri: str = Field(
        default="mongodb://app-ferretdb:27017/yolomy",
        description="MongoDB connection URI including the database name",
    )

    # mongoengine connection alias the handle registers itself under
    db_alias: str = Field(default="yolomy", min_length=1)

    # pymongo server selection timeout; bounds how long a request waits
    # when the database is unreachable
    db_server_selection_timeout_ms: int = Field(default=5000, ge=100, le=120_000)

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000, ge=1, le=65535)

    # Comma-separated origins; "*" permits every origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into the list CORSMiddleware expects."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Uploads ───────────────────────────────────────────────────────────
    # Default: 10 MiB
    max_image_size: int = Field(default=10_485_760, ge=1024, le=MAX_DOCUMENT_IMAGE_BYTES)

    # ── Errors & Logging ──────────────────────────────────────────────────
    # When true, 500 responses carry the raw underlying error text
    expose_error_details: bool = Field(default=False)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # MONGODB_URI and mongodb_uri both work
        "extra": "ignore",
    }


settings = Settings()
