"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for every field except
secrets: the signing key and the bootstrap administrator credentials
must come from the environment (or a deployment secret store) and are
never embedded in source.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Lawn Care Booking API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Key used to sign access tokens.  When empty the application
    # generates a random key at startup, which invalidates all tokens
    # on restart.
    secret_key: str = os.getenv("SECRET_KEY", "")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    # Storage backend: ``memory`` keeps everything in process, ``sqlite``
    # persists to ``database_url``.
    storage_backend: str = os.getenv("STORAGE_BACKEND", "memory")

    # Path to the SQLite database file.  A relative path is resolved
    # relative to the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "lawncare.db")

    # Credentials for the administrator account seeded at startup.  If
    # either is empty, no administrator is created.
    admin_username: str = os.getenv("ADMIN_USERNAME", "")
    admin_password: str = os.getenv("ADMIN_PASSWORD", "")

    # When enabled, status changes must follow ``ALLOWED_TRANSITIONS``
    # from ``services.lifecycle``.  Disabled by default so admins can
    # set any status manually.
    enforce_status_transitions: bool = _env_flag("ENFORCE_STATUS_TRANSITIONS")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Tests construct their own
# ``Settings`` and pass them to ``create_app``.
settings = Settings()
