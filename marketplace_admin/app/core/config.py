"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
console starts against a local backend without any setup.  In a
production deployment override them via environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Marketplace Admin")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Base URL of the marketplace REST backend.  Service paths such as
    # ``/v2/user`` are appended to it.
    backend_base_url: str = os.getenv("BACKEND_BASE_URL", "http://localhost:3000")

    # Base URL that relative image paths returned by the backend are
    # joined to.  Leave empty to pass relative paths through unchanged.
    image_base_url: str = os.getenv("IMAGE_BASE_URL", "")

    # Timeout in seconds for every backend request.
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "15"))

    # JSON file holding the persisted auth token and user profile.
    auth_store_path: str = os.getenv("AUTH_STORE_PATH", ".marketplace_admin_auth.json")

    page_size: int = int(os.getenv("PAGE_SIZE", "10"))

    # Pause between two product creations during a bulk upload.
    bulk_upload_delay: float = float(os.getenv("BULK_UPLOAD_DELAY", "0.3"))

    # Delay the UI waits before following a redirect after a successful
    # form submission.
    redirect_delay: float = float(os.getenv("REDIRECT_DELAY", "1.5"))

    admin_host: str = os.getenv("ADMIN_HOST", "0.0.0.0")
    admin_port: int = int(os.getenv("ADMIN_PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
