"""
Centralized configuration using Pydantic Settings.

All environment variables are loaded and validated here. Settings are
built per request through ``get_settings`` so that changes to the
environment are picked up without restarting the service.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ADMIN_EMAIL = "admin@example.com"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Resend
    resend_api_key: str = ""
    resend_api_url: str = "https://api.resend.com/emails"
    http_timeout_seconds: float = 30.0

    # Recipients
    admin_email: str = DEFAULT_ADMIN_EMAIL
    property_owner_email: str | None = None
    waiver_from_email: str = "Southern Mammoth Waivers <noreply@yourdomain.com>"

    # Caves whose name contains this marker need property owner approval
    protected_site_marker: str = "Hatcher"

    # Rendering
    display_timezone: str = "UTC"
    escape_html: bool = False

    # Logging
    log_level: str = "INFO"
    json_logs: bool = True  # False for colored dev output

    @property
    def admin_recipient(self) -> str:
        """Admin address, falling back to the default when blank."""
        return self.admin_email or DEFAULT_ADMIN_EMAIL


def get_settings() -> Settings:
    """FastAPI dependency returning settings read from the current environment."""
    return Settings()
