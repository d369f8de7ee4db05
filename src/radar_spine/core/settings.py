"""Radar ingestion settings.

All fields can be set via ``RADAR_*`` environment variables (e.g.
``RADAR_GOOGLE_API_KEY=...``) or through a ``.env`` file.

Examples:
    >>> from radar_spine.core.settings import get_settings
    >>> settings = get_settings()
    >>> settings.required_headers
    ['name', 'ring', 'quadrant', 'isNew', 'description']
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class RadarSettings(BaseSettings):
    """Centralized configuration for radar ingestion."""

    model_config = SettingsConfigDict(
        env_prefix="RADAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Validation ───────────────────────────────────────────────
    required_headers: list[str] = Field(
        default=["name", "ring", "quadrant", "isNew", "description"],
        description="Column labels every source must carry (topic is optional)",
    )

    # ── Locator ──────────────────────────────────────────────────
    provider_domain_suffix: str = Field(default="google.com")
    csv_suffix: str = Field(default=".csv")
    csv_sheet_label: str = Field(default="CSV File", description="Current sheet name shown for CSV radars")
    default_sheet_url: str | None = Field(
        default=None,
        description="Sheet offered by the entry form when no source is given",
    )

    # ── HTTP ─────────────────────────────────────────────────────
    http_timeout: float = Field(default=30.0)
    sheets_api_base: str = Field(default="https://sheets.googleapis.com/v4")
    google_api_key: SecretStr | None = Field(
        default=None,
        description="API key used for anonymous reads of public sheets",
    )

    # ── OAuth ────────────────────────────────────────────────────
    oauth_client_secret_path: Path = Field(default=Path("client_secret.json"))
    oauth_token_path: Path = Field(default_factory=lambda: Path.home() / ".radar" / "google_token.json")
    oauth_scopes: list[str] = Field(
        default=[
            "openid",
            "https://www.googleapis.com/auth/userinfo.email",
            "https://www.googleapis.com/auth/spreadsheets.readonly",
        ]
    )
    userinfo_url: str = Field(default="https://openidconnect.googleapis.com/v1/userinfo")

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: RadarSettings | None = None


def get_settings(*, _force_reload: bool = False) -> RadarSettings:
    """Load, validate, and cache a :class:`RadarSettings` instance."""
    global _settings_cache
    if _settings_cache is None or _force_reload:
        _settings_cache = RadarSettings()
    return _settings_cache
