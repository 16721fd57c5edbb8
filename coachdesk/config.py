from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


#
# Shared theme tokens for the dashboard.
# - Centralized here so styles.py and the chart helpers read one palette.
#
THEME = {
    # Backgrounds
    "bg_primary": "#F5F7FB",     # page background
    "bg_secondary": "#FFFFFF",   # sidebar / top surfaces
    "bg_card": "#FFFFFF",       # card surface
    # Accents
    "accent_primary": "#2563EB",    # income / primary actions
    "accent_secondary": "#3B82F6",  # hover
    "navy_900": "#0B1220",
    "navy_800": "#111C33",
    # Text + borders
    "text_primary": "#111827",
    "text_secondary": "rgba(17, 24, 39, 0.72)",
    "border_color": "#E5E7EB",
    "grid": "rgba(17, 24, 39, 0.10)",
    "shadow": "0 1px 3px rgba(16,24,40,0.08)",
    "radius_px": 10,
    # Status colors
    "success": "#15803D",
    "warning": "#F59E0B",
    "danger": "#DC2626",
}


DEFAULT_API_BASE_URL = "http://localhost:3001/api"
DEFAULT_SETTINGS_PATH = os.path.join("~", ".coachdesk", "settings.json")


@dataclass(frozen=True)
class AppConfig:
    # REST backend ("connected" mode)
    api_base_url: str
    api_timeout_seconds: float
    health_timeout_seconds: float

    # Local settings file (center name + password hash)
    settings_path: str

    # Skip the health probe and start straight in offline mode
    force_offline: bool

    # Display
    currency_symbol: str
    log_level: str

    @property
    def settings_file(self) -> str:
        return os.path.abspath(os.path.expanduser(self.settings_path))


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def _getfloat(name: str, default: float) -> float:
    raw = _getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def get_config() -> AppConfig:
    """
    Centralized config: this is the ONLY place env vars are read.
    - Loads `.env` if present (local dev)
    - Every value has a default so the dashboard starts with no env at all
    """
    load_dotenv(override=False)

    return AppConfig(
        api_base_url=(_getenv("API_BASE_URL", DEFAULT_API_BASE_URL) or DEFAULT_API_BASE_URL).rstrip("/"),
        api_timeout_seconds=_getfloat("API_TIMEOUT_SECONDS", 10.0),
        health_timeout_seconds=_getfloat("HEALTH_TIMEOUT_SECONDS", 3.0),
        settings_path=_getenv("SETTINGS_PATH", DEFAULT_SETTINGS_PATH) or DEFAULT_SETTINGS_PATH,
        force_offline=(_getenv("USE_SAMPLE_DATA", "false") or "false").lower() == "true",
        currency_symbol=_getenv("CURRENCY_SYMBOL", "₹") or "₹",
        log_level=(_getenv("LOG_LEVEL", "INFO") or "INFO").upper(),
    )
