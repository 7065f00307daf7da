"""
Environment variable loader for the clinic sheets client.
Handles loading the Apps Script Web App settings from .env file or environment.
"""
import math
import os
from pathlib import Path

# Load .env file if it exists
from dotenv import load_dotenv

from config import DEFAULT_ALLOWED_HOSTS, DEFAULT_TIMEOUT_SECONDS

WEB_APP_URL_ENV = "APPS_SCRIPT_WEB_APP_URL"

_TRUTHY = {"1", "true", "yes", "on"}


# Find .env file (look in current dir and parent dirs)
def _find_env_file() -> Path | None:
    current = Path(__file__).parent
    for _ in range(3):  # Check up to 3 levels up
        env_path = current / ".env"
        if env_path.exists():
            return env_path
        current = current.parent
    return None

_env_file = _find_env_file()
if _env_file:
    load_dotenv(_env_file)


def get_web_app_url() -> str | None:
    """
    Get the deployed Apps Script Web App URL.

    Returns:
        The `.../exec` URL, or None if unset or blank.
    """
    url = os.environ.get(WEB_APP_URL_ENV, "").strip()
    return url if url else None


def is_simulation_forced() -> bool:
    """Check if simulated mode is forced regardless of the Web App URL."""
    return os.environ.get("SHEETS_SIMULATE", "false").strip().lower() in _TRUTHY


def get_request_timeout() -> float | None:
    """
    Get the Web App request timeout in seconds.

    "0" or "none" disables the timeout entirely.

    Raises:
        RuntimeError: If SHEETS_REQUEST_TIMEOUT is not a number
    """
    raw = os.environ.get("SHEETS_REQUEST_TIMEOUT")
    if raw is None or raw.strip() == "":
        return DEFAULT_TIMEOUT_SECONDS
    raw = raw.strip().lower()
    if raw == "none":
        return None
    try:
        value = float(raw)
    except ValueError as e:
        raise RuntimeError(f"Invalid SHEETS_REQUEST_TIMEOUT: {e}")
    if not math.isfinite(value):
        raise RuntimeError(f"Invalid SHEETS_REQUEST_TIMEOUT: {raw} is not a finite number")
    if value < 0:
        raise RuntimeError(f"Invalid SHEETS_REQUEST_TIMEOUT: {raw} is negative")
    return value or None


def get_port() -> int:
    """Get server port from environment."""
    return int(os.environ.get("PORT", "8080"))


def get_allowed_hosts() -> list[str]:
    """Get hosts allowed by the MCP server (MCP_ALLOWED_HOSTS, comma-separated)."""
    raw = os.environ.get("MCP_ALLOWED_HOSTS", "")
    extra = [h.strip() for h in raw.split(",") if h.strip()]
    return DEFAULT_ALLOWED_HOSTS + extra
