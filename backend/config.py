import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables from backend/.env if present; real env wins
env_path = os.path.join(os.path.dirname(__file__), ".env")
load_dotenv(dotenv_path=env_path, override=False)


DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"

FEATURE_HEALTH_DETAILS = "FEATURE_HEALTH_DETAILS"


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, read once at startup."""

    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    log_level: str = "info"


def load_settings() -> Settings:
    port_raw = os.getenv("PORT", "").strip()
    port = int(port_raw) if port_raw else DEFAULT_PORT
    if not 0 <= port <= 65535:
        raise ValueError(f"PORT out of range: {port}")
    return Settings(
        port=port,
        host=os.getenv("HOST", DEFAULT_HOST),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def health_details_enabled() -> bool:
    # Read on every call so a toggle applies to the next request
    return os.getenv(FEATURE_HEALTH_DETAILS, "disabled") == "enabled"
