# settings.py — environment driven configuration
import os
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

DEFAULT_API_BASE_URL = "https://backend-romi.vercel.app"


def _float_env(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    api_base_url: str = DEFAULT_API_BASE_URL
    api_timeout: Optional[float] = None
    splash_delay: float = 2.0
    patients_delay: float = 1.5
    form_error_seconds: float = 3.0
    display_timezone: Optional[str] = None
    log_level: str = "INFO"
    mock_api_port: int = 5000

    @classmethod
    def from_env(cls) -> "Settings":
        port = os.environ.get("MOCK_API_PORT", "").strip()
        log_level = (os.environ.get("LOG_LEVEL") or "INFO").strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"LOG_LEVEL is not a logging level: {log_level!r}")
        return cls(
            api_base_url=(os.environ.get("ROMI_API_BASE_URL") or DEFAULT_API_BASE_URL).strip().rstrip("/"),
            api_timeout=_float_env("ROMI_API_TIMEOUT", None),
            splash_delay=_float_env("SPLASH_DELAY_SECONDS", 2.0),
            patients_delay=_float_env("PATIENTS_DELAY_SECONDS", 1.5),
            form_error_seconds=_float_env("FORM_ERROR_SECONDS", 3.0),
            display_timezone=os.environ.get("DISPLAY_TIMEZONE", "").strip() or None,
            log_level=log_level,
            mock_api_port=int(port) if port else 5000,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv()
    return Settings.from_env()


def configure_logging(level: Optional[str] = None):
    logging.basicConfig(
        level=level or get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
