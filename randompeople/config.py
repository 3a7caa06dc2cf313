#!/usr/bin/env python3
"""
Settings for the Random People service, read from .env / environment variables.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# -----------------------------------------------------------------------------
# Load .env (one directory above this file)
# -----------------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")  # existing environment variables win over .env

DEFAULT_API_URL = "https://randomuser.me/api/"
DEFAULT_RESULTS = 12
DEFAULT_COUNTRY = "US"


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    results: int = DEFAULT_RESULTS
    default_country: str = DEFAULT_COUNTRY
    timeout: Optional[float] = None  # None means wait forever, like the browser clients
    autoload: bool = True


def _env_flag(value: str) -> bool:
    return value.strip().lower() not in ("0", "false", "no", "off", "")


def load_settings() -> Settings:
    """
    Build Settings from the environment.

    Unset variables fall back to the defaults above. A malformed number raises
    ValueError so a bad deployment fails at startup instead of at request time.
    """
    timeout_raw = os.environ.get("RANDOMUSER_TIMEOUT", "").strip()
    return Settings(
        api_url=os.environ.get("RANDOMUSER_API_URL", DEFAULT_API_URL),
        results=int(os.environ.get("RANDOMUSER_RESULTS", DEFAULT_RESULTS)),
        default_country=os.environ.get("RANDOMUSER_DEFAULT_COUNTRY", DEFAULT_COUNTRY),
        timeout=float(timeout_raw) if timeout_raw else None,
        autoload=_env_flag(os.environ.get("RANDOMUSER_AUTOLOAD", "1")),
    )
