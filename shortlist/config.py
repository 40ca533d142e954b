from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


@dataclass(frozen=True)
class AppConfig:
    title: str = os.getenv("APP_TITLE", "POI Shortlist API")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


DEFAULT_APP_CONFIG = AppConfig()
