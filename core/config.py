"""
Application settings.
Values come from the environment (optionally a .env file) with defaults that
point at the bundled data directory.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv


# Project directory (parent of core/)
PROJECT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

load_dotenv()


def _env(name: str, default: str) -> str:
    value = os.getenv(name, "").strip()
    return value or default


@dataclass(frozen=True)
class Settings:
    # Static reference data
    DATA_DIR: str = _env("RESOURCE_GUIDE_DATA_DIR", os.path.join(PROJECT_DIR, "data"))
    GEOGRAPHY_CSV: str = _env("RESOURCE_GUIDE_GEOGRAPHY_CSV", "massachusetts_geography.csv")

    # Local document store (resources, access requests, visitation logs)
    STORE_FILE: str = _env("RESOURCE_GUIDE_STORE_FILE", "resource_guide.json")

    # Admin dashboard
    RECENT_DAYS: int = int(_env("RESOURCE_GUIDE_RECENT_DAYS", "30"))

    # App
    LOG_LEVEL: str = _env("RESOURCE_GUIDE_LOG_LEVEL", "INFO")
    PAGE_TITLE: str = "CASA Worcester Community Resource Guide"

    @property
    def geography_path(self) -> str:
        return os.path.join(self.DATA_DIR, self.GEOGRAPHY_CSV)

    @property
    def store_path(self) -> str:
        if os.path.isabs(self.STORE_FILE):
            return self.STORE_FILE
        return os.path.join(self.DATA_DIR, self.STORE_FILE)


SETTINGS = Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the app and the command-line scripts."""
    logging.basicConfig(
        level=(level or SETTINGS.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
