"""Application configuration.

Settings are read from environment variables once at import time. A `.env`
file in the working directory is loaded first when present so local runs do
not need exported variables.
"""

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _list_env(name: str, default: str) -> List[str]:
    return [v.strip() for v in os.getenv(name, default).split(",") if v.strip()]


class Settings:
    """Runtime settings for the Diet Planner API."""

    # Read/Write partitioning: point READ_DATABASE_URL at a replica in production.
    WRITE_DATABASE_URL = os.getenv("WRITE_DATABASE_URL", "sqlite:///diet_planner.db")
    READ_DATABASE_URL = os.getenv("READ_DATABASE_URL", WRITE_DATABASE_URL)

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_DIR = os.getenv("LOG_DIR", os.path.join(os.path.dirname(__file__), "..", "logs"))

    CORS_ORIGINS = _list_env("CORS_ORIGINS", "*")

    STREAK_MAX_LOOKBACK_DAYS = _int_env("STREAK_MAX_LOOKBACK_DAYS", 3650)
    DAILY_WATER_TARGET_ML = _int_env("DAILY_WATER_TARGET_ML", 2000)
    MEAL_CANDIDATE_LIMIT = _int_env("MEAL_CANDIDATE_LIMIT", 10)


settings = Settings()
