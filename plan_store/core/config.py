"""
Configuration for the plan store service.
Values come from the environment, with a local .env file merged in first.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv()

# HTTP listener
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

# Storage backend selection
STORE_BACKEND = os.getenv("STORE_BACKEND", "redis")  # redis|sqlite|memory
SUPPORTED_BACKENDS = ("redis", "sqlite", "memory")

# Redis connection (REDIS_URL wins over host/port/db)
REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_DB = int(os.getenv("REDIS_DB", "0"))

# SQLite file for STORE_BACKEND=sqlite
DB_PATH = os.getenv("DB_PATH", "./data/plans.db")

DEBUG = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Field rewritten from DD-MM-YYYY to YYYY-MM-DD on writes
DATE_FIELD = "creationDate"

# Version string
VERSION = "1.0.0"


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "false").lower() == "true"


def get_store_backend() -> str:
    """Get the configured storage backend name."""
    return os.getenv("STORE_BACKEND", STORE_BACKEND).strip().lower()


def get_redis_url() -> str:
    """Get the Redis URL, building it from host/port/db when REDIS_URL is unset."""
    url = os.getenv("REDIS_URL")
    if url:
        return url
    host = os.getenv("REDIS_HOST", REDIS_HOST)
    port = os.getenv("REDIS_PORT", str(REDIS_PORT))
    db = os.getenv("REDIS_DB", str(REDIS_DB))
    return f"redis://{host}:{port}/{db}"


def get_db_path() -> str:
    """Get the SQLite database path."""
    return os.getenv("DB_PATH", DB_PATH)


def ensure_db_directory(db_path: str = None):
    """Ensure the database directory exists."""
    Path(db_path or get_db_path()).parent.mkdir(parents=True, exist_ok=True)


def validate_config() -> List[str]:
    """Validate configuration and return any issues."""
    issues = []

    backend = get_store_backend()
    if backend not in SUPPORTED_BACKENDS:
        issues.append(f"Invalid STORE_BACKEND: {backend}")

    for name in ("PORT", "REDIS_PORT"):
        raw = os.getenv(name)
        if raw is None:
            continue
        try:
            port = int(raw)
        except ValueError:
            issues.append(f"{name} must be an integer, got {raw!r}")
            continue
        if not 0 < port < 65536:
            issues.append(f"{name} must be between 1 and 65535")

    return issues
