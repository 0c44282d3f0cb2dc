"""
Centralized configuration for the prescription system.

Configuration is read from the environment once, at startup, by
load_settings(). The resulting Settings object is passed explicitly to
create_app() and init_engine(); nothing inside the domain, repositories or
services reads the environment.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///./pms.db"
DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent.parent / "logs"

_TRUTHY = ("true", "1", "yes")


def _as_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    """Process-wide startup configuration."""

    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = "INFO"
    log_json: bool = False
    log_to_file: bool = True
    log_dir: Path = DEFAULT_LOG_DIR
    sql_echo: bool = False
    rate_limit_enabled: bool = True
    testing: bool = False


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    Environment Variables:
        DATABASE_URL: SQLAlchemy URL (default: sqlite:///./pms.db)
        LOG_LEVEL: Logging level name (default: INFO)
        LOG_JSON: Emit JSON logs on the console (default: false)
        LOG_TO_FILE: Write rotating log files (default: true)
        LOG_DIR: Directory for log files (default: backend/logs)
        SQL_ECHO: Log SQL statements with timings (default: false)
        RATE_LIMIT_ENABLED: Enable Flask-Limiter (default: true)
        TESTING: Test mode flag (default: false)

    A .env file is loaded only when DATABASE_URL is not already defined and
    no explicit mapping is given.
    """
    if environ is None:
        if not os.getenv("DATABASE_URL"):
            load_dotenv()
        environ = os.environ

    testing = _as_bool(environ.get("TESTING"), False)
    settings = Settings(
        database_url=environ.get("DATABASE_URL") or DEFAULT_DATABASE_URL,
        log_level=(environ.get("LOG_LEVEL") or "INFO").upper(),
        log_json=_as_bool(environ.get("LOG_JSON"), False),
        log_to_file=_as_bool(environ.get("LOG_TO_FILE"), not testing),
        log_dir=Path(environ.get("LOG_DIR") or DEFAULT_LOG_DIR),
        sql_echo=_as_bool(environ.get("SQL_ECHO"), False),
        rate_limit_enabled=_as_bool(environ.get("RATE_LIMIT_ENABLED"), not testing),
        testing=testing,
    )
    return settings


def mask_url_password(url: str) -> str:
    """Hide the password part of a database URL for logging."""
    import re

    return re.sub(r"(://[^:/?#]+):[^@]*@", r"\1:***@", url)


def log_settings(settings: Settings) -> None:
    """
    Log the active configuration.

    Should be called during application startup, after logging is set up.
    """
    logger.info(
        "Configuration initialized",
        extra={
            "context": {
                "database_url": mask_url_password(settings.database_url),
                "log_level": settings.log_level,
                "rate_limit_enabled": settings.rate_limit_enabled,
                "testing": settings.testing,
            }
        },
    )
