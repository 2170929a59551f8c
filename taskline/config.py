"""Settings loaded from environment variables.

Every value has a default, so taskline runs with no configuration at all.
Command-line flags override what is read here.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

ENV_PREFIX = "TASKLINE"

DEFAULT_DB_PATH = "tasks.json"
DEFAULT_LOG_LEVEL = "WARNING"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_path(name: str, default: Optional[Path]) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw.strip()).expanduser()


@dataclass(frozen=True)
class Settings:
    """Runtime settings.

    Attributes:
        db_path: JSON file holding the saved task list
        log_level: Name of the logging level for the stderr handler
        log_file: Optional file receiving every log record
    """

    db_path: Path
    log_level: str
    log_file: Optional[Path] = None


def get_settings() -> Settings:
    """Build Settings from TASKLINE_* environment variables."""
    return Settings(
        db_path=_env_path(_k("DB_PATH"), Path(DEFAULT_DB_PATH)),
        log_level=_env(_k("LOG_LEVEL"), DEFAULT_LOG_LEVEL).upper(),
        log_file=_env_path(_k("LOG_FILE"), None),
    )
