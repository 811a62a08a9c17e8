"""Location of the pricing catalog database."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from .env import optional_env_var
from .errors import ConfigurationError

APP_DIR_NAME: Final[str] = "tiersync"
CATALOG_DB_FILENAME: Final[str] = "catalog.db"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _data_dir() -> Path:
    configured = optional_env_var("TIERSYNC_DATA_DIR")
    if configured is not None:
        return Path(configured).expanduser().resolve()
    if os.name == "nt":
        local_app_data = optional_env_var("LOCALAPPDATA")
        base = Path(local_app_data) if local_app_data else Path.home() / "AppData" / "Local"
    else:
        xdg_data_home = optional_env_var("XDG_DATA_HOME")
        base = Path(xdg_data_home) if xdg_data_home else Path.home() / ".local" / "share"
    return (base / APP_DIR_NAME).expanduser().resolve()


def _validated_uri(raw: str) -> str:
    try:
        make_url(raw)
    except ArgumentError as exc:
        raise ConfigurationError(f"DATABASE_URI is not a valid database URL: {raw!r}") from exc
    return raw


def get_database_config() -> DatabaseConfig:
    """Resolve the catalog database from ``DATABASE_URI`` or the data directory.

    Without an explicit URI the catalog lives in a SQLite file under
    ``TIERSYNC_DATA_DIR`` (or the platform data directory), created on demand.
    """

    configured = optional_env_var("DATABASE_URI")
    if configured is not None:
        return DatabaseConfig(uri=_validated_uri(configured))

    data_dir = _data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    return DatabaseConfig(uri=f"sqlite+pysqlite:///{data_dir / CATALOG_DB_FILENAME}")
