from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_JWT_EXP_MINUTES = 7 * 24 * 60
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def load_env(path: Optional[Path] = None) -> bool:
    """Load KEY=value pairs from a .env file into os.environ.

    Existing variables win over the file. Returns False when there is no file.
    """
    env_path = path or Path.cwd() / ".env"
    if not env_path.exists():
        return False
    return load_dotenv(env_path, override=False)


def _int(raw: Optional[str], default: int) -> int:
    try:
        return int(raw) if raw is not None else default
    except ValueError:
        return default


def _database_path(url: str) -> str:
    # accept "sqlite:///notes.db" as well as a bare file path
    for prefix in ("sqlite:///", "file:"):
        if url.startswith(prefix):
            return url[len(prefix):]
    return url


@dataclass(frozen=True)
class Settings:
    secret: str
    database_url: str = "sqlite.db"
    host: str = "127.0.0.1"
    port: int = 8000
    jwt_algorithm: str = "HS256"
    jwt_exp_minutes: int = DEFAULT_JWT_EXP_MINUTES
    log_level: str = "INFO"
    env: str = "development"

    @property
    def database_path(self) -> str:
        return _database_path(self.database_url)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            secret=env.get("SECRET", ""),
            database_url=env.get("DATABASE_URL", "sqlite.db"),
            host=env.get("HOST", "127.0.0.1"),
            port=_int(env.get("PORT"), 8000),
            jwt_algorithm=env.get("JWT_ALGORITHM", "HS256"),
            jwt_exp_minutes=_int(env.get("JWT_EXP_MINUTES"), DEFAULT_JWT_EXP_MINUTES),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
            env=env.get("APP_ENV", "development"),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
