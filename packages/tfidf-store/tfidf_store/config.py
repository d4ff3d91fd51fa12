# Settings parsed from the environment (and an optional .env file).
from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _read_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _read_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() in ("1", "true", "yes", "on")


def to_async_url(url: str) -> str:
    """Map a plain database URL onto its async driver"""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


@dataclass(frozen=True)
class TfidfSettings:
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./tfidf.db")
    echo_sql: bool = _read_bool("DB_ECHO", False)
    pool_size: int = _read_int("DB_POOL_SIZE", 5)
    max_overflow: int = _read_int("DB_MAX_OVERFLOW", 10)
    pool_timeout: int = _read_int("DB_POOL_TIMEOUT", 30)
    pool_recycle: int = _read_int("DB_POOL_RECYCLE", 3600)
    create_schema: bool = _read_bool("TFIDF_CREATE_SCHEMA", True)
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    gateway_host: str = os.getenv("GATEWAY_HOST", "0.0.0.0")
    gateway_port: int = _read_int("GATEWAY_PORT", 8000)

    @property
    def async_database_url(self) -> str:
        return to_async_url(self.database_url)

    @property
    def as_dict(self) -> dict:
        return {
            "database_url": self.database_url,
            "echo_sql": self.echo_sql,
            "create_schema": self.create_schema,
            "log_level": self.log_level,
            "gateway_host": self.gateway_host,
            "gateway_port": self.gateway_port,
        }


SETTINGS = TfidfSettings()
