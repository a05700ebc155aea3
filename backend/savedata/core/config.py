from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _load_dotenv() -> None:
    if os.getenv("SAVEDATA_SKIP_DOTENV") == "1":
        return

    env_path = Path(__file__).resolve().parents[2] / ".env"
    if not env_path.exists():
        return

    from dotenv import load_dotenv

    load_dotenv(env_path, override=True)


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_non_negative_int(value: str | None, default: int = 0) -> int:
    if value is None:
        return default
    raw = value.strip()
    if not raw:
        return default
    try:
        return max(0, int(raw))
    except ValueError:
        return default


def _parse_port(value: str | None, default: int) -> int:
    port = _parse_non_negative_int(value, default=default)
    if not 0 < port < 65536:
        return default
    return port


@dataclass(frozen=True)
class Settings:
    env: str
    app_name: str
    host: str
    port: int
    cors_origins: list[str]
    log_level: str
    file_storage_path: Path
    memory_max_bytes: int
    database_url: str | None
    db_host: str | None
    db_port: int
    db_user: str
    db_password: str
    db_name: str


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_dotenv()

    cors = os.getenv("SAVEDATA_CORS_ORIGINS", "http://localhost:3000")
    log_level = (os.getenv("SAVEDATA_LOG_LEVEL") or "INFO").strip().upper() or "INFO"

    return Settings(
        env=os.getenv("SAVEDATA_ENV", "development"),
        app_name="SaveData API",
        host=os.getenv("SAVEDATA_HOST", "0.0.0.0"),
        port=_parse_port(os.getenv("SAVEDATA_PORT"), default=8080),
        cors_origins=_split_csv(cors),
        log_level=log_level,
        file_storage_path=Path(os.getenv("SAVEDATA_FILE_PATH") or "data.txt"),
        memory_max_bytes=_parse_non_negative_int(os.getenv("SAVEDATA_MEMORY_MAX_BYTES"), default=0),
        database_url=os.getenv("DATABASE_URL") or None,
        db_host=os.getenv("SAVEDATA_DB_HOST") or None,
        db_port=_parse_port(os.getenv("SAVEDATA_DB_PORT"), default=5432),
        db_user=os.getenv("SAVEDATA_DB_USER", "admin"),
        db_password=os.getenv("SAVEDATA_DB_PASSWORD", ""),
        db_name=os.getenv("SAVEDATA_DB_NAME", "app_database"),
    )
