"""Process-wide database connection.

One ``DatabaseConnection`` is opened during application startup and shared by
reference with every ``DatabaseStorage``. The SQLAlchemy engine pools DBAPI
connections and each ``save`` uses its own session, so concurrent writers need
no extra locking here.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import Engine, create_engine, desc, func, select, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from savedata.core.config import Settings
from savedata.domain.errors import DatabaseConnectionError, PersistenceError
from savedata.infra.db.base import Base
from savedata.infra.db.models import SavedPayloadRow

logger = logging.getLogger(__name__)


def _normalize_database_url(raw_url: str) -> str:
    if raw_url.startswith("postgres://"):
        return raw_url.replace("postgres://", "postgresql+psycopg://", 1)
    if raw_url.startswith("postgresql://") and "+psycopg" not in raw_url:
        return raw_url.replace("postgresql://", "postgresql+psycopg://", 1)
    if raw_url.startswith("sqlite:///"):
        path_part = raw_url.removeprefix("sqlite:///")
        if path_part and path_part != ":memory:" and not path_part.startswith("/"):
            return f"sqlite:///{Path(path_part).resolve()}"
    return raw_url


def database_url_from_settings(settings: Settings) -> str:
    if settings.database_url:
        return _normalize_database_url(settings.database_url)

    if settings.db_host:
        return URL.create(
            "postgresql+psycopg",
            username=settings.db_user or None,
            password=settings.db_password or None,
            host=settings.db_host,
            port=settings.db_port,
            database=settings.db_name,
        ).render_as_string(hide_password=False)

    default_path = Path(__file__).resolve().parents[3] / "savedata.db"
    return f"sqlite:///{default_path}"


class DatabaseConnection:
    def __init__(self, url: str):
        self.url = url
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None
        self._connected = False

    @property
    def target(self) -> str:
        parsed = make_url(self.url)
        if parsed.host:
            return f"{parsed.host}:{parsed.port or ''}".rstrip(":")
        return parsed.database or parsed.drivername

    def connect(self) -> None:
        kwargs: dict = {}
        if self.url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
        else:
            kwargs["pool_pre_ping"] = True

        target = "(unparsed url)"
        engine: Engine | None = None
        try:
            target = self.target
            logger.info("Establishing database connection to %s...", target)
            engine = create_engine(self.url, **kwargs)
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            Base.metadata.create_all(bind=engine)
        except SQLAlchemyError as exc:
            if engine is not None:
                engine.dispose()
            raise DatabaseConnectionError(f"failed to connect to database at {target}: {exc}") from exc

        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
        self._connected = True
        logger.info("Successfully connected to database: %s", make_url(self.url).database or target)

    def is_connected(self) -> bool:
        return self._connected

    def _sessions(self) -> sessionmaker[Session]:
        if not self._connected or self._session_factory is None:
            raise PersistenceError("connection not established")
        return self._session_factory

    def save(self, payload: bytes) -> None:
        session_factory = self._sessions()
        try:
            with session_factory() as db, db.begin():
                db.add(SavedPayloadRow(payload=payload, size=len(payload)))
        except SQLAlchemyError as exc:
            raise PersistenceError(f"failed to save data to database: {exc}") from exc

    def latest_payload(self) -> bytes | None:
        with self._sessions()() as db:
            stmt = select(SavedPayloadRow.payload).order_by(desc(SavedPayloadRow.id)).limit(1)
            return db.scalars(stmt).first()

    def count(self) -> int:
        with self._sessions()() as db:
            return db.scalar(select(func.count()).select_from(SavedPayloadRow)) or 0

    def close(self) -> None:
        if not self._connected:
            return
        logger.info("Closing database connection to %s", self.target)
        self._connected = False
        self._session_factory = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
