"""Hosted store connection and single-row inserts"""

import logging
import threading
from typing import Any, Dict, Optional, Type

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel

from form_intake.config import config

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None
_engine_lock = threading.Lock()


class StoreConfigError(RuntimeError):
    """Store endpoint or credential is not configured"""


class StoreError(RuntimeError):
    """The store rejected an insert or could not be reached"""


def store_settings() -> Dict[str, bool]:
    """Report which store settings are present, never their values"""
    return {
        "has_url": bool(config.get("supabase_db_url")),
        "has_credential": bool(config.get("supabase_db_password")),
    }


def _build_engine() -> Engine:
    db_url = config.get("supabase_db_url")
    password = config.get("supabase_db_password")
    missing = [
        name
        for name, value in (
            ("SUPABASE_DB_URL", db_url),
            ("SUPABASE_DB_PASSWORD", password),
        )
        if not value
    ]
    if missing:
        raise StoreConfigError(f"Missing store configuration: {', '.join(missing)}")

    # psycopg2 is the installed driver, whatever scheme the URL carries
    url = make_url(db_url).set(
        drivername="postgresql+psycopg2", password=password
    )
    logger.info(f"Creating store engine for host {url.host}")
    return create_engine(url, pool_pre_ping=True)


def get_engine() -> Engine:
    """Return the process-wide engine, creating it on first use"""
    global _engine
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                _engine = _build_engine()
    return _engine


def reset_engine():
    """Dispose of the cached engine so the next call rebuilds it from config"""
    global _engine
    with _engine_lock:
        if _engine is not None:
            _engine.dispose()
        _engine = None


class SubmissionStore:
    """Inserts normalized submission records, one row per call"""

    def __init__(self, engine: Optional[Engine] = None):
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine if self._engine is not None else get_engine()

    def insert(self, table: Type[SQLModel], row: Dict[str, Any]) -> SQLModel:
        """
        Insert one record into the given table.

        Args:
            table: SQLModel table class
            row: Column values

        Returns:
            The persisted record

        Raises:
            StoreConfigError: If the store is not configured
            StoreError: If the insert fails
        """
        record = table(**row)
        try:
            with Session(self.engine) as session:
                session.add(record)
                session.commit()
                session.refresh(record)
        except SQLAlchemyError as e:
            logger.error(f"Insert into {table.__tablename__} failed: {e}")
            raise StoreError(str(getattr(e, "orig", None) or e)) from e

        logger.info(f"Inserted {table.__tablename__} row {record.id}")
        return record


def get_store() -> SubmissionStore:
    """Get the submission store"""
    return SubmissionStore()
