"""Database engine and per-request sessions for the quota store"""

import logging
from typing import Any, Dict, Generator
from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session
from barcode_gateway.config import Settings, settings


def engine_options(config: Settings) -> Dict[str, Any]:
    """
    Keyword arguments for create_engine.

    Server databases get a bounded, pre-pinged pool sized from config. SQLite
    (local runs and tests) gets cross-thread access instead, since FastAPI
    serves sync endpoints from a thread pool.
    """
    if make_url(config.database_url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_size": config.db_pool_size,
        "max_overflow": config.db_max_overflow,
        "pool_recycle": config.db_pool_recycle_seconds,
    }


engine = create_engine(settings.database_url, **engine_options(settings))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency injection for database sessions"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ping(db: Session) -> bool:
    """True when the quota store answers a trivial query"""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logging.warning(f"Database ping failed: {e}")
        db.rollback()
        return False
