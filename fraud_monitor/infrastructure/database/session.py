"""Database session management"""

from typing import Callable
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from fraud_monitor.config import settings
from fraud_monitor.infrastructure.database.models import Base


def _engine_options(database_url: str) -> dict:
    if database_url.startswith("sqlite"):
        # Sessions are used from FastAPI's threadpool
        return {"connect_args": {"check_same_thread": False}}
    # Connection pool: max 20 connections, recycle after 1 hour to avoid stale connections
    return {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 10, "pool_recycle": 3600}


engine = create_engine(settings.database_url, **_engine_options(settings.database_url))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(session_factory: Callable[[], Session] = SessionLocal) -> None:
    """Create tables that do not exist yet on the factory's database"""
    with session_factory() as session:
        Base.metadata.create_all(bind=session.get_bind())

