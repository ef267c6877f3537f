"""
Database engine and session management for the relational podcast store.

Session-per-operation: every read opens a session through session_scope()
and closes it when done. SQLAlchemy errors are logged and re-raised as
DataAccessError so callers never depend on the driver's exception types.
"""

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from src.domain.errors import DataAccessError

logger = logging.getLogger(__name__)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create the SQLAlchemy engine for database_url."""
    try:
        return create_engine(database_url, echo=echo)
    except (SQLAlchemyError, ValueError) as error:
        raise DataAccessError(f"Invalid database configuration: {error}") from error


@contextmanager
def session_scope(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """
    Context manager for one read-only unit of work.

    Usage:
        with session_scope(SessionLocal) as session:
            rows = session.execute(statement).all()
    """
    session = session_factory()
    try:
        logger.debug("Database session created")
        yield session

    except SQLAlchemyError as e:
        logger.error(f"Database error: {e}")
        session.rollback()
        raise DataAccessError(f"Relational store query failed: {e}") from e

    finally:
        session.close()
        logger.debug("Database session closed")
