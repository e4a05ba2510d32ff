"""
Database base configuration and utilities.

Provides the declarative base class, common column helpers, and database
engine factory functions.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Uuid, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


# =============================================================================
# COMMON COLUMN HELPERS
# =============================================================================

def uuid_pk() -> Mapped[uuid.UUID]:
    """ Primary key UUID column, auto-generated on insert. """
    return mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)


def created_at() -> Mapped[datetime]:
    """ Created timestamp column, auto-set on insert. """
    return mapped_column(default=utcnow, nullable=False)


def updated_at() -> Mapped[datetime]:
    """ Updated timestamp column, auto-updated on modification """
    return mapped_column(
        default=utcnow,
        onupdate=utcnow,
        nullable=False
    )


# =============================================================================
# ENGINE FACTORY
# =============================================================================

def create_db_engine(url: Optional[str] = None, echo: bool = False):
    """ Create database engine with proper configuration. """
    if not url:
        from lexchain.config import config
        url = config.database_url
    if not url:
        raise ValueError("DATABASE_URL or DB_CONNECTION_STRING must be set")

    if url in ("sqlite://", "sqlite:///:memory:"):
        # one shared connection so every session sees the same in-memory database
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, echo=echo, pool_pre_ping=True)


def get_session_maker(engine):
    """ Get sessionmaker for the given engine. """
    return sessionmaker(bind=engine, expire_on_commit=False)
