"""
Database models package.

Exports all models and provides initialization utilities.
"""

from .base import Base, create_db_engine, get_session_maker
from .conversion import Conversion, ExtractedData, DeployedContract
from .repository import ConversionRepository

__all__ = [
    'Base',
    'Conversion',
    'ExtractedData',
    'DeployedContract',
    'ConversionRepository',
    'create_db_engine',
    'get_session_maker',
    'init_database',
]


def init_database(database_url: str = None, echo: bool = False):
    """
    Initialize database: create all tables.

    Args:
        database_url: SQLAlchemy connection string; defaults to DATABASE_URL
        echo: Whether to echo SQL statements

    Returns:
        SQLAlchemy engine
    """
    engine = create_db_engine(database_url, echo=echo)
    Base.metadata.create_all(engine)
    return engine
