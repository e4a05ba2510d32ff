"""Persistence models: enums, SQLAlchemy tables, pydantic schemas and converters."""
