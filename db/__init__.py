"""
Database module for the data portal account service.

Provides the SQLAlchemy engine, session factory and models used by the
PostgreSQL user store.
"""

from db.engine import Base, SessionLocal, create_tables

__all__ = ["Base", "SessionLocal", "create_tables"]
