"""
SQLAlchemy engine and session factory for PostgreSQL.

Usage:
    from db.engine import SessionLocal

    with SessionLocal() as db:
        user = db.query(User).first()
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from account.config import AccountConfig


# Create engine with connection pooling
engine = create_engine(
    AccountConfig.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before use
    pool_size=10,
    max_overflow=20,
    echo=False,
)

# Session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Base class for all models
Base = declarative_base()


def create_tables() -> None:
    """Create any missing tables for the registered models."""
    import db.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
