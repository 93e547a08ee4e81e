"""
SQLAlchemy models for the data portal account tables.
"""

from db.models.user import User

__all__ = ["User"]
