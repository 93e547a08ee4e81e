"""PostgreSQL user store using SQLAlchemy."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from account.exceptions import UserNotFound
from db.engine import SessionLocal
from db.models.user import User


def _to_dict(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "hashed_password": user.hashed_password,
        "created_at": int(user.created_at.timestamp()) if user.created_at else None,
        "updated_at": int(user.updated_at.timestamp()) if user.updated_at else None,
    }


class PostgresUserStore:
    """User store backed by PostgreSQL."""

    def __init__(self, session_factory: sessionmaker | None = None) -> None:
        self._session_factory = session_factory or SessionLocal

    def _get_session(self) -> Session:
        return self._session_factory()

    async def get_by_email(self, email: str) -> dict | None:
        with self._get_session() as db:
            user = db.execute(
                select(User).where(User.email == email.lower())
            ).scalar_one_or_none()
            return _to_dict(user) if user else None

    async def get_by_id(self, user_id: int) -> dict | None:
        with self._get_session() as db:
            user = db.execute(
                select(User).where(User.id == user_id)
            ).scalar_one_or_none()
            return _to_dict(user) if user else None

    async def create_user(self, data: dict) -> dict:
        with self._get_session() as db:
            user = User(
                email=data["email"].lower(),
                name=data.get("name"),
                hashed_password=data.get("hashed_password"),
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            return _to_dict(user)

    async def update_user(self, user_id: int, updates: dict) -> dict:
        with self._get_session() as db:
            user = db.execute(
                select(User).where(User.id == user_id)
            ).scalar_one_or_none()
            if not user:
                raise UserNotFound()
            for key, value in updates.items():
                if hasattr(user, key):
                    setattr(user, key, value)
            db.commit()
            db.refresh(user)
            return _to_dict(user)
