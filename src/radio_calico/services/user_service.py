"""CRUD-style helpers for managing users."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from radio_calico.core.errors import NotFoundError, StoreError, UniquenessError, ValidationError
from radio_calico.models.user import User

__all__ = [
    "get_user",
    "get_users",
    "create_user",
    "delete_user",
]

logger = logging.getLogger(__name__)


def get_users(db: Session) -> Sequence[User]:
    """Return all users, newest first."""
    try:
        return db.scalars(select(User).order_by(User.created_at.desc(), User.id.desc())).all()
    except SQLAlchemyError as exc:
        logger.exception("Failed to list users")
        raise StoreError("Failed to load users") from exc


def get_user(db: Session, user_id: int) -> User:
    """Return a single user by primary key."""
    try:
        user = db.get(User, user_id)
    except SQLAlchemyError as exc:
        logger.exception("Failed to load user %s", user_id)
        raise StoreError("Failed to load user") from exc
    if user is None:
        raise NotFoundError("User not found")
    return user


def create_user(db: Session, username: str, email: str) -> User:
    """Persist a new user, translating constraint violations."""
    if not username or not email:
        raise ValidationError("Username and email are required")

    db_user = User(username=username, email=email)
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise UniquenessError("Username or email already exists") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to create user %s", username)
        raise StoreError("Failed to create user") from exc
    db.refresh(db_user)
    return db_user


def delete_user(db: Session, user_id: int) -> None:
    """Remove a user from the database."""
    db_user = get_user(db, user_id)
    db.delete(db_user)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to delete user %s", user_id)
        raise StoreError("Failed to delete user") from exc
