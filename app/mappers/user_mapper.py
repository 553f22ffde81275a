"""
User mapper - converts between ORM records and API schemas.
Pure functions: no session, no hashing. The service sets password_hash.
"""

from collections.abc import Iterable
from datetime import datetime, timezone

from app.db.models.user import User
from app.schemas.user import UserCreate, UserResponse, UserUpdate


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    """Trim and lowercase. Applied before every store write or email comparison."""
    return email.strip().lower()


def to_response(user: User | None) -> UserResponse | None:
    """Map model to API response. password_hash is deliberately not copied."""
    if user is None:
        return None
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        active=user.active,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def to_response_list(users: Iterable[User]) -> list[UserResponse]:
    return [to_response(u) for u in users]


def from_create(data: UserCreate) -> User:
    """New unsaved user: active, created now, no password hash yet."""
    return User(
        name=data.name.strip(),
        email=normalize_email(data.email),
        active=True,
        created_at=utcnow(),
        updated_at=None,
    )


def apply_update(user: User, data: UserUpdate) -> User:
    """Overwrite name/email with present, non-blank values. Other fields untouched."""
    if data.name is not None and data.name.strip():
        user.name = data.name.strip()
    if data.email is not None and data.email.strip():
        user.email = normalize_email(data.email)
    return user
