"""
User repository - encapsulates all user data access (SOLID: Single Responsibility).
Challenge: Keep queries in one place for optimization and reuse.
Emails passed in are expected to be normalized already (see user_mapper.normalize_email).
"""

import logging

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError

from app.db.models.user import User
from app.db.repositories.base_repository import BaseRepository

logger = logging.getLogger(__name__)


# How the unique email index shows up in driver messages: index name (Postgres), UNIQUE failure (SQLite)
EMAIL_CONSTRAINT_MARKERS = ("ix_users_email", "UNIQUE constraint failed: users.email")


class EmailConstraintViolation(Exception):
    """The database rejected a write because another row holds the email."""

    def __init__(self, email: str):
        super().__init__(f"Email already stored: {email}")
        self.email = email


def _is_email_conflict(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return any(marker in message for marker in EMAIL_CONSTRAINT_MARKERS)


class UserRepository(BaseRepository[User]):
    """User-specific queries. Extends base CRUD with lookups by email, state and name."""

    def __init__(self, session):
        super().__init__(session, User)

    async def save(self, entity: User) -> User:
        """Persist user. Email unique-index hits become EmailConstraintViolation; other integrity errors propagate."""
        try:
            return await super().save(entity)
        except IntegrityError as exc:
            await self.session.rollback()
            if not _is_email_conflict(exc):
                raise
            logger.warning("save rejected by unique constraint: email=%s", entity.email)
            raise EmailConstraintViolation(entity.email) from exc

    async def get_active_by_id(self, id: int) -> User | None:
        """Fetch user only while active (soft-deleted rows are invisible)."""
        result = await self.session.execute(
            select(User).where(User.id == id, User.active.is_(True))
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        """Exact match on normalized email, regardless of active flag."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        result = await self.session.execute(select(exists().where(User.email == email)))
        return bool(result.scalar())

    async def exists_by_email_for_other(self, email: str, user_id: int) -> bool:
        """True when a user other than ``user_id`` holds the email."""
        result = await self.session.execute(
            select(exists().where(User.email == email, User.id != user_id))
        )
        return bool(result.scalar())

    async def list_active(self) -> list[User]:
        result = await self.session.execute(
            select(User).where(User.active.is_(True)).order_by(User.id)
        )
        return list(result.scalars().all())

    async def find_by_name_contains(self, fragment: str) -> list[User]:
        """Case-insensitive substring match on name. Includes inactive users."""
        result = await self.session.execute(
            select(User)
            .where(User.name.icontains(fragment, autoescape=True))
            .order_by(User.id)
        )
        return list(result.scalars().all())
