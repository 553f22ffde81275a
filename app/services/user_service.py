"""
User service - business logic for users (SOLID: Single Responsibility).
Challenge: Email uniqueness, soft-delete lifecycle, hashing before persistence.
Design: Service depends on the repository only; failures come back as Result, not exceptions.
"""

import logging

from app.core.result import ErrorKind, Result
from app.core.security import hash_password
from app.db.repositories.user_repository import EmailConstraintViolation, UserRepository
from app.mappers import user_mapper
from app.mappers.user_mapper import normalize_email, utcnow
from app.schemas.user import UserCreate, UserResponse, UserUpdate

logger = logging.getLogger(__name__)


def _email_taken(email: str) -> Result:
    return Result.failure(ErrorKind.EMAIL_ALREADY_EXISTS, f"Email already registered: {email}")


def _not_found(user_id: int) -> Result:
    return Result.failure(ErrorKind.USER_NOT_FOUND, f"User not found with id: {user_id}")


class UserService:
    """Handles all user use cases: create, lookups, partial update, soft delete."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def create(self, data: UserCreate) -> Result[UserResponse]:
        """Reject taken emails, hash the password, persist."""
        email = normalize_email(data.email)
        if await self.user_repo.exists_by_email(email):
            logger.warning("create rejected: email=%s already registered", email)
            return _email_taken(email)

        user = user_mapper.from_create(data)
        user.password_hash = hash_password(data.password)
        try:
            user = await self.user_repo.save(user)
        except EmailConstraintViolation:
            # Lost the race against a concurrent create with the same email
            return _email_taken(email)

        logger.info("user created: id=%s email=%s", user.id, user.email)
        return Result.success(user_mapper.to_response(user))

    async def get_by_id(self, user_id: int) -> Result[UserResponse]:
        user = await self.user_repo.get_active_by_id(user_id)
        if user is None:
            return _not_found(user_id)
        return Result.success(user_mapper.to_response(user))

    async def get_by_email(self, email: str) -> Result[UserResponse]:
        email = normalize_email(email)
        user = await self.user_repo.get_by_email(email)
        if user is None or not user.active:
            return Result.failure(ErrorKind.USER_NOT_FOUND, f"User not found with email: {email}")
        return Result.success(user_mapper.to_response(user))

    async def list_all(self) -> list[UserResponse]:
        """Active users only."""
        users = await self.user_repo.list_active()
        return user_mapper.to_response_list(users)

    async def search_by_name(self, fragment: str) -> list[UserResponse]:
        users = await self.user_repo.find_by_name_contains(fragment)
        return user_mapper.to_response_list(u for u in users if u.active)

    async def update(self, user_id: int, data: UserUpdate) -> Result[UserResponse]:
        """Partial update of an active user. Email change re-checks uniqueness excluding self."""
        user = await self.user_repo.get_active_by_id(user_id)
        if user is None:
            return _not_found(user_id)

        if data.email is not None and data.email.strip():
            email = normalize_email(data.email)
            if email != user.email and await self.user_repo.exists_by_email_for_other(email, user_id):
                logger.warning("update rejected: id=%s email=%s held by another user", user_id, email)
                return _email_taken(email)

        user_mapper.apply_update(user, data)
        user.updated_at = utcnow()
        try:
            user = await self.user_repo.save(user)
        except EmailConstraintViolation as exc:
            return _email_taken(exc.email)

        logger.info("user updated: id=%s", user.id)
        return Result.success(user_mapper.to_response(user))

    async def deactivate(self, user_id: int) -> Result[None]:
        """Soft delete. An already inactive user is reported as not found."""
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            return _not_found(user_id)
        if not user.active:
            return Result.failure(ErrorKind.USER_NOT_FOUND, f"User already inactive: {user_id}")

        user.active = False
        user.updated_at = utcnow()
        await self.user_repo.save(user)
        logger.info("user deactivated: id=%s", user_id)
        return Result.success()

    async def reactivate(self, user_id: int) -> Result[UserResponse]:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            return _not_found(user_id)
        if user.active:
            return Result.failure(ErrorKind.INVALID_STATE, f"User is already active: {user_id}")

        user.active = True
        user.updated_at = utcnow()
        user = await self.user_repo.save(user)
        logger.info("user reactivated: id=%s", user_id)
        return Result.success(user_mapper.to_response(user))

    async def email_exists(self, email: str) -> bool:
        return await self.user_repo.exists_by_email(normalize_email(email))

    async def email_exists_for_other_user(self, email: str, user_id: int) -> bool:
        return await self.user_repo.exists_by_email_for_other(normalize_email(email), user_id)
