# Repository pattern: abstract data access (SOLID - Dependency Inversion)

from app.db.repositories.user_repository import EmailConstraintViolation, UserRepository

__all__ = ["UserRepository", "EmailConstraintViolation"]
