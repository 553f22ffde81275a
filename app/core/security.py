"""
Security: password hashing (best practices for APIs).
Challenge: No plain-text passwords; slow salted hash to resist brute force.
"""

from passlib.context import CryptContext

from app.config import get_settings

settings = get_settings()
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(password: str) -> str:
    """One-way salted hash for storage. Never store plain passwords."""
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time check against a stored hash (re-hashes with the stored salt)."""
    return pwd_context.verify(plain, hashed)
