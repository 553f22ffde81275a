"""
User request/response schemas - API contract and validation.
Request models only fix the JSON shape; field rules live in the validate_* functions,
which the endpoints call before handing input to the service.
"""

from datetime import datetime

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 8
# bcrypt accepts max 72 bytes; longer passwords cause 500. Validate here for a clear 400.
PASSWORD_MAX_BYTES = 72

FieldError = tuple[str, str]


class UserCreate(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None


class UserUpdate(BaseModel):
    """Partial update: absent or blank fields are left untouched."""

    name: str | None = None
    email: str | None = None


class UserResponse(BaseModel):
    """Transfer shape. Never carries the password hash."""

    id: int
    name: str
    email: str
    active: bool
    created_at: datetime
    updated_at: datetime | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EmailExistsResponse(BaseModel):
    email: str
    exists: bool


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _check_name(name: str, errors: list[FieldError]) -> None:
    length = len(name.strip())
    if length < NAME_MIN_LENGTH or length > NAME_MAX_LENGTH:
        errors.append(("name", f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"))


def _check_email(email: str, errors: list[FieldError]) -> None:
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        errors.append(("email", "Email must be a valid email address"))


def validate_user_create(data: UserCreate) -> list[FieldError]:
    """Presence, length and format checks for a new user."""
    errors: list[FieldError] = []

    if _blank(data.name):
        errors.append(("name", "Name is required"))
    else:
        _check_name(data.name, errors)

    if _blank(data.email):
        errors.append(("email", "Email is required"))
    else:
        _check_email(data.email, errors)

    if not data.password:
        errors.append(("password", "Password is required"))
    elif len(data.password) < PASSWORD_MIN_LENGTH:
        errors.append(("password", f"Password must be at least {PASSWORD_MIN_LENGTH} characters"))
    elif len(data.password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        errors.append(("password", f"Password must be at most {PASSWORD_MAX_BYTES} bytes"))

    return errors


def validate_user_update(data: UserUpdate) -> list[FieldError]:
    """Only non-blank fields are checked; blank ones are ignored by the update."""
    errors: list[FieldError] = []
    if not _blank(data.name):
        _check_name(data.name, errors)
    if not _blank(data.email):
        _check_email(data.email, errors)
    return errors
