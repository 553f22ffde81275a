"""
Boundary validation tests - field/message pairs for create and update input.
"""

from app.schemas.user import UserCreate, UserUpdate, validate_user_create, validate_user_update


def _fields(errors):
    return {field for field, _ in errors}


def test_valid_create_has_no_errors():
    data = UserCreate(name="Joe", email="joe@example.com", password="12345678")
    assert validate_user_create(data) == []


def test_create_reports_every_missing_field():
    errors = validate_user_create(UserCreate())
    assert _fields(errors) == {"name", "email", "password"}


def test_create_rejects_short_name_bad_email_short_password():
    data = UserCreate(name="J", email="not-an-email", password="1234567")
    errors = dict(validate_user_create(data))
    assert "between 2 and 100" in errors["name"]
    assert "valid email" in errors["email"]
    assert "at least 8" in errors["password"]


def test_create_rejects_name_over_limit():
    data = UserCreate(name="x" * 101, email="joe@example.com", password="12345678")
    assert _fields(validate_user_create(data)) == {"name"}


def test_create_rejects_password_over_bcrypt_limit():
    data = UserCreate(name="Joe", email="joe@example.com", password="p" * 73)
    assert _fields(validate_user_create(data)) == {"password"}


def test_create_accepts_email_with_surrounding_spaces():
    data = UserCreate(name="Joe", email="Joe@Email.com ", password="12345678")
    assert validate_user_create(data) == []


def test_update_ignores_absent_and_blank_fields():
    assert validate_user_update(UserUpdate()) == []
    assert validate_user_update(UserUpdate(name="  ", email="")) == []


def test_update_checks_present_fields():
    errors = validate_user_update(UserUpdate(name="J", email="nope"))
    assert _fields(errors) == {"name", "email"}
