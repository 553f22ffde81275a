"""
User CRUD endpoints - RESTful resource (GET/POST/PUT/PATCH/DELETE).
Challenge: Boundary validation, clear status codes, soft delete.
Design: Thin controller; service layer holds business logic and reports errors as Result.
"""

from fastapi import APIRouter, Query, Request, Response, status

from app.api.errors import service_error_response, validation_error_response
from app.db.repositories.user_repository import UserRepository
from app.db.session import DbSession
from app.schemas.user import (
    EmailExistsResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
    validate_user_create,
    validate_user_update,
)
from app.services.user_service import UserService

router = APIRouter()


def _get_user_service(session: DbSession) -> UserService:
    """Factory for service with repository injection (Dependency Inversion)."""
    return UserService(UserRepository(session))


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(session: DbSession, data: UserCreate, request: Request, response: Response):
    """Create user. Location header points at the new resource."""
    errors = validate_user_create(data)
    if errors:
        return validation_error_response(errors)
    result = await _get_user_service(session).create(data)
    if not result.ok:
        return service_error_response(result.error)
    response.headers["Location"] = str(request.url_for("get_user", user_id=result.value.id))
    return result.value


@router.get("", response_model=list[UserResponse])
async def list_users(session: DbSession):
    """Active users only."""
    return await _get_user_service(session).list_all()


# Fixed paths are declared before /{user_id} so they are not captured by it
@router.get("/search", response_model=list[UserResponse])
async def search_users(session: DbSession, name: str = Query(...)):
    """Case-insensitive name search over active users. An empty fragment matches all of them."""
    return await _get_user_service(session).search_by_name(name)


@router.get("/email/{email}", response_model=UserResponse)
async def get_user_by_email(session: DbSession, email: str):
    result = await _get_user_service(session).get_by_email(email)
    if not result.ok:
        return service_error_response(result.error)
    return result.value


@router.get("/email-exists/{email}", response_model=EmailExistsResponse)
async def email_exists(session: DbSession, email: str, exclude_id: int | None = Query(None)):
    """Availability check. With exclude_id, ignores that user's own email (edit forms)."""
    svc = _get_user_service(session)
    if exclude_id is None:
        exists = await svc.email_exists(email)
    else:
        exists = await svc.email_exists_for_other_user(email, exclude_id)
    return EmailExistsResponse(email=email, exists=exists)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(session: DbSession, user_id: int):
    result = await _get_user_service(session).get_by_id(user_id)
    if not result.ok:
        return service_error_response(result.error)
    return result.value


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(session: DbSession, user_id: int, data: UserUpdate):
    """Partial update: only non-blank name/email are applied."""
    errors = validate_user_update(data)
    if errors:
        return validation_error_response(errors)
    result = await _get_user_service(session).update(user_id, data)
    if not result.ok:
        return service_error_response(result.error)
    return result.value


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def deactivate_user(session: DbSession, user_id: int):
    """Soft delete: the record stays, flagged inactive."""
    result = await _get_user_service(session).deactivate(user_id)
    if not result.ok:
        return service_error_response(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{user_id}/reactivate", response_model=UserResponse)
async def reactivate_user(session: DbSession, user_id: int):
    result = await _get_user_service(session).reactivate(user_id)
    if not result.ok:
        return service_error_response(result.error)
    return result.value
