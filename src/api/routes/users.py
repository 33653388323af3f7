"""User account routes (signup, login, lookup, delete, password reset).

Endpoints:
- POST /user/signup: Create an account
- POST /user/login: Check credentials
- GET /user/getUser/{username}: Fetch an account
- DELETE /user/deleteUser/{username}: Delete an account
- PATCH /user/resetPassword: Replace the password
- PATCH /user/updateBiography: Replace the biography
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import get_user_repo
from api.models import BiographyRequest, ErrorResponse, SafeUserResponse, UserRequest
from domain.model.errors import NotFoundError
from domain.model.result import Err
from domain.model.user import UserCredentials, UserDraft
from port.user_repository import UserRepository
from services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["user"])

INVALID_BODY = "Invalid request body: username and password are required."
INVALID_USERNAME = "Invalid or missing username parameter."

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def _is_non_blank(value) -> bool:
    return isinstance(value, str) and value.strip() != ''


def is_user_body_valid(request: UserRequest) -> bool:
    """Return True if the body has non-blank string username and password."""
    return _is_non_blank(request.username) and _is_non_blank(request.password)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "/signup",
    response_model=SafeUserResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
async def create_user(request: UserRequest, repo: UserRepository = Depends(get_user_repo)):
    """Create a new user account."""
    if not is_user_body_valid(request):
        return _error(status.HTTP_400_BAD_REQUEST, INVALID_BODY)

    result = user_service.create_user(repo, UserDraft(
        username=request.username,
        password=request.password,
        date_joined=datetime.now(timezone.utc),
    ))
    if isinstance(result, Err):
        logger.warning("Signup failed", extra={"username": request.username, "error": result.message})
        return _error(status.HTTP_400_BAD_REQUEST, result.message)

    logger.info("User registered", extra={"userId": result.value.id, "username": result.value.username})
    return SafeUserResponse.from_domain(result.value)


@router.post(
    "/login",
    response_model=SafeUserResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
async def login(request: UserRequest, repo: UserRepository = Depends(get_user_repo)):
    """Check a username/password pair and return the account."""
    if not is_user_body_valid(request):
        return _error(status.HTTP_400_BAD_REQUEST, INVALID_BODY)

    result = user_service.authenticate(
        repo, UserCredentials(username=request.username, password=request.password)
    )
    if isinstance(result, Err):
        return _error(status.HTTP_401_UNAUTHORIZED, result.message)

    logger.info("User logged in", extra={"userId": result.value.id, "username": result.value.username})
    return SafeUserResponse.from_domain(result.value)


@router.get(
    "/getUser/{username}",
    response_model=SafeUserResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
async def get_user(username: str, repo: UserRepository = Depends(get_user_repo)):
    """Fetch a user by username."""
    if not _is_non_blank(username):
        return _error(status.HTTP_400_BAD_REQUEST, INVALID_USERNAME)

    result = user_service.fetch_by_username(repo, username)
    if isinstance(result, Err):
        return _error(status.HTTP_404_NOT_FOUND, result.message)

    return SafeUserResponse.from_domain(result.value)


@router.delete(
    "/deleteUser/{username}",
    response_model=SafeUserResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
async def delete_user(username: str, repo: UserRepository = Depends(get_user_repo)):
    """Delete a user and return the removed account."""
    if not _is_non_blank(username):
        return _error(status.HTTP_400_BAD_REQUEST, INVALID_USERNAME)

    result = user_service.delete_by_username(repo, username)
    if isinstance(result, Err):
        if isinstance(result.error, NotFoundError):
            return _error(status.HTTP_404_NOT_FOUND, result.message)
        logger.error("Delete failed", extra={"username": username, "error": result.message})
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, result.message)

    logger.info("User deleted", extra={"userId": result.value.id, "username": username})
    return SafeUserResponse.from_domain(result.value)


@router.patch(
    "/resetPassword",
    response_model=SafeUserResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
async def reset_password(request: UserRequest, repo: UserRepository = Depends(get_user_repo)):
    """Replace a user's password."""
    if not is_user_body_valid(request):
        return _error(status.HTTP_400_BAD_REQUEST, INVALID_BODY)

    policy = user_service.validate_password(request.password)
    if isinstance(policy, Err):
        return _error(status.HTTP_400_BAD_REQUEST, policy.message)

    result = user_service.update_user(repo, request.username, {"password": request.password})
    if isinstance(result, Err):
        return _error(status.HTTP_400_BAD_REQUEST, result.message)

    logger.info("Password reset", extra={"userId": result.value.id, "username": request.username})
    return SafeUserResponse.from_domain(result.value)


@router.patch(
    "/updateBiography",
    response_model=SafeUserResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
async def update_biography(request: BiographyRequest, repo: UserRepository = Depends(get_user_repo)):
    """Replace a user's biography."""
    if not _is_non_blank(request.username) or not isinstance(request.biography, str):
        return _error(
            status.HTTP_400_BAD_REQUEST,
            "Invalid request body: username and biography are required.",
        )

    result = user_service.update_user(repo, request.username, {"biography": request.biography})
    if isinstance(result, Err):
        if isinstance(result.error, NotFoundError):
            return _error(status.HTTP_404_NOT_FOUND, result.message)
        return _error(status.HTTP_400_BAD_REQUEST, result.message)

    return SafeUserResponse.from_domain(result.value)
