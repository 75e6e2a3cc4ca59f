"""
User API endpoints.

Thin adapters over the user store. All endpoints require a valid access
token. Every client-side failure (bad id, bad body, unknown user, store
rejection) is reported as 400.

Handlers are plain functions: the store and bcrypt block, so FastAPI runs
them in its threadpool.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from api.dependencies import get_user_repository
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .exceptions import UserNotFoundError, UserStoreError
from .interfaces import IUserRepository
from .models import User, UserCreate, UserResponse, UserUpdate
from .passwords import hash_password

logger = logging.getLogger(__name__)

router = APIRouter()


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


@router.get("", response_model=list[UserResponse])
def list_users(
    _: AuthenticatedUser = Depends(get_current_user),
    users: IUserRepository = Depends(get_user_repository),
) -> list[UserResponse]:
    """List all users."""
    try:
        return [UserResponse.model_validate(u) for u in users.list_users()]
    except UserStoreError as e:
        raise _bad_request(e.message)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int = Path(ge=1, description="User ID"),
    _: AuthenticatedUser = Depends(get_current_user),
    users: IUserRepository = Depends(get_user_repository),
) -> UserResponse:
    """Get a single user."""
    try:
        user = users.get_user(user_id)
    except UserStoreError as e:
        raise _bad_request(e.message)
    if user is None:
        raise _bad_request("User not found")
    return UserResponse.model_validate(user)


@router.patch("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_user(
    payload: UserUpdate,
    user_id: int = Path(ge=1, description="User ID"),
    caller: AuthenticatedUser = Depends(get_current_user),
    users: IUserRepository = Depends(get_user_repository),
) -> Response:
    """
    Update a user's name and email.

    If the body carries an id it must match the path. A password in the
    body replaces the stored hash in the same write.
    """
    if payload.id is not None and payload.id != user_id:
        raise _bad_request("User id in body does not match path")

    try:
        users.update_user(
            User(
                id=user_id,
                first_name=payload.first_name,
                last_name=payload.last_name,
                email=payload.email,
                password=hash_password(payload.password) if payload.password else None,
            )
        )
    except (UserNotFoundError, UserStoreError) as e:
        raise _bad_request(e.message)

    logger.info("User %d updated by user %d", user_id, caller.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def insert_user(
    payload: UserCreate,
    user_id: int = Path(ge=1, description="User ID"),
    caller: AuthenticatedUser = Depends(get_current_user),
    users: IUserRepository = Depends(get_user_repository),
) -> Response:
    """
    Insert a new user.

    The store assigns the new id; an id in the body must match the path
    but is otherwise ignored.
    """
    if payload.id is not None and payload.id != user_id:
        raise _bad_request("User id in body does not match path")

    user = User(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        password=hash_password(payload.password) if payload.password else None,
    )
    try:
        new_id = users.insert_user(user)
    except UserStoreError as e:
        raise _bad_request(e.message)

    logger.info("User %d inserted by user %d", new_id, caller.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int = Path(ge=1, description="User ID"),
    caller: AuthenticatedUser = Depends(get_current_user),
    users: IUserRepository = Depends(get_user_repository),
) -> Response:
    """Delete a user."""
    try:
        users.delete_user(user_id)
    except (UserNotFoundError, UserStoreError) as e:
        raise _bad_request(e.message)

    logger.info("User %d deleted by user %d", user_id, caller.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
