"""
User management API routes

Routes are the only layer that knows about HTTP: service and repository
outcomes are translated into status codes here.
"""

import logging
import re
from fastapi import APIRouter, HTTPException, Depends

from userapi.models.user import UserCreateRequest, UserUpdateRequest
from userapi.services.user_repository import UserRepository, get_user_repository
from userapi.services.users_service import UsersService
from userapi.utils.exceptions import ValidationError, NotFoundError, ConflictError, StoreError

router = APIRouter()
logger = logging.getLogger(__name__)

USER_ID_PATTERN = re.compile(r"-?[0-9]+")
INVALID_USER_ID_MESSAGE = "Invalid user ID"
INTERNAL_ERROR_MESSAGE = "Internal server error"


def get_users_service(repository: UserRepository = Depends(get_user_repository)) -> UsersService:
    return UsersService(repository)


def parse_user_id(raw_id: str) -> int:
    """Parse the id path segment, rejecting anything but a plain integer"""
    if not USER_ID_PATTERN.fullmatch(raw_id):
        raise HTTPException(status_code=400, detail=INVALID_USER_ID_MESSAGE)
    return int(raw_id)


def store_failure(action: str, error: StoreError) -> HTTPException:
    logger.error(f"Failed to {action}: {error.message}")
    return HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.get("")
async def list_users(users_service: UsersService = Depends(get_users_service)):
    """List all users ordered by id"""
    try:
        users = await users_service.list_users()
    except StoreError as e:
        raise store_failure("list users", e)

    return {"data": users}

@router.get("/{user_id}")
async def get_user(
    user_id: str,
    users_service: UsersService = Depends(get_users_service)
):
    """Get user details"""
    parsed_id = parse_user_id(user_id)

    try:
        user = await users_service.get_user(parsed_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except StoreError as e:
        raise store_failure("get user", e)

    return {"data": user}

@router.post("", status_code=201)
async def create_user(
    request: UserCreateRequest,
    users_service: UsersService = Depends(get_users_service)
):
    """Create a new user"""
    try:
        user = await users_service.create_user(request.name, request.email)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=e.message)
    except StoreError as e:
        raise store_failure("create user", e)

    return {"data": user}

@router.put("/{user_id}")
async def update_user(
    user_id: str,
    request: UserUpdateRequest,
    users_service: UsersService = Depends(get_users_service)
):
    """Replace a user's name and email"""
    parsed_id = parse_user_id(user_id)

    try:
        user = await users_service.update_user(parsed_id, request.name, request.email)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except StoreError as e:
        raise store_failure("update user", e)

    return {"data": user}

@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    users_service: UsersService = Depends(get_users_service)
):
    """Delete a user"""
    parsed_id = parse_user_id(user_id)

    try:
        await users_service.delete_user(parsed_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except StoreError as e:
        raise store_failure("delete user", e)

    return {"message": "User deleted"}
