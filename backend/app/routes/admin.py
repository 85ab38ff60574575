"""Administrator views of user accounts."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.acl import ROLE_ADMIN
from app.database import get_session
from app.auth import require_role
from app.exceptions import NotFoundError
from app.models import User
from app.schemas import AdminUserCreate, UserResponse, UserUpdate
from app.crud import (
    create_user,
    get_all_users,
    get_user,
    get_user_by_email,
    save_user,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin", tags=["admin"])


async def _load_user(db: AsyncSession, user_id: int) -> User:
    user = await get_user(db, user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user


@router.get("/users", response_model=list[UserResponse])
async def admin_list_users(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    return await get_all_users(db)


@router.post(
    "/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED
)
async def admin_create_user(
    data: AdminUserCreate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    """Create an account with a chosen role, bypassing public registration."""
    if await get_user_by_email(db, data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "code": "auth_email_registered",
                "message": "Email is already registered.",
            },
        )
    user = await create_user(
        db,
        User(
            name=data.name,
            email=data.email,
            password_hash=data.password,
            role=data.role,
        ),
    )
    logger.info("%s created %s user %s", current_user.email, user.role, user.email)
    return user


@router.get("/users/{user_id}", response_model=UserResponse)
async def admin_get_user(
    user_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    return await _load_user(db, user_id)


@router.put("/users/{user_id}", response_model=UserResponse)
async def admin_update_user(
    user_id: int,
    data: UserUpdate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    """Rename a user or change their role.

    A role change also changes which role-based mandatory courses apply
    to the user from their next request on.
    """
    user = await _load_user(db, user_id)
    changes = data.model_dump(exclude_unset=True)
    if "role" in changes and changes["role"] != user.role:
        logger.info(
            "%s changed role of user %s from %s to %s",
            current_user.email,
            user.id,
            user.role,
            changes["role"],
        )
    for field, value in changes.items():
        setattr(user, field, value)
    return await save_user(db, user)
