import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from inventory_api.api.auth import get_current_active_user
from inventory_api.core.security import get_password_hash, verify_password
from inventory_api.database import db
from inventory_api.errors import DuplicateEntry, NotFound
from inventory_api.guardrails.decorators import require_permission
from inventory_api.guardrails.permissions import Permission
from inventory_api.models.user import ChangePasswordRequest, User, UserCreate, UserPublic, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])

@router.get("/", response_model=List[UserPublic])
async def list_users(
    skip: int = 0,
    limit: int = 100,
    current_user: User = Depends(require_permission(Permission.MANAGE_USERS))
):
    users = await db.users.list(skip=skip, limit=limit, sort=[("name", 1)])
    return [UserPublic.from_user(u) for u in users]

@router.put("/change-password")
async def change_password(
    payload: ChangePasswordRequest,
    current_user: User = Depends(get_current_active_user)
):
    """Any signed-in user may change their own password."""
    if not verify_password(payload.current_password, current_user.password_hash):
        raise HTTPException(status_code=401, detail="Current password is incorrect.")
    await db.users.update(current_user.id, {"password_hash": get_password_hash(payload.new_password)})
    logger.info(f"User {current_user.email} changed their password")
    return {"message": "Password updated successfully."}

@router.get("/{user_id}", response_model=UserPublic)
async def get_user(
    user_id: str,
    current_user: User = Depends(require_permission(Permission.MANAGE_USERS))
):
    user = await db.users.get_active(user_id)
    if not user:
        raise NotFound("User", user_id)
    return UserPublic.from_user(user)

@router.post("/", response_model=UserPublic, status_code=201)
async def create_user(
    payload: UserCreate,
    current_user: User = Depends(require_permission(Permission.MANAGE_USERS))
):
    if await db.users.get_by_email(payload.email, include_inactive=True):
        raise DuplicateEntry("Email already in use.")
    user = User(
        name=payload.name.strip(),
        email=payload.email,
        password_hash=get_password_hash(payload.password),
        role=payload.role,
    )
    await db.users.create(user)
    logger.info(f"User {user.email} created by {current_user.email}")
    return UserPublic.from_user(user)

@router.put("/{user_id}", response_model=UserPublic)
async def update_user(
    user_id: str,
    payload: UserUpdate,
    current_user: User = Depends(require_permission(Permission.MANAGE_USERS))
):
    user = await db.users.get_active(user_id)
    if not user:
        raise NotFound("User", user_id)

    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in changes:
        changes["email"] = changes["email"].lower()
        other = await db.users.get_by_email(changes["email"], include_inactive=True)
        if other and other.id != user_id:
            raise DuplicateEntry("Email already in use.")
    if "password" in changes:
        changes["password_hash"] = get_password_hash(changes.pop("password"))
    if "role" in changes:
        changes["role"] = changes["role"].value

    updated = await db.users.update(user_id, changes)
    return UserPublic.from_user(updated)

@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    current_user: User = Depends(require_permission(Permission.MANAGE_USERS))
):
    if user_id == current_user.id:
        raise HTTPException(status_code=400, detail="You cannot deactivate your own account.")
    if not await db.users.soft_delete(user_id):
        raise NotFound("User", user_id)
    return {"message": "User deactivated successfully"}
