from fastapi import APIRouter, Depends, HTTPException, status

from ..auth.dependencies import get_current_user, require_admin
from ..auth.security import verify_password
from ..database import get_store
from ..schemas.auth import PasswordChange, UserCreate, UserOut, UserUpdate
from ..schemas.core import MessageResponse
from ..storage.base import Storage

router = APIRouter()


def _ensure_self_or_admin(current_user: dict, user_id: int) -> None:
    if current_user["role"] != "admin" and current_user["id"] != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")


@router.get("", response_model=list[UserOut])
def list_users(
    _: dict = Depends(require_admin),
    store: Storage = Depends(get_store),
):
    return store.get_all_users()


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: int,
    current_user: dict = Depends(get_current_user),
    store: Storage = Depends(get_store),
):
    _ensure_self_or_admin(current_user, user_id)
    user = store.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("", response_model=UserOut, status_code=201)
def create_user(
    payload: UserCreate,
    _: dict = Depends(require_admin),
    store: Storage = Depends(get_store),
):
    return store.create_user(payload.model_dump())


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: int,
    payload: UserUpdate,
    current_user: dict = Depends(get_current_user),
    store: Storage = Depends(get_store),
):
    _ensure_self_or_admin(current_user, user_id)
    user = store.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")

    changes = payload.model_dump(exclude_unset=True)
    if changes.get("role") not in (None, user["role"]) and current_user["role"] != "admin":
        raise HTTPException(status_code=403, detail="Cannot change role")
    return store.update_user(user_id, changes)


@router.put("/{user_id}/password", response_model=MessageResponse)
def change_password(
    user_id: int,
    payload: PasswordChange,
    current_user: dict = Depends(get_current_user),
    store: Storage = Depends(get_store),
):
    _ensure_self_or_admin(current_user, user_id)
    user = store.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")

    # Admins resetting someone else's password skip the current-password check
    if current_user["id"] == user_id:
        if not payload.current_password or not verify_password(
            payload.current_password, user.get("hashed_password", "")
        ):
            raise HTTPException(status_code=400, detail="Current password is incorrect")

    store.update_user(user_id, {"password": payload.new_password})
    return MessageResponse(message="Password updated successfully")


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    current_user: dict = Depends(require_admin),
    store: Storage = Depends(get_store),
):
    if current_user["id"] == user_id:
        raise HTTPException(status_code=400, detail="Cannot delete your own account")
    if not store.delete_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return MessageResponse(message="User deleted successfully")
