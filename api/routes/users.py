from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from api.models.user_schemas import (
    ChangePasswordRequest,
    MessageResponse,
    UserBase,
    UserCreateRequest,
)
from repositories.user_repository import UserRepository
from utils.database import get_db

router = APIRouter(
    prefix="/api",
    tags=["Users"],
)


@router.get("/users", response_model=List[UserBase])
def list_users(db: Session = Depends(get_db)):
    """List admin accounts. Password hashes are never returned."""
    repo = UserRepository(db)
    return [UserBase(**user) for user in repo.list_users()]


@router.post("/users", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def create_user(request: UserCreateRequest, db: Session = Depends(get_db)):
    repo = UserRepository(db)
    user = repo.create_user(request.username, request.password, request.role)
    if not user:
        raise HTTPException(status_code=409, detail="Username already exists")
    return MessageResponse(message="User created successfully")


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(user_id: str, db: Session = Depends(get_db)):
    repo = UserRepository(db)
    if not repo.delete_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return MessageResponse(message="User deleted successfully")


@router.post("/change-password", response_model=MessageResponse)
def change_password(request: ChangePasswordRequest, db: Session = Depends(get_db)):
    """
    Change a user's password.

    **Errors:**
    - 404: unknown username
    - 401: current password does not match
    """
    repo = UserRepository(db)
    user = repo.get_by_username(request.username)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if not repo.verify_credentials(request.username, request.currentPassword):
        raise HTTPException(status_code=401, detail="Invalid current password")

    repo.change_password(user, request.newPassword)
    return MessageResponse(message="Password updated successfully")
