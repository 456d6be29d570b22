from pydantic import BaseModel, Field
from typing import Optional


class UserBase(BaseModel):
    id: str
    username: str
    role: str
    created_at: Optional[str] = None


class UserCreateRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)
    role: str = Field(default="admin", min_length=1, max_length=20)


class ChangePasswordRequest(BaseModel):
    username: str = Field(..., min_length=1)
    currentPassword: str = Field(..., min_length=1)
    newPassword: str = Field(..., min_length=1)


class MessageResponse(BaseModel):
    message: str
