from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator
from inventory_api.models.base import SoftDeleteModel

class Role(str, Enum):
    ADMIN = "admin"
    STAFF = "staff"


class User(SoftDeleteModel):
    name: str
    email: str
    password_hash: str
    role: Role = Role.STAFF

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserPublic(BaseModel):
    """User as returned by the API (no password hash)."""
    id: Optional[str] = Field(None, serialization_alias="_id")
    name: str
    email: str
    role: Role
    active: bool = True

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls(id=user.id, name=user.name, email=user.email, role=user.role, active=user.active)


# Request Models
class UserCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: Role = Role.STAFF


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6)
    role: Optional[Role] = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserPublic


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)
