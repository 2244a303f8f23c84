from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from safetrade.models.user import Role
from safetrade.schemas.base import CamelModel


class UserSummary(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: str


class User(UserSummary):
    national_id: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    role: Role
    is_active: bool
    is_verified: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ModeratorCreate(CamelModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    national_id: str
    phone: Optional[str] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class UserUpdate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class ActiveStatusUpdate(CamelModel):
    is_active: bool


class RoleUpdate(CamelModel):
    role: Role
