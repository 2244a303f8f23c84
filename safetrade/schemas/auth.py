from typing import Optional

from pydantic import EmailStr, Field

from safetrade.schemas.base import CamelModel


# ======================
# TOKEN SCHEMAS
# ======================

class Token(CamelModel):
    access_token: str
    token_type: str
    role: str


# ======================
# AUTHENTICATION SCHEMAS
# ======================

class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class RegisterRequest(CamelModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    # Bcrypt limit is 72 bytes
    password: str = Field(..., min_length=8, max_length=72)
    national_id: str
    phone: Optional[str] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
