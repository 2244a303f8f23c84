import enum
import uuid

from sqlalchemy import Column, String, Boolean, Float, TIMESTAMP, func
from sqlalchemy.orm import relationship
from safetrade.database import Base


class Role(str, enum.Enum):
    CLIENT = "CLIENT"
    MODERATOR = "MODERATOR"
    ADMIN = "ADMIN"


def _new_user_id() -> str:
    return str(uuid.uuid4())


# ---------------- USER (AUTH TABLE) ----------------
class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_user_id)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    national_id = Column(String(20), unique=True, index=True, nullable=True)
    phone = Column(String(20))
    gender = Column(String(20))
    address = Column(String(500))
    latitude = Column(Float)
    longitude = Column(Float)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=Role.CLIENT.value)
    is_active = Column(Boolean, default=True, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, onupdate=func.now())

    products = relationship("Product", back_populates="user")
    likes = relationship("Like", back_populates="user", cascade="all, delete-orphan")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
