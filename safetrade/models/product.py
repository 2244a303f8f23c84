# safetrade/models/product.py
import enum

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Boolean,
    Float,
    ForeignKey,
    TIMESTAMP,
    Enum,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship
from safetrade.database import Base


class ProductStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    REPORTED = "REPORTED"
    SUSPENDED = "SUSPENDED"
    BANNED = "BANNED"
    DELETED = "DELETED"
    DEACTIVATED = "DEACTIVATED"


class ProductType(str, enum.Enum):
    PRODUCT = "PRODUCT"
    SERVICE = "SERVICE"


class Category(str, enum.Enum):
    ELECTRONICS = "ELECTRONICS"
    HOME = "HOME"
    FASHION = "FASHION"
    SPORTS = "SPORTS"
    AUTOMOTIVE = "AUTOMOTIVE"
    TOYS = "TOYS"
    BOOKS = "BOOKS"
    SERVICES = "SERVICES"
    OTHER = "OTHER"


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(40), unique=True, nullable=False)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    type = Column(Enum(ProductType), default=ProductType.PRODUCT, nullable=False)
    category = Column(Enum(Category), default=Category.OTHER, nullable=False)
    status = Column(Enum(ProductStatus), default=ProductStatus.ACTIVE, nullable=False, index=True)
    address = Column(String(500))
    latitude = Column(Float)
    longitude = Column(Float)
    address_type = Column(String(50))
    service_hours = Column(String(100))
    availability = Column(Boolean, default=True, nullable=False)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    publish_date = Column(TIMESTAMP, server_default=func.now())
    deleted_at = Column(TIMESTAMP, nullable=True)

    user = relationship("User", back_populates="products")
    images = relationship("ProductImage", back_populates="product", cascade="all, delete-orphan")
    likes = relationship("Like", back_populates="product", cascade="all, delete-orphan")
    # Incidents are retained for audit; they are never cascaded away.
    incidents = relationship("Incident", back_populates="product")


class ProductImage(Base):
    __tablename__ = "product_images"

    id = Column(Integer, primary_key=True, index=True)
    url = Column(String(1000), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)

    product = relationship("Product", back_populates="images")


class Like(Base):
    __tablename__ = "likes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(TIMESTAMP, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_likes_user_product"),
    )

    user = relationship("User", back_populates="likes")
    product = relationship("Product", back_populates="likes")
