from datetime import datetime
from typing import List, Optional

from pydantic import Field

from safetrade.models.incident import IncidentStatus
from safetrade.models.product import Category, ProductStatus, ProductType
from safetrade.schemas.base import CamelModel


class ProductImage(CamelModel):
    id: int
    url: str


class IncidentBrief(CamelModel):
    id: int
    comment: Optional[str] = None
    status: IncidentStatus


class ProductCreate(CamelModel):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: float = Field(..., ge=0, le=1_000_000)
    images: List[str] = Field(default_factory=list)
    type: ProductType = ProductType.PRODUCT
    category: Category = Category.OTHER
    address: Optional[str] = None
    address_type: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    service_hours: Optional[str] = None
    availability: bool = True


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0, le=1_000_000)
    images: Optional[List[str]] = None
    images_to_remove: Optional[List[int]] = None
    type: Optional[ProductType] = None
    category: Optional[Category] = None
    address: Optional[str] = None
    address_type: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    service_hours: Optional[str] = None
    availability: Optional[bool] = None


class ProductStatusUpdate(CamelModel):
    status: ProductStatus


class Product(CamelModel):
    id: int
    code: str
    name: str
    description: str
    price: float
    type: ProductType
    category: Category
    status: ProductStatus
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address_type: Optional[str] = None
    service_hours: Optional[str] = None
    availability: bool
    user_id: str
    publish_date: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    images: List[ProductImage] = Field(default_factory=list)


class ProductWithLikes(Product):
    likes_count: int = 0
    has_liked: bool = False


class ProductWithIncidents(Product):
    incidents: List[IncidentBrief] = Field(default_factory=list)


class LikeToggleResponse(CamelModel):
    message: str
    liked: bool
