# safetrade/models/__init__.py
# Import models in dependency order
from .user import User, Role
from .product import Product, ProductImage, Like, ProductStatus, ProductType, Category
from .incident import Incident, IncidentStatus, IncidentPhase, ReportType, SYSTEM_REPORTER_ID

__all__ = [
    "User",
    "Role",
    "Product",
    "ProductImage",
    "Like",
    "ProductStatus",
    "ProductType",
    "Category",
    "Incident",
    "IncidentStatus",
    "IncidentPhase",
    "ReportType",
    "SYSTEM_REPORTER_ID",
]
