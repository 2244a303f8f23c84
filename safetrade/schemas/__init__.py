# safetrade/schemas/__init__.py

# Auth schemas
from .auth import Token, LoginRequest, RegisterRequest

# User schemas
from .user import (
    User,
    UserSummary,
    ModeratorCreate,
    UserUpdate,
    ActiveStatusUpdate,
    RoleUpdate,
)

# Product schemas
from .product import (
    Product,
    ProductCreate,
    ProductUpdate,
    ProductStatusUpdate,
    ProductWithLikes,
    ProductWithIncidents,
    LikeToggleResponse,
)

# Moderation schemas
from .moderation import (
    ReportCreate,
    IncidentStatusUpdate,
    AppealRequest,
    ResolveRequest,
    Incident,
    IncidentWithProduct,
    IncidentDetail,
    DangerCheck,
)

__all__ = [
    "Token",
    "LoginRequest",
    "RegisterRequest",
    "User",
    "UserSummary",
    "ModeratorCreate",
    "UserUpdate",
    "ActiveStatusUpdate",
    "RoleUpdate",
    "Product",
    "ProductCreate",
    "ProductUpdate",
    "ProductStatusUpdate",
    "ProductWithLikes",
    "ProductWithIncidents",
    "LikeToggleResponse",
    "ReportCreate",
    "IncidentStatusUpdate",
    "AppealRequest",
    "ResolveRequest",
    "Incident",
    "IncidentWithProduct",
    "IncidentDetail",
    "DangerCheck",
]
