from datetime import datetime
from typing import Optional

from pydantic import Field

from safetrade.models.incident import IncidentPhase, IncidentStatus, ReportType
from safetrade.schemas.base import CamelModel
from safetrade.schemas.product import Product
from safetrade.schemas.user import UserSummary


class ReportCreate(CamelModel):
    product_id: int
    type: ReportType
    comment: Optional[str] = None
    # Defaults to the authenticated caller when omitted.
    reporter_id: Optional[str] = None


class IncidentStatusUpdate(CamelModel):
    status: IncidentStatus


class AppealRequest(CamelModel):
    reason: str = Field(..., min_length=1, max_length=2000)


class ResolveRequest(CamelModel):
    final_status: IncidentStatus


class Incident(CamelModel):
    id: int
    product_id: int
    type: ReportType
    comment: Optional[str] = None
    reporter_id: str
    status: IncidentStatus
    phase: IncidentPhase
    moderator_id: Optional[str] = None
    appeal_moderator_id: Optional[str] = None
    appeal_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductWithOwner(Product):
    user: Optional[UserSummary] = None


class IncidentWithProduct(Incident):
    product: Optional[Product] = None
    moderator: Optional[UserSummary] = None


class IncidentDetail(Incident):
    product: Optional[ProductWithOwner] = None
    moderator: Optional[UserSummary] = None
    appeal_moderator: Optional[UserSummary] = None
    reporter: Optional[UserSummary] = None


class DangerCheck(CamelModel):
    is_dangerous: bool


