# safetrade/models/incident.py
import enum

from sqlalchemy import Column, Integer, String, Text, ForeignKey, TIMESTAMP, Enum, func
from sqlalchemy.orm import relationship
from safetrade.database import Base

# Reporter id recorded on incidents raised by automatic detection.
SYSTEM_REPORTER_ID = "0"


class ReportType(str, enum.Enum):
    DANGEROUS = "DANGEROUS"
    FRAUD = "FRAUD"
    INAPPROPRIATE = "INAPPROPRIATE"
    OTHER = "OTHER"


class IncidentStatus(str, enum.Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    APPEALED = "APPEALED"


class IncidentPhase(str, enum.Enum):
    INITIAL = "INITIAL"
    APPEAL = "APPEAL"


class Incident(Base):
    __tablename__ = "incidents"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    type = Column(Enum(ReportType), nullable=False)
    comment = Column(Text, nullable=True)
    # Plain string: either a user id or SYSTEM_REPORTER_ID.
    reporter_id = Column(String(36), nullable=False, index=True)
    status = Column(Enum(IncidentStatus), default=IncidentStatus.PENDING, nullable=False, index=True)
    phase = Column(Enum(IncidentPhase), default=IncidentPhase.INITIAL, nullable=False)
    moderator_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    appeal_moderator_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    appeal_reason = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP, server_default=func.now(), nullable=False)
    updated_at = Column(TIMESTAMP, server_default=func.now(), nullable=False)

    product = relationship("Product", back_populates="incidents")
    moderator = relationship("User", foreign_keys=[moderator_id])
    appeal_moderator = relationship("User", foreign_keys=[appeal_moderator_id])
    reporter = relationship(
        "User",
        primaryjoin="foreign(Incident.reporter_id) == User.id",
        viewonly=True,
    )

    @property
    def is_automatic(self) -> bool:
        return self.reporter_id == SYSTEM_REPORTER_ID
