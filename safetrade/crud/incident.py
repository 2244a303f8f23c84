# safetrade/crud/incident.py
"""
Incident CRUD Operations

Persistence primitives for the moderation workflow. Writes that guard an
assignment or an appeal are single conditional UPDATE statements so two
concurrent requests cannot both win; callers inspect the affected-row count.
"""

from datetime import datetime, UTC
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from safetrade.models.incident import (
    Incident,
    IncidentPhase,
    IncidentStatus,
    ReportType,
)
from safetrade.models.product import Product


def _now() -> datetime:
    return datetime.now(UTC)


def get_incident(db: Session, incident_id: int) -> Optional[Incident]:
    return db.query(Incident).filter(Incident.id == incident_id).first()


def create_incident(
    db: Session,
    *,
    product_id: int,
    type: ReportType,
    comment: Optional[str],
    reporter_id: str,
) -> Incident:
    now = _now()
    incident = Incident(
        product_id=product_id,
        type=type,
        comment=comment,
        reporter_id=reporter_id,
        status=IncidentStatus.PENDING,
        phase=IncidentPhase.INITIAL,
        created_at=now,
        updated_at=now,
    )
    db.add(incident)
    db.flush()
    return incident


def set_status(
    db: Session,
    incident: Incident,
    status: IncidentStatus,
    *,
    phase: Optional[IncidentPhase] = None,
) -> Incident:
    incident.status = status
    if phase is not None:
        incident.phase = phase
    incident.updated_at = _now()
    db.flush()
    return incident


def claim_moderator(db: Session, incident_id: int, moderator_id: str) -> bool:
    """Set moderator_id only while the incident is PENDING and unassigned."""
    updated = (
        db.query(Incident)
        .filter(
            Incident.id == incident_id,
            Incident.status == IncidentStatus.PENDING,
            Incident.moderator_id.is_(None),
        )
        .update(
            {"moderator_id": moderator_id, "updated_at": _now()},
            synchronize_session=False,
        )
    )
    db.flush()
    return updated == 1


def claim_appeal_moderator(db: Session, incident_id: int, moderator_id: str) -> bool:
    """Set appeal_moderator_id only while the appeal is unassigned.

    The original moderator is excluded in the same statement.
    """
    updated = (
        db.query(Incident)
        .filter(
            Incident.id == incident_id,
            Incident.status == IncidentStatus.APPEALED,
            Incident.phase == IncidentPhase.APPEAL,
            Incident.appeal_moderator_id.is_(None),
            (Incident.moderator_id.is_(None)) | (Incident.moderator_id != moderator_id),
        )
        .update(
            {"appeal_moderator_id": moderator_id, "updated_at": _now()},
            synchronize_session=False,
        )
    )
    db.flush()
    return updated == 1


def open_appeal(db: Session, incident_id: int, reason: str) -> bool:
    """Record the appeal only if none was submitted before."""
    updated = (
        db.query(Incident)
        .filter(
            Incident.id == incident_id,
            Incident.appeal_reason.is_(None),
        )
        .update(
            {
                "status": IncidentStatus.APPEALED,
                "phase": IncidentPhase.APPEAL,
                "appeal_reason": reason,
                "updated_at": _now(),
            },
            synchronize_session=False,
        )
    )
    db.flush()
    return updated == 1


def get_incidents_by_status(db: Session, status: IncidentStatus) -> List[Incident]:
    return (
        db.query(Incident)
        .options(
            joinedload(Incident.product).selectinload(Product.images),
            joinedload(Incident.moderator),
        )
        .filter(Incident.status == status)
        .order_by(Incident.created_at.desc(), Incident.id.desc())
        .all()
    )


def get_all_incidents(db: Session) -> List[Incident]:
    return (
        db.query(Incident)
        .options(
            joinedload(Incident.product).selectinload(Product.images),
            joinedload(Incident.product).joinedload(Product.user),
            joinedload(Incident.moderator),
            joinedload(Incident.appeal_moderator),
            joinedload(Incident.reporter),
        )
        .order_by(Incident.created_at.desc(), Incident.id.desc())
        .all()
    )
