# safetrade/services/moderation_service.py
"""
Moderation Engine

Incident lifecycle:

    PENDING --resolve--> ACCEPTED | REJECTED          (phase INITIAL)
    ACCEPTED --appeal--> APPEALED                      (phase becomes APPEAL)
    APPEALED --resolve--> ACCEPTED | REJECTED          (phase APPEAL)

Product status follows the resolution:

    INITIAL + ACCEPTED -> SUSPENDED   (owner may still appeal)
    APPEAL  + ACCEPTED -> BANNED      (final)
    any     + REJECTED -> ACTIVE

Every precondition is checked before the first write. Writes that guard an
assignment are conditional UPDATEs, so a lost race surfaces as the same
"already assigned" error a sequential caller would see.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from safetrade import models
from safetrade.crud import incident as incident_crud
from safetrade.crud import product as product_crud
from safetrade.crud import user as user_crud
from safetrade.models.incident import Incident, IncidentPhase, IncidentStatus, ReportType
from safetrade.models.product import ProductStatus
from safetrade.services import notification_service
from safetrade.services.errors import (
    ForbiddenError,
    InternalFailureError,
    InvalidAppealError,
    InvalidAssignmentError,
    InvalidResolutionError,
    InvalidStateError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

FINAL_STATUSES = (IncidentStatus.ACCEPTED, IncidentStatus.REJECTED)


def product_status_for_resolution(
    phase: IncidentPhase,
    final_status: IncidentStatus,
) -> ProductStatus:
    """Map a (phase, verdict) pair to the product status it produces."""
    if final_status == IncidentStatus.REJECTED:
        return ProductStatus.ACTIVE
    if final_status == IncidentStatus.ACCEPTED:
        if phase == IncidentPhase.INITIAL:
            return ProductStatus.SUSPENDED
        if phase == IncidentPhase.APPEAL:
            return ProductStatus.BANNED
    raise InvalidResolutionError("Final status must be ACCEPTED or REJECTED")


def _get_incident_or_404(db: Session, incident_id: int) -> Incident:
    incident = incident_crud.get_incident(db, incident_id)
    if incident is None:
        raise NotFoundError("Incident not found")
    return incident


# ======================
# REPORTS
# ======================

def create_report(
    db: Session,
    *,
    product_id: int,
    type: ReportType,
    comment: Optional[str],
    reporter_id: str,
) -> Incident:
    """
    File a manual report: new PENDING incident and product -> REPORTED.

    Both writes share one transaction. If the product status cannot be
    changed nothing is persisted and InternalFailureError is raised.
    """
    try:
        incident = incident_crud.create_incident(
            db,
            product_id=product_id,
            type=type,
            comment=comment,
            reporter_id=reporter_id,
        )
        product = product_crud.change_status(db, product_id, ProductStatus.REPORTED)
        if product is None:
            raise InternalFailureError("Failed to change product status")
        db.commit()
    except InternalFailureError:
        db.rollback()
        logger.error("Report on product %s aborted: product status not changed", product_id)
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Report on product %s failed", product_id)
        raise InternalFailureError("Failed to create report") from exc

    db.refresh(incident)
    logger.info(
        "Incident %s created for product %s (type=%s, reporter=%s)",
        incident.id, product_id, type.value, reporter_id,
    )
    return incident


def change_incident_status(db: Session, incident_id: int, status: IncidentStatus) -> Incident:
    """
    Administrative override of an incident's status; product untouched.

    The phase follows the status: APPEALED always means the appeal phase, and
    an incident may only go back to PENDING while no appeal was filed or
    assigned, which returns it to the initial phase.
    """
    incident = _get_incident_or_404(db, incident_id)

    if status == IncidentStatus.APPEALED:
        phase = IncidentPhase.APPEAL
    elif status == IncidentStatus.PENDING:
        if incident.appeal_reason is not None or incident.appeal_moderator_id is not None:
            raise InvalidStateError("Cannot reopen an appealed incident as PENDING")
        phase = IncidentPhase.INITIAL
    else:
        phase = incident.phase

    incident_crud.set_status(db, incident, status, phase=phase)
    db.commit()
    db.refresh(incident)
    logger.info(
        "Incident %s status overridden to %s (phase=%s)",
        incident_id, status.value, phase.value,
    )
    return incident


# ======================
# ASSIGNMENT
# ======================

def assign_moderator(db: Session, incident_id: int, moderator_id: str) -> Incident:
    """
    Assign a moderator to the phase the incident is currently in.

    PENDING  -> fills moderator_id (once).
    APPEALED -> fills appeal_moderator_id (once), never the original moderator.
    """
    incident = _get_incident_or_404(db, incident_id)

    if user_crud.get_user(db, moderator_id) is None:
        raise InvalidAssignmentError("Moderator not found")

    if incident.status == IncidentStatus.APPEALED:
        if incident.phase != IncidentPhase.APPEAL:
            raise InvalidAssignmentError("Incident not in a valid state for assignment")
        if incident.moderator_id == moderator_id:
            raise InvalidAssignmentError("Original moderator cannot handle the appeal")
        if incident.appeal_moderator_id:
            raise InvalidAssignmentError("Appeal already assigned to a moderator")
        claimed = incident_crud.claim_appeal_moderator(db, incident_id, moderator_id)
        if not claimed:
            db.rollback()
            raise InvalidAssignmentError("Appeal already assigned to a moderator")
    elif incident.status == IncidentStatus.PENDING:
        if incident.moderator_id:
            raise InvalidAssignmentError("Incident already assigned to a moderator")
        claimed = incident_crud.claim_moderator(db, incident_id, moderator_id)
        if not claimed:
            db.rollback()
            raise InvalidAssignmentError("Incident already assigned to a moderator")
    else:
        raise InvalidAssignmentError("Incident not in a valid state for assignment")

    db.commit()
    db.refresh(incident)
    logger.info(
        "Moderator %s assigned to incident %s (phase=%s)",
        moderator_id, incident_id, incident.phase.value,
    )
    return incident


# ======================
# RESOLUTION
# ======================

def resolve_incident(
    db: Session,
    incident_id: int,
    final_status: IncidentStatus,
    moderator_id: Optional[str] = None,
) -> Incident:
    """
    Record a verdict for the incident's current phase and update the product.

    The resolving moderator fills the phase's assignment slot when it is
    still empty; an existing assignment is never overwritten. In the appeal
    phase the original moderator may not resolve.
    """
    incident = _get_incident_or_404(db, incident_id)

    if final_status not in FINAL_STATUSES:
        raise InvalidResolutionError("Final status must be ACCEPTED or REJECTED")

    phase = incident.phase
    if phase == IncidentPhase.APPEAL and moderator_id and moderator_id == incident.moderator_id:
        raise InvalidAssignmentError("Original moderator cannot handle the appeal")

    new_product_status = product_status_for_resolution(phase, final_status)

    if moderator_id:
        if phase == IncidentPhase.INITIAL and incident.moderator_id is None:
            incident.moderator_id = moderator_id
        elif phase == IncidentPhase.APPEAL and incident.appeal_moderator_id is None:
            incident.appeal_moderator_id = moderator_id

    if incident.product_id is not None:
        product = product_crud.change_status(db, incident.product_id, new_product_status)
        if product is None:
            logger.warning(
                "Incident %s resolved but product %s no longer exists",
                incident_id, incident.product_id,
            )

    incident_crud.set_status(db, incident, final_status)
    db.commit()
    db.refresh(incident)

    logger.info(
        "Incident %s resolved as %s in %s phase; product %s -> %s",
        incident_id, final_status.value, phase.value,
        incident.product_id, new_product_status.value,
    )
    notification_service.notify_incident_resolved(db, incident)
    return incident


# ======================
# APPEALS
# ======================

def manage_appeal(
    db: Session,
    incident_id: int,
    reason: str,
    requester: Optional[models.User] = None,
) -> Incident:
    """
    Open the one-time appeal on an accepted incident.

    Requires the product to be SUSPENDED and no appeal on record. Clients may
    only appeal incidents on their own products. The appeal moderator is
    assigned separately.
    """
    incident = _get_incident_or_404(db, incident_id)
    product = product_crud.get_product(db, incident.product_id)
    if product is None:
        raise NotFoundError("Product not found")

    if (
        requester is not None
        and (requester.role or "").upper() == models.Role.CLIENT.value
        and product.user_id != requester.id
    ):
        raise ForbiddenError("Only the product owner can appeal this incident")

    if product.status != ProductStatus.SUSPENDED:
        raise InvalidAppealError("Cannot appeal: Product is not suspended")
    if incident.appeal_reason:
        raise InvalidAppealError("Appeal already submitted")
    if incident.status != IncidentStatus.ACCEPTED:
        raise InvalidAppealError(
            f"Cannot appeal an incident with status {incident.status.value}"
        )

    if not incident_crud.open_appeal(db, incident_id, reason):
        db.rollback()
        raise InvalidAppealError("Appeal already submitted")

    db.commit()
    db.refresh(incident)
    logger.info("Appeal opened on incident %s (product %s)", incident_id, product.id)
    return incident


# ======================
# QUERIES
# ======================

def find_by_status(db: Session, status: IncidentStatus) -> List[Incident]:
    return incident_crud.get_incidents_by_status(db, status)


def find_all_incidents(db: Session) -> List[Incident]:
    return incident_crud.get_all_incidents(db)
