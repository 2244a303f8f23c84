# safetrade/api/moderation.py
"""
Moderation API Router

Endpoints:
- GET   /moderation/incidents                         - All incidents, joined
- GET   /moderation/incidents/{status}                - Incidents by status
- POST  /moderation/report                            - File a report
- PATCH /moderation/incident/{id}/status              - Raw status override
- PATCH /moderation/incident/{id}/assign/{moderator}  - Assign a moderator
- PATCH /moderation/incident/{id}/appeal              - Appeal a suspension
- PATCH /moderation/incident/{id}/resolve             - Resolve current phase
- GET   /moderation/detect-dangerous                  - Sweep active products
- GET   /moderation/detect-dangerous/{product_id}     - Check one product
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from safetrade import models, schemas
from safetrade.database import get_db
from safetrade.models.incident import IncidentStatus
from safetrade.models.user import Role
from safetrade.services import detection_service, moderation_service
from safetrade.services.classifier import Classifier, get_classifier
from safetrade.utils.security import require_roles

router = APIRouter(prefix="/moderation", tags=["Moderation"])

staff_only = require_roles(Role.MODERATOR, Role.ADMIN)
any_role = require_roles(Role.MODERATOR, Role.CLIENT, Role.ADMIN)


@router.get("/incidents", response_model=List[schemas.IncidentDetail])
def find_all_incidents(
    staff: models.User = Depends(staff_only),
    db: Session = Depends(get_db),
):
    return moderation_service.find_all_incidents(db)


@router.get("/incidents/{incident_status}", response_model=List[schemas.IncidentWithProduct])
def find_by_status(
    incident_status: IncidentStatus,
    staff: models.User = Depends(staff_only),
    db: Session = Depends(get_db),
):
    return moderation_service.find_by_status(db, incident_status)


@router.post("/report", response_model=schemas.Incident, status_code=status.HTTP_201_CREATED)
def create_report(
    payload: schemas.ReportCreate,
    current_user: models.User = Depends(any_role),
    db: Session = Depends(get_db),
):
    return moderation_service.create_report(
        db,
        product_id=payload.product_id,
        type=payload.type,
        comment=payload.comment,
        reporter_id=payload.reporter_id or current_user.id,
    )


@router.patch("/incident/{incident_id}/status", response_model=schemas.Incident)
def change_incident_status(
    incident_id: int,
    payload: schemas.IncidentStatusUpdate,
    staff: models.User = Depends(staff_only),
    db: Session = Depends(get_db),
):
    return moderation_service.change_incident_status(db, incident_id, payload.status)


@router.patch("/incident/{incident_id}/assign/{moderator_id}", response_model=schemas.Incident)
def assign_moderator(
    incident_id: int,
    moderator_id: str,
    staff: models.User = Depends(staff_only),
    db: Session = Depends(get_db),
):
    return moderation_service.assign_moderator(db, incident_id, moderator_id)


@router.patch("/incident/{incident_id}/appeal", response_model=schemas.Incident)
def manage_appeal(
    incident_id: int,
    payload: schemas.AppealRequest,
    current_user: models.User = Depends(any_role),
    db: Session = Depends(get_db),
):
    return moderation_service.manage_appeal(
        db, incident_id, payload.reason, requester=current_user
    )


@router.patch("/incident/{incident_id}/resolve", response_model=schemas.Incident)
def resolve_incident(
    incident_id: int,
    payload: schemas.ResolveRequest,
    staff: models.User = Depends(staff_only),
    db: Session = Depends(get_db),
):
    return moderation_service.resolve_incident(
        db, incident_id, payload.final_status, moderator_id=staff.id
    )


@router.get("/detect-dangerous", response_model=List[schemas.Product])
def detect_dangerous_products(
    staff: models.User = Depends(staff_only),
    db: Session = Depends(get_db),
    classifier: Classifier = Depends(get_classifier),
):
    return detection_service.detect_dangerous_products(db, classifier)


@router.get("/detect-dangerous/{product_id}", response_model=schemas.DangerCheck)
def detect_dangerous_product(
    product_id: int,
    staff: models.User = Depends(staff_only),
    db: Session = Depends(get_db),
    classifier: Classifier = Depends(get_classifier),
):
    is_dangerous = detection_service.detect_dangerous_product_by_id(db, product_id, classifier)
    return schemas.DangerCheck(is_dangerous=is_dangerous)
