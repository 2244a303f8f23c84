from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from safetrade import models, schemas
from safetrade.database import get_db
from safetrade.models.user import Role
from safetrade.services import user_service
from safetrade.services.geocoding import Geocoder, get_geocoder
from safetrade.utils.security import get_current_user, require_roles

router = APIRouter(prefix="/users", tags=["Users"])

staff_only = require_roles(Role.ADMIN, Role.MODERATOR)
admin_only = require_roles(Role.ADMIN)


@router.post("/moderators", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
def create_moderator(
    payload: schemas.ModeratorCreate,
    staff: models.User = Depends(staff_only),
    db: Session = Depends(get_db),
    geocoder: Geocoder = Depends(get_geocoder),
):
    return user_service.create_moderator(db, payload, geocoder=geocoder)


@router.get("", response_model=List[schemas.User])
def list_users(
    role: Optional[Role] = Query(None),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    staff: models.User = Depends(staff_only),
    db: Session = Depends(get_db),
):
    return user_service.list_users(db, role=role, is_active=is_active)


@router.get("/{user_id}", response_model=schemas.User)
def get_user(
    user_id: str,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return user_service.get_user_or_404(db, user_id)


@router.patch("/{user_id}", response_model=schemas.User)
def update_user(
    user_id: str,
    payload: schemas.UserUpdate,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
    geocoder: Geocoder = Depends(get_geocoder),
):
    return user_service.update_user(
        db, user_id, payload, acting_user=current_user, geocoder=geocoder
    )


@router.patch("/{user_id}/status", response_model=schemas.User)
def set_active_status(
    user_id: str,
    payload: schemas.ActiveStatusUpdate,
    staff: models.User = Depends(staff_only),
    db: Session = Depends(get_db),
):
    return user_service.set_active_status(db, user_id, payload.is_active)


@router.patch("/{user_id}/role", response_model=schemas.User)
def set_role(
    user_id: str,
    payload: schemas.RoleUpdate,
    admin: models.User = Depends(admin_only),
    db: Session = Depends(get_db),
):
    return user_service.set_role(db, user_id, payload.role)
