"""
User Service Layer

Registration, moderator onboarding and account administration. Account
deactivation cascades to the user's listings: ACTIVE products become
DEACTIVATED and only those come back on reactivation.
"""

from __future__ import annotations

import logging
import secrets
import string
from typing import List, Optional

from sqlalchemy.orm import Session

from safetrade import models, schemas
from safetrade.crud import product as product_crud
from safetrade.crud import user as user_crud
from safetrade.models.product import ProductStatus
from safetrade.models.user import Role
from safetrade.services import notification_service
from safetrade.services.errors import (
    DuplicateError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)
from safetrade.services.geocoding import Geocoder, resolve_location
from safetrade.utils.national_id import is_valid_ecuadorian_id
from safetrade.utils.security import get_password_hash

logger = logging.getLogger(__name__)

TEMP_PASSWORD_LENGTH = 10
DEACTIVATION_REASON = "Your account was disabled by an administrator."


def _generate_temporary_password() -> str:
    alphabet = string.ascii_letters + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(TEMP_PASSWORD_LENGTH))


def _check_identity_available(db: Session, email: str, national_id: str) -> None:
    if user_crud.get_user_by_email(db, email):
        raise DuplicateError("Email already in use")
    if not is_valid_ecuadorian_id(national_id):
        raise InvalidStateError("Invalid Ecuadorian national ID (cedula)")
    if user_crud.get_user_by_national_id(db, national_id):
        raise DuplicateError("National ID already registered")


def get_user_or_404(db: Session, user_id: str) -> models.User:
    user = user_crud.get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def register_client(
    db: Session,
    payload: schemas.RegisterRequest,
    *,
    geocoder: Optional[Geocoder] = None,
) -> models.User:
    email = payload.email.strip().lower()
    _check_identity_available(db, email, payload.national_id)

    address, latitude, longitude, _ = resolve_location(
        geocoder,
        address=payload.address,
        latitude=payload.latitude,
        longitude=payload.longitude,
    )

    try:
        user = user_crud.create_user(
            db,
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=email,
            national_id=payload.national_id,
            phone=payload.phone,
            gender=payload.gender,
            address=address,
            latitude=latitude,
            longitude=longitude,
            password_hash=get_password_hash(payload.password),
            role=Role.CLIENT.value,
            is_active=True,
            is_verified=True,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(user)
    logger.info("Client %s registered", user.id)
    return user


def create_moderator(
    db: Session,
    payload: schemas.ModeratorCreate,
    *,
    geocoder: Optional[Geocoder] = None,
) -> models.User:
    email = payload.email.strip().lower()
    _check_identity_available(db, email, payload.national_id)

    address, latitude, longitude, _ = resolve_location(
        geocoder,
        address=payload.address,
        latitude=payload.latitude,
        longitude=payload.longitude,
    )
    temporary_password = _generate_temporary_password()

    try:
        user = user_crud.create_user(
            db,
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=email,
            national_id=payload.national_id,
            phone=payload.phone,
            gender=payload.gender,
            address=address,
            latitude=latitude,
            longitude=longitude,
            password_hash=get_password_hash(temporary_password),
            role=Role.MODERATOR.value,
            is_active=True,
            is_verified=True,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(user)
    logger.info("Moderator %s created", user.id)

    notification_service.send_welcome_email(user, temporary_password)
    return user


def list_users(
    db: Session,
    *,
    role: Optional[Role] = None,
    is_active: Optional[bool] = None,
) -> List[models.User]:
    return user_crud.list_users(db, role=role, is_active=is_active)


def update_user(
    db: Session,
    user_id: str,
    payload: schemas.UserUpdate,
    *,
    acting_user: models.User,
    geocoder: Optional[Geocoder] = None,
) -> models.User:
    if acting_user.id != user_id and (acting_user.role or "").upper() != Role.ADMIN.value:
        raise ForbiddenError("You can only update your own profile")

    user = get_user_or_404(db, user_id)
    data = payload.model_dump(exclude_unset=True, exclude={"address", "latitude", "longitude"})

    if payload.latitude is not None and payload.longitude is not None:
        data.update(latitude=payload.latitude, longitude=payload.longitude)
        if payload.address:
            data["address"] = payload.address
    elif payload.address and payload.address != user.address:
        address, latitude, longitude, _ = resolve_location(
            geocoder, address=payload.address, latitude=None, longitude=None
        )
        data["address"] = address
        if latitude is not None:
            data.update(latitude=latitude, longitude=longitude)

    for key, value in data.items():
        setattr(user, key, value)
    db.commit()
    db.refresh(user)
    return user


def set_active_status(db: Session, user_id: str, is_active: bool) -> models.User:
    user = get_user_or_404(db, user_id)

    user.is_active = is_active
    if is_active:
        moved = product_crud.bulk_change_status(
            db,
            user_id=user_id,
            from_status=ProductStatus.DEACTIVATED,
            to_status=ProductStatus.ACTIVE,
        )
    else:
        moved = product_crud.bulk_change_status(
            db,
            user_id=user_id,
            from_status=ProductStatus.ACTIVE,
            to_status=ProductStatus.DEACTIVATED,
        )
    db.commit()
    db.refresh(user)
    logger.info(
        "User %s %s; %d product(s) updated",
        user_id, "reactivated" if is_active else "deactivated", moved,
    )

    notification_service.send_account_status_email(
        user,
        is_active=is_active,
        reason=None if is_active else DEACTIVATION_REASON,
    )
    return user


def set_role(db: Session, user_id: str, role: Role) -> models.User:
    user = get_user_or_404(db, user_id)
    if role == Role.ADMIN:
        raise InvalidStateError("Cannot assign ADMIN role here")
    user.role = role.value
    db.commit()
    db.refresh(user)
    logger.info("User %s role set to %s", user_id, role.value)
    return user
