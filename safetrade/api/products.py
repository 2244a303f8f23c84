# safetrade/api/products.py
"""
Products API Router

Owner endpoints (create, update, delete, like) for every role, plus the
status endpoints moderators use. Fixed paths are declared before
``/{product_id}`` so they are not swallowed by it.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from safetrade import models, schemas
from safetrade.database import get_db
from safetrade.models.product import ProductStatus
from safetrade.models.user import Role
from safetrade.services import product_service
from safetrade.services.classifier import Classifier, get_classifier
from safetrade.services.geocoding import Geocoder, get_geocoder
from safetrade.utils.security import require_roles

router = APIRouter(prefix="/products", tags=["Products"])

any_role = require_roles(Role.CLIENT, Role.MODERATOR, Role.ADMIN)
staff_only = require_roles(Role.MODERATOR, Role.ADMIN)


@router.post("", response_model=schemas.Product, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: schemas.ProductCreate,
    current_user: models.User = Depends(any_role),
    db: Session = Depends(get_db),
    classifier: Classifier = Depends(get_classifier),
    geocoder: Geocoder = Depends(get_geocoder),
):
    return product_service.create_product(
        db, payload, current_user.id, classifier=classifier, geocoder=geocoder
    )


@router.get("", response_model=List[schemas.ProductWithLikes])
def list_products(
    current_user: models.User = Depends(any_role),
    db: Session = Depends(get_db),
):
    return product_service.list_active(db, current_user.id)


@router.get("/user/{user_id}", response_model=List[schemas.ProductWithIncidents])
def list_products_by_user(
    user_id: str,
    current_user: models.User = Depends(any_role),
    db: Session = Depends(get_db),
):
    return product_service.list_by_user(db, user_id)


@router.get("/status/{product_status}", response_model=List[schemas.Product])
def list_products_by_status(
    product_status: ProductStatus,
    staff: models.User = Depends(staff_only),
    db: Session = Depends(get_db),
):
    return product_service.list_by_status(db, product_status)


@router.get("/{product_id}", response_model=schemas.ProductWithLikes)
def get_product(
    product_id: int,
    current_user: models.User = Depends(any_role),
    db: Session = Depends(get_db),
):
    return product_service.get_product(db, product_id, current_user.id)


@router.patch("/{product_id}", response_model=schemas.Product)
def update_product(
    product_id: int,
    payload: schemas.ProductUpdate,
    current_user: models.User = Depends(any_role),
    db: Session = Depends(get_db),
    classifier: Classifier = Depends(get_classifier),
    geocoder: Geocoder = Depends(get_geocoder),
):
    return product_service.update_product(
        db, product_id, payload, current_user.id, classifier=classifier, geocoder=geocoder
    )


@router.delete("/{product_id}", response_model=schemas.Product)
def remove_product(
    product_id: int,
    current_user: models.User = Depends(any_role),
    db: Session = Depends(get_db),
):
    return product_service.remove_product(db, product_id, current_user.id)


@router.patch("/{product_id}/status", response_model=schemas.Product)
def change_product_status(
    product_id: int,
    payload: schemas.ProductStatusUpdate,
    staff: models.User = Depends(staff_only),
    db: Session = Depends(get_db),
):
    return product_service.change_status(db, product_id, payload.status)


@router.post("/{product_id}/like", response_model=schemas.LikeToggleResponse)
def toggle_like(
    product_id: int,
    current_user: models.User = Depends(any_role),
    db: Session = Depends(get_db),
):
    return product_service.toggle_like(db, product_id, current_user.id)


@router.get("/{product_id}/likes-count", response_model=int)
def likes_count(
    product_id: int,
    current_user: models.User = Depends(any_role),
    db: Session = Depends(get_db),
):
    return product_service.likes_count(db, product_id)
