# safetrade/services/product_service.py
"""
Product Service Layer

Listing lifecycle for owners (create, update, soft delete, likes) and the
caller side of automatic detection: after every create/update the listing is
classified and, when dangerous, explicitly moved to REPORTED.
"""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, UTC
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from safetrade import models, schemas
from safetrade.crud import product as product_crud
from safetrade.models.product import Product, ProductStatus
from safetrade.services import detection_service
from safetrade.services.classifier import Classifier
from safetrade.services.errors import ForbiddenError, InvalidStateError, NotFoundError
from safetrade.services.geocoding import Geocoder, resolve_location

logger = logging.getLogger(__name__)

NON_EDITABLE_STATUSES = (ProductStatus.REPORTED, ProductStatus.DELETED)
NON_DELETABLE_STATUSES = (ProductStatus.REPORTED, ProductStatus.SUSPENDED)


def _generate_code() -> str:
    return f"PRD_{int(time.time() * 1000)}_{uuid.uuid4().hex[:6]}"


def _get_product_or_404(db: Session, product_id: int) -> Product:
    product = product_crud.get_product(db, product_id)
    if product is None:
        raise NotFoundError("Product not found")
    return product


def _ensure_owner(product: Product, user_id: str) -> None:
    if product.user_id != user_id:
        raise ForbiddenError("You cannot modify a product you do not own")


def _screen(db: Session, product: Product, classifier: Classifier) -> Product:
    """Run detection and apply the REPORTED status on a positive verdict."""
    if detection_service.detect_dangerous_product_by_id(db, product.id, classifier):
        product_crud.change_status(db, product.id, ProductStatus.REPORTED)
        db.commit()
        db.refresh(product)
        logger.warning("Product %s moved to REPORTED by automatic detection", product.id)
    return product


def with_likes(db: Session, product: Product, user_id: Optional[str]) -> schemas.ProductWithLikes:
    liked = bool(user_id) and product_crud.get_like(db, user_id, product.id) is not None
    return schemas.ProductWithLikes.model_validate(product).model_copy(
        update={
            "likes_count": product_crud.count_likes(db, product.id),
            "has_liked": liked,
        }
    )


# ======================
# CREATE / UPDATE / DELETE
# ======================

def create_product(
    db: Session,
    payload: schemas.ProductCreate,
    user_id: str,
    *,
    classifier: Classifier,
    geocoder: Optional[Geocoder] = None,
) -> Product:
    address, latitude, longitude, address_type = resolve_location(
        geocoder,
        address=payload.address,
        latitude=payload.latitude,
        longitude=payload.longitude,
        address_type=payload.address_type,
    )

    try:
        product = product_crud.create_product(
            db,
            image_urls=payload.images,
            code=_generate_code(),
            name=payload.name,
            description=payload.description,
            price=payload.price,
            type=payload.type,
            category=payload.category,
            status=ProductStatus.ACTIVE,
            address=address,
            latitude=latitude,
            longitude=longitude,
            address_type=address_type,
            service_hours=payload.service_hours,
            availability=payload.availability,
            user_id=user_id,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(product)
    logger.info("Product %s created by user %s", product.id, user_id)

    return _screen(db, product, classifier)


def update_product(
    db: Session,
    product_id: int,
    payload: schemas.ProductUpdate,
    user_id: str,
    *,
    classifier: Classifier,
    geocoder: Optional[Geocoder] = None,
) -> Product:
    product = _get_product_or_404(db, product_id)
    _ensure_owner(product, user_id)

    if product.status in NON_EDITABLE_STATUSES:
        raise InvalidStateError(f"Cannot update a product with status {product.status.value}")

    data: Dict[str, Any] = payload.model_dump(
        exclude_unset=True,
        exclude={"images", "images_to_remove", "address", "latitude", "longitude", "address_type"},
    )

    if payload.latitude is not None and payload.longitude is not None:
        data.update(
            address=payload.address,
            latitude=payload.latitude,
            longitude=payload.longitude,
        )
        if payload.address_type:
            data["address_type"] = payload.address_type
    elif payload.address and payload.address != product.address:
        address, latitude, longitude, address_type = resolve_location(
            geocoder,
            address=payload.address,
            latitude=None,
            longitude=None,
            address_type=payload.address_type,
        )
        data.update(address=address)
        if latitude is not None:
            data.update(latitude=latitude, longitude=longitude, address_type=address_type)

    try:
        if payload.images_to_remove:
            product_crud.remove_images(db, product_id, payload.images_to_remove)
            db.expire(product, ["images"])
        for url in payload.images or []:
            product.images.append(models.ProductImage(url=url))
        for key, value in data.items():
            setattr(product, key, value)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(product)
    logger.info("Product %s updated by owner %s", product_id, user_id)

    return _screen(db, product, classifier)


def remove_product(db: Session, product_id: int, user_id: str) -> Product:
    """Soft delete: status DELETED plus deletion timestamp."""
    product = _get_product_or_404(db, product_id)
    _ensure_owner(product, user_id)

    if product.status in NON_DELETABLE_STATUSES:
        raise InvalidStateError(f"Cannot delete a product with status {product.status.value}")

    product.status = ProductStatus.DELETED
    product.deleted_at = datetime.now(UTC)
    db.commit()
    db.refresh(product)
    logger.info("Product %s soft-deleted", product_id)
    return product


def change_status(db: Session, product_id: int, status: ProductStatus) -> Product:
    product = product_crud.change_status(db, product_id, status)
    if product is None:
        raise NotFoundError("Product not found")
    db.commit()
    db.refresh(product)
    return product


# ======================
# READS
# ======================

def list_active(db: Session, user_id: Optional[str] = None) -> List[schemas.ProductWithLikes]:
    products = product_crud.get_products_by_status(db, ProductStatus.ACTIVE)
    return [with_likes(db, p, user_id) for p in products]


def get_product(db: Session, product_id: int, user_id: Optional[str] = None) -> schemas.ProductWithLikes:
    return with_likes(db, _get_product_or_404(db, product_id), user_id)


def list_by_user(db: Session, user_id: str) -> List[Product]:
    return product_crud.get_products_by_user(db, user_id)


def list_by_status(db: Session, status: ProductStatus) -> List[Product]:
    return product_crud.get_products_by_status(db, status)


# ======================
# LIKES
# ======================

def toggle_like(db: Session, product_id: int, user_id: str) -> Dict[str, Any]:
    product = _get_product_or_404(db, product_id)
    if product.status != ProductStatus.ACTIVE:
        raise InvalidStateError("Cannot like a non-active product")

    existing = product_crud.get_like(db, user_id, product_id)
    if existing:
        product_crud.delete_like(db, existing)
        db.commit()
        return {"message": "Like removed", "liked": False}

    product_crud.add_like(db, user_id, product_id)
    db.commit()
    return {"message": "Like added", "liked": True}


def likes_count(db: Session, product_id: int) -> int:
    _get_product_or_404(db, product_id)
    return product_crud.count_likes(db, product_id)
