"""
Automatic detection of dangerous listings.

Detection only records a system incident (reporter "0", type DANGEROUS).
It does not touch the product's status: callers that act on a positive
verdict set REPORTED themselves via ``product_crud.change_status``.
Incident persistence here is best effort; failures are logged and the
verdict is still returned.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from safetrade.crud import incident as incident_crud
from safetrade.crud import product as product_crud
from safetrade.models.incident import Incident, ReportType, SYSTEM_REPORTER_ID
from safetrade.models.product import Product, ProductStatus
from safetrade.services.classifier import Classifier
from safetrade.services.errors import NotFoundError

logger = logging.getLogger(__name__)

AUTOMATIC_DETECTION_COMMENT = "Detected automatically as dangerous/offensive"


def _record_system_incident(db: Session, product: Product) -> Optional[Incident]:
    try:
        incident = incident_crud.create_incident(
            db,
            product_id=product.id,
            type=ReportType.DANGEROUS,
            comment=AUTOMATIC_DETECTION_COMMENT,
            reporter_id=SYSTEM_REPORTER_ID,
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating incident for product %s", product.id)
        return None
    logger.warning(
        "Product %s flagged as dangerous; system incident %s created",
        product.id, incident.id,
    )
    return incident


def detect_dangerous_product_by_id(db: Session, product_id: int, classifier: Classifier) -> bool:
    product = product_crud.get_product(db, product_id)
    if product is None:
        raise NotFoundError("Product not found")

    if not classifier.is_dangerous(product.name, product.description):
        return False

    _record_system_incident(db, product)
    return True


def detect_dangerous_products(db: Session, classifier: Classifier) -> List[Product]:
    """Sweep every ACTIVE product; returns the dangerous ones."""
    products = product_crud.get_products_by_status(db, ProductStatus.ACTIVE)
    dangerous: List[Product] = []

    for product in products:
        if classifier.is_dangerous(product.name, product.description):
            dangerous.append(product)
            _record_system_incident(db, product)

    logger.info("Dangerous-product sweep: %d of %d active products flagged", len(dangerous), len(products))
    return dangerous
