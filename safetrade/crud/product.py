# safetrade/crud/product.py
"""
Product CRUD Operations

Single-table primitives over products, images and likes. Functions flush
but never commit; the calling service owns the transaction.
"""

from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from safetrade.models.product import Like, Product, ProductImage, ProductStatus


def get_product(db: Session, product_id: int) -> Optional[Product]:
    return db.query(Product).filter(Product.id == product_id).first()


def get_products_by_status(db: Session, status: ProductStatus) -> List[Product]:
    return (
        db.query(Product)
        .options(selectinload(Product.images))
        .filter(Product.status == status)
        .order_by(Product.id.asc())
        .all()
    )


def get_products_by_user(db: Session, user_id: str) -> List[Product]:
    return (
        db.query(Product)
        .options(selectinload(Product.images), selectinload(Product.incidents))
        .filter(Product.user_id == user_id, Product.status != ProductStatus.DELETED)
        .order_by(Product.publish_date.desc(), Product.id.desc())
        .all()
    )


def create_product(db: Session, *, image_urls: List[str], **fields) -> Product:
    product = Product(**fields)
    product.images = [ProductImage(url=url) for url in image_urls]
    db.add(product)
    db.flush()
    return product


def change_status(db: Session, product_id: int, status: ProductStatus) -> Optional[Product]:
    """
    Set a product's status unconditionally.

    No prior-state validation happens here: which transitions are legal is
    decided by the callers (moderation service, product service).

    Returns:
        The updated Product, or None when the product does not exist.
    """
    product = get_product(db, product_id)
    if product is None:
        return None
    product.status = status
    db.flush()
    return product


def bulk_change_status(
    db: Session,
    *,
    user_id: str,
    from_status: ProductStatus,
    to_status: ProductStatus,
) -> int:
    updated = (
        db.query(Product)
        .filter(Product.user_id == user_id, Product.status == from_status)
        .update({"status": to_status}, synchronize_session=False)
    )
    db.flush()
    return int(updated)


def remove_images(db: Session, product_id: int, image_ids: List[int]) -> int:
    removed = (
        db.query(ProductImage)
        .filter(ProductImage.product_id == product_id, ProductImage.id.in_(image_ids))
        .delete(synchronize_session=False)
    )
    db.flush()
    return int(removed)


# ======================
# LIKES
# ======================

def get_like(db: Session, user_id: str, product_id: int) -> Optional[Like]:
    return db.query(Like).filter(Like.user_id == user_id, Like.product_id == product_id).first()


def count_likes(db: Session, product_id: int) -> int:
    return db.query(Like).filter(Like.product_id == product_id).count()


def add_like(db: Session, user_id: str, product_id: int) -> Like:
    like = Like(user_id=user_id, product_id=product_id)
    db.add(like)
    db.flush()
    return like


def delete_like(db: Session, like: Like) -> None:
    db.delete(like)
    db.flush()
