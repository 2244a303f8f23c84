from typing import List, Optional

from sqlalchemy.orm import Session

from safetrade import models


def get_user(db: Session, user_id: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == email).first()


def get_user_by_national_id(db: Session, national_id: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.national_id == national_id).first()


def list_users(
    db: Session,
    *,
    role: Optional[models.Role] = None,
    is_active: Optional[bool] = None,
) -> List[models.User]:
    query = db.query(models.User)
    if role is not None:
        query = query.filter(models.User.role == role.value)
    if is_active is not None:
        query = query.filter(models.User.is_active == is_active)
    return query.order_by(models.User.created_at.desc()).all()


def create_user(db: Session, **fields) -> models.User:
    user = models.User(**fields)
    db.add(user)
    db.flush()
    return user
