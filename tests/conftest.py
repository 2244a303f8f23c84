"""Pytest bootstrap for project imports and shared fixtures."""

from pathlib import Path
import os
import sys

# Ensure project root is on sys.path so `import safetrade` works
PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

# Keep safetrade.main from creating a database file during collection
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("EMAIL_NOTIFICATIONS_ENABLED", "false")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from safetrade.config import DEFAULT_BANNED_WORDS, DEFAULT_PROFANITY_WORDS
from safetrade.database import Base
from safetrade.models.product import Product, ProductStatus
from safetrade.models.user import Role, User
from safetrade.services.classifier import Classifier


# Valid Ecuadorian cedulas for fixtures
CEDULAS = ["1710034065", "0102030400", "1712345675", "0912345675"]


# ======================
# TEST DATABASE SETUP
# ======================

@pytest.fixture
def db_session():
    """In-memory database shared by every connection of the test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()

    yield session

    session.close()
    engine.dispose()


@pytest.fixture
def make_user(db_session):
    def _make_user(email: str, role: Role = Role.CLIENT, **fields) -> User:
        local = email.split("@")[0]
        user = User(
            first_name=fields.pop("first_name", local.title()),
            last_name=fields.pop("last_name", "Tester"),
            email=email,
            password_hash=fields.pop("password_hash", "hash"),
            role=role.value,
            is_active=fields.pop("is_active", True),
            is_verified=True,
            **fields,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def setup_users(make_user):
    """Owner, a second client, two moderators and an admin"""
    return {
        "owner": make_user("owner@test.com"),
        "client": make_user("client@test.com"),
        "m1": make_user("m1@test.com", Role.MODERATOR),
        "m2": make_user("m2@test.com", Role.MODERATOR),
        "admin": make_user("admin@test.com", Role.ADMIN),
    }


@pytest.fixture
def make_product(db_session):
    counter = {"n": 0}

    def _make_product(
        owner: User,
        name: str = "Mountain bike",
        description: str = "Aluminium frame, barely used",
        status: ProductStatus = ProductStatus.ACTIVE,
    ) -> Product:
        counter["n"] += 1
        product = Product(
            code=f"PRD_TEST_{counter['n']}",
            name=name,
            description=description,
            price=120.0,
            status=status,
            user_id=owner.id,
        )
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product

    return _make_product


@pytest.fixture
def classifier():
    return Classifier.build(DEFAULT_BANNED_WORDS, DEFAULT_PROFANITY_WORDS)
