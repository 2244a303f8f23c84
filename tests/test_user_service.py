# tests/test_user_service.py
"""User service: registration, moderator onboarding and account status."""

import pytest

from safetrade import schemas
from safetrade.models.product import ProductStatus
from safetrade.models.user import Role
from safetrade.services import notification_service, user_service
from safetrade.services.errors import (
    DuplicateError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)
from safetrade.utils.national_id import is_valid_ecuadorian_id
from safetrade.utils.security import verify_password

from conftest import CEDULAS


def _register_payload(**overrides):
    data = {
        "firstName": "Ana",
        "lastName": "Paredes",
        "email": "Ana@Example.com",
        "password": "Secret123",
        "nationalId": CEDULAS[0],
        "latitude": -0.2,
        "longitude": -78.5,
        "address": "Quito",
    }
    data.update(overrides)
    return schemas.RegisterRequest(**data)


# ======================
# NATIONAL ID
# ======================

@pytest.mark.parametrize("cedula", CEDULAS)
def test_valid_cedulas(cedula):
    assert is_valid_ecuadorian_id(cedula) is True


@pytest.mark.parametrize(
    "cedula",
    ["1710034060", "9910034065", "1790034065", "171003406", "17100340651", "17100340a5", ""],
)
def test_invalid_cedulas(cedula):
    assert is_valid_ecuadorian_id(cedula) is False


# ======================
# REGISTRATION
# ======================

def test_register_client(db_session):
    user = user_service.register_client(db_session, _register_payload())

    assert user.email == "ana@example.com"
    assert user.role == Role.CLIENT.value
    assert user.is_active is True
    assert verify_password("Secret123", user.password_hash)
    assert (user.latitude, user.longitude) == (-0.2, -78.5)


def test_register_duplicate_email(db_session):
    user_service.register_client(db_session, _register_payload())
    with pytest.raises(DuplicateError, match="Email"):
        user_service.register_client(db_session, _register_payload(nationalId=CEDULAS[1]))


def test_register_duplicate_national_id(db_session):
    user_service.register_client(db_session, _register_payload())
    with pytest.raises(DuplicateError, match="National ID"):
        user_service.register_client(db_session, _register_payload(email="other@example.com"))


def test_register_invalid_national_id(db_session):
    with pytest.raises(InvalidStateError, match="cedula"):
        user_service.register_client(db_session, _register_payload(nationalId="1234567890"))


# ======================
# MODERATORS
# ======================

def test_create_moderator_sends_temporary_password(db_session, monkeypatch):
    sent = []
    monkeypatch.setattr(notification_service, "is_email_enabled", lambda: True)
    monkeypatch.setattr(notification_service, "send_email", lambda **kwargs: sent.append(kwargs) or True)

    moderator = user_service.create_moderator(
        db_session,
        schemas.ModeratorCreate(
            first_name="Luis",
            last_name="Mora",
            email="luis@safetrade.ec",
            national_id=CEDULAS[2],
        ),
    )

    assert moderator.role == Role.MODERATOR.value
    assert moderator.is_verified is True
    assert len(sent) == 1
    assert sent[0]["to_email"] == "luis@safetrade.ec"
    temporary_password = sent[0]["body_text"].split("Temporary password: ")[1].split("\n")[0]
    assert verify_password(temporary_password, moderator.password_hash)


def test_list_users_filters(db_session, setup_users):
    moderators = user_service.list_users(db_session, role=Role.MODERATOR)
    assert {u.email for u in moderators} == {"m1@test.com", "m2@test.com"}
    assert user_service.list_users(db_session, is_active=False) == []


# ======================
# PROFILE & STATUS
# ======================

def test_user_updates_own_profile(db_session, setup_users):
    owner = setup_users["owner"]
    updated = user_service.update_user(
        db_session,
        owner.id,
        schemas.UserUpdate(phone="0991234567"),
        acting_user=owner,
    )
    assert updated.phone == "0991234567"


def test_client_cannot_update_other_user(db_session, setup_users):
    with pytest.raises(ForbiddenError):
        user_service.update_user(
            db_session,
            setup_users["owner"].id,
            schemas.UserUpdate(phone="000"),
            acting_user=setup_users["client"],
        )


def test_admin_updates_any_user(db_session, setup_users):
    updated = user_service.update_user(
        db_session,
        setup_users["owner"].id,
        schemas.UserUpdate(first_name="Renamed"),
        acting_user=setup_users["admin"],
    )
    assert updated.first_name == "Renamed"


def test_deactivation_cascades_to_active_products(db_session, setup_users, make_product):
    owner = setup_users["owner"]
    active = make_product(owner)
    suspended = make_product(owner, name="Suspended thing", status=ProductStatus.SUSPENDED)

    user_service.set_active_status(db_session, owner.id, False)
    db_session.refresh(active)
    db_session.refresh(suspended)
    assert owner.is_active is False
    assert active.status == ProductStatus.DEACTIVATED
    assert suspended.status == ProductStatus.SUSPENDED

    user_service.set_active_status(db_session, owner.id, True)
    db_session.refresh(active)
    db_session.refresh(suspended)
    assert owner.is_active is True
    assert active.status == ProductStatus.ACTIVE
    assert suspended.status == ProductStatus.SUSPENDED


def test_set_role(db_session, setup_users):
    user = user_service.set_role(db_session, setup_users["client"].id, Role.MODERATOR)
    assert user.role == Role.MODERATOR.value

    with pytest.raises(InvalidStateError):
        user_service.set_role(db_session, setup_users["client"].id, Role.ADMIN)


def test_unknown_user(db_session):
    with pytest.raises(NotFoundError):
        user_service.get_user_or_404(db_session, "missing")
