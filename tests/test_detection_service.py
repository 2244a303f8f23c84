# tests/test_detection_service.py
"""Automatic detection: verdicts, system incidents and best-effort persistence."""

import pytest
from sqlalchemy.exc import SQLAlchemyError

from safetrade.crud import incident as incident_crud
from safetrade.models.incident import Incident, IncidentStatus, ReportType, SYSTEM_REPORTER_ID
from safetrade.models.product import ProductStatus
from safetrade.services import detection_service
from safetrade.services.errors import NotFoundError


def test_dangerous_product_gets_system_incident(db_session, setup_users, make_product, classifier):
    product = make_product(setup_users["owner"], name="drug paraphernalia", description="glass pipes")

    assert detection_service.detect_dangerous_product_by_id(db_session, product.id, classifier) is True

    incidents = db_session.query(Incident).filter(Incident.product_id == product.id).all()
    assert len(incidents) == 1
    incident = incidents[0]
    assert incident.reporter_id == SYSTEM_REPORTER_ID
    assert incident.is_automatic is True
    assert incident.type == ReportType.DANGEROUS
    assert incident.status == IncidentStatus.PENDING
    assert incident.comment == detection_service.AUTOMATIC_DETECTION_COMMENT


def test_detection_does_not_change_product_status(db_session, setup_users, make_product, classifier):
    product = make_product(setup_users["owner"], name="explosive fireworks")

    detection_service.detect_dangerous_product_by_id(db_session, product.id, classifier)

    db_session.refresh(product)
    assert product.status == ProductStatus.ACTIVE


def test_clean_product_creates_no_incident(db_session, setup_users, make_product, classifier):
    product = make_product(setup_users["owner"])

    assert detection_service.detect_dangerous_product_by_id(db_session, product.id, classifier) is False
    assert db_session.query(Incident).count() == 0


def test_unknown_product_raises_not_found(db_session, classifier):
    with pytest.raises(NotFoundError):
        detection_service.detect_dangerous_product_by_id(db_session, 404, classifier)


def test_incident_failure_still_returns_verdict(db_session, setup_users, make_product, classifier, monkeypatch):
    product = make_product(setup_users["owner"], name="poison darts")

    def boom(*args, **kwargs):
        raise SQLAlchemyError("incidents table locked")

    monkeypatch.setattr(incident_crud, "create_incident", boom)

    assert detection_service.detect_dangerous_product_by_id(db_session, product.id, classifier) is True
    assert db_session.query(Incident).count() == 0


# ======================
# BULK SWEEP
# ======================

def test_sweep_returns_dangerous_active_products(db_session, setup_users, make_product, classifier):
    owner = setup_users["owner"]
    bad = make_product(owner, name="illegal copies", description="dvds")
    make_product(owner, name="Bookshelf", description="solid oak")
    make_product(owner, name="weapon replica", status=ProductStatus.SUSPENDED)

    dangerous = detection_service.detect_dangerous_products(db_session, classifier)

    assert [p.id for p in dangerous] == [bad.id]
    incidents = db_session.query(Incident).all()
    assert [i.product_id for i in incidents] == [bad.id]


def test_sweep_isolates_incident_failures(db_session, setup_users, make_product, classifier, monkeypatch):
    owner = setup_users["owner"]
    first = make_product(owner, name="fraud kit")
    second = make_product(owner, name="drug scale")

    real_create = incident_crud.create_incident
    calls = {"n": 0}

    def flaky_create(db, **kwargs):
        calls["n"] += 1
        if calls["n"] == 1:
            raise SQLAlchemyError("transient")
        return real_create(db, **kwargs)

    monkeypatch.setattr(incident_crud, "create_incident", flaky_create)

    dangerous = detection_service.detect_dangerous_products(db_session, classifier)

    assert {p.id for p in dangerous} == {first.id, second.id}
    incidents = db_session.query(Incident).all()
    assert len(incidents) == 1
    assert incidents[0].product_id == second.id
