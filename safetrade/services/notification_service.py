from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from safetrade import models
from safetrade.config import settings
from safetrade.models.incident import IncidentPhase, IncidentStatus
from safetrade.utils.email import is_email_enabled, send_email

logger = logging.getLogger(__name__)


RESOLUTION_MESSAGES = {
    (IncidentPhase.INITIAL, IncidentStatus.ACCEPTED): (
        "Your listing has been suspended",
        "A moderator reviewed a report against \"{product}\" and suspended the listing. "
        "You can appeal this decision once from your products page.",
    ),
    (IncidentPhase.INITIAL, IncidentStatus.REJECTED): (
        "Your listing is active again",
        "A report against \"{product}\" was dismissed and the listing is visible again.",
    ),
    (IncidentPhase.APPEAL, IncidentStatus.ACCEPTED): (
        "Your appeal was rejected",
        "After reviewing your appeal, \"{product}\" has been permanently banned.",
    ),
    (IncidentPhase.APPEAL, IncidentStatus.REJECTED): (
        "Your appeal was accepted",
        "After reviewing your appeal, \"{product}\" is active again.",
    ),
}


def _greeting(user: models.User) -> str:
    name = (user.first_name or "there").strip() or "there"
    return f"Hi {name},"


def _deliver(to_email: str, subject: str, body_text: str) -> bool:
    """Inline best-effort delivery; never raises."""
    if not is_email_enabled():
        return False
    try:
        sent = send_email(to_email=to_email, subject=subject, body_text=body_text)
    except Exception as exc:
        logger.warning("Email delivery to %s raised: %s", to_email, exc)
        return False
    if not sent:
        logger.info("Email to %s was not sent (subject=%r)", to_email, subject)
    return sent


def notify_incident_resolved(db: Session, incident: models.Incident) -> bool:
    """Tell the product owner how their listing's incident was resolved."""
    key = (incident.phase, incident.status)
    if key not in RESOLUTION_MESSAGES:
        return False

    product = incident.product or db.query(models.Product).filter(
        models.Product.id == incident.product_id
    ).first()
    owner = product.user if product else None
    if owner is None or not owner.email:
        return False

    subject, template = RESOLUTION_MESSAGES[key]
    body_text = (
        f"{_greeting(owner)}\n\n"
        f"{template.format(product=product.name)}\n\n"
        f"Incident ID: {incident.id}\n\n"
        f"Open SafeTrade to view details: {settings.FRONTEND_URL}/my-products"
    )
    return _deliver(owner.email, f"SafeTrade: {subject}", body_text)


def send_welcome_email(user: models.User, temporary_password: str) -> bool:
    body_text = (
        f"{_greeting(user)}\n\n"
        "A SafeTrade moderator account has been created for you.\n\n"
        f"Email: {user.email}\n"
        f"Temporary password: {temporary_password}\n\n"
        f"Sign in at {settings.FRONTEND_URL}/login and change your password."
    )
    return _deliver(user.email, "Welcome to SafeTrade!", body_text)


def send_account_status_email(
    user: models.User,
    *,
    is_active: bool,
    reason: Optional[str] = None,
) -> bool:
    status_label = "activated" if is_active else "deactivated"
    lines = [
        _greeting(user),
        "",
        f"Your SafeTrade account has been {status_label}.",
    ]
    if reason:
        lines.append(f"Reason: {reason}")
    lines.extend(["", f"Sign in: {settings.FRONTEND_URL}/login"])
    return _deliver(user.email, f"Your account has been {status_label}", "\n".join(lines))
