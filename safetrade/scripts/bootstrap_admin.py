import os
import re
import sys
from typing import Optional

from safetrade import models
from safetrade.database import SessionLocal
from safetrade.utils.national_id import is_valid_ecuadorian_id
from safetrade.utils.security import get_password_hash


CONFIRM_PHRASE = "CREATE-FIRST-ADMIN"
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _is_truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "y", "on"}


def _required_env(key: str) -> str:
    value = os.getenv(key, "").strip()
    if not value:
        raise ValueError(f"Missing required environment variable: {key}")
    return value


def _validate_password(password: str) -> None:
    if len(password) < 8:
        raise ValueError("ADMIN_PASSWORD must be at least 8 characters.")
    if len(password.encode("utf-8")) > 72:
        raise ValueError("ADMIN_PASSWORD must be <= 72 bytes (bcrypt limit).")
    if not re.search(r"[A-Z]", password):
        raise ValueError("ADMIN_PASSWORD must contain at least one uppercase letter.")
    if not re.search(r"[a-z]", password):
        raise ValueError("ADMIN_PASSWORD must contain at least one lowercase letter.")
    if not re.search(r"\d", password):
        raise ValueError("ADMIN_PASSWORD must contain at least one digit.")


def bootstrap_admin() -> int:
    """Create the first ADMIN account from ADMIN_* environment variables."""
    try:
        if not _is_truthy(os.getenv("ENABLE_ADMIN_BOOTSTRAP")):
            raise ValueError(
                "Bootstrap disabled. Set ENABLE_ADMIN_BOOTSTRAP=true to run."
            )
        confirm = _required_env("ADMIN_BOOTSTRAP_CONFIRM")
        if confirm != CONFIRM_PHRASE:
            raise ValueError(
                f"Invalid ADMIN_BOOTSTRAP_CONFIRM. Expected exact phrase: {CONFIRM_PHRASE}"
            )

        first_name = _required_env("ADMIN_FIRST_NAME")
        last_name = _required_env("ADMIN_LAST_NAME")
        email = _required_env("ADMIN_EMAIL").lower()
        password = _required_env("ADMIN_PASSWORD")
        national_id = os.getenv("ADMIN_NATIONAL_ID", "").strip() or None

        if not EMAIL_RE.match(email):
            raise ValueError("ADMIN_EMAIL is not a valid email format.")
        if national_id and not is_valid_ecuadorian_id(national_id):
            raise ValueError("ADMIN_NATIONAL_ID is not a valid Ecuadorian cedula.")
        _validate_password(password)

        db = SessionLocal()
        try:
            existing_admin_count = db.query(models.User).filter(
                models.User.role == models.Role.ADMIN.value
            ).count()
            if existing_admin_count > 0:
                raise ValueError(
                    "Admin bootstrap blocked: an admin already exists. "
                    "This command is one-time for first admin creation."
                )

            existing_email = db.query(models.User).filter(
                models.User.email == email
            ).first()
            if existing_email:
                raise ValueError("ADMIN_EMAIL is already registered.")

            db.add(models.User(
                first_name=first_name,
                last_name=last_name,
                email=email,
                national_id=national_id,
                password_hash=get_password_hash(password),
                role=models.Role.ADMIN.value,
                is_active=True,
                is_verified=True,
            ))
            db.commit()
            print(f"Admin created successfully: {email}")
            return 0
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
    except Exception as exc:
        print(f"Admin bootstrap failed: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(bootstrap_admin())
