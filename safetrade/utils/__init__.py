__all__ = [
    "verify_password",
    "get_password_hash",
    "create_access_token",
    "authenticate_user",
    "get_current_user",
    "require_roles",
    "oauth2_scheme",
    "is_email_enabled",
    "send_email",
    "is_valid_ecuadorian_id",
]


def __getattr__(name):
    if name in {
        "verify_password",
        "get_password_hash",
        "create_access_token",
        "authenticate_user",
        "get_current_user",
        "require_roles",
        "oauth2_scheme",
    }:
        from . import security as _security
        return getattr(_security, name)
    if name in {"is_email_enabled", "send_email"}:
        from . import email as _email
        return getattr(_email, name)
    if name == "is_valid_ecuadorian_id":
        from . import national_id as _national_id
        return getattr(_national_id, name)
    raise AttributeError(f"module 'safetrade.utils' has no attribute '{name}'")
