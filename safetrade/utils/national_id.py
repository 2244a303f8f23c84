"""Ecuadorian national id (cedula) validation."""

import re

_CEDULA_RE = re.compile(r"^\d{10}$")
_COEFFICIENTS = (2, 1, 2, 1, 2, 1, 2, 1, 2)


def is_valid_ecuadorian_id(cedula: str) -> bool:
    """Check province code, third digit and the modulo-10 verifier digit."""
    if not cedula or not _CEDULA_RE.match(cedula):
        return False

    province = int(cedula[:2])
    if province < 1 or (province > 24 and province != 30):
        return False
    if int(cedula[2]) >= 6:
        return False

    digits = [int(ch) for ch in cedula]
    total = 0
    for digit, coefficient in zip(digits[:9], _COEFFICIENTS):
        value = digit * coefficient
        if value >= 10:
            value -= 9
        total += value

    verifier = (10 - (total % 10)) % 10
    return verifier == digits[9]
