"""
core/validators.py
------------------
Format and business-rule checks run before any repository call.

Pure functions: no I/O, no database access. Each check either returns the
(normalised) value or raises ValidationError(field, rule), whose code
"<field>.<rule>" is stable and safe to show to clients.
"""

import re
from typing import Optional

from managerh.core.errors import ValidationError
from managerh.models.computer import ComputerStatus

SIRET_RE = re.compile(r"[0-9]{14}")
# Same separator in all five positions: the backreference forbids mixing ':' and '-'
MAC_RE = re.compile(r"[0-9A-Fa-f]{2}([:-])[0-9A-Fa-f]{2}(?:\1[0-9A-Fa-f]{2}){4}")

PASSWORD_MIN_LENGTH = 8
AGE_MAX = 150


def validate_siret(siret: str) -> str:
    """Exactly 14 ASCII digits."""
    if not isinstance(siret, str) or SIRET_RE.fullmatch(siret) is None:
        raise ValidationError(
            "siret", "format", "SIRET must contain exactly 14 digits"
        )
    return siret


def validate_password_strength(password: str, field: str = "password") -> str:
    if not isinstance(password, str) or len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(
            field,
            "too_short",
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
        )
    if not any(ch in "0123456789" for ch in password):
        raise ValidationError(
            field, "missing_digit", "Password must contain at least one digit"
        )
    return password


def validate_mac_address(mac_address: str) -> str:
    """AA:BB:CC:DD:EE:FF or AA-BB-CC-DD-EE-FF, never a mix of both."""
    if not isinstance(mac_address, str) or MAC_RE.fullmatch(mac_address) is None:
        raise ValidationError(
            "mac_address",
            "format",
            "MAC address must look like AA:BB:CC:DD:EE:FF or AA-BB-CC-DD-EE-FF",
        )
    return mac_address


def validate_status(status: str) -> ComputerStatus:
    try:
        return ComputerStatus(status)
    except ValueError:
        raise ValidationError(
            "status",
            "invalid",
            "Status must be one of: "
            + ", ".join(s.value for s in ComputerStatus),
        )


def validate_status_holder(status: str, employee_id: Optional[str]) -> ComputerStatus:
    """
    Edge check for computer updates: an 'assigned' computer needs a holder.
    'available' and 'broken' computers may or may not have one.
    """
    parsed = validate_status(status)
    if parsed is ComputerStatus.assigned and not employee_id:
        raise ValidationError(
            "employee_id",
            "required_when_assigned",
            "Select an employee to mark this computer as assigned",
        )
    return parsed


def validate_age(age: Optional[int]) -> Optional[int]:
    if age is None:
        return None
    if not 0 <= age <= AGE_MAX:
        raise ValidationError("age", "out_of_range", f"Age must be between 0 and {AGE_MAX}")
    return age
