"""
core/errors.py
--------------
Typed error taxonomy shared by the service layer and the HTTP boundary.

Services raise these; main.py converts them into JSON responses of the form
    {"code": "<stable code>", "detail": "<message>", ...details}
so clients can pick a precise, human-readable message from the code alone.
Raw internal error text never crosses the boundary.
"""

from typing import Any, Optional


class AppError(Exception):
    """Base class for all expected (non-fatal) application errors."""

    code: str = "internal_error"
    status_code: int = 500
    message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = details or {}
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} code={self.code}>"


class ValidationError(AppError):
    """A field failed a format or business rule. Code is ``<field>.<rule>``."""

    status_code = 422
    message = "Invalid input"

    def __init__(self, field: str, rule: str, message: Optional[str] = None) -> None:
        self.field = field
        self.rule = rule
        super().__init__(
            message=message,
            code=f"{field}.{rule}",
            details={"field": field, "rule": rule},
        )


class NotFound(AppError):
    """
    Entity does not exist *within the caller's tenant*.
    Deliberately identical for "absent" and "owned by another tenant".
    """

    status_code = 404

    def __init__(self, entity_kind: str, entity_id: str) -> None:
        self.entity_kind = entity_kind
        self.entity_id = entity_id
        super().__init__(
            message=f"{entity_kind.capitalize()} not found",
            code=f"{entity_kind}_not_found",
            details={"entity_kind": entity_kind, "id": entity_id},
        )


class AlreadyAssigned(AppError):
    status_code = 409
    code = "employee_already_assigned"
    message = "This employee already has a computer assigned"

    def __init__(self, employee_id: str) -> None:
        self.employee_id = employee_id
        super().__init__(details={"employee_id": employee_id})


class DuplicateIdentifier(AppError):
    status_code = 409
    code = "duplicate_siret"
    message = "This SIRET number is already registered"

    def __init__(self, business_id: str) -> None:
        self.business_id = business_id
        super().__init__(details={"siret": business_id})


class AuthFailed(AppError):
    """Covers both unknown SIRET and wrong password; never say which."""

    status_code = 401
    code = "auth_failed"
    message = "Invalid SIRET or password"


class SessionInvalid(AppError):
    """Missing, expired, tampered or revoked session token."""

    status_code = 401
    code = "session_invalid"
    message = "Authentication required"


class StorageUnavailable(AppError):
    """Wraps any non-integrity persistence failure. Safe for callers to retry."""

    status_code = 503
    code = "storage_unavailable"
    message = "Service temporarily unavailable, please retry"
