"""Client-side validation for the registration form.

Checks run in a fixed order and stop at the first failure, so the user sees one
message at a time. On failure `FormValidationError` is raised and no request is
sent to the backend.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

MIN_USERNAME_LENGTH = 6
MIN_PASSWORD_LENGTH = 6


@dataclass
class FormValidationError(Exception):
    """Exception raised for form validation failures.

    Attributes:
        field_errors: mapping of field name -> human-readable error message.
        message: optional top-level message.
    """

    field_errors: Dict[str, str]
    message: str = "Validation failed"

    def __str__(self) -> str:  # pragma: no cover
        return self.message


def _as_str(v: Any) -> str:
    return "" if v is None else str(v)


def validate_registration(username: Any, password: Any, confirm_password: Any) -> Dict[str, str]:
    username = _as_str(username)
    password = _as_str(password)
    confirm_password = _as_str(confirm_password)

    if not username:
        _fail("username", "Username is a required field")
    if len(username) < MIN_USERNAME_LENGTH:
        _fail("username", f"Username must be at least {MIN_USERNAME_LENGTH} characters")
    if not password:
        _fail("password", "Password is a required field")
    if len(password) < MIN_PASSWORD_LENGTH:
        _fail("password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if password != confirm_password:
        _fail("confirm_password", "Passwords do not match")

    return {"username": username, "password": password}


def _fail(field: str, message: str) -> None:
    raise FormValidationError(field_errors={field: message}, message=message)
