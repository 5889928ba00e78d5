"""Composable request validators.

Each factory returns a pure function taking the request payload (a dict) and
returning a list of `{"field", "message"}` errors. An operation declares its
rules as a plain list; `run_validators` applies all of them and raises a
single `ValidationError` before the handler runs.
"""

from __future__ import annotations

import re
import uuid
from typing import Any, Callable, Iterable, Mapping, Optional

from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date

Validator = Callable[[Mapping[str, Any]], list]

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _error(field: str, message: str) -> dict:
    return {"field": field, "message": message}


def run_validators(payload: Mapping[str, Any], rules: Iterable[Validator]) -> None:
    errors: list[dict] = []
    for rule in rules:
        errors.extend(rule(payload))
    if errors:
        raise ValidationError(errors[0]["message"], errors=errors)


def required_string(field: str, *, max_length: int, label: Optional[str] = None) -> Validator:
    label = label or field.capitalize()

    def check(payload: Mapping[str, Any]) -> list:
        value = payload.get(field)
        if not isinstance(value, str) or not value.strip():
            return [_error(field, f"{label} is required")]
        if len(value.strip()) > max_length:
            return [_error(field, f"{label} must be at most {max_length} characters")]
        return []

    return check


def optional_string(field: str, *, max_length: int, label: Optional[str] = None, allow_blank: bool = True) -> Validator:
    """Absent or null passes; otherwise must be a string within `max_length` after trimming."""
    label = label or field.capitalize()

    def check(payload: Mapping[str, Any]) -> list:
        value = payload.get(field)
        if value is None:
            return []
        if not isinstance(value, str):
            return [_error(field, f"{label} must be a string")]
        if not allow_blank and not value.strip():
            return [_error(field, f"{label} cannot be empty")]
        if len(value.strip()) > max_length:
            return [_error(field, f"{label} must be at most {max_length} characters")]
        return []

    return check


def not_null(field: str, *, label: Optional[str] = None) -> Validator:
    """Reject an explicit null for a field that may be omitted but not cleared."""
    label = label or field.capitalize()

    def check(payload: Mapping[str, Any]) -> list:
        if field in payload and payload[field] is None:
            return [_error(field, f"{label} cannot be null")]
        return []

    return check


def email_field(field: str = "email", *, max_length: int = 255) -> Validator:
    def check(payload: Mapping[str, Any]) -> list:
        value = payload.get(field)
        if not isinstance(value, str) or not _EMAIL_RE.match(value.strip()) or len(value.strip()) > max_length:
            return [_error(field, "Valid email required")]
        return []

    return check


def password_policy(field: str = "password", *, min_length: int = MIN_PASSWORD_LENGTH) -> Validator:
    """At least `min_length` characters, one uppercase letter and one digit."""

    def check(payload: Mapping[str, Any]) -> list:
        value = payload.get(field)
        if not isinstance(value, str):
            return [_error(field, "Password is required")]
        errors = []
        if len(value) < min_length:
            errors.append(_error(field, f"Password must be at least {min_length} characters"))
        if not re.search(r"[A-Z]", value):
            errors.append(_error(field, "Password must contain an uppercase letter"))
        if not re.search(r"[0-9]", value):
            errors.append(_error(field, "Password must contain a number"))
        return errors

    return check


def required_text(field: str, *, message: str) -> Validator:
    """Non-empty string, taken as-is (no trimming or length bound)."""

    def check(payload: Mapping[str, Any]) -> list:
        value = payload.get(field)
        if not isinstance(value, str) or not value:
            return [_error(field, message)]
        return []

    return check


def one_of(field: str, choices: Iterable[str], *, message: Optional[str] = None) -> Validator:
    """Optional field; when present it must be one of `choices`."""
    allowed = tuple(choices)
    message = message or f"{field} must be one of: {', '.join(allowed)}"

    def check(payload: Mapping[str, Any]) -> list:
        value = payload.get(field)
        if value is None:
            return []
        if value not in allowed:
            return [_error(field, message)]
        return []

    return check


def iso_date(field: str, *, message: Optional[str] = None) -> Validator:
    """Optional field; when present (and not null) it must parse as an ISO-8601 date."""
    message = message or f"{field} must be a valid date"

    def check(payload: Mapping[str, Any]) -> list:
        value = payload.get(field)
        if value is None:
            return []
        if not isinstance(value, str):
            return [_error(field, message)]
        try:
            parse_iso_date(value)
        except ValueError:
            return [_error(field, message)]
        return []

    return check


def int_range(field: str, *, min_value: int, max_value: Optional[int] = None) -> Validator:
    """Optional integer (or integer string) bounded to [min_value, max_value]."""

    def check(payload: Mapping[str, Any]) -> list:
        value = payload.get(field)
        if value is None:
            return []
        try:
            number = int(value)
        except (TypeError, ValueError):
            return [_error(field, f"{field} must be an integer")]
        if isinstance(value, bool) or number < min_value or (max_value is not None and number > max_value):
            bounds = f"between {min_value} and {max_value}" if max_value is not None else f"at least {min_value}"
            return [_error(field, f"{field} must be {bounds}")]
        return []

    return check


def date_order(start_field: str, end_field: str) -> Validator:
    """When both dates parse, `start_field` must not be after `end_field`."""

    def check(payload: Mapping[str, Any]) -> list:
        start, end = payload.get(start_field), payload.get(end_field)
        if not isinstance(start, str) or not isinstance(end, str):
            return []
        try:
            if parse_iso_date(start) > parse_iso_date(end):
                return [_error(start_field, f"{start_field} must not be after {end_field}")]
        except ValueError:
            # reported by iso_date
            return []
        return []

    return check


def uuid_value(value: str, *, field: str = "id", message: str = "Invalid id") -> None:
    try:
        uuid.UUID(str(value))
    except ValueError:
        raise ValidationError(message, errors=[_error(field, message)])


def required_bool(field: str, *, label: Optional[str] = None) -> Validator:
    label = label or field

    def check(payload: Mapping[str, Any]) -> list:
        if not isinstance(payload.get(field), bool):
            return [_error(field, f"{label} must be true or false")]
        return []

    return check


def clean_text(value: Optional[str]) -> Optional[str]:
    """Trim optional free text; blank becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None
