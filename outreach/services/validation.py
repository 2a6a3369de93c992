"""Field-level validation for dynamic form records.

The same ``validate`` runs in ``outreach.client`` before a submit and in the
public API before anything is stored; only the server-side run is trusted.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

from outreach.schemas.forms import FieldType, FormFieldSpec, parse_fields

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^[\d\-+().]{7,20}$")
_WHITESPACE_RE = re.compile(r"\s")

INVALID_EMAIL_MESSAGE = "Please enter a valid email address"
INVALID_PHONE_MESSAGE = "Please enter a valid phone number"


@dataclass(frozen=True)
class FieldError:
    field_id: str
    message: str


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_RE.match(value))


def is_valid_phone(value: str) -> bool:
    return bool(PHONE_RE.match(_WHITESPACE_RE.sub("", value)))


def _check_email(value: str) -> str | None:
    return None if is_valid_email(value) else INVALID_EMAIL_MESSAGE


def _check_phone(value: str) -> str | None:
    return None if is_valid_phone(value) else INVALID_PHONE_MESSAGE


# Format checks per field type, applied only to non-empty values.
# Every FieldType has an entry; None means required-ness is the only rule.
FORMAT_CHECKS: dict[FieldType, Callable[[str], str | None] | None] = {
    FieldType.TEXT: None,
    FieldType.EMAIL: _check_email,
    FieldType.PHONE: _check_phone,
    FieldType.TEXTAREA: None,
    FieldType.SELECT: None,
    FieldType.CHECKBOX: None,
    FieldType.MULTISELECT: None,
    FieldType.NUMBER: None,
    FieldType.DATE: None,
}


def as_field_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value if v is not None)
    return str(value)


def normalize_record(data: Mapping[str, Any] | None) -> dict[str, str]:
    """Coerce a JSON payload into the string-to-string shape stored for submissions."""
    return {str(key): as_field_text(value) for key, value in dict(data or {}).items()}


def validate_field(field: FormFieldSpec, value: str) -> str | None:
    if field.required and not value.strip():
        return f"{field.label} is required"
    if not value:
        return None
    check = FORMAT_CHECKS[field.type]
    if check is None:
        return None
    return check(value)


def validate(fields: Iterable[FormFieldSpec | dict], record: Mapping[str, Any]) -> list[FieldError]:
    """Return one error per invalid field, in field declaration order."""
    errors: list[FieldError] = []
    for field in parse_fields(list(fields)):
        message = validate_field(field, as_field_text(record.get(field.id)))
        if message:
            errors.append(FieldError(field_id=field.id, message=message))
    return errors


def format_phone(value: str) -> str:
    """Group digits as a 10-digit NANP number while the user types.

    Presentation only: the result is still checked with ``is_valid_phone``
    and numbers in other formats are never rejected because of it.
    """
    digits = re.sub(r"\D", "", value or "")
    if len(digits) <= 3:
        return digits
    if len(digits) <= 6:
        return f"({digits[:3]}) {digits[3:]}"
    return f"({digits[:3]}) {digits[3:6]}-{digits[6:10]}"
