from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

_LOG = logging.getLogger("outreach.forms")


class FieldType(str, Enum):
    TEXT = "text"
    EMAIL = "email"
    PHONE = "phone"
    TEXTAREA = "textarea"
    SELECT = "select"
    CHECKBOX = "checkbox"
    MULTISELECT = "multiselect"
    NUMBER = "number"
    DATE = "date"


OPTION_TYPES = {FieldType.SELECT, FieldType.MULTISELECT}


class FormFieldSpec(BaseModel):
    id: str = Field(min_length=1, max_length=80, pattern=r"^[A-Za-z0-9][A-Za-z0-9_-]*$")
    type: FieldType
    label: str = Field(min_length=1, max_length=200)
    placeholder: Optional[str] = None
    required: bool = False
    options: Optional[List[str]] = None
    help_text: Optional[str] = None

    @model_validator(mode="after")
    def _options_match_type(self):
        if self.type in OPTION_TYPES and not self.options:
            raise ValueError(f'Field "{self.id}" of type {self.type.value} needs at least one option')
        if self.type not in OPTION_TYPES and self.type != FieldType.CHECKBOX and self.options:
            raise ValueError(f'Field "{self.id}" of type {self.type.value} does not take options')
        return self

    @property
    def is_boolean_checkbox(self) -> bool:
        return self.type == FieldType.CHECKBOX and not self.options

    def to_storage(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


def ensure_unique_ids(fields: List[FormFieldSpec]) -> List[FormFieldSpec]:
    seen: set[str] = set()
    for field in fields:
        if field.id in seen:
            raise ValueError(f'Duplicate field id "{field.id}"')
        seen.add(field.id)
    return fields


def parse_fields(raw: list | None) -> List[FormFieldSpec]:
    """Load stored field dicts, skipping entries that no longer parse."""
    out: List[FormFieldSpec] = []
    for item in raw or []:
        if isinstance(item, FormFieldSpec):
            out.append(item)
            continue
        if not isinstance(item, dict):
            _LOG.warning("skipping stored field that is not an object: %r", item)
            continue
        try:
            out.append(FormFieldSpec.model_validate(item))
        except ValueError as exc:
            _LOG.warning("skipping stored field id=%s that no longer parses: %s", item.get("id"), exc)
            continue
    return out


class FormConfigUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    fields: Optional[List[FormFieldSpec]] = None
    submit_button_text: Optional[str] = Field(default=None, min_length=1, max_length=100)
    success_message: Optional[str] = None
    enabled: Optional[bool] = None

    @field_validator("fields")
    @classmethod
    def _unique_field_ids(cls, value):
        if value is None:
            return value
        return ensure_unique_ids(value)
