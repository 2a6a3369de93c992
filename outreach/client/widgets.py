"""Widget descriptors for rendering a form schema.

``render_field`` maps each ``FieldType`` to the control a front end should
draw. Descriptors are plain data so any template layer can consume them.
"""
from __future__ import annotations

from dataclasses import dataclass, field as dc_field
from typing import Callable, Mapping, Optional

from outreach.schemas.forms import FieldType, FormFieldSpec

SELECT_PLACEHOLDER = "Select an option..."
TEXTAREA_ROWS = 4


@dataclass
class Widget:
    field_id: str
    control: str
    label: str
    value: str
    input_type: Optional[str] = None
    placeholder: Optional[str] = None
    required: bool = False
    options: list[str] = dc_field(default_factory=list)
    selected: list[str] = dc_field(default_factory=list)
    help_text: Optional[str] = None
    error: Optional[str] = None
    rows: Optional[int] = None

    @property
    def has_error(self) -> bool:
        return bool(self.error)


def split_multi_value(value: str) -> list[str]:
    return [part.strip() for part in str(value or "").split(",") if part.strip()]


def _base(field: FormFieldSpec, value: str, error: str | None, control: str, **extra) -> Widget:
    return Widget(
        field_id=field.id,
        control=control,
        label=field.label,
        value=value,
        placeholder=field.placeholder,
        required=field.required,
        help_text=field.help_text,
        error=error,
        **extra,
    )


def _text_input(input_type: str) -> Callable[[FormFieldSpec, str, Optional[str]], Widget]:
    def _render(field: FormFieldSpec, value: str, error: str | None) -> Widget:
        return _base(field, value, error, "input", input_type=input_type)

    return _render


def _textarea(field: FormFieldSpec, value: str, error: str | None) -> Widget:
    return _base(field, value, error, "textarea", rows=TEXTAREA_ROWS)


def _select(field: FormFieldSpec, value: str, error: str | None) -> Widget:
    widget = _base(field, value, error, "select", options=list(field.options or []))
    widget.placeholder = field.placeholder or SELECT_PLACEHOLDER
    return widget


def _checkbox(field: FormFieldSpec, value: str, error: str | None) -> Widget:
    if field.is_boolean_checkbox:
        return _base(field, value, error, "checkbox", input_type="checkbox")
    # A checkbox with options is a group; the value holds the ticked options.
    return _base(
        field,
        value,
        error,
        "checkbox_group",
        input_type="checkbox",
        options=list(field.options or []),
        selected=split_multi_value(value),
    )


def _multiselect(field: FormFieldSpec, value: str, error: str | None) -> Widget:
    return _base(
        field,
        value,
        error,
        "multiselect",
        options=list(field.options or []),
        selected=split_multi_value(value),
    )


RENDERERS: dict[FieldType, Callable[[FormFieldSpec, str, Optional[str]], Widget]] = {
    FieldType.TEXT: _text_input("text"),
    FieldType.EMAIL: _text_input("email"),
    FieldType.PHONE: _text_input("tel"),
    FieldType.TEXTAREA: _textarea,
    FieldType.SELECT: _select,
    FieldType.CHECKBOX: _checkbox,
    FieldType.MULTISELECT: _multiselect,
    FieldType.NUMBER: _text_input("number"),
    FieldType.DATE: _text_input("date"),
}


def render_field(field: FormFieldSpec, value: str = "", error: str | None = None) -> Widget:
    return RENDERERS[field.type](field, value, error)


def render_form(
    fields: list[FormFieldSpec],
    values: Mapping[str, str] | None = None,
    errors: Mapping[str, str] | None = None,
) -> list[Widget]:
    values = values or {}
    errors = errors or {}
    return [render_field(f, values.get(f.id, ""), errors.get(f.id)) for f in fields]
