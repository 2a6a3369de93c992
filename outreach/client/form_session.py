"""Client-side interaction state for one open form.

A ``FormSession`` drives a public form or an event registration through
``LOADING -> READY -> SUBMITTING -> SUCCESS`` against the public API. It keeps
only transient state; ``close`` forgets everything and the next ``open``
fetches the schema again.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional

import httpx

from outreach.client.widgets import Widget, render_form
from outreach.schemas.forms import FieldType, FormFieldSpec, parse_fields
from outreach.services.validation import as_field_text, format_phone, validate

_LOG = logging.getLogger("outreach.client")

LOAD_FAILED_MESSAGE = "Failed to load form"
SUBMIT_FAILED_MESSAGE = "Failed to submit form"
DISABLED_MESSAGE = "This form is currently disabled"
FULL_MESSAGE = "This event has reached maximum capacity"


class FormState(str, Enum):
    CLOSED = "closed"
    LOADING = "loading"
    ERROR = "error"
    READY = "ready"
    SUBMITTING = "submitting"
    SUCCESS = "success"


class FormSession:
    def __init__(
        self,
        client: httpx.Client,
        *,
        form_type: str | None = None,
        event_id: int | None = None,
        api_prefix: str = "/api/public",
    ):
        if (form_type is None) == (event_id is None):
            raise ValueError("FormSession needs exactly one of form_type or event_id")
        self.client = client
        self.form_type = form_type
        self.event_id = event_id
        self.api_prefix = api_prefix.rstrip("/")
        self._reset()

    def _reset(self) -> None:
        self.state = FormState.CLOSED
        self.schema: dict[str, Any] = {}
        self.fields: list[FormFieldSpec] = []
        self.values: dict[str, str] = {}
        self.field_errors: dict[str, str] = {}
        self.banner: Optional[str] = None
        self.success_message: Optional[str] = None
        self.reference_id: Optional[int] = None
        self.honeypot = ""

    @property
    def schema_path(self) -> str:
        if self.form_type is not None:
            return f"{self.api_prefix}/forms/{self.form_type}"
        return f"{self.api_prefix}/events/{self.event_id}/registration-form"

    @property
    def submit_path(self) -> str:
        if self.form_type is not None:
            return f"{self.api_prefix}/forms/{self.form_type}/submissions"
        return f"{self.api_prefix}/events/{self.event_id}/registrations"

    @property
    def submit_enabled(self) -> bool:
        return self.state == FormState.READY

    @property
    def title(self) -> str:
        return str(self.schema.get("title") or "")

    @property
    def submit_button_text(self) -> str:
        return str(self.schema.get("submit_button_text") or "Submit")

    def open(self) -> FormState:
        self._reset()
        self.state = FormState.LOADING
        try:
            response = self.client.get(self.schema_path)
        except httpx.HTTPError as exc:
            _LOG.warning("schema fetch failed path=%s: %s", self.schema_path, exc)
            return self._fail_load(LOAD_FAILED_MESSAGE)

        body = _json_or_empty(response)
        if response.status_code >= 400:
            return self._fail_load(str(body.get("error") or LOAD_FAILED_MESSAGE))
        if not body.get("enabled", True):
            return self._fail_load(FULL_MESSAGE if self.event_id is not None else DISABLED_MESSAGE)

        self.schema = body
        self.fields = parse_fields(body.get("fields"))
        self.values = {f.id: ("false" if f.is_boolean_checkbox else "") for f in self.fields}
        self.state = FormState.READY
        return self.state

    def _fail_load(self, message: str) -> FormState:
        self.banner = message
        self.state = FormState.ERROR
        return self.state

    def _field(self, field_id: str) -> FormFieldSpec:
        for field in self.fields:
            if field.id == field_id:
                return field
        raise KeyError(field_id)

    def set_value(self, field_id: str, value: Any) -> str:
        if self.state != FormState.READY:
            raise RuntimeError(f"cannot edit a form in state {self.state.value}")
        field = self._field(field_id)
        text = as_field_text(value)
        if field.type == FieldType.PHONE:
            text = format_phone(text)
        self.values[field_id] = text
        self.field_errors.pop(field_id, None)
        return text

    def widgets(self) -> list[Widget]:
        return render_form(self.fields, self.values, self.field_errors)

    def submit(self) -> FormState:
        if self.state != FormState.READY:
            raise RuntimeError(f"cannot submit a form in state {self.state.value}")
        errors = validate(self.fields, self.values)
        self.field_errors = {err.field_id: err.message for err in errors}
        if errors:
            return self.state

        self.banner = None
        self.state = FormState.SUBMITTING
        try:
            response = self.client.post(self.submit_path, json={"data": dict(self.values), "_honeypot": self.honeypot})
        except httpx.HTTPError as exc:
            _LOG.warning("submit failed path=%s: %s", self.submit_path, exc)
            return self._reject(SUBMIT_FAILED_MESSAGE)

        body = _json_or_empty(response)
        if response.is_success:
            self.success_message = str(body.get("message") or self.schema.get("success_message") or "")
            self.reference_id = int(body.get("submission_id") or 0) or None
            self.state = FormState.SUCCESS
            return self.state
        if "error" not in body:
            return self._reject(SUBMIT_FAILED_MESSAGE)
        server_field_errors = body.get("field_errors")
        if isinstance(server_field_errors, dict):
            self.field_errors = {str(k): str(v) for k, v in server_field_errors.items()}
        return self._reject(str(body["error"]))

    def _reject(self, message: str) -> FormState:
        self.banner = message
        self.state = FormState.READY
        return self.state

    def close(self) -> None:
        self._reset()


def _json_or_empty(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
