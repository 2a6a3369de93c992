from __future__ import annotations

from typing import Any, Optional

import httpx

from outreach.services.csv_export import records_to_csv


class TriageError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class TriageClient:
    """Admin-side helper for working through submissions and registrations."""

    def __init__(self, client: httpx.Client, *, api_prefix: str = "/api/admin"):
        self.client = client
        self.api_prefix = api_prefix.rstrip("/")
        self._token: Optional[str] = None

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._token}"} if self._token else {}

    def _call(self, method: str, path: str, **kwargs) -> Any:
        response = self.client.request(method, f"{self.api_prefix}{path}", headers=self._headers(), **kwargs)
        if response.status_code >= 400:
            try:
                message = str(response.json().get("error") or response.text)
            except ValueError:
                message = response.text
            raise TriageError(response.status_code, message)
        return response.json()

    def login(self, email: str, password: str) -> None:
        self._token = self._call("POST", "/auth/login", json={"email": email, "password": password})["access_token"]

    def submissions(self, form_type: str | None = None) -> list[dict]:
        params = {"form_type": form_type} if form_type else None
        return self._call("GET", "/submissions", params=params)

    def registrations(self, event_id: int | None = None) -> list[dict]:
        params = {"event_id": event_id} if event_id is not None else None
        return self._call("GET", "/registrations", params=params)

    def set_submission_status(self, submission_id: int, status: str, notes: str | None = None) -> dict:
        body = {"status": status}
        if notes is not None:
            body["notes"] = notes
        return self._call("PATCH", f"/submissions/{submission_id}", json=body)

    def set_registration_status(self, registration_id: int, status: str, notes: str | None = None) -> dict:
        body = {"status": status}
        if notes is not None:
            body["notes"] = notes
        return self._call("PATCH", f"/registrations/{registration_id}", json=body)

    def submissions_csv(self, form_type: str | None = None) -> str:
        return records_to_csv(self.submissions(form_type), "form_type")

    def registrations_csv(self, event_id: int | None = None) -> str:
        return records_to_csv(self.registrations(event_id), "event_id")
