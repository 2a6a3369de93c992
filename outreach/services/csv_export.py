"""CSV rendering of submissions and registrations for the admin export."""
from __future__ import annotations

import csv
import io
from typing import Any, Iterable, Mapping

FIXED_TAIL_COLUMNS = ("status", "notes", "created_at")


def data_columns(records: Iterable[Mapping[str, Any]]) -> list[str]:
    """Distinct data keys across ``records`` in first-seen order."""
    seen: dict[str, None] = {}
    for record in records:
        for key in (record.get("data") or {}):
            seen.setdefault(str(key), None)
    return list(seen)


def records_to_csv(records: list[Mapping[str, Any]], owner_key: str) -> str:
    """Render serialized records as RFC 4180 CSV.

    ``owner_key`` is the column that ties a record to its parent,
    ``form_type`` for submissions and ``event_id`` for registrations.
    """
    keys = data_columns(records)
    header = ["id", owner_key, *FIXED_TAIL_COLUMNS, *keys]

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\r\n")
    writer.writerow(header)
    for record in records:
        data = record.get("data") or {}
        row = [record.get("id"), record.get(owner_key)]
        row.extend(record.get(column) for column in FIXED_TAIL_COLUMNS)
        row.extend(data.get(key, "") for key in keys)
        writer.writerow(["" if value is None else value for value in row])
    return buffer.getvalue()
