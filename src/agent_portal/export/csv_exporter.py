from __future__ import annotations

import csv
import io
import re
from collections.abc import Iterable, Sequence
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any

from ..logger import get_logger, log_action
from ..views.listing_view import ColumnDescriptor, Record, read_field

SENSITIVE_KEYS = {"token", "secret", "password"}
MASKED_VALUE = "***"

logger = get_logger(__name__)


def export_filename(view_name: str, scope: str) -> str:
    return f"{_slug(view_name)}-{_slug(scope)}.csv"


def _slug(value: str) -> str:
    clean = re.sub(r"[^\w.-]+", "-", value.strip())
    return clean.strip("-") or "all"


def csv_value(key: str, value: Any) -> str:
    if any(token in key.lower() for token in SENSITIVE_KEYS):
        return MASKED_VALUE
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def write_rows(handle: Any, rows: Iterable[Record], columns: Sequence[ColumnDescriptor]) -> int:
    writer = csv.writer(handle, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow([column.label for column in columns])
    count = 0
    for record in rows:
        writer.writerow([csv_value(column.key, read_field(record, column.key)) for column in columns])
        count += 1
    return count


def to_csv(rows: Iterable[Record], columns: Sequence[ColumnDescriptor]) -> str:
    buffer = io.StringIO()
    write_rows(buffer, rows, columns)
    return buffer.getvalue()


def export_csv(
    *,
    view_name: str,
    scope: str,
    rows: Iterable[Record],
    columns: Sequence[ColumnDescriptor],
    output_dir: str | Path = "exports",
) -> Path:
    """Write the filtered, unpaginated rows of a view to ``<view>-<scope>.csv``."""
    destination = Path(output_dir)
    destination.mkdir(parents=True, exist_ok=True)
    path = destination / export_filename(view_name, scope)
    with path.open("w", newline="", encoding="utf-8-sig") as handle:
        count = write_rows(handle, rows, columns)
    log_action(logger, module=view_name, action="export_csv", outcome="success", path=str(path), rows=count)
    return path
