from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from .logger import get_logger, log_action
from .models import CollectionPage

ModelT = TypeVar("ModelT", bound=BaseModel)

logger = get_logger(__name__)

_ROW_KEYS = ("data", "rows", "items", "records")
_TOTAL_KEYS = ("totalRecordCount", "total", "totalCount", "count")


def normalize_collection(payload: Any) -> CollectionPage:
    """Accept every collection shape the portal backend returns.

    Supported: bare arrays, ``{data: [...]}``, ``{success: true, data: [...]}``
    and the CRM envelope ``{status, data: {data: [...], totalRecordCount}}``.
    Anything else yields an empty page rather than an error.
    """
    rows, total = _extract(payload, depth=0)
    return CollectionPage(rows=rows, total_record_count=total if total is not None else None)


def _extract(payload: Any, depth: int) -> tuple[list[Any], int | None]:
    if isinstance(payload, list):
        return payload, None
    if not isinstance(payload, dict) or depth > 2:
        return [], None
    if payload.get("success") is False:
        return [], None

    total = _first_int(payload, _TOTAL_KEYS)
    for key in _ROW_KEYS:
        value = payload.get(key)
        if isinstance(value, list):
            return value, total
        if isinstance(value, dict):
            rows, nested_total = _extract(value, depth + 1)
            return rows, nested_total if nested_total is not None else total
    return [], total


def _first_int(payload: dict[str, Any], keys: tuple[str, ...]) -> int | None:
    for key in keys:
        value = payload.get(key)
        if value is None or value == "" or isinstance(value, bool):
            continue
        try:
            return int(value)
        except (TypeError, ValueError):
            continue
    return None


def coerce_rows(rows: list[Any], model: type[ModelT]) -> list[ModelT]:
    """Validate rows into ``model``; non-mapping rows are skipped.

    A field that fails validation is dropped from its row so it reads as
    missing, and the rest of the row and collection still load.
    """
    return [coerce_row(row, model) for row in rows if isinstance(row, dict)]


def coerce_row(row: dict[str, Any], model: type[ModelT]) -> ModelT:
    try:
        return model.model_validate(row)
    except ValidationError as exc:
        bad_keys = _invalid_keys(exc, model)
        log_action(
            logger,
            module=model.__name__,
            action="coerce_row",
            outcome="dropped_fields",
            level=logging.WARNING,
            fields=sorted(bad_keys),
        )
        return model.model_validate({key: value for key, value in row.items() if key not in bad_keys})


def _invalid_keys(exc: ValidationError, model: type[BaseModel]) -> set[str]:
    keys: set[str] = set()
    for error in exc.errors():
        loc = error.get("loc") or ()
        if not loc:
            continue
        key = str(loc[0])
        keys.add(key)
        for name, field in model.model_fields.items():
            if key in (name, field.alias):
                keys.update(part for part in (name, field.alias) if part)
    return keys
