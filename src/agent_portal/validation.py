from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, TypeVar

from pydantic import ValidationError as PydanticValidationError

from .models import StockTransferRequest

T = TypeVar("T")


@dataclass(frozen=True)
class ValidationIssue:
    row_index: int | None
    field: str
    reason: str


class ClientValidationError(ValueError):
    """Raised before any request is sent when input is incomplete."""

    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = issues
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.issues:
            return "Validation failed"
        issue = self.issues[0]
        location = f"row {issue.row_index}" if issue.row_index is not None else "payload"
        return f"{location} {issue.field}: {issue.reason}"


def require_text(value: str | None, field: str) -> str:
    clean = (value or "").strip()
    if not clean:
        _raise_issue(None, field, f"{field} is required")
    return clean


def validate_transfer_payload(payload: StockTransferRequest | Mapping[str, Any]) -> StockTransferRequest:
    data = _coerce_model(payload, StockTransferRequest, None)
    require_text(data.material_type, "material_type")
    require_text(data.transfer_from, "transfer_from")
    require_text(data.transfer_to, "transfer_to")
    if data.transfer_from.strip() == data.transfer_to.strip():
        _raise_issue(None, "transfer_to", "transfer_from and transfer_to must differ")
    if not data.serial_numbers:
        _raise_issue(None, "serial_numbers", "serial_numbers must not be empty")
    seen: set[str] = set()
    cleaned: list[str] = []
    for idx, serial in enumerate(data.serial_numbers):
        serial = serial.strip()
        if not serial:
            _raise_issue(idx, "serial_numbers", "serial number must not be blank")
        if serial in seen:
            _raise_issue(idx, "serial_numbers", f"serial number {serial} is duplicated")
        seen.add(serial)
        cleaned.append(serial)
    return data.model_copy(update={"serial_numbers": cleaned})


def _coerce_model(value: T | Mapping[str, Any], model_type: type[T], row_index: int | None) -> T:
    if isinstance(value, model_type):
        return value
    try:
        return model_type.model_validate(value)
    except PydanticValidationError as exc:
        issue = exc.errors()[0] if exc.errors() else {"loc": ("payload",), "msg": "Invalid payload"}
        field = ".".join(str(part) for part in issue.get("loc", ("payload",)))
        _raise_issue(row_index, field, issue.get("msg", "Invalid payload"))
        raise


def _raise_issue(row_index: int | None, field: str, reason: str) -> None:
    raise ClientValidationError([ValidationIssue(row_index=row_index, field=field, reason=reason)])
