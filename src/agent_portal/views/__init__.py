from .action_dialog import ActionDialog, ActionVariant, DialogStatus, SubmitOutcome
from .listing_view import (
    EMPTY_VALUE,
    ColumnDescriptor,
    FilterState,
    PageState,
    SortState,
    TabularResult,
    TabularView,
    read_field,
    summarize,
)
from .toasts import Toast, ToastCenter, ToastVariant

__all__ = [
    "EMPTY_VALUE",
    "ActionDialog",
    "ActionVariant",
    "ColumnDescriptor",
    "DialogStatus",
    "FilterState",
    "PageState",
    "SortState",
    "SubmitOutcome",
    "TabularResult",
    "TabularView",
    "Toast",
    "ToastCenter",
    "ToastVariant",
    "read_field",
    "summarize",
]
