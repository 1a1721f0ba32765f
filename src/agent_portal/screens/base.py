from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from ..exceptions import ApiError
from ..export import export_csv
from ..logger import get_logger, log_action
from ..models import CollectionPage
from ..query_cache import QueryCache, QueryKey
from ..views import (
    ActionDialog,
    ActionVariant,
    ColumnDescriptor,
    FilterState,
    PageState,
    SortState,
    TabularResult,
    TabularView,
    ToastCenter,
    ToastVariant,
)
from ..views.listing_view import ColumnMatcher, RecordPredicate

logger = get_logger(__name__)


class ListScreen:
    """One list page: a fetched collection plus its view state.

    Subclasses provide ``columns``, ``query_key()`` and ``fetch()``. The
    filter, sort and page state belong to the screen and are reset whenever
    the query key changes. Loads that finish after ``close()`` or after a
    newer load started are dropped.
    """

    name = "list"
    columns: Sequence[ColumnDescriptor] = ()
    searchable_fields: Sequence[str] | None = None
    default_sort: str | None = None
    load_error_title = "Failed to load data"

    def __init__(
        self,
        *,
        cache: QueryCache,
        toasts: ToastCenter,
        page_size: int = 10,
        export_dir: str | Path = "exports",
    ) -> None:
        self.cache = cache
        self.toasts = toasts
        self.export_dir = Path(export_dir)
        self.view = TabularView(
            self.columns,
            searchable_fields=self.searchable_fields,
            column_matchers=self.column_matchers(),
        )
        self.filter_state = FilterState()
        self.sort_state = SortState(column_key=self.default_sort)
        self.page_state = PageState(page_size=page_size)
        self.records: list[Any] = []
        self.total_record_count: int | None = None
        self.is_demo_data = False
        self.loading = False
        self.last_error: ApiError | None = None
        self.current_key: QueryKey | None = None
        self.closed = False
        self._generation = 0

    def query_key(self) -> QueryKey:
        raise NotImplementedError

    def fetch(self) -> CollectionPage:
        raise NotImplementedError

    def cache_prefix(self) -> QueryKey:
        return self.query_key()[:1]

    def column_matchers(self) -> dict[str, ColumnMatcher]:
        return {}

    def predicates(self) -> list[RecordPredicate]:
        return []

    def load(self, *, force_refresh: bool = False) -> bool:
        if self.closed:
            return False
        key = self.query_key()
        if key != self.current_key:
            self.reset_view_state()
            self.current_key = key
        self._generation += 1
        generation = self._generation
        self.loading = True
        try:
            page = self.cache.fetch(key, self.fetch, force_refresh=force_refresh)
        except ApiError as exc:
            if not self._is_current(generation):
                return False
            self.last_error = exc
            self.toasts.notify(self.load_error_title, exc.message, ToastVariant.DESTRUCTIVE, module=self.name, trace_id=exc.trace_id)
            return False
        finally:
            if generation == self._generation:
                self.loading = False
        if not self._is_current(generation):
            log_action(logger, module=self.name, action="load", outcome="discarded", level=logging.DEBUG)
            return False
        self.last_error = None
        self.records = list(page.rows)
        self.total_record_count = page.total_record_count
        self.is_demo_data = page.is_demo_data
        return True

    def refetch(self) -> bool:
        self.cache.invalidate(self.cache_prefix())
        return self.load(force_refresh=True)

    def close(self) -> None:
        self.closed = True
        self._generation += 1
        self.loading = False

    def _is_current(self, generation: int) -> bool:
        return not self.closed and generation == self._generation

    def reset_view_state(self) -> None:
        self.filter_state.reset()
        self.sort_state = SortState(column_key=self.default_sort)
        self.page_state.page_index = 0

    def set_search(self, text: str) -> None:
        self.filter_state.global_text = text
        self.page_state.page_index = 0

    def set_filter(self, key: str, value: str) -> None:
        self.filter_state.per_column[key] = value
        self.page_state.page_index = 0

    def toggle_sort(self, key: str) -> None:
        self.sort_state.toggle(key)

    def go_to_page(self, page_index: int) -> None:
        self.page_state.page_index = max(0, page_index)

    def next_page(self) -> None:
        if self.result().has_next:
            self.page_state.page_index += 1

    def previous_page(self) -> None:
        if self.result().has_previous:
            self.page_state.page_index -= 1

    def result(self) -> TabularResult:
        result = self.view.apply(
            self.records,
            self.filter_state,
            self.sort_state,
            self.page_state,
            predicates=self.predicates(),
            is_demo_data=self.is_demo_data,
        )
        self.page_state.page_index = result.page_index
        return result

    def export_scope(self) -> str:
        return "all"

    def export_columns(self) -> Sequence[ColumnDescriptor]:
        return self.columns

    def export(self, scope: str | None = None) -> Path:
        return export_csv(
            view_name=self.name,
            scope=scope or self.export_scope(),
            rows=self.result().filtered_rows,
            columns=self.export_columns(),
            output_dir=self.export_dir,
        )

    def make_dialog(self, name: str, variants: Sequence[ActionVariant]) -> ActionDialog:
        return ActionDialog(name, variants, toasts=self.toasts, on_success=self.refetch)

    def run_action(self, action: str, call: Callable[[], Any], *, success_title: str, failure_title: str) -> bool:
        """Direct row mutation without a dialog; refetches on success."""
        try:
            call()
        except ApiError as exc:
            self.toasts.notify(failure_title, exc.message, ToastVariant.DESTRUCTIVE, module=self.name, trace_id=exc.trace_id)
            log_action(logger, module=self.name, action=action, outcome="error", trace_id=exc.trace_id, level=logging.WARNING)
            return False
        self.toasts.notify(success_title, None, ToastVariant.SUCCESS, module=self.name)
        log_action(logger, module=self.name, action=action, outcome="success")
        self.refetch()
        return True
