from __future__ import annotations

import math
from collections import Counter
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

EMPTY_VALUE = "-"
ALL_VALUES = "all"
SORT_ASC = "asc"
SORT_DESC = "desc"

Record = Any
RecordPredicate = Callable[[Record], bool]
ColumnMatcher = Callable[[Record, str], bool]


def read_field(record: Record, key: str) -> Any:
    """Read ``key`` from a mapping row or an attribute-style row (pydantic models)."""
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


@dataclass(frozen=True)
class ColumnDescriptor:
    key: str
    label: str
    sortable: bool = True
    render: Callable[[Any, Record], str] | None = None

    def display(self, record: Record) -> str:
        # render errors are programming defects and propagate
        value = read_field(record, self.key)
        if is_missing(value):
            return EMPTY_VALUE
        if self.render is not None:
            return self.render(value, record)
        return str(value)


@dataclass
class FilterState:
    global_text: str = ""
    per_column: dict[str, str] = field(default_factory=dict)

    def is_identity(self) -> bool:
        return not self.global_text.strip() and all(_accepts_all(value) for value in self.per_column.values())

    def reset(self) -> None:
        self.global_text = ""
        self.per_column = {}


@dataclass
class SortState:
    column_key: str | None = None
    direction: str = SORT_ASC

    def toggle(self, column_key: str) -> None:
        if self.column_key == column_key:
            self.direction = SORT_DESC if self.direction == SORT_ASC else SORT_ASC
            return
        self.column_key = column_key
        self.direction = SORT_ASC


@dataclass
class PageState:
    page_index: int = 0
    page_size: int = 10

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")


@dataclass(frozen=True)
class TabularResult:
    visible_rows: list[Record]
    total_filtered_count: int
    total_pages: int
    page_index: int
    filtered_rows: list[Record]
    is_demo_data: bool = False

    @property
    def has_previous(self) -> bool:
        return self.page_index > 0

    @property
    def has_next(self) -> bool:
        return self.page_index < self.total_pages - 1


def total_pages_for(count: int, page_size: int) -> int:
    return max(1, math.ceil(count / page_size))


def _accepts_all(value: str | None) -> bool:
    return value is None or not str(value).strip() or str(value).strip().lower() == ALL_VALUES


class TabularView:
    """Filter, sort and paginate an in-memory record collection.

    Pipeline order is global text search, per-column filters, extra
    predicates, sort, then pagination. Nothing here raises on malformed rows:
    missing fields simply fail text matches and sort as empty strings.
    """

    def __init__(
        self,
        columns: Sequence[ColumnDescriptor],
        *,
        searchable_fields: Iterable[str] | None = None,
        column_matchers: Mapping[str, ColumnMatcher] | None = None,
    ) -> None:
        self.columns = list(columns)
        self.searchable_fields = list(searchable_fields) if searchable_fields is not None else [c.key for c in self.columns]
        self.column_matchers = dict(column_matchers or {})
        self._columns_by_key = {column.key: column for column in self.columns}

    def column(self, key: str) -> ColumnDescriptor | None:
        return self._columns_by_key.get(key)

    def matches_text(self, record: Record, text: str) -> bool:
        query = text.strip().lower()
        if not query:
            return True
        for key in self.searchable_fields:
            value = read_field(record, key)
            if value is not None and query in str(value).lower():
                return True
        return False

    def matches_column(self, record: Record, key: str, accepted: str | None) -> bool:
        if _accepts_all(accepted):
            return True
        matcher = self.column_matchers.get(key)
        if matcher is not None:
            return matcher(record, str(accepted))
        value = read_field(record, key)
        return value is not None and str(value) == str(accepted)

    def filter(
        self,
        records: Iterable[Record],
        filter_state: FilterState | None = None,
        predicates: Sequence[RecordPredicate] = (),
    ) -> list[Record]:
        state = filter_state or FilterState()
        rows = [record for record in records if self.matches_text(record, state.global_text)]
        for key, accepted in state.per_column.items():
            if _accepts_all(accepted):
                continue
            rows = [record for record in rows if self.matches_column(record, key, accepted)]
        for predicate in predicates:
            rows = [record for record in rows if predicate(record)]
        return rows

    def sort(self, rows: list[Record], sort_state: SortState | None = None) -> list[Record]:
        if sort_state is None or not sort_state.column_key:
            return list(rows)
        column = self.column(sort_state.column_key)
        if column is None or not column.sortable:
            return list(rows)

        def _sort_key(record: Record) -> str:
            value = read_field(record, column.key)
            return "" if value is None else str(value).lower()

        return sorted(rows, key=_sort_key, reverse=sort_state.direction == SORT_DESC)

    def paginate(self, rows: list[Record], page_state: PageState) -> tuple[list[Record], int, int]:
        total_pages = total_pages_for(len(rows), page_state.page_size)
        page_index = min(max(0, page_state.page_index), total_pages - 1)
        start = page_index * page_state.page_size
        return rows[start : start + page_state.page_size], page_index, total_pages

    def apply(
        self,
        records: Iterable[Record],
        filter_state: FilterState | None = None,
        sort_state: SortState | None = None,
        page_state: PageState | None = None,
        *,
        predicates: Sequence[RecordPredicate] = (),
        is_demo_data: bool = False,
    ) -> TabularResult:
        filtered = self.sort(self.filter(records, filter_state, predicates), sort_state)
        visible, page_index, total_pages = self.paginate(filtered, page_state or PageState())
        return TabularResult(
            visible_rows=visible,
            total_filtered_count=len(filtered),
            total_pages=total_pages,
            page_index=page_index,
            filtered_rows=filtered,
            is_demo_data=is_demo_data,
        )

    def render_rows(self, rows: Iterable[Record]) -> list[list[str]]:
        return [[column.display(record) for column in self.columns] for record in rows]


def summarize(records: Iterable[Record], key: str, *, normalize: Callable[[Any], str] | None = None) -> dict[str, int]:
    """Count records per value of ``key``; missing values count under the placeholder."""
    counts: Counter[str] = Counter()
    for record in records:
        value = read_field(record, key)
        if is_missing(value):
            counts[EMPTY_VALUE] += 1
        else:
            counts[normalize(value) if normalize else str(value)] += 1
    return dict(counts)
