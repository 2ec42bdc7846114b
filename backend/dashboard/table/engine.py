"""
Table Engine - search, sort and paginate a record collection.

Pipeline, applied in this order on every render:
1. Filter: keep records whose ``search_key`` value contains the search term
   (case-insensitive). Empty values never match.
2. Sort: stable sort on the active column; incomparable values tie.
3. Paginate: slice ``[(page - 1) * page_size, page * page_size)``.

No operation raises on user input: page requests are clamped, sort requests
on unknown or unsortable columns are ignored.
"""
from __future__ import annotations

import json
import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import Any

from ..schemas.table import (
    EmptyState,
    PageButton,
    PaginationControls,
    SearchBox,
    TableColumnHeader,
    TableRow,
    TableView,
)

Record = Mapping[str, Any]
RenderStrategy = Callable[[Record], Any]
CompareStrategy = Callable[[Record, Record], int]
ActionsStrategy = Callable[[Record], list[str]]

EMPTY_PLACEHOLDER = "-"
EMPTY_MESSAGE = "No data found"
ACTIONS_KEY = "actions"
PAGE_WINDOW = 5


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortState:
    key: str
    direction: SortDirection = SortDirection.ASC


@dataclass
class TableViewState:
    page: int = 1
    search_term: str = ""
    sort: SortState | None = None


@dataclass(frozen=True)
class Column:
    key: str
    header: str
    render: RenderStrategy | None = None
    sortable: bool = False
    compare: CompareStrategy | None = None  # receives whole records


def stringify(value: Any) -> str:
    if value is None or value == "":
        return EMPTY_PLACEHOLDER
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else stringify(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value)
    return str(value)


def _searchable_text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return stringify(value).lower()


def native_compare(left: Any, right: Any) -> int:
    """Three-way comparison; missing, NaN and mismatched values compare equal."""
    if left is None or right is None:
        return 0
    try:
        if left < right:
            return -1
        if left > right:
            return 1
    except TypeError:
        return 0
    return 0


def page_window(current: int, total_pages: int) -> list[int]:
    """At most five page numbers around ``current``."""
    if total_pages <= PAGE_WINDOW:
        return list(range(1, total_pages + 1))
    if current <= 3:
        start = 1
    elif current >= total_pages - 2:
        start = total_pages - PAGE_WINDOW + 1
    else:
        start = current - 2
    return list(range(start, start + PAGE_WINDOW))


class TableEngine:
    def __init__(
        self,
        data: Sequence[Record],
        columns: Sequence[Column],
        search_key: str | None = None,
        search_placeholder: str = "Search...",
        page_size: int = 10,
        actions: ActionsStrategy | None = None,
        state: TableViewState | None = None,
    ):
        if page_size <= 0:
            raise ValueError("page_size must be greater than 0")
        self.data = list(data)
        self.columns = list(columns)
        self.search_key = search_key
        self.search_placeholder = search_placeholder
        self.page_size = page_size
        self.actions = actions
        self.state = state if state is not None else TableViewState()

    def _column(self, key: str) -> Column | None:
        for column in self.columns:
            if column.key == key:
                return column
        return None

    # ------------------------------------------------------------------
    # controls
    # ------------------------------------------------------------------

    def set_search_term(self, term: str) -> None:
        """Replace the search term; a changed term moves back to page 1."""
        if term != self.state.search_term:
            self.state.page = 1
        self.state.search_term = term

    def set_sort_column(self, key: str) -> None:
        column = self._column(key)
        if column is None or not column.sortable:
            return

        current = self.state.sort
        if current is not None and current.key == key:
            direction = (
                SortDirection.DESC if current.direction == SortDirection.ASC else SortDirection.ASC
            )
            self.state.sort = SortState(key, direction)
        else:
            self.state.sort = SortState(key, SortDirection.ASC)

    def set_page(self, page: int) -> None:
        self.state.page = self._clamp(page)

    def _clamp(self, page: int) -> int:
        return max(1, min(page, max(1, self.total_pages)))

    # ------------------------------------------------------------------
    # pipeline
    # ------------------------------------------------------------------

    def filtered(self) -> list[Record]:
        """Records passing the search filter, in sorted order."""
        rows = self.data
        term = self.state.search_term
        if term and self.search_key:
            needle = term.lower()
            rows = [
                record
                for record in rows
                if (text := _searchable_text(record.get(self.search_key))) is not None
                and needle in text
            ]

        sort = self.state.sort
        if sort is None:
            return list(rows)

        column = self._column(sort.key)
        if column is not None and column.compare is not None:
            compare = column.compare
        else:
            def compare(left: Record, right: Record) -> int:
                return native_compare(left.get(sort.key), right.get(sort.key))

        sign = -1 if sort.direction == SortDirection.DESC else 1
        return sorted(rows, key=cmp_to_key(lambda a, b: sign * compare(a, b)))

    @property
    def total_pages(self) -> int:
        return math.ceil(len(self.filtered()) / self.page_size)

    @property
    def current_page(self) -> int:
        return self._clamp(self.state.page)

    def page_rows(self) -> list[Record]:
        rows = self.filtered()
        start = (self.current_page - 1) * self.page_size
        return rows[start:start + self.page_size]

    # ------------------------------------------------------------------
    # rendering
    # ------------------------------------------------------------------

    def _cell(self, column: Column, record: Record) -> str:
        if column.render is not None:
            rendered = column.render(record)
            # a renderer returning "" keeps the blank cell
            return rendered if rendered == "" else stringify(rendered)
        return stringify(record.get(column.key))

    def _headers(self) -> list[TableColumnHeader]:
        sort = self.state.sort
        headers = [
            TableColumnHeader(
                key=column.key,
                header=column.header,
                sortable=column.sortable,
                sort_direction=(
                    sort.direction.value if sort is not None and sort.key == column.key else None
                ),
            )
            for column in self.columns
        ]
        if self.actions is not None:
            headers.append(TableColumnHeader(key=ACTIONS_KEY, header="Actions"))
        return headers

    def _pagination(self, page: int, total_pages: int, filtered_count: int) -> PaginationControls | None:
        if total_pages <= 1:
            return None
        start = (page - 1) * self.page_size
        end = min(start + self.page_size, filtered_count)
        return PaginationControls(
            summary=f"Showing {start + 1} to {end} of {filtered_count} entries",
            previous_disabled=page == 1,
            next_disabled=page == total_pages,
            pages=[
                PageButton(page=number, active=number == page)
                for number in page_window(page, total_pages)
            ],
        )

    def render(self) -> TableView:
        rows = self.filtered()
        total_pages = math.ceil(len(rows) / self.page_size)
        page = max(1, min(self.state.page, max(1, total_pages)))
        start = (page - 1) * self.page_size
        visible = rows[start:start + self.page_size]

        body = [
            TableRow(
                id=None if record.get("id") is None else str(record.get("id")),
                cells={column.key: self._cell(column, record) for column in self.columns},
                actions=self.actions(record) if self.actions is not None else None,
            )
            for record in visible
        ]

        empty = None
        if not visible:
            empty = EmptyState(
                message=EMPTY_MESSAGE,
                col_span=len(self.columns) + (1 if self.actions is not None else 0),
            )

        search = None
        if self.search_key:
            search = SearchBox(
                key=self.search_key,
                term=self.state.search_term,
                placeholder=self.search_placeholder,
            )

        return TableView(
            headers=self._headers(),
            rows=body,
            empty=empty,
            pagination=self._pagination(page, total_pages, len(rows)),
            search=search,
            page=page,
            page_size=self.page_size,
            total_pages=total_pages,
            filtered_count=len(rows),
            total_count=len(self.data),
        )
