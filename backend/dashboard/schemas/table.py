from typing import Literal

from pydantic import Field

from .base import CamelModel


class TableColumnHeader(CamelModel):
    key: str
    header: str
    sortable: bool = False
    sort_direction: Literal["asc", "desc"] | None = None


class TableRow(CamelModel):
    id: str | None = None
    cells: dict[str, str]
    actions: list[str] | None = None


class EmptyState(CamelModel):
    message: str = "No data found"
    col_span: int


class PageButton(CamelModel):
    page: int
    active: bool = False


class PaginationControls(CamelModel):
    summary: str
    previous_disabled: bool
    next_disabled: bool
    pages: list[PageButton] = Field(default_factory=list)


class SearchBox(CamelModel):
    key: str
    term: str
    placeholder: str


class TableView(CamelModel):
    headers: list[TableColumnHeader]
    rows: list[TableRow]
    empty: EmptyState | None = None
    pagination: PaginationControls | None = None
    search: SearchBox | None = None
    page: int
    page_size: int
    total_pages: int
    filtered_count: int
    total_count: int


class SearchRequest(CamelModel):
    term: str = Field(default="", max_length=255)


class SortRequest(CamelModel):
    key: str = Field(..., min_length=1, max_length=100)


class PageRequest(CamelModel):
    page: int
