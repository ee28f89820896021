"""Page cursor over a result table.

The cursor is an immutable ``PaginationState`` passed through ``view``,
``next`` and ``prev``; ``Paginator`` just holds the one live table/state pair
for a session.

Two behaviours are literal. The header counts as a row, so
``max_page`` is ``total_rows // page_size``: 20 rows with a page size of 10
allow a third, empty page. And every page renders its first row as the
header, so from the second page on a data row sits in the header slot.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace

from .errors import ValidationError
from .table import Row, Table


@dataclass(frozen=True)
class PaginationState:
    page_size: int
    total_rows: int
    page_index: int = 0

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError("page_size must be greater than 0")
        if self.total_rows < 0:
            raise ValueError("total_rows must not be negative")
        if not 0 <= self.page_index <= self.max_page:
            raise ValueError(
                f"page_index {self.page_index} outside 0..{self.max_page}"
            )

    @property
    def max_page(self) -> int:
        return self.total_rows // self.page_size

    @property
    def page_count(self) -> int:
        return math.ceil(self.total_rows / self.page_size)

    def next(self) -> PaginationState:
        return replace(self, page_index=min(self.page_index + 1, self.max_page))

    def prev(self) -> PaginationState:
        return replace(self, page_index=max(self.page_index - 1, 0))

    def reset(self) -> PaginationState:
        return replace(self, page_index=0)


@dataclass(frozen=True)
class PageView:
    header: Row
    body: list[Row]
    page_index: int
    page_count: int

    def as_dict(self) -> dict:
        return {
            "page": self.page_index + 1,
            "page_count": self.page_count,
            "header": list(self.header),
            "rows": [list(row) for row in self.body],
        }


def view(table: Table, state: PaginationState) -> PageView:
    start = state.page_index * state.page_size
    rows = table.rows[start : start + state.page_size]
    return PageView(
        header=rows[0] if rows else [],
        body=rows[1:],
        page_index=state.page_index,
        page_count=state.page_count,
    )


@dataclass
class Paginator:
    page_size: int
    table: Table = field(default_factory=Table)
    state: PaginationState = field(init=False)

    def __post_init__(self) -> None:
        self.state = PaginationState(self.page_size, len(self.table))

    def install(self, table: Table) -> PageView:
        self.table = table
        self.state = PaginationState(self.page_size, len(table))
        return self.view()

    def view(self) -> PageView:
        return view(self.table, self.state)

    def next(self) -> PageView:
        self.state = self.state.next()
        return self.view()

    def prev(self) -> PageView:
        self.state = self.state.prev()
        return self.view()

    def reset(self) -> PageView:
        self.state = self.state.reset()
        return self.view()

    def handle(self, command: str) -> PageView:
        if command == "next":
            return self.next()
        if command == "prev":
            return self.prev()
        raise ValidationError(f"Unknown page command: {command}")
