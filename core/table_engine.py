# core/table_engine.py
# -------------------------------------------------------------------
# Search / sort / pagination engine shared by every listing screen.
# - View state is an immutable TableState; every transition is a pure
#   (state, ...) -> state function.
# - derive_view() recomputes filter -> sort -> paginate from scratch and
#   re-clamps the page so a shrunk result set never shows an empty page.
# -------------------------------------------------------------------
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Callable, List, Mapping, Optional, Sequence

import pandas as pd

logger = logging.getLogger(__name__)

ASC = "asc"
DESC = "desc"
DEFAULT_PAGE_SIZE = 10
NO_DATA_TEXT = "No data found"
COLUMN_KINDS = ("text", "number", "date", "boolean")


# ------------------------------------------------------------
# Column / state types
# ------------------------------------------------------------
@dataclass(frozen=True)
class Column:
    """One column of a listing.

    ``kind`` picks the sort comparator; ``formatter`` is any object with a
    ``format(value, row)`` method (see core/formatters.py).
    """
    key: str
    label: str
    sortable: bool = False
    kind: str = "text"
    formatter: Optional[Any] = None

    def __post_init__(self):
        if self.kind not in COLUMN_KINDS:
            raise ValueError(f"Unknown column kind '{self.kind}' for column '{self.key}'")


@dataclass(frozen=True)
class SortSpec:
    key: str
    direction: str = ASC


@dataclass(frozen=True)
class TableState:
    search_text: str = ""
    sort: Optional[SortSpec] = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


def new_state(page_size: int = DEFAULT_PAGE_SIZE) -> TableState:
    return TableState(page_size=max(1, int(page_size or DEFAULT_PAGE_SIZE)))


# ------------------------------------------------------------
# Pure transitions
# ------------------------------------------------------------
def total_pages_for(count: int, page_size: int) -> int:
    return max(1, math.ceil(count / max(1, page_size)))


def clamp_page(page: int, total_pages: int) -> int:
    return min(max(int(page), 1), max(total_pages, 1))


def with_search_text(state: TableState, text: str) -> TableState:
    """New search text always starts again from page 1."""
    return replace(state, search_text=text or "", page=1)


def with_sort(state: TableState, key: str, columns: Optional[Sequence[Column]] = None) -> TableState:
    """
    Toggle rule: same key while ascending -> descending; anything else ->
    ascending on ``key``. The page is left alone.
    """
    if columns is not None and not any(c.key == key and c.sortable for c in columns):
        logger.debug("Ignoring sort request on non-sortable column %r", key)
        return state
    if state.sort and state.sort.key == key and state.sort.direction == ASC:
        return replace(state, sort=SortSpec(key, DESC))
    return replace(state, sort=SortSpec(key, ASC))


def with_page(state: TableState, page: int, total_pages: int) -> TableState:
    return replace(state, page=clamp_page(page, total_pages))


def first_page(state: TableState, total_pages: int) -> TableState:
    return with_page(state, 1, total_pages)


def prev_page(state: TableState, total_pages: int) -> TableState:
    return with_page(state, state.page - 1, total_pages)


def next_page(state: TableState, total_pages: int) -> TableState:
    return with_page(state, state.page + 1, total_pages)


def last_page(state: TableState, total_pages: int) -> TableState:
    return with_page(state, total_pages, total_pages)


def reset_state(state: TableState) -> TableState:
    return new_state(state.page_size)


# ------------------------------------------------------------
# Filter / sort helpers
# ------------------------------------------------------------
def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def display_text(value: Any) -> str:
    """Default string form of a raw cell value."""
    if _is_missing(value):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _as_bool(value: Any) -> Optional[float]:
    if _is_missing(value):
        return None
    if isinstance(value, str):
        return 1.0 if value.strip().lower() in ("1", "true", "yes", "y") else 0.0
    return 1.0 if value else 0.0


SORT_KEYS: dict[str, Callable[[pd.Series], pd.Series]] = {
    "text": lambda s: s.map(lambda v: None if _is_missing(v) else display_text(v)),
    "number": lambda s: pd.to_numeric(s, errors="coerce"),
    "date": lambda s: pd.to_datetime(s, errors="coerce", format="mixed"),
    "boolean": lambda s: pd.to_numeric(s.map(_as_bool), errors="coerce"),
}


def _frame(rows: Sequence[Mapping[str, Any]]) -> pd.DataFrame:
    # object dtype keeps ints as ints (no 1500 -> "1500.0" when a column has gaps)
    return pd.DataFrame([dict(r) for r in rows], dtype=object)


def filter_positions(rows: Sequence[Mapping[str, Any]], search_text: str) -> List[int]:
    """Positions of rows where any field's display text contains ``search_text`` (case-insensitive)."""
    if not search_text:
        return list(range(len(rows)))
    if not rows:
        return []
    df = _frame(rows)
    if df.columns.empty:
        return []
    needle = search_text.lower()
    texts = df.apply(lambda col: col.map(display_text).str.lower())
    mask = texts.apply(lambda col: col.str.contains(needle, regex=False, na=False)).any(axis=1)
    return [int(i) for i in df.index[mask.to_numpy(dtype=bool)]]


def sort_positions(
    rows: Sequence[Mapping[str, Any]],
    positions: List[int],
    sort: Optional[SortSpec],
    columns: Sequence[Column],
) -> List[int]:
    """Stable sort of ``positions`` by the sort column; missing values go last either way."""
    if sort is None or not positions:
        return positions
    kind = next((c.kind for c in columns if c.key == sort.key), "text")
    values = pd.Series([rows[i].get(sort.key) for i in positions], index=positions, dtype=object)
    keyed = SORT_KEYS[kind](values)
    ordered = keyed.sort_values(ascending=sort.direction != DESC, kind="stable", na_position="last")
    return [int(i) for i in ordered.index]


# ------------------------------------------------------------
# View model
# ------------------------------------------------------------
@dataclass(frozen=True)
class HeaderCell:
    key: str
    label: str
    sortable: bool
    direction: Optional[str] = None

    @property
    def indicator(self) -> str:
        if not self.sortable:
            return ""
        return {ASC: "↑", DESC: "↓"}.get(self.direction or "", "↕")


@dataclass(frozen=True)
class ViewRow:
    index: int
    source: Mapping[str, Any]
    cells: List[Any]


@dataclass(frozen=True)
class TableView:
    headers: List[HeaderCell]
    rows: List[ViewRow]
    state: TableState
    total_count: int
    total_pages: int
    has_actions: bool = False
    placeholder: str = NO_DATA_TEXT

    @property
    def start_item(self) -> int:
        if not self.total_count:
            return 0
        return (self.state.page - 1) * self.state.page_size + 1

    @property
    def end_item(self) -> int:
        return min(self.state.page * self.state.page_size, self.total_count)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def column_span(self) -> int:
        return len(self.headers) + (1 if self.has_actions else 0)

    @property
    def show_pagination(self) -> bool:
        return self.total_pages > 1

    @property
    def can_go_back(self) -> bool:
        return self.state.page > 1

    @property
    def can_go_forward(self) -> bool:
        return self.state.page < self.total_pages

    @property
    def summary(self) -> str:
        return f"Showing {self.start_item} to {self.end_item} of {self.total_count} entries"

    @property
    def page_label(self) -> str:
        return f"Page {self.state.page} of {self.total_pages}"


def render_cell(column: Column, row: Mapping[str, Any]) -> Any:
    value = row.get(column.key)
    if column.formatter is not None:
        return column.formatter.format(value, row)
    return display_text(value)


def derive_view(
    state: TableState,
    rows: Sequence[Mapping[str, Any]],
    columns: Sequence[Column],
    has_actions: bool = False,
) -> TableView:
    """Filter -> sort -> paginate. Pure; the returned view carries the re-clamped state."""
    positions = filter_positions(rows, state.search_text)
    positions = sort_positions(rows, positions, state.sort, columns)

    total_pages = total_pages_for(len(positions), state.page_size)
    state = with_page(state, state.page, total_pages)
    start = (state.page - 1) * state.page_size
    window = positions[start:start + state.page_size]

    direction_for = {state.sort.key: state.sort.direction} if state.sort else {}
    headers = [
        HeaderCell(c.key, c.label, c.sortable, direction_for.get(c.key) if c.sortable else None)
        for c in columns
    ]
    body = [
        ViewRow(index=i, source=rows[pos], cells=[render_cell(c, rows[pos]) for c in columns])
        for i, pos in enumerate(window)
    ]
    return TableView(
        headers=headers,
        rows=body,
        state=state,
        total_count=len(positions),
        total_pages=total_pages,
        has_actions=has_actions,
    )


# ------------------------------------------------------------
# Stateful wrapper (one per table instance)
# ------------------------------------------------------------
@dataclass
class TableEngine:
    columns: Sequence[Column]
    rows: Sequence[Mapping[str, Any]] = field(default_factory=list)
    page_size: int = DEFAULT_PAGE_SIZE
    on_search: Optional[Callable[[str], None]] = None
    has_actions: bool = False
    state: Optional[TableState] = None

    def __post_init__(self):
        if self.state is None:
            self.state = new_state(self.page_size)

    @property
    def total_pages(self) -> int:
        count = len(filter_positions(self.rows, self.state.search_text))
        return total_pages_for(count, self.state.page_size)

    def set_rows(self, rows: Sequence[Mapping[str, Any]]) -> None:
        """Swap the dataset. View state is kept; call reset() to start over."""
        self.rows = rows

    def set_search_text(self, text: str) -> None:
        self.state = with_search_text(self.state, text)
        if self.on_search is not None:
            self.on_search(self.state.search_text)

    def set_sort(self, key: str) -> None:
        self.state = with_sort(self.state, key, self.columns)

    def set_page(self, page: int) -> None:
        self.state = with_page(self.state, page, self.total_pages)

    def first_page(self) -> None:
        self.state = first_page(self.state, self.total_pages)

    def prev_page(self) -> None:
        self.state = prev_page(self.state, self.total_pages)

    def next_page(self) -> None:
        self.state = next_page(self.state, self.total_pages)

    def last_page(self) -> None:
        self.state = last_page(self.state, self.total_pages)

    def reset(self) -> None:
        self.state = reset_state(self.state)

    def derive_view(self) -> TableView:
        view = derive_view(self.state, self.rows, self.columns, self.has_actions)
        self.state = view.state
        return view
