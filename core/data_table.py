# core/data_table.py
# -------------------------------------------------------------------
# Streamlit data table: search box, sortable header, body rows with an
# optional actions column, and a pagination footer.
# - View state (TableState) lives in st.session_state under a
#   per-table namespace, so two tables on one page never collide.
# - All widget callbacks go through bind(); the rerun that follows
#   re-derives the view from the stored state.
# -------------------------------------------------------------------
from __future__ import annotations

from typing import Any, Callable, Mapping, MutableMapping, Optional, Sequence

import streamlit as st

from core.formatters import Cell
from core.table_engine import (
    DEFAULT_PAGE_SIZE,
    Column,
    TableEngine,
    TableState,
    TableView,
    new_state,
)

ActionRenderer = Callable[[Mapping[str, Any], str], None]

TONE_COLORS = {
    "positive": "green",
    "success": "green",
    "negative": "red",
    "danger": "red",
    "info": "blue",
    "warning": "orange",
}
BADGE_COLORS = {
    "default": "blue",
    "secondary": "violet",
    "outline": "gray",
    "destructive": "red",
}
_MD_SPECIAL = str.maketrans({c: "\\" + c for c in "\\$[]*_`~#"})


# ------------------------------------------------------------
# Session-state plumbing (plain MutableMapping, testable without a runtime)
# ------------------------------------------------------------
def state_key(table_id: str) -> str:
    return f"{table_id}__table_state"


def search_key(table_id: str) -> str:
    return f"{table_id}__search"


def load_engine(
    store: MutableMapping[str, Any],
    table_id: str,
    columns: Sequence[Column],
    rows: Sequence[Mapping[str, Any]],
    page_size: Optional[int] = None,
    on_search: Optional[Callable[[str], None]] = None,
    has_actions: bool = False,
) -> TableEngine:
    """Engine for ``table_id`` seeded from stored state (fresh state on first use or page-size change)."""
    size = max(1, int(page_size or DEFAULT_PAGE_SIZE))
    state = store.get(state_key(table_id))
    if not isinstance(state, TableState) or state.page_size != size:
        state = new_state(size)
    return TableEngine(
        columns=columns,
        rows=rows,
        page_size=size,
        on_search=on_search,
        has_actions=has_actions,
        state=state,
    )


def save_engine(store: MutableMapping[str, Any], table_id: str, engine: TableEngine) -> None:
    store[state_key(table_id)] = engine.state


def bind(store: MutableMapping[str, Any], table_id: str, engine: TableEngine, action: str, *args) -> Callable[[], None]:
    """Widget callback: run ``engine.<action>(*args)`` then persist the new state."""
    def _callback():
        getattr(engine, action)(*args)
        save_engine(store, table_id, engine)
    return _callback


def bind_search(store: MutableMapping[str, Any], table_id: str, engine: TableEngine) -> Callable[[], None]:
    def _callback():
        engine.set_search_text(store.get(search_key(table_id)) or "")
        save_engine(store, table_id, engine)
    return _callback


def sync_search(store: MutableMapping[str, Any], table_id: str, engine: TableEngine) -> None:
    """
    Keep the search box and the applied filter in agreement.

    Streamlit drops a widget's key on any run where the widget is not
    drawn, so a returning table finds no box value: refill it from the
    stored filter. A box value that differs from the filter wins.
    """
    key = search_key(table_id)
    if key not in store:
        store[key] = engine.state.search_text
    elif (store[key] or "") != engine.state.search_text:
        engine.set_search_text(store[key] or "")
        save_engine(store, table_id, engine)


def reset_table(store: MutableMapping[str, Any], table_id: str) -> None:
    """Back to empty search / no sort / page 1 (e.g. after the dataset is replaced)."""
    store.pop(state_key(table_id), None)
    store.pop(search_key(table_id), None)


# ------------------------------------------------------------
# Cell markup
# ------------------------------------------------------------
def cell_markdown(cell: Any) -> str:
    if not isinstance(cell, Cell):
        return str(cell).translate(_MD_SPECIAL)
    text = cell.text.translate(_MD_SPECIAL)
    if cell.variant:
        return f":{BADGE_COLORS.get(cell.variant, 'gray')}-background[{text}]"
    if cell.tone in TONE_COLORS:
        return f":{TONE_COLORS[cell.tone]}[**{text}**]"
    return text


# ------------------------------------------------------------
# Renderer
# ------------------------------------------------------------
def render_data_table(
    table_id: str,
    columns: Sequence[Column],
    rows: Sequence[Mapping[str, Any]],
    actions: Optional[ActionRenderer] = None,
    on_search: Optional[Callable[[str], None]] = None,
    page_size: Optional[int] = None,
) -> TableView:
    store = st.session_state
    engine = load_engine(store, table_id, columns, rows, page_size, on_search, has_actions=actions is not None)
    sync_search(store, table_id, engine)

    st.text_input(
        "Search",
        key=search_key(table_id),
        placeholder="Search...",
        label_visibility="collapsed",
        on_change=bind_search(store, table_id, engine),
    )

    view = engine.derive_view()
    save_engine(store, table_id, engine)

    widths = [1.0] * len(columns) + ([1.2] if actions else [])

    with st.container(border=True):
        header = st.columns(widths)
        for i, (slot, cell) in enumerate(zip(header, view.headers)):
            with slot:
                if cell.sortable:
                    st.button(
                        f"{cell.label} {cell.indicator}",
                        key=f"{table_id}__sort__{i}",
                        type="tertiary",
                        on_click=bind(store, table_id, engine, "set_sort", cell.key),
                    )
                else:
                    st.markdown(f"**{cell.label}**")
        if actions:
            header[-1].markdown("**Actions**")

        if view.is_empty:
            st.markdown(
                f"<div style='text-align:center;padding:2rem 0;opacity:0.6'>{view.placeholder}</div>",
                unsafe_allow_html=True,
            )
        else:
            for row in view.rows:
                slots = st.columns(widths)
                for slot, cell in zip(slots, row.cells):
                    slot.markdown(cell_markdown(cell))
                if actions:
                    with slots[-1]:
                        actions(row.source, f"{table_id}__row_{view.state.page}_{row.index}")

    if view.show_pagination:
        summary, first, prev, label, nxt, last = st.columns([4, 1, 1, 2, 1, 1])
        summary.caption(view.summary)
        first.button("«", key=f"{table_id}__first", disabled=not view.can_go_back,
                     on_click=bind(store, table_id, engine, "first_page"))
        prev.button("‹", key=f"{table_id}__prev", disabled=not view.can_go_back,
                    on_click=bind(store, table_id, engine, "prev_page"))
        label.markdown(view.page_label)
        nxt.button("›", key=f"{table_id}__next", disabled=not view.can_go_forward,
                   on_click=bind(store, table_id, engine, "next_page"))
        last.button("»", key=f"{table_id}__last", disabled=not view.can_go_forward,
                    on_click=bind(store, table_id, engine, "last_page"))

    return view
