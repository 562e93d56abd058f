# core/crud.py
# -------------------------------------------------------------------
# Shared list / view / create / edit / delete page for one entity table.
# The listing goes through the data table; the open "dialog" (mode +
# record id) is kept in session state under a per-table key.
# -------------------------------------------------------------------
from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence

import pandas as pd
import streamlit as st
from sqlalchemy.engine import Engine

from core.data_table import render_data_table
from core.forms import split_composites, validate_record
from core.policy import can_edit_page, user_roles
from core.records import delete_record, fetch_all, fetch_one, insert_record, update_record
from core.table_engine import Column, display_text
from core.ui import handle_error, page_header, removed, success


@dataclass(frozen=True)
class FormField:
    name: str
    label: str
    widget: str = "text"          # text | textarea | number | integer | select | date | time
    options: Sequence[str] = ()
    placeholder: str = ""


@dataclass(frozen=True)
class EntityScreen:
    page: str
    table: str
    title: str
    subtitle: str
    noun: str
    columns: Sequence[Column]
    fields: Sequence[FormField]
    label_field: str = "name"
    detail_labels: Dict[str, str] = field(default_factory=dict)


def _dialog_key(table: str) -> str:
    return f"{table}__dialog"


def open_dialog(table: str, mode: str, record_id: Optional[str] = None):
    def _callback():
        st.session_state[_dialog_key(table)] = {"mode": mode, "id": record_id}
    return _callback


def close_dialog(table: str) -> None:
    st.session_state.pop(_dialog_key(table), None)


# ------------------------------------------------------------
# Form widgets
# ------------------------------------------------------------
def _date_default(raw: Any) -> datetime.date:
    try:
        return datetime.date.fromisoformat(str(raw)[:10])
    except (TypeError, ValueError):
        return datetime.date.today()


def _time_default(raw: Any) -> datetime.time:
    try:
        return datetime.time.fromisoformat(str(raw)[:5])
    except (TypeError, ValueError):
        return datetime.time(9, 0)


def _widget(f: FormField, default: Any, key: str, disabled: bool) -> Any:
    if f.widget == "textarea":
        return st.text_area(f.label, value=display_text(default), key=key, disabled=disabled)
    if f.widget == "number":
        return st.number_input(f.label, value=float(default or 0), step=1.0, key=key, disabled=disabled)
    if f.widget == "integer":
        return st.number_input(f.label, value=int(default or 0), step=1, key=key, disabled=disabled)
    if f.widget == "select":
        options = list(f.options)
        index = options.index(default) if default in options else None
        return st.selectbox(f.label, options, index=index, key=key, disabled=disabled,
                            placeholder=f"Select {f.label.lower()}")
    if f.widget == "date":
        return st.date_input(f.label, value=_date_default(default), key=key, disabled=disabled)
    if f.widget == "time":
        return st.time_input(f.label, value=_time_default(default), key=key, disabled=disabled)
    return st.text_input(f.label, value=display_text(default), key=key, disabled=disabled,
                         placeholder=f.placeholder)


def _render_form(engine: Engine, screen: EntityScreen, mode: str, record: Optional[Dict[str, Any]]) -> None:
    defaults = split_composites(screen.table, record or {})
    title = f"Add New {screen.noun}" if mode == "create" else f"Edit {screen.noun}"
    with st.form(f"{screen.table}__form_{mode}_{(record or {}).get('id', 'new')}"):
        st.subheader(title)
        values = {
            f.name: _widget(f, defaults.get(f.name), f"{screen.table}__f_{mode}_{f.name}", disabled=False)
            for f in screen.fields
        }
        save_col, cancel_col = st.columns(2)
        submitted = save_col.form_submit_button("Save", type="primary")
        cancelled = cancel_col.form_submit_button("Cancel")

    if cancelled:
        close_dialog(screen.table)
        st.rerun()
    if not submitted:
        return

    clean, errors = validate_record(screen.table, values)
    if errors:
        for msg in errors.values():
            st.error(msg)
        return
    try:
        with engine.begin() as conn:
            if mode == "create":
                new_id = insert_record(conn, screen.table, clean)
                success(f"{screen.noun} {new_id} created successfully!")
            else:
                update_record(conn, screen.table, record["id"], clean)
                success(f"{screen.noun} updated successfully!")
    except Exception as e:
        handle_error(e, f"Could not save {screen.noun.lower()}")
        return
    close_dialog(screen.table)
    st.rerun()


def _render_details(screen: EntityScreen, record: Mapping[str, Any]) -> None:
    labels = {c.key: c.label for c in screen.columns}
    labels.update(screen.detail_labels)
    details = pd.DataFrame(
        [{"Field": labels.get(k, k.replace("_", " ").title()), "Value": display_text(v)} for k, v in record.items()]
    )
    with st.container(border=True):
        st.subheader(f"View {screen.noun}")
        st.dataframe(details, hide_index=True, use_container_width=True)
        if st.button("Close", key=f"{screen.table}__close_view"):
            close_dialog(screen.table)
            st.rerun()


def _render_delete(engine: Engine, screen: EntityScreen, record: Mapping[str, Any]) -> None:
    label = record.get(screen.label_field) or record.get("id")
    with st.container(border=True):
        st.subheader(f"Delete {screen.noun}")
        st.warning(f"Are you sure you want to delete {label}? This action cannot be undone.")
        yes, no = st.columns(2)
        if yes.button("Delete", type="primary", key=f"{screen.table}__confirm_delete"):
            try:
                with engine.begin() as conn:
                    delete_record(conn, screen.table, record["id"])
            except Exception as e:
                handle_error(e, f"Could not delete {screen.noun.lower()}")
                return
            removed(f"{screen.noun} deleted successfully!")
            close_dialog(screen.table)
            st.rerun()
        if no.button("Cancel", key=f"{screen.table}__cancel_delete"):
            close_dialog(screen.table)
            st.rerun()


# ------------------------------------------------------------
# Page
# ------------------------------------------------------------
def row_actions(screen: EntityScreen, can_edit: bool):
    def _actions(row: Mapping[str, Any], key: str) -> None:
        view_col, edit_col, delete_col = st.columns(3)
        view_col.button("👁", key=f"{key}__view", help="View",
                        on_click=open_dialog(screen.table, "view", row["id"]))
        edit_col.button("✏️", key=f"{key}__edit", help="Edit", disabled=not can_edit,
                        on_click=open_dialog(screen.table, "edit", row["id"]))
        delete_col.button("🗑", key=f"{key}__delete", help="Delete", disabled=not can_edit,
                          on_click=open_dialog(screen.table, "delete", row["id"]))
    return _actions


def render_crud_page(engine: Engine, screen: EntityScreen, page_size: int) -> None:
    can_edit = can_edit_page(screen.page, user_roles())
    head, add = st.columns([4, 1])
    with head:
        page_header(screen.title, screen.subtitle)
    with add:
        st.button(f"➕ Add {screen.noun}", key=f"{screen.table}__add", disabled=not can_edit,
                  on_click=open_dialog(screen.table, "create"))

    dialog = st.session_state.get(_dialog_key(screen.table)) or {}
    mode = dialog.get("mode")
    if mode:
        record = None
        if dialog.get("id"):
            with engine.connect() as conn:
                record = fetch_one(conn, screen.table, dialog["id"])
            if record is None:
                st.info(f"{screen.noun} {dialog['id']} no longer exists.")
                close_dialog(screen.table)
                mode = None
        if mode == "view":
            _render_details(screen, record)
        elif mode in ("create", "edit") and can_edit:
            _render_form(engine, screen, mode, record)
        elif mode == "delete" and can_edit:
            _render_delete(engine, screen, record)

    try:
        with engine.connect() as conn:
            rows = fetch_all(conn, screen.table)
    except Exception as e:
        handle_error(e, f"Failed to load {screen.title.lower()}")
        return

    render_data_table(
        screen.table,
        screen.columns,
        rows,
        actions=row_actions(screen, can_edit),
        page_size=page_size,
    )
