# screens/my_students.py
from __future__ import annotations

from typing import Any, Mapping

import streamlit as st

from core.data_table import render_data_table
from core.formatters import DateFormat, Percentage
from core.policy import current_user, require_page
from core.records import fetch_all
from core.reports import students_for_course
from core.table_engine import Column, display_text
from core.ui import app_context, page_header, page_size_for

PAGE_KEY = "My Students"
SELECTED = "my_students__selected"

COLUMNS = [
    Column("id", "ID", sortable=True),
    Column("name", "Name", sortable=True),
    Column("group_name", "Group", sortable=True),
    Column("last_attendance", "Last Attendance", sortable=True, kind="date", formatter=DateFormat()),
    Column("progress", "Progress", sortable=True, kind="number", formatter=Percentage()),
]


def _select(row_id: str):
    def _callback():
        st.session_state[SELECTED] = row_id
    return _callback


def _actions(row: Mapping[str, Any], key: str) -> None:
    st.button("👁", key=f"{key}__view", help="View", on_click=_select(row["id"]))


@require_page(PAGE_KEY)
def render():
    try:
        settings, engine = app_context()
        user = current_user()
        page_header("My Students", f"Students enrolled in {user.get('course', 'your course')}")

        with engine.connect() as conn:
            students = students_for_course(fetch_all(conn, "students"), user.get("course", ""))

        selected = next((s for s in students if s["id"] == st.session_state.get(SELECTED)), None)
        if selected:
            with st.container(border=True):
                st.subheader(selected["name"])
                st.write(f"**Phone:** {display_text(selected.get('phone'))}")
                st.write(f"**Group:** {display_text(selected.get('group_name'))}")
                st.write(f"**Last attendance:** {DateFormat().format(selected.get('last_attendance'), selected).text}")
                st.progress(min(max(int(selected.get("progress") or 0), 0), 100) / 100,
                            text=Percentage().format(selected.get("progress"), selected).text)
                if st.button("Close", key="my_students__close"):
                    st.session_state.pop(SELECTED, None)
                    st.rerun()

        render_data_table("my_students", COLUMNS, students, actions=_actions, page_size=page_size_for(settings))
    except Exception as e:
        st.error("An unexpected error occurred while rendering My Students.")
        st.exception(e)


render()
