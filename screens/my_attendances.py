# screens/my_attendances.py
from __future__ import annotations

import streamlit as st

from core.data_table import render_data_table
from core.formatters import formatter_for
from core.forms import ATTENDANCE_STATUSES, validate_record
from core.policy import can_edit_page, current_user, require_page, user_roles
from core.records import fetch_all, insert_record
from core.reports import attendance_summary, groups_for_teacher
from core.table_engine import Column
from core.ui import app_context, handle_error, page_header, page_size_for, success

PAGE_KEY = "My Attendances"

COLUMNS = [
    Column("date", "Date", sortable=True, kind="date", formatter=formatter_for("date")),
    Column("group_name", "Group", sortable=True),
    Column("present", "Present", sortable=True, kind="number", formatter=formatter_for("emphasis", tone="positive")),
    Column("late", "Late", sortable=True, kind="number", formatter=formatter_for("emphasis", tone="warning")),
    Column("absent", "Absent", sortable=True, kind="number", formatter=formatter_for("emphasis", tone="negative")),
]


def _mark_attendance(engine, group_names) -> None:
    with st.expander("➕ Mark Attendance", expanded=False):
        with st.form("my_attendances__mark"):
            student = st.text_input("Student")
            group = st.selectbox("Group", group_names, index=None, placeholder="Select group")
            date = st.date_input("Date")
            status = st.selectbox("Status", ATTENDANCE_STATUSES)
            submitted = st.form_submit_button("Save", type="primary")
        if not submitted:
            return
        clean, errors = validate_record(
            "attendances", {"student": student, "group_name": group, "date": date, "status": status}
        )
        if errors:
            for msg in errors.values():
                st.error(msg)
            return
        try:
            with engine.begin() as conn:
                insert_record(conn, "attendances", clean)
        except Exception as e:
            handle_error(e, "Could not mark attendance")
            return
        success(f"Attendance marked for {clean['student']}")
        st.rerun()


@require_page(PAGE_KEY)
def render():
    try:
        settings, engine = app_context()
        user = current_user()
        page_header("My Attendances", "Track attendance records for your classes")

        with engine.connect() as conn:
            groups = [g["name"] for g in groups_for_teacher(fetch_all(conn, "student_groups"), user.get("name", ""))]
            marks = [a for a in fetch_all(conn, "attendances") if a.get("group_name") in groups]

        if can_edit_page(PAGE_KEY, user_roles()):
            _mark_attendance(engine, groups)

        render_data_table("my_attendances", COLUMNS, attendance_summary(marks), page_size=page_size_for(settings))
    except Exception as e:
        st.error("An unexpected error occurred while rendering My Attendances.")
        st.exception(e)


render()
