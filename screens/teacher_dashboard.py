# screens/teacher_dashboard.py
from __future__ import annotations

import streamlit as st

from core.data_table import render_data_table
from core.formatters import formatter_for
from core.policy import current_user, require_page
from core.records import fetch_all
from core.reports import groups_for_teacher, students_for_course
from core.table_engine import Column
from core.ui import app_context, page_header

PAGE_KEY = "Teacher Dashboard"

LESSON_COLUMNS = [
    Column("course", "Course", sortable=True),
    Column("date_time", "When", sortable=True, kind="date", formatter=formatter_for("datetime")),
    Column("room", "Room"),
    Column("status", "Status",
           formatter=formatter_for("badge", variants={"scheduled": "outline", "completed": "default", "cancelled": "destructive"})),
]


@require_page(PAGE_KEY)
def render():
    try:
        settings, engine = app_context()
        user = current_user()
        page_header("Dashboard", f"Welcome back, {user.get('name', 'Teacher')}")

        with engine.connect() as conn:
            students = students_for_course(fetch_all(conn, "students"), user.get("course", ""))
            groups = groups_for_teacher(fetch_all(conn, "student_groups"), user.get("name", ""))
            lessons = [l for l in fetch_all(conn, "lessons") if l.get("teacher") == user.get("name")]

        c1, c2, c3 = st.columns(3)
        c1.metric("My Students", len(students))
        c2.metric("My Groups", len(groups))
        c3.metric("Upcoming Lessons", sum(1 for l in lessons if l.get("status") == "scheduled"))

        st.subheader("My Lessons")
        render_data_table("teacher_lessons", LESSON_COLUMNS, lessons, page_size=5)
    except Exception as e:
        st.error("An unexpected error occurred while rendering the Dashboard.")
        st.exception(e)


render()
