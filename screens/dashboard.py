# screens/dashboard.py
from __future__ import annotations

import streamlit as st

from core.data_table import render_data_table
from core.formatters import formatter_for
from core.policy import current_user, require_page
from core.records import fetch_all
from core.reports import admin_totals
from core.table_engine import Column
from core.ui import app_context, page_header

PAGE_KEY = "Dashboard"

PAYMENT_COLUMNS = [
    Column("student", "Student", sortable=True),
    Column("amount", "Amount", sortable=True, kind="number", formatter=formatter_for("currency")),
    Column("date", "Date", sortable=True, kind="date", formatter=formatter_for("date")),
    Column("status", "Status",
           formatter=formatter_for("badge", variants={"completed": "default", "pending": "outline", "failed": "destructive"})),
]
LESSON_COLUMNS = [
    Column("course", "Course", sortable=True),
    Column("teacher", "Teacher", sortable=True),
    Column("date_time", "When", sortable=True, kind="date", formatter=formatter_for("datetime")),
]


@require_page(PAGE_KEY)
def render():
    try:
        settings, engine = app_context()
        page_header("Dashboard", f"Welcome back, {current_user().get('name', 'Admin')}")

        with engine.connect() as conn:
            students = fetch_all(conn, "students")
            teachers = fetch_all(conn, "teachers")
            courses = fetch_all(conn, "courses")
            payments = fetch_all(conn, "payments")
            lessons = fetch_all(conn, "lessons")

        totals = admin_totals(students, teachers, courses, payments)
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Students", totals["students"], help=f"{totals['active_students']} active")
        c2.metric("Teachers", totals["teachers"])
        c3.metric("Courses", totals["courses"])
        money = formatter_for("currency")
        c4.metric("Revenue", money.format(totals["revenue"], {}).text,
                  help=f"{money.format(totals['pending'], {}).text} pending")

        left, right = st.columns(2)
        with left:
            st.subheader("Recent Payments")
            render_data_table("dash_payments", PAYMENT_COLUMNS, list(reversed(payments)), page_size=5)
        with right:
            st.subheader("Upcoming Lessons")
            upcoming = [l for l in lessons if l.get("status") == "scheduled"]
            render_data_table("dash_lessons", LESSON_COLUMNS, upcoming, page_size=5)
    except Exception as e:
        st.error("An unexpected error occurred while rendering the Dashboard.")
        st.exception(e)


render()
