# screens/students.py
from __future__ import annotations

import streamlit as st

from core.crud import EntityScreen, FormField, render_crud_page
from core.formatters import Badge, Currency
from core.forms import STUDENT_STATUSES
from core.policy import require_page
from core.table_engine import Column
from core.ui import app_context, page_size_for

PAGE_KEY = "Students"

SCREEN = EntityScreen(
    page=PAGE_KEY,
    table="students",
    title="Students",
    subtitle="Manage all students in the system",
    noun="Student",
    columns=[
        Column("id", "ID", sortable=True),
        Column("name", "Name", sortable=True),
        Column("phone", "Phone"),
        Column("course", "Course", sortable=True),
        Column("group_name", "Group", sortable=True),
        Column("balance", "Balance", sortable=True, kind="number", formatter=Currency(grouping=False, signed=True)),
        Column("status", "Status", sortable=True,
               formatter=Badge(variants={"active": "default", "inactive": "destructive", "pending": "outline"})),
    ],
    fields=[
        FormField("name", "Full Name", placeholder="John Doe"),
        FormField("phone", "Phone", placeholder="+1-555-0000"),
        FormField("course", "Course"),
        FormField("group_name", "Group"),
        FormField("balance", "Balance", widget="number"),
        FormField("status", "Status", widget="select", options=STUDENT_STATUSES),
    ],
    detail_labels={"progress": "Progress (%)", "last_attendance": "Last Attendance"},
)


@require_page(PAGE_KEY)
def render():
    try:
        settings, engine = app_context()
        render_crud_page(engine, SCREEN, page_size_for(settings))
    except Exception as e:
        st.error("An unexpected error occurred while rendering the Students page.")
        st.exception(e)


render()
