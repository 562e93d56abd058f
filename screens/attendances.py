# screens/attendances.py
from __future__ import annotations

import streamlit as st

from core.crud import EntityScreen, FormField, render_crud_page
from core.formatters import Badge, DateFormat
from core.forms import ATTENDANCE_STATUSES
from core.policy import require_page
from core.table_engine import Column
from core.ui import app_context, page_size_for

PAGE_KEY = "Attendances"

SCREEN = EntityScreen(
    page=PAGE_KEY,
    table="attendances",
    title="Attendances",
    subtitle="Mark and review student attendance",
    noun="Attendance",
    columns=[
        Column("student", "Student", sortable=True),
        Column("group_name", "Group", sortable=True),
        Column("date", "Date", sortable=True, kind="date", formatter=DateFormat()),
        Column("status", "Status", sortable=True,
               formatter=Badge(variants={"present": "default", "late": "outline", "absent": "destructive"})),
    ],
    fields=[
        FormField("student", "Student"),
        FormField("group_name", "Group"),
        FormField("date", "Date", widget="date"),
        FormField("status", "Status", widget="select", options=ATTENDANCE_STATUSES),
    ],
    label_field="student",
)


@require_page(PAGE_KEY)
def render():
    try:
        settings, engine = app_context()
        render_crud_page(engine, SCREEN, page_size_for(settings))
    except Exception as e:
        st.error("An unexpected error occurred while rendering the Attendances page.")
        st.exception(e)


render()
