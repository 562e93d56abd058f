# screens/lessons.py
from __future__ import annotations

import streamlit as st

from core.crud import EntityScreen, FormField, render_crud_page
from core.formatters import Badge, DateTimeFormat
from core.forms import LESSON_STATUSES
from core.policy import require_page
from core.table_engine import Column
from core.ui import app_context, page_size_for

PAGE_KEY = "Lessons"

SCREEN = EntityScreen(
    page=PAGE_KEY,
    table="lessons",
    title="Lessons",
    subtitle="Schedule and track lessons",
    noun="Lesson",
    columns=[
        Column("id", "Lesson ID", sortable=True),
        Column("course", "Course", sortable=True),
        Column("teacher", "Teacher", sortable=True),
        Column("date_time", "Date & Time", sortable=True, kind="date", formatter=DateTimeFormat()),
        Column("room", "Room"),
        Column("status", "Status", sortable=True,
               formatter=Badge(variants={"scheduled": "outline", "completed": "default", "cancelled": "destructive"})),
    ],
    fields=[
        FormField("course", "Course"),
        FormField("teacher", "Teacher"),
        FormField("date", "Date", widget="date"),
        FormField("time", "Time", widget="time"),
        FormField("room", "Room", placeholder="Room 101"),
        FormField("status", "Status", widget="select", options=LESSON_STATUSES),
        FormField("description", "Description", widget="textarea"),
    ],
    label_field="course",
)


@require_page(PAGE_KEY)
def render():
    try:
        settings, engine = app_context()
        render_crud_page(engine, SCREEN, page_size_for(settings))
    except Exception as e:
        st.error("An unexpected error occurred while rendering the Lessons page.")
        st.exception(e)


render()
