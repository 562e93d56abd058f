# screens/courses.py
from __future__ import annotations

import streamlit as st

from core.crud import EntityScreen, FormField, render_crud_page
from core.formatters import Currency, Emphasis
from core.policy import require_page
from core.table_engine import Column
from core.ui import app_context, page_size_for

PAGE_KEY = "Courses"

SCREEN = EntityScreen(
    page=PAGE_KEY,
    table="courses",
    title="Courses",
    subtitle="Manage the course catalog",
    noun="Course",
    columns=[
        Column("id", "ID", sortable=True),
        Column("name", "Course Name", sortable=True),
        Column("duration", "Duration", sortable=True),
        Column("price", "Price", sortable=True, kind="number", formatter=Currency()),
        Column("students_count", "Students", sortable=True, kind="number", formatter=Emphasis("info")),
    ],
    fields=[
        FormField("name", "Course Name"),
        FormField("duration", "Duration", placeholder="6 months"),
        FormField("price", "Price", widget="number"),
        FormField("students_count", "Students Count", widget="integer"),
        FormField("description", "Description", widget="textarea"),
    ],
)


@require_page(PAGE_KEY)
def render():
    try:
        settings, engine = app_context()
        render_crud_page(engine, SCREEN, page_size_for(settings))
    except Exception as e:
        st.error("An unexpected error occurred while rendering the Courses page.")
        st.exception(e)


render()
