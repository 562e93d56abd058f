# screens/groups.py
from __future__ import annotations

import streamlit as st

from core.crud import EntityScreen, FormField, render_crud_page
from core.formatters import Emphasis
from core.policy import require_page
from core.table_engine import Column
from core.ui import app_context, page_size_for

PAGE_KEY = "Groups"

SCREEN = EntityScreen(
    page=PAGE_KEY,
    table="student_groups",
    title="Groups",
    subtitle="Manage study groups and their schedules",
    noun="Group",
    columns=[
        Column("id", "ID", sortable=True),
        Column("name", "Group Name", sortable=True),
        Column("course", "Course", sortable=True),
        Column("teacher", "Teacher", sortable=True),
        Column("students_count", "Students", sortable=True, kind="number", formatter=Emphasis("info")),
        Column("schedule", "Schedule"),
    ],
    fields=[
        FormField("name", "Group Name", placeholder="WD-103"),
        FormField("course", "Course"),
        FormField("teacher", "Teacher"),
        FormField("students_count", "Students Count", widget="integer"),
        FormField("schedule", "Schedule", placeholder="Mon, Wed 10:00-12:00"),
    ],
)


@require_page(PAGE_KEY)
def render():
    try:
        settings, engine = app_context()
        render_crud_page(engine, SCREEN, page_size_for(settings))
    except Exception as e:
        st.error("An unexpected error occurred while rendering the Groups page.")
        st.exception(e)


render()
