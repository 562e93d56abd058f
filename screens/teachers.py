# screens/teachers.py
from __future__ import annotations

import streamlit as st

from core.crud import EntityScreen, FormField, render_crud_page
from core.formatters import Badge, Rating
from core.forms import SALARY_TYPES
from core.policy import require_page
from core.table_engine import Column
from core.ui import app_context, page_size_for

PAGE_KEY = "Teachers"

SCREEN = EntityScreen(
    page=PAGE_KEY,
    table="teachers",
    title="Teachers",
    subtitle="Manage teaching staff",
    noun="Teacher",
    columns=[
        Column("id", "ID", sortable=True),
        Column("name", "Name", sortable=True),
        Column("subject", "Subject", sortable=True),
        Column("phone", "Phone"),
        Column("salary_type", "Salary Type", sortable=True,
               formatter=Badge(variants={"monthly": "outline", "hourly": "secondary"})),
        Column("rating", "Rating", sortable=True, kind="number", formatter=Rating()),
    ],
    fields=[
        FormField("name", "Full Name", placeholder="Dr. Jane Doe"),
        FormField("phone", "Phone", placeholder="+1-555-0000"),
        FormField("subject", "Subject"),
        FormField("salary_type", "Salary Type", widget="select", options=SALARY_TYPES),
    ],
)


@require_page(PAGE_KEY)
def render():
    try:
        settings, engine = app_context()
        render_crud_page(engine, SCREEN, page_size_for(settings))
    except Exception as e:
        st.error("An unexpected error occurred while rendering the Teachers page.")
        st.exception(e)


render()
