# screens/payments.py
from __future__ import annotations

import streamlit as st

from core.crud import EntityScreen, FormField, render_crud_page
from core.formatters import Badge, Currency, DateFormat
from core.forms import PAYMENT_METHODS, PAYMENT_STATUSES
from core.policy import require_page
from core.table_engine import Column
from core.ui import app_context, page_size_for

PAGE_KEY = "Payments"

METHOD_LABELS = {"card": "Credit Card", "cash": "Cash", "online": "Online"}

SCREEN = EntityScreen(
    page=PAGE_KEY,
    table="payments",
    title="Payments",
    subtitle="Track student payments",
    noun="Payment",
    columns=[
        Column("id", "Payment ID", sortable=True),
        Column("student", "Student", sortable=True),
        Column("amount", "Amount", sortable=True, kind="number", formatter=Currency()),
        Column("date", "Date", sortable=True, kind="date", formatter=DateFormat()),
        Column("method", "Method", sortable=True,
               formatter=Badge(labels=METHOD_LABELS, default_variant="secondary")),
        Column("status", "Status", sortable=True,
               formatter=Badge(variants={"completed": "default", "pending": "outline", "failed": "destructive"})),
    ],
    fields=[
        FormField("student", "Student"),
        FormField("amount", "Amount", widget="number"),
        FormField("date", "Date", widget="date"),
        FormField("method", "Method", widget="select", options=PAYMENT_METHODS),
        FormField("status", "Status", widget="select", options=PAYMENT_STATUSES),
        FormField("description", "Description", widget="textarea"),
    ],
    label_field="id",
)


@require_page(PAGE_KEY)
def render():
    try:
        settings, engine = app_context()
        render_crud_page(engine, SCREEN, page_size_for(settings))
    except Exception as e:
        st.error("An unexpected error occurred while rendering the Payments page.")
        st.exception(e)


render()
