# core/ui.py
from __future__ import annotations

import datetime
import logging
import traceback
from typing import Tuple

import streamlit as st
from sqlalchemy.engine import Engine

from core.db import get_engine, init_db
from core.settings import Settings, load_settings

log = logging.getLogger(__name__)


def app_context() -> Tuple[Settings, Engine]:
    """Settings + ready-to-use engine (schemas installed, demo data seeded once)."""
    settings = load_settings()
    engine = get_engine(settings.db.url)
    init_db(engine, seed=settings.seed_demo_data)
    return settings, engine


def page_header(title: str, subtitle: str = "") -> None:
    st.title(title)
    if subtitle:
        st.caption(subtitle)


def success(message: str) -> None:
    st.toast(message, icon="✅")


def removed(message: str) -> None:
    st.toast(message, icon="🗑️")


def handle_error(e: Exception, message: str) -> None:
    log.error(message, exc_info=True)
    st.error(f"{message}: {e}")
    st.code(traceback.format_exc())


def page_size_for(settings: Settings) -> int:
    """Rows per page: the user's choice on the Settings page, else the configured default."""
    return int(st.session_state.get("page_size") or settings.ui.page_size)


def render_footer_global(app_name: str = "EduCRM") -> None:
    st.sidebar.divider()
    st.sidebar.caption(f"© {datetime.date.today().year} {app_name}")
