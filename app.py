# app.py
# -------------------------------------------------------------------
# Entry point: `streamlit run app.py`
# - Demo sign-in by role (admin / teacher).
# - Sidebar navigation limited to the pages the role may view.
# -------------------------------------------------------------------
from __future__ import annotations

import logging
import sys
from pathlib import Path

import streamlit as st

project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from core.policy import DEMO_USERS, current_user, home_page_for, sign_in, sign_out, user_roles, visible_pages_for
from core.settings import load_settings
from core.ui import render_footer_global

PAGE_FILES = {
    "Dashboard": ("screens/dashboard.py", "📊"),
    "Students": ("screens/students.py", "👥"),
    "Teachers": ("screens/teachers.py", "🎓"),
    "Courses": ("screens/courses.py", "📚"),
    "Lessons": ("screens/lessons.py", "📅"),
    "Payments": ("screens/payments.py", "💳"),
    "Attendances": ("screens/attendances.py", "✅"),
    "Groups": ("screens/groups.py", "🧑‍🤝‍🧑"),
    "Teacher Dashboard": ("screens/teacher_dashboard.py", "📊"),
    "My Students": ("screens/my_students.py", "👥"),
    "My Attendances": ("screens/my_attendances.py", "✅"),
    "Settings": ("screens/settings.py", "⚙️"),
}


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _login(app_name: str) -> None:
    st.title(f"🎓 {app_name}")
    st.caption("Education administration console")
    role = st.radio("Sign in as", list(DEMO_USERS), format_func=str.title, horizontal=True)
    if st.button("Sign in", type="primary"):
        sign_in(role)
        st.rerun()


def main() -> None:
    settings = load_settings()
    _configure_logging(settings.log_level)
    st.set_page_config(page_title=settings.ui.app_name, page_icon="🎓", layout="wide")

    if not current_user():
        _login(settings.ui.app_name)
        return

    user = current_user()
    roles = user_roles()
    home = home_page_for(roles)
    pages = [
        st.Page(str(project_root / PAGE_FILES[name][0]), title=name.replace("Teacher Dashboard", "Dashboard"),
                icon=PAGE_FILES[name][1], url_path=name.lower().replace(" ", "_"), default=name == home)
        for name in visible_pages_for(roles)
        if name in PAGE_FILES
    ]

    with st.sidebar:
        st.markdown(f"### 🎓 {settings.ui.app_name}")
        st.caption(f"{user.get('name')} · {user.get('title', '')}")
        if st.button("Sign out"):
            sign_out()
            st.rerun()

    nav = st.navigation(pages)
    render_footer_global(settings.ui.app_name)
    nav.run()


main()
