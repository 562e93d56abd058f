# screens/settings.py
from __future__ import annotations

import streamlit as st

from core.policy import can_edit_page, current_user, require_page, user_roles
from core.ui import app_context, page_header, success

PAGE_KEY = "Settings"
PAGE_SIZES = [5, 10, 25, 50]


@require_page(PAGE_KEY)
def render():
    settings, _engine = app_context()
    page_header("Settings", "Manage your account settings and preferences")
    user = current_user()
    can_edit = can_edit_page(PAGE_KEY, user_roles())

    with st.form("settings__profile"):
        st.subheader("Profile Settings")
        c1, c2 = st.columns(2)
        name = c1.text_input("Full Name", value=user.get("name", ""))
        email = c2.text_input("Email", value=user.get("email", ""))
        phone = c1.text_input("Phone", value=user.get("phone", ""))
        c2.text_input("Role", value=user.get("title", ""), disabled=True)
        if st.form_submit_button("Save Changes", disabled=not can_edit):
            # profile lives in the session only
            user.update({"name": name.strip() or user.get("name"), "email": email.strip(), "phone": phone.strip()})
            success("Profile updated")

    st.subheader("Tables")
    current = st.session_state.get("page_size") or settings.ui.page_size
    options = sorted(set(PAGE_SIZES) | {current})
    st.session_state["page_size"] = st.selectbox(
        "Rows per page", options, index=options.index(current), key="settings__page_size"
    )


render()
