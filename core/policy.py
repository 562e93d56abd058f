# core/policy.py
# -------------------------------------------------------------------
# Page access by role, plus the demo sign-in that decides the role.
# There is no authentication backend: signing in picks one of the
# DEMO_USERS accounts and keeps a copy in the session.
# -------------------------------------------------------------------
from __future__ import annotations

import functools
from typing import Any, Callable, Dict, List, Optional, Set

import streamlit as st

USER_KEY = "user"
PUBLIC = "public"

ADMIN_PAGES = ["Dashboard", "Students", "Teachers", "Courses", "Lessons", "Payments", "Attendances", "Groups"]
TEACHER_PAGES = ["Teacher Dashboard", "My Students", "My Attendances"]
SHARED_PAGES = ["Settings"]

# Teachers may only record attendance; every other teacher page is read-only.
PAGE_ACCESS: Dict[str, Dict[str, Set[str]]] = {
    **{p: {"view": {"admin"}, "edit": {"admin"}} for p in ADMIN_PAGES},
    **{p: {"view": {"teacher"}, "edit": set()} for p in TEACHER_PAGES},
    **{p: {"view": {"admin", "teacher"}, "edit": {"admin", "teacher"}} for p in SHARED_PAGES},
}
PAGE_ACCESS["My Attendances"]["edit"] = {"teacher"}

DEMO_USERS: Dict[str, Dict[str, Any]] = {
    "admin": {
        "name": "Admin User",
        "email": "admin@crm.com",
        "phone": "+1-555-0000",
        "role": "admin",
        "title": "Administrator",
    },
    "teacher": {
        "name": "Dr. Robert Chen",
        "email": "robert.chen@crm.com",
        "phone": "+1-555-0101",
        "role": "teacher",
        "title": "Teacher",
        "course": "Web Development",
    },
}


def sign_in(role: str) -> Dict[str, Any]:
    """Start a session as the demo account for ``role``."""
    if role not in DEMO_USERS:
        raise ValueError(f"No demo account for role '{role}'")
    st.session_state[USER_KEY] = dict(DEMO_USERS[role])
    return st.session_state[USER_KEY]


def sign_out() -> None:
    st.session_state.pop(USER_KEY, None)


def current_user() -> Dict[str, Any]:
    """The signed-in demo account (editable copy), or {} before sign-in."""
    return st.session_state.get(USER_KEY) or {}


def roles_of(user: Dict[str, Any]) -> Set[str]:
    role = user.get("role")
    return {role} if role in DEMO_USERS else {PUBLIC}


def user_roles() -> Set[str]:
    return roles_of(current_user())


def can_view_page(page_name: str, roles: Set[str]) -> bool:
    # pages missing from PAGE_ACCESS are open to everyone
    allowed = PAGE_ACCESS.get(page_name, {}).get("view")
    return not allowed or bool(roles & allowed)


def can_edit_page(page_name: str, roles: Set[str]) -> bool:
    return bool(roles & PAGE_ACCESS.get(page_name, {}).get("edit", set()))


def require_page(page_name: str):
    """Stop the script with an error unless the signed-in role may view ``page_name``."""
    def _wrap(fn: Callable):
        @functools.wraps(fn)
        def _inner(*args, **kwargs):
            if not can_view_page(page_name, user_roles()):
                st.error(f"Access denied: your role cannot open {page_name}.")
                st.stop()
            return fn(*args, **kwargs)
        return _inner
    return _wrap


def visible_pages_for(roles: Set[str]) -> List[str]:
    return [p for p in PAGE_ACCESS if can_view_page(p, roles)]


def home_page_for(roles: Set[str]) -> Optional[str]:
    """First page a role lands on after sign-in."""
    pages = visible_pages_for(roles)
    return pages[0] if pages else None
