import pytest

from core.policy import (
    ADMIN_PAGES,
    DEMO_USERS,
    TEACHER_PAGES,
    can_edit_page,
    can_view_page,
    home_page_for,
    roles_of,
    visible_pages_for,
)


def test_admin_pages():
    assert can_view_page("Students", {"admin"})
    assert can_edit_page("Payments", {"admin"})
    assert not can_view_page("Students", {"teacher"})
    assert visible_pages_for({"admin"}) == ADMIN_PAGES + ["Settings"]
    assert home_page_for({"admin"}) == "Dashboard"


def test_teacher_pages():
    assert visible_pages_for({"teacher"}) == TEACHER_PAGES + ["Settings"]
    assert not can_edit_page("My Students", {"teacher"})
    assert can_edit_page("My Attendances", {"teacher"})
    assert can_edit_page("Settings", {"teacher"})
    assert home_page_for({"teacher"}) == "Teacher Dashboard"


def test_anonymous_sees_nothing():
    assert visible_pages_for({"public"}) == []
    assert home_page_for({"public"}) is None


def test_unlisted_page_is_open():
    assert can_view_page("Help", {"public"})


@pytest.mark.parametrize("role", list(DEMO_USERS))
def test_demo_accounts_carry_their_role(role):
    assert roles_of(DEMO_USERS[role]) == {role}


def test_unknown_or_missing_role_is_public():
    assert roles_of({}) == {"public"}
    assert roles_of({"role": "owner"}) == {"public"}
