"""Rendered data table, driven through Streamlit's AppTest harness."""
from streamlit.testing.v1 import AppTest

TEACHERS = [
    {"id": "T001", "name": "Dr. Robert Chen"},
    {"id": "T002", "name": "Prof. Sarah Williams"},
    {"id": "T003", "name": "Ms. Emily Rodriguez"},
]
STUDENTS = [{"id": f"S{i:03d}", "name": f"Student {i}"} for i in range(1, 26)]


def table_page():
    import streamlit as st

    from core.data_table import render_data_table
    from core.table_engine import Column

    if st.session_state.get("show_table", True):
        render_data_table(
            "people",
            [Column("id", "ID", sortable=True), Column("name", "Name", sortable=True)],
            st.session_state["rows"],
            page_size=10,
        )


def _app(rows):
    at = AppTest.from_function(table_page)
    at.session_state["rows"] = rows
    return at.run()


def _ids(at):
    return [m.value for m in at.markdown if m.value[:1] in ("S", "T") and m.value[1:].isdigit()]


def _button_keys(at):
    return {b.key for b in at.button}


def test_renders_rows_without_footer_on_single_page():
    at = _app(TEACHERS)
    assert not at.exception
    assert _ids(at) == ["T001", "T002", "T003"]
    assert "people__next" not in _button_keys(at)
    assert not any("No data found" in m.value for m in at.markdown)


def test_no_results_shows_placeholder():
    at = _app(TEACHERS)
    at.text_input(key="people__search").input("nobody").run()
    assert _ids(at) == []
    assert any("No data found" in m.value for m in at.markdown)
    assert "people__next" not in _button_keys(at)


def test_footer_and_page_moves_persist_across_reruns():
    at = _app(STUDENTS)
    assert at.caption[0].value == "Showing 1 to 10 of 25 entries"
    assert at.button(key="people__prev").disabled

    at.button(key="people__next").click().run()
    assert _ids(at)[0] == "S011"
    assert at.caption[0].value == "Showing 11 to 20 of 25 entries"

    at.run()
    assert _ids(at)[0] == "S011"

    at.button(key="people__last").click().run()
    assert _ids(at) == [f"S{i:03d}" for i in range(21, 26)]
    assert at.button(key="people__next").disabled
    assert at.button(key="people__last").disabled


def test_header_click_sorts_and_toggles():
    at = _app(TEACHERS)
    at.button(key="people__sort__1").click().run()
    assert _ids(at) == ["T001", "T003", "T002"]
    assert "↑" in at.button(key="people__sort__1").label

    at.button(key="people__sort__1").click().run()
    assert _ids(at) == ["T002", "T003", "T001"]
    assert "↓" in at.button(key="people__sort__1").label


def test_search_box_and_filter_agree_after_table_is_hidden():
    at = _app(TEACHERS)
    at.text_input(key="people__search").input("chen").run()
    assert _ids(at) == ["T001"]

    at.session_state["show_table"] = False
    at.run()
    at.session_state["show_table"] = True
    at.run()

    assert at.text_input(key="people__search").value == "chen"
    assert _ids(at) == ["T001"]

    at.text_input(key="people__search").input("").run()
    assert _ids(at) == ["T001", "T002", "T003"]
