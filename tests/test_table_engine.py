import copy
import math

import pytest

from core.table_engine import (
    ASC,
    DESC,
    Column,
    SortSpec,
    TableEngine,
    TableState,
    derive_view,
    display_text,
    filter_positions,
    first_page,
    last_page,
    new_state,
    next_page,
    prev_page,
    total_pages_for,
    with_page,
    with_search_text,
    with_sort,
)

COLUMNS = [
    Column("id", "ID", sortable=True),
    Column("name", "Name", sortable=True),
    Column("score", "Score", sortable=True, kind="number"),
    Column("notes", "Notes"),
]


def make_rows(n):
    # 37 * i mod 101 is distinct for i in 1..100, so scores never tie
    return [
        {"id": f"S{i:03d}", "name": f"Student {i}", "score": (i * 37) % 101, "notes": ""}
        for i in range(1, n + 1)
    ]


def ids(view):
    return [r.source["id"] for r in view.rows]


# ------------------------------------------------------------
# Pagination
# ------------------------------------------------------------
def test_twenty_five_rows_paginate_into_three_pages():
    view = derive_view(new_state(10), make_rows(25), COLUMNS)

    assert view.total_pages == 3
    assert ids(view) == [f"S{i:03d}" for i in range(1, 11)]
    assert view.summary == "Showing 1 to 10 of 25 entries"
    assert view.page_label == "Page 1 of 3"
    assert view.show_pagination


def test_last_page_holds_the_remainder():
    state = TableState(page=3, page_size=10)
    view = derive_view(state, make_rows(25), COLUMNS)

    assert ids(view) == [f"S{i:03d}" for i in range(21, 26)]
    assert view.summary == "Showing 21 to 25 of 25 entries"
    assert view.can_go_back and not view.can_go_forward


@pytest.mark.parametrize("count", [0, 1, 9, 10, 11, 25, 100])
@pytest.mark.parametrize("page_size", [1, 3, 10])
def test_total_pages_formula(count, page_size):
    view = derive_view(new_state(page_size), make_rows(count), COLUMNS)
    assert view.total_pages == max(1, math.ceil(count / page_size))
    assert total_pages_for(count, page_size) == view.total_pages


def test_next_on_last_page_and_prev_on_first_page_are_noops():
    state = TableState(page=3, page_size=10)
    assert next_page(state, 3) == state
    state = TableState(page=1, page_size=10)
    assert prev_page(state, 3) == state


def test_page_navigation_transitions():
    state = TableState(page=2, page_size=10)
    assert first_page(state, 3).page == 1
    assert prev_page(state, 3).page == 1
    assert next_page(state, 3).page == 3
    assert last_page(state, 3).page == 3


@pytest.mark.parametrize("requested,expected", [(99, 3), (0, 1), (-4, 1), (2, 2)])
def test_jump_clamps_into_range(requested, expected):
    assert with_page(new_state(10), requested, 3).page == expected


def test_engine_set_page_clamps_against_filtered_count():
    engine = TableEngine(columns=COLUMNS, rows=make_rows(25), page_size=10)
    engine.set_page(7)
    assert engine.state.page == 3
    engine.next_page()
    assert engine.state.page == 3
    engine.first_page()
    engine.prev_page()
    assert engine.state.page == 1


def test_shrinking_dataset_reclamps_the_page():
    engine = TableEngine(columns=COLUMNS, rows=make_rows(25), page_size=10)
    engine.last_page()
    assert engine.state.page == 3

    engine.set_rows(make_rows(12))
    view = engine.derive_view()

    assert view.state.page == 2
    assert engine.state.page == 2
    assert ids(view) == ["S011", "S012"]


# ------------------------------------------------------------
# Search
# ------------------------------------------------------------
TEACHERS = [
    {"id": "T001", "name": "Dr. Robert Chen", "subject": "Web Development"},
    {"id": "T002", "name": "Sarah Williams", "subject": "Data Science"},
    {"id": "T003", "name": "Michael Brown", "subject": "Kitchen Management"},
    {"id": "T004", "name": "Emily Davis", "subject": "UI/UX Design"},
]


def test_search_matches_case_insensitive_substring_in_any_field():
    assert filter_positions(TEACHERS, "Chen") == [0, 2]
    assert filter_positions(TEACHERS, "CHEN") == [0, 2]
    assert filter_positions(TEACHERS, "robert chen") == [0]


def test_search_scans_fields_that_are_not_rendered():
    rows = [{"id": "S001", "hidden": "needle"}, {"id": "S002", "hidden": "hay"}]
    view = derive_view(with_search_text(new_state(), "NEEDLE"), rows, [Column("id", "ID")])
    assert ids(view) == ["S001"]


def test_search_matches_numbers_by_their_string_form():
    rows = make_rows(25)
    kept = filter_positions(rows, "84")
    assert [rows[i]["score"] for i in kept] == [84]


@pytest.mark.parametrize("text", ["student 1", "S02", "7", "zzz", "", "Student"])
def test_filtered_rows_are_exactly_the_matching_subset(text):
    rows = make_rows(30)
    kept = set(filter_positions(rows, text))
    for i, row in enumerate(rows):
        matches = any(text.lower() in display_text(v).lower() for v in row.values())
        assert (i in kept) == matches


def test_empty_search_keeps_everything_in_order():
    rows = make_rows(5)
    assert filter_positions(rows, "") == [0, 1, 2, 3, 4]


def test_missing_values_never_match():
    rows = [{"id": "S001", "note": None}, {"id": "S002", "note": "none given"}]
    assert filter_positions(rows, "none") == [1]


def test_no_results_render_placeholder_and_hide_pagination():
    view = derive_view(with_search_text(new_state(10), "nobody"), make_rows(25), COLUMNS, has_actions=True)

    assert view.is_empty
    assert view.total_count == 0
    assert view.total_pages == 1
    assert not view.show_pagination
    assert view.placeholder == "No data found"
    assert view.column_span == len(COLUMNS) + 1


# ------------------------------------------------------------
# Sort
# ------------------------------------------------------------
def test_toggle_cycles_asc_desc_asc_on_the_same_key():
    state = new_state()
    seen = []
    for _ in range(3):
        state = with_sort(state, "score", COLUMNS)
        seen.append(state.sort)
    assert seen == [SortSpec("score", ASC), SortSpec("score", DESC), SortSpec("score", ASC)]


def test_switching_columns_starts_ascending():
    state = with_sort(with_sort(new_state(), "score", COLUMNS), "score", COLUMNS)
    assert with_sort(state, "name", COLUMNS).sort == SortSpec("name", ASC)


def test_sort_request_on_unsortable_column_is_ignored():
    state = with_sort(new_state(), "score", COLUMNS)
    assert with_sort(state, "notes", COLUMNS) is state
    assert with_sort(state, "no_such_column", COLUMNS) is state


def test_numeric_sort_ascending_then_reversed():
    rows = make_rows(25)
    state = with_sort(new_state(100), "score", COLUMNS)
    asc = [r.source["score"] for r in derive_view(state, rows, COLUMNS).rows]
    assert asc == sorted(asc)
    assert asc != [r["score"] for r in rows]

    state = with_sort(state, "score", COLUMNS)
    desc = [r.source["score"] for r in derive_view(state, rows, COLUMNS).rows]
    assert desc == list(reversed(asc))

    state = with_sort(state, "score", COLUMNS)
    assert [r.source["score"] for r in derive_view(state, rows, COLUMNS).rows] == asc


def test_numbers_sort_numerically_not_lexicographically():
    rows = [{"n": 10}, {"n": 9}, {"n": 100}, {"n": -1}]
    state = with_sort(new_state(), "n", [Column("n", "N", sortable=True, kind="number")])
    view = derive_view(state, rows, [Column("n", "N", sortable=True, kind="number")])
    assert [r.source["n"] for r in view.rows] == [-1, 9, 10, 100]


def test_sort_is_stable_for_equal_keys_in_both_directions():
    rows = [
        {"id": "a", "course": "Web"},
        {"id": "b", "course": "Data"},
        {"id": "c", "course": "Web"},
        {"id": "d", "course": "Data"},
    ]
    columns = [Column("id", "ID"), Column("course", "Course", sortable=True)]
    asc = derive_view(TableState(sort=SortSpec("course", ASC)), rows, columns)
    desc = derive_view(TableState(sort=SortSpec("course", DESC)), rows, columns)
    assert ids(asc) == ["b", "d", "a", "c"]
    assert ids(desc) == ["a", "c", "b", "d"]


def test_missing_sort_values_go_last_either_way():
    rows = [{"id": "a", "n": 2}, {"id": "b", "n": None}, {"id": "c", "n": 1}]
    columns = [Column("id", "ID"), Column("n", "N", sortable=True, kind="number")]
    assert ids(derive_view(TableState(sort=SortSpec("n", ASC)), rows, columns)) == ["c", "a", "b"]
    assert ids(derive_view(TableState(sort=SortSpec("n", DESC)), rows, columns)) == ["a", "c", "b"]


def test_date_columns_sort_chronologically():
    rows = [{"id": "a", "d": "2025-01-15 10:00"}, {"id": "b", "d": "2024-12-31"}, {"id": "c", "d": "2025-01-02"}]
    columns = [Column("id", "ID"), Column("d", "Date", sortable=True, kind="date")]
    assert ids(derive_view(TableState(sort=SortSpec("d", ASC)), rows, columns)) == ["b", "c", "a"]


def test_boolean_columns_sort_false_first():
    rows = [{"id": "a", "ok": True}, {"id": "b", "ok": False}, {"id": "c", "ok": True}]
    columns = [Column("id", "ID"), Column("ok", "OK", sortable=True, kind="boolean")]
    assert ids(derive_view(TableState(sort=SortSpec("ok", ASC)), rows, columns)) == ["b", "a", "c"]


def test_unknown_column_kind_is_rejected():
    with pytest.raises(ValueError):
        Column("x", "X", kind="currency")


# ------------------------------------------------------------
# State rules
# ------------------------------------------------------------
def test_search_resets_page_and_sort_keeps_it():
    state = TableState(page=3, page_size=10)
    assert with_search_text(state, "Student").page == 1
    assert with_sort(TableState(page=2), "name", COLUMNS).page == 2


def test_engine_search_fires_hook_and_resets_page():
    heard = []
    engine = TableEngine(columns=COLUMNS, rows=make_rows(25), page_size=10, on_search=heard.append)
    engine.set_page(3)
    engine.set_search_text("Student 2")

    assert heard == ["Student 2"]
    assert engine.state.page == 1
    assert engine.total_pages == 1


def test_engine_reset_restores_defaults():
    engine = TableEngine(columns=COLUMNS, rows=make_rows(25), page_size=5)
    engine.set_search_text("1")
    engine.set_sort("score")
    engine.set_page(2)
    engine.reset()
    assert engine.state == TableState(page_size=5)


def test_derivation_does_not_touch_the_source_rows():
    rows = make_rows(25)
    before = copy.deepcopy(rows)
    state = with_sort(with_search_text(new_state(10), "student"), "score", COLUMNS)
    first = derive_view(state, rows, COLUMNS)
    second = derive_view(state, rows, COLUMNS)

    assert rows == before
    assert ids(first) == ids(second)
    assert first.state == second.state


# ------------------------------------------------------------
# Render model
# ------------------------------------------------------------
class Shout:
    def format(self, value, row):
        return f"{value}!".upper()


def test_headers_reflect_the_active_sort():
    state = with_sort(new_state(), "score", COLUMNS)
    headers = {h.key: h for h in derive_view(state, make_rows(3), COLUMNS).headers}

    assert headers["score"].direction == ASC and headers["score"].indicator == "↑"
    assert headers["name"].direction is None and headers["name"].indicator == "↕"
    assert headers["notes"].indicator == ""


def test_cells_use_formatter_or_default_text():
    rows = [{"id": "S001", "name": "ann", "active": True, "gone": None}]
    columns = [
        Column("name", "Name", formatter=Shout()),
        Column("active", "Active"),
        Column("gone", "Gone"),
    ]
    view = derive_view(new_state(), rows, columns)
    assert view.rows[0].cells == ["ANN!", "true", ""]
    assert view.rows[0].index == 0
