import pytest

from core.db import init_db
from core.records import (
    count_records,
    delete_record,
    fetch_all,
    fetch_one,
    insert_record,
    next_record_id,
    update_record,
)


def test_seeded_collections(engine):
    with engine.connect() as conn:
        assert count_records(conn, "students") == 25
        assert count_records(conn, "teachers") == 5
        assert count_records(conn, "courses") == 5
        assert count_records(conn, "student_groups") == 6
        assert count_records(conn, "lessons") == 6
        assert count_records(conn, "payments") == 6
        assert count_records(conn, "attendances") == 8


def test_init_db_is_idempotent(engine):
    init_db(engine)
    with engine.connect() as conn:
        assert count_records(conn, "students") == 25


def test_fetch_all_keeps_insertion_order(engine):
    with engine.connect() as conn:
        rows = fetch_all(conn, "students")
    assert [r["id"] for r in rows[:3]] == ["S001", "S002", "S003"]
    assert set(rows[0]) >= {"name", "course", "group_name", "balance", "status"}


def test_insert_generates_prefixed_id(engine):
    with engine.begin() as conn:
        new_id = insert_record(conn, "students", {
            "name": "Jane Doe", "phone": "+1-555-0199", "course": "Web Development",
            "group_name": "WD-101", "balance": 0, "status": "pending",
        })
        assert new_id == "S026"
        assert fetch_one(conn, "students", "S026")["name"] == "Jane Doe"


def test_next_id_skips_ids_in_use(engine):
    with engine.begin() as conn:
        delete_record(conn, "students", "S003")
        # 24 rows left, but S025 is still taken
        assert next_record_id(conn, "students") == "S026"


def test_next_id_on_empty_table(empty_engine):
    with empty_engine.connect() as conn:
        assert next_record_id(conn, "payments") == "P001"


def test_update_and_delete(engine):
    with engine.begin() as conn:
        assert update_record(conn, "teachers", "T002", {"rating": 5.0})
        assert fetch_one(conn, "teachers", "T002")["rating"] == 5.0
        assert delete_record(conn, "teachers", "T002")
        assert fetch_one(conn, "teachers", "T002") is None
        assert not delete_record(conn, "teachers", "T999")


def test_unknown_table_or_column_rejected(engine):
    with engine.begin() as conn:
        with pytest.raises(ValueError):
            fetch_all(conn, "parents")
        with pytest.raises(ValueError):
            update_record(conn, "students", "S001", {"nickname": "JJ"})
