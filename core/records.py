# core/records.py
# -------------------------------------------------------------------
# Generic record access for the CRUD screens.
# Table and column names are whitelisted here; values always go
# through bound parameters.
# -------------------------------------------------------------------
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import text as sa_text
from sqlalchemy.engine import Connection

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableDef:
    name: str
    id_prefix: str
    columns: Tuple[str, ...]


TABLES: Dict[str, TableDef] = {
    t.name: t
    for t in (
        TableDef("students", "S", ("id", "name", "phone", "course", "group_name", "balance",
                                   "status", "progress", "last_attendance")),
        TableDef("teachers", "T", ("id", "name", "subject", "phone", "salary_type", "rating")),
        TableDef("courses", "C", ("id", "name", "duration", "price", "students_count", "description")),
        TableDef("student_groups", "G", ("id", "name", "course", "teacher", "students_count", "schedule")),
        TableDef("lessons", "L", ("id", "course", "teacher", "date_time", "room", "status", "description")),
        TableDef("payments", "P", ("id", "student", "amount", "date", "method", "status", "description")),
        TableDef("attendances", "A", ("id", "student", "group_name", "date", "status")),
    )
}


def table_def(table: str) -> TableDef:
    try:
        return TABLES[table]
    except KeyError:
        raise ValueError(f"Unknown table '{table}'") from None


def _clean(tdef: TableDef, data: Mapping[str, Any]) -> Dict[str, Any]:
    unknown = set(data) - set(tdef.columns)
    if unknown:
        raise ValueError(f"Unknown column(s) for {tdef.name}: {', '.join(sorted(unknown))}")
    return dict(data)


def fetch_all(conn: Connection, table: str) -> List[Dict[str, Any]]:
    """All rows of ``table`` in insertion order."""
    tdef = table_def(table)
    rows = conn.execute(sa_text(f"SELECT {', '.join(tdef.columns)} FROM {tdef.name} ORDER BY rowid")).fetchall()
    return [dict(r._mapping) for r in rows]


def fetch_one(conn: Connection, table: str, record_id: str) -> Optional[Dict[str, Any]]:
    tdef = table_def(table)
    row = conn.execute(
        sa_text(f"SELECT {', '.join(tdef.columns)} FROM {tdef.name} WHERE id = :id"),
        {"id": record_id},
    ).fetchone()
    return dict(row._mapping) if row else None


def count_records(conn: Connection, table: str) -> int:
    tdef = table_def(table)
    return int(conn.execute(sa_text(f"SELECT COUNT(*) FROM {tdef.name}")).scalar() or 0)


def next_record_id(conn: Connection, table: str) -> str:
    """Prefix + zero-padded (count + 1), e.g. S026; bumped past ids already taken."""
    tdef = table_def(table)
    n = count_records(conn, table) + 1
    while True:
        candidate = f"{tdef.id_prefix}{n:03d}"
        if fetch_one(conn, table, candidate) is None:
            return candidate
        n += 1


def insert_record(conn: Connection, table: str, data: Mapping[str, Any]) -> str:
    tdef = table_def(table)
    payload = _clean(tdef, data)
    if not payload.get("id"):
        payload["id"] = next_record_id(conn, table)
    cols = list(payload)
    conn.execute(
        sa_text(f"INSERT INTO {tdef.name} ({', '.join(cols)}) VALUES ({', '.join(':' + c for c in cols)})"),
        payload,
    )
    log.info("Inserted %s %s", tdef.name, payload["id"])
    return payload["id"]


def update_record(conn: Connection, table: str, record_id: str, data: Mapping[str, Any]) -> bool:
    tdef = table_def(table)
    changes = {k: v for k, v in _clean(tdef, data).items() if k != "id"}
    if not changes:
        return False
    result = conn.execute(
        sa_text(f"UPDATE {tdef.name} SET {', '.join(f'{k} = :{k}' for k in changes)} WHERE id = :id"),
        {**changes, "id": record_id},
    )
    log.info("Updated %s %s (%s)", tdef.name, record_id, ", ".join(changes))
    return bool(result.rowcount)


def delete_record(conn: Connection, table: str, record_id: str) -> bool:
    tdef = table_def(table)
    result = conn.execute(sa_text(f"DELETE FROM {tdef.name} WHERE id = :id"), {"id": record_id})
    log.info("Deleted %s %s", tdef.name, record_id)
    return bool(result.rowcount)
