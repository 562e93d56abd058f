# core/reports.py
# Aggregates behind the dashboards and the teacher attendance sheet.
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence

import pandas as pd

from core.forms import ATTENDANCE_STATUSES


def attendance_summary(rows: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    One row per (date, group) with present / late / absent counts,
    newest date first.
    """
    if not rows:
        return []
    df = pd.DataFrame(list(rows))
    counts = (
        df.assign(n=1)
        .pivot_table(index=["date", "group_name"], columns="status", values="n", aggfunc="sum", fill_value=0)
        .reindex(columns=list(ATTENDANCE_STATUSES), fill_value=0)
        .reset_index()
        .sort_values(["date", "group_name"], ascending=[False, True], kind="stable")
    )
    counts.columns.name = None
    return [
        {
            "date": r["date"],
            "group_name": r["group_name"],
            **{s: int(r[s]) for s in ATTENDANCE_STATUSES},
        }
        for r in counts.to_dict("records")
    ]


def admin_totals(
    students: Sequence[Mapping[str, Any]],
    teachers: Sequence[Mapping[str, Any]],
    courses: Sequence[Mapping[str, Any]],
    payments: Sequence[Mapping[str, Any]],
) -> Dict[str, Any]:
    pay = pd.DataFrame(list(payments), columns=["amount", "status"])
    amounts = pd.to_numeric(pay["amount"], errors="coerce").fillna(0)
    return {
        "students": len(students),
        "active_students": sum(1 for s in students if s.get("status") == "active"),
        "teachers": len(teachers),
        "courses": len(courses),
        "revenue": float(amounts[pay["status"] == "completed"].sum()),
        "pending": float(amounts[pay["status"] == "pending"].sum()),
    }


def students_for_course(students: Sequence[Mapping[str, Any]], course: str) -> List[Mapping[str, Any]]:
    return [s for s in students if s.get("course") == course]


def groups_for_teacher(groups: Sequence[Mapping[str, Any]], teacher: str) -> List[Mapping[str, Any]]:
    return [g for g in groups if g.get("teacher") == teacher]
