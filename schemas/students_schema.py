# schemas/students_schema.py
from __future__ import annotations

from sqlalchemy import text as sa_text
from sqlalchemy.engine import Engine
import logging

log = logging.getLogger(__name__)


def install_schema(engine: Engine) -> None:
    """
    Create (if missing) all student-related tables and indexes.
    Idempotent: safe to re-run.

    Column "group" is a reserved word, hence group_name.
    """
    ddl = [
        # 1) Student roster
        """
        CREATE TABLE IF NOT EXISTS students (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            phone TEXT,
            course TEXT NOT NULL,
            group_name TEXT NOT NULL,
            balance REAL NOT NULL DEFAULT 0,
            status TEXT NOT NULL DEFAULT 'active',
            -- 'active' | 'inactive' | 'pending'
            progress INTEGER DEFAULT 0,
            last_attendance TEXT
        )
        """,

        # 2) Payments
        """
        CREATE TABLE IF NOT EXISTS payments (
            id TEXT PRIMARY KEY,
            student TEXT NOT NULL,
            amount REAL NOT NULL,
            date TEXT NOT NULL,
            method TEXT NOT NULL,
            -- 'cash' | 'card' | 'online'
            status TEXT NOT NULL DEFAULT 'pending',
            -- 'completed' | 'pending' | 'failed'
            description TEXT
        )
        """,

        # 3) Attendance marks
        """
        CREATE TABLE IF NOT EXISTS attendances (
            id TEXT PRIMARY KEY,
            student TEXT NOT NULL,
            group_name TEXT NOT NULL,
            date TEXT NOT NULL,
            status TEXT NOT NULL
            -- 'present' | 'late' | 'absent'
        )
        """,

        # Helpful indexes
        "CREATE INDEX IF NOT EXISTS idx_students_course     ON students(course)",
        "CREATE INDEX IF NOT EXISTS idx_payments_student    ON payments(student)",
        "CREATE INDEX IF NOT EXISTS idx_attendances_group   ON attendances(group_name, date)",
    ]

    try:
        with engine.begin() as conn:
            for stmt in ddl:
                conn.execute(sa_text(stmt))
        log.info("Student schema installed/verified successfully.")
    except Exception as e:
        log.error(f"Failed to install student schema: {e}")
        raise


# ===========================================================================
# SEED DATA
# ===========================================================================

_FIRST = ["John", "Emma", "Liam", "Olivia", "Noah", "Ava", "Ethan", "Sophia", "Mason", "Isabella",
          "Lucas", "Mia", "Logan", "Amelia", "Jacob", "Harper", "Aiden", "Evelyn", "Elijah", "Abigail",
          "Daniel", "Ella", "Henry", "Grace", "Samuel"]
_LAST = ["Smith", "Johnson", "Garcia", "Martinez", "Lee", "Walker", "Hall", "Young", "King", "Wright",
         "Lopez", "Hill", "Scott", "Green", "Adams", "Baker", "Nelson", "Carter", "Mitchell", "Perez",
         "Roberts", "Turner", "Phillips", "Campbell", "Parker"]
_PLACEMENTS = [
    ("Web Development", "WD-101"),
    ("Web Development", "WD-102"),
    ("Data Science", "DS-201"),
    ("Mobile Development", "MD-301"),
    ("UI/UX Design", "UX-401"),
]
_STATUSES = ["active", "active", "active", "inactive", "pending"]


def demo_students() -> list[dict]:
    """25 deterministic demo students (S001..S025)."""
    out = []
    for i, (first, last) in enumerate(zip(_FIRST, _LAST)):
        course, group = _PLACEMENTS[i % len(_PLACEMENTS)]
        out.append({
            "id": f"S{i + 1:03d}",
            "name": f"{first} {last}",
            "phone": f"+1-555-{1000 + i * 7:04d}",
            "course": course,
            "group_name": group,
            "balance": (i * 137) % 900 - 300,
            "status": _STATUSES[i % len(_STATUSES)],
            "progress": (i * 23) % 101,
            "last_attendance": f"2025-01-{(i % 20) + 1:02d}",
        })
    return out


PAYMENTS = [
    ("P001", "John Smith", 500, "2025-01-05", "card", "completed", "January installment"),
    ("P002", "Emma Johnson", 750, "2025-01-06", "cash", "completed", None),
    ("P003", "Liam Garcia", 1000, "2025-01-08", "online", "pending", "Course deposit"),
    ("P004", "Olivia Martinez", 300, "2025-01-10", "card", "failed", "Card declined"),
    ("P005", "Noah Lee", 1200, "2025-01-12", "online", "completed", None),
    ("P006", "Ava Walker", 450, "2025-01-14", "cash", "pending", None),
]

ATTENDANCES = [
    ("A001", "John Smith", "WD-101", "2025-01-15", "present"),
    ("A002", "Emma Johnson", "WD-102", "2025-01-15", "late"),
    ("A003", "Liam Garcia", "DS-201", "2025-01-15", "absent"),
    ("A004", "Lucas Lopez", "WD-101", "2025-01-15", "present"),
    ("A005", "Mia Hill", "WD-102", "2025-01-15", "present"),
    ("A006", "John Smith", "WD-101", "2025-01-17", "absent"),
    ("A007", "Lucas Lopez", "WD-101", "2025-01-17", "present"),
    ("A008", "Olivia Martinez", "MD-301", "2025-01-16", "present"),
]


def seed_demo_data(engine: Engine) -> None:
    """Seed demo rows once; skipped when students already has data."""
    with engine.begin() as conn:
        existing = conn.execute(sa_text("SELECT COUNT(*) FROM students")).scalar() or 0
        if existing > 0:
            log.info("Student data already present, skipping seed")
            return

        conn.execute(sa_text("""
            INSERT INTO students (id, name, phone, course, group_name, balance, status, progress, last_attendance)
            VALUES (:id, :name, :phone, :course, :group_name, :balance, :status, :progress, :last_attendance)
        """), demo_students())

        conn.execute(sa_text("""
            INSERT INTO payments (id, student, amount, date, method, status, description)
            VALUES (:id, :student, :amount, :date, :method, :status, :description)
        """), [dict(zip(("id", "student", "amount", "date", "method", "status", "description"), p)) for p in PAYMENTS])

        conn.execute(sa_text("""
            INSERT INTO attendances (id, student, group_name, date, status)
            VALUES (:id, :student, :group_name, :date, :status)
        """), [dict(zip(("id", "student", "group_name", "date", "status"), a)) for a in ATTENDANCES])

    log.info("Seeded student demo data")
