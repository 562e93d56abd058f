# schemas/academics_schema.py
from __future__ import annotations

import logging

from sqlalchemy import text as sa_text
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


def install_schema(engine: Engine) -> None:
    """
    Create (if missing) teachers, courses, groups and lessons.
    Idempotent: safe to re-run.
    """
    ddl = [
        # 1) Teaching staff
        """
        CREATE TABLE IF NOT EXISTS teachers (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            subject TEXT NOT NULL,
            phone TEXT,
            salary_type TEXT NOT NULL DEFAULT 'monthly',
            -- 'monthly' | 'hourly'
            rating REAL DEFAULT 0
        )
        """,

        # 2) Course catalog
        """
        CREATE TABLE IF NOT EXISTS courses (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            duration TEXT NOT NULL,
            price REAL NOT NULL DEFAULT 0,
            students_count INTEGER NOT NULL DEFAULT 0,
            description TEXT
        )
        """,

        # 3) Groups ("groups" is an SQLite keyword)
        """
        CREATE TABLE IF NOT EXISTS student_groups (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            course TEXT NOT NULL,
            teacher TEXT NOT NULL,
            students_count INTEGER NOT NULL DEFAULT 0,
            schedule TEXT
        )
        """,

        # 4) Lessons
        """
        CREATE TABLE IF NOT EXISTS lessons (
            id TEXT PRIMARY KEY,
            course TEXT NOT NULL,
            teacher TEXT NOT NULL,
            date_time TEXT NOT NULL,
            room TEXT,
            status TEXT NOT NULL DEFAULT 'scheduled',
            -- 'scheduled' | 'completed' | 'cancelled'
            description TEXT
        )
        """,

        "CREATE INDEX IF NOT EXISTS idx_groups_course   ON student_groups(course)",
        "CREATE INDEX IF NOT EXISTS idx_lessons_teacher ON lessons(teacher)",
    ]

    try:
        with engine.begin() as conn:
            for stmt in ddl:
                conn.execute(sa_text(stmt))
        logger.info("Academics schema installed/verified.")
    except Exception as e:
        logger.error(f"Failed to install academics schema: {e}", exc_info=True)
        raise


# ===========================================================================
# SEED DATA
# ===========================================================================

TEACHERS = [
    ("T001", "Dr. Robert Chen", "Web Development", "+1-555-0101", "monthly", 4.8),
    ("T002", "Sarah Williams", "Data Science", "+1-555-0102", "monthly", 4.9),
    ("T003", "Michael Brown", "Mobile Development", "+1-555-0103", "hourly", 4.6),
    ("T004", "Emily Davis", "UI/UX Design", "+1-555-0104", "hourly", 4.7),
    ("T005", "James Wilson", "Cloud Computing", "+1-555-0105", "monthly", 4.5),
]

COURSES = [
    ("C001", "Web Development", "6 months", 1500, 45, "Full-stack web development with modern frameworks"),
    ("C002", "Data Science", "8 months", 2000, 32, "Statistics, Python and machine learning fundamentals"),
    ("C003", "Mobile Development", "5 months", 1800, 28, "Cross-platform mobile applications"),
    ("C004", "UI/UX Design", "4 months", 1200, 20, "User research, wireframing and prototyping"),
    ("C005", "Cloud Computing", "6 months", 2200, 15, "Cloud infrastructure and DevOps practices"),
]

GROUPS = [
    ("G001", "WD-101", "Web Development", "Dr. Robert Chen", 15, "Mon, Wed, Fri 10:00-12:00"),
    ("G002", "WD-102", "Web Development", "Dr. Robert Chen", 14, "Tue, Thu 14:00-17:00"),
    ("G003", "DS-201", "Data Science", "Sarah Williams", 16, "Mon, Wed 18:00-21:00"),
    ("G004", "MD-301", "Mobile Development", "Michael Brown", 12, "Tue, Thu 10:00-13:00"),
    ("G005", "UX-401", "UI/UX Design", "Emily Davis", 10, "Sat 10:00-15:00"),
    ("G006", "CC-501", "Cloud Computing", "James Wilson", 8, "Fri 16:00-20:00"),
]

LESSONS = [
    ("L001", "Web Development", "Dr. Robert Chen", "2025-01-15 10:00", "Room 101", "completed", "HTML and CSS basics"),
    ("L002", "Data Science", "Sarah Williams", "2025-01-15 18:00", "Room 202", "completed", "Intro to pandas"),
    ("L003", "Mobile Development", "Michael Brown", "2025-01-16 10:00", "Room 103", "scheduled", "Navigation patterns"),
    ("L004", "Web Development", "Dr. Robert Chen", "2025-01-17 10:00", "Room 101", "scheduled", "JavaScript fundamentals"),
    ("L005", "UI/UX Design", "Emily Davis", "2025-01-18 10:00", "Studio A", "cancelled", "Design systems"),
    ("L006", "Cloud Computing", "James Wilson", "2025-01-17 16:00", "Lab 2", "scheduled", "Containers"),
]


def seed_demo_data(engine: Engine) -> None:
    """Seed demo rows once; skipped when teachers already has data."""
    with engine.begin() as conn:
        existing = conn.execute(sa_text("SELECT COUNT(*) FROM teachers")).scalar() or 0
        if existing > 0:
            logger.info("Academics data already present, skipping seed")
            return

        conn.execute(sa_text("""
            INSERT INTO teachers (id, name, subject, phone, salary_type, rating)
            VALUES (:id, :name, :subject, :phone, :salary_type, :rating)
        """), [dict(zip(("id", "name", "subject", "phone", "salary_type", "rating"), t)) for t in TEACHERS])

        conn.execute(sa_text("""
            INSERT INTO courses (id, name, duration, price, students_count, description)
            VALUES (:id, :name, :duration, :price, :students_count, :description)
        """), [dict(zip(("id", "name", "duration", "price", "students_count", "description"), c)) for c in COURSES])

        conn.execute(sa_text("""
            INSERT INTO student_groups (id, name, course, teacher, students_count, schedule)
            VALUES (:id, :name, :course, :teacher, :students_count, :schedule)
        """), [dict(zip(("id", "name", "course", "teacher", "students_count", "schedule"), g)) for g in GROUPS])

        conn.execute(sa_text("""
            INSERT INTO lessons (id, course, teacher, date_time, room, status, description)
            VALUES (:id, :course, :teacher, :date_time, :room, :status, :description)
        """), [dict(zip(("id", "course", "teacher", "date_time", "room", "status", "description"), l)) for l in LESSONS])

    logger.info("Seeded academics demo data")
