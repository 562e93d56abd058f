# core/forms.py
# -------------------------------------------------------------------
# Create / edit form rules for every entity screen.
# validate_record() coerces raw widget values and returns
# (clean_record, errors); screens never write when errors is non-empty.
# -------------------------------------------------------------------
from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class FieldRule:
    name: str
    label: str
    kind: str = "text"            # 'text' | 'number' | 'choice' | 'date' | 'time'
    min_length: int = 1
    minimum: Optional[float] = None
    choices: Sequence[str] = ()
    required: bool = True
    message: str = ""

    @property
    def error(self) -> str:
        return self.message or f"{self.label} is required"


STUDENT_STATUSES = ("active", "inactive", "pending")
SALARY_TYPES = ("monthly", "hourly")
LESSON_STATUSES = ("scheduled", "completed", "cancelled")
PAYMENT_METHODS = ("cash", "card", "online")
PAYMENT_STATUSES = ("completed", "pending", "failed")
ATTENDANCE_STATUSES = ("present", "late", "absent")

FORM_RULES: Dict[str, Tuple[FieldRule, ...]] = {
    "students": (
        FieldRule("name", "Name", min_length=2, message="Name must be at least 2 characters"),
        FieldRule("phone", "Phone", min_length=10, message="Phone number must be valid"),
        FieldRule("course", "Course"),
        FieldRule("group_name", "Group"),
        FieldRule("balance", "Balance", kind="number", minimum=0, message="Balance must be positive"),
        FieldRule("status", "Status", kind="choice", choices=STUDENT_STATUSES),
    ),
    "teachers": (
        FieldRule("name", "Name", min_length=2, message="Name must be at least 2 characters"),
        FieldRule("phone", "Phone", min_length=10, message="Phone number must be valid"),
        FieldRule("salary_type", "Salary Type", kind="choice", choices=SALARY_TYPES,
                  message="Salary type is required"),
        FieldRule("subject", "Subject"),
    ),
    "courses": (
        FieldRule("name", "Course Name", min_length=2, message="Course name must be at least 2 characters"),
        FieldRule("duration", "Duration"),
        FieldRule("price", "Price", kind="number", minimum=0, message="Price must be positive"),
        FieldRule("students_count", "Students Count", kind="number", minimum=0,
                  message="Students count must be positive"),
        FieldRule("description", "Description", required=False),
    ),
    "student_groups": (
        FieldRule("name", "Group Name", message="Group name is required"),
        FieldRule("course", "Course"),
        FieldRule("teacher", "Teacher"),
        FieldRule("students_count", "Students Count", kind="number", minimum=0,
                  message="Students count must be positive"),
        FieldRule("schedule", "Schedule"),
    ),
    "lessons": (
        FieldRule("course", "Course"),
        FieldRule("teacher", "Teacher"),
        FieldRule("date", "Date", kind="date"),
        FieldRule("time", "Time", kind="time"),
        FieldRule("room", "Room"),
        FieldRule("status", "Status", kind="choice", choices=LESSON_STATUSES),
        FieldRule("description", "Description", required=False),
    ),
    "payments": (
        FieldRule("student", "Student", message="Student name is required"),
        FieldRule("amount", "Amount", kind="number", minimum=1, message="Amount must be greater than 0"),
        FieldRule("date", "Date", kind="date"),
        FieldRule("method", "Method", kind="choice", choices=PAYMENT_METHODS, message="Method is required"),
        FieldRule("status", "Status", kind="choice", choices=PAYMENT_STATUSES),
        FieldRule("description", "Description", required=False),
    ),
    "attendances": (
        FieldRule("student", "Student", message="Student name is required"),
        FieldRule("group_name", "Group"),
        FieldRule("date", "Date", kind="date"),
        FieldRule("status", "Status", kind="choice", choices=ATTENDANCE_STATUSES),
    ),
}

# form fields folded into a single stored column
COMPOSITES: Dict[str, Dict[str, Tuple[str, ...]]] = {
    "lessons": {"date_time": ("date", "time")},
}


def _number(raw: Any) -> Optional[float]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return raw
    try:
        value = float(str(raw).strip())
    except (TypeError, ValueError):
        return None
    return int(value) if value.is_integer() else value


def _check(rule: FieldRule, raw: Any) -> Tuple[Any, Optional[str]]:
    if rule.kind == "number":
        value = _number(raw)
        if value is None:
            return None, f"{rule.label} must be a number"
        if rule.minimum is not None and value < rule.minimum:
            return value, rule.error
        return value, None

    if isinstance(raw, datetime.time):
        raw = raw.strftime("%H:%M")
    elif isinstance(raw, datetime.date):
        raw = raw.isoformat()
    text = "" if raw is None else str(raw).strip()
    if rule.kind == "choice":
        return text, (None if text in rule.choices else rule.error)
    if not text:
        return None, (rule.error if rule.required else None)
    if len(text) < rule.min_length:
        return text, rule.error
    return text, None


def validate_record(table: str, data: Mapping[str, Any]) -> Tuple[Dict[str, Any], Dict[str, str]]:
    """
    Check ``data`` against the rules for ``table``.

    Returns (record, errors). ``record`` holds only known fields, coerced
    (numbers as int/float, text stripped, composites joined); ``errors``
    maps field name -> message.
    """
    try:
        rules = FORM_RULES[table]
    except KeyError:
        raise ValueError(f"No form rules for '{table}'") from None

    record: Dict[str, Any] = {}
    errors: Dict[str, str] = {}
    for rule in rules:
        value, problem = _check(rule, data.get(rule.name))
        record[rule.name] = value
        if problem:
            errors[rule.name] = problem

    for target, parts in COMPOSITES.get(table, {}).items():
        record[target] = " ".join(str(record.pop(p) or "") for p in parts).strip()
    return record, errors


def split_composites(table: str, record: Mapping[str, Any]) -> Dict[str, Any]:
    """Inverse of the composite join, for pre-filling an edit form."""
    values = dict(record)
    for target, parts in COMPOSITES.get(table, {}).items():
        pieces = str(values.pop(target, "") or "").split(" ", len(parts) - 1)
        pieces += [""] * (len(parts) - len(pieces))
        values.update(zip(parts, pieces))
    return values
