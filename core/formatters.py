# core/formatters.py
# -------------------------------------------------------------------
# Cell formatters for listing columns.
# Every formatter exposes format(value, row) -> Cell; the table engine
# only ever calls that method.
# -------------------------------------------------------------------
from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from core.table_engine import display_text


@dataclass(frozen=True)
class Cell:
    """Formatted cell: display text plus optional badge variant / colour tone."""
    text: str
    variant: Optional[str] = None
    tone: Optional[str] = None

    def __str__(self) -> str:
        return self.text


def _number(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _grouped(amount: float) -> str:
    if float(amount).is_integer():
        return f"{int(amount):,}"
    return f"{amount:,.2f}"


def _parse_date(value: Any) -> Optional[datetime.date]:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    try:
        return datetime.date.fromisoformat(str(value).strip()[:10])
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class Identity:
    def format(self, value: Any, row: Mapping[str, Any]) -> Cell:
        return Cell(display_text(value))


@dataclass(frozen=True)
class Currency:
    """``$1,500``. With ``signed=True`` negatives / positives get a red / green tone."""
    symbol: str = "$"
    grouping: bool = True
    signed: bool = False

    def format(self, value: Any, row: Mapping[str, Any]) -> Cell:
        amount = _number(value)
        if amount is None:
            return Cell(display_text(value))
        body = _grouped(abs(amount)) if self.grouping else display_text(value).lstrip("-")
        text = f"-{self.symbol}{body}" if amount < 0 else f"{self.symbol}{body}"
        tone = None
        if self.signed:
            tone = "negative" if amount < 0 else "positive" if amount > 0 else None
        return Cell(text, tone=tone)


@dataclass(frozen=True)
class DateFormat:
    """ISO date -> ``Jan 15, 2025`` (``Wed, Jan 15, 2025`` with weekday)."""
    with_weekday: bool = False

    def format(self, value: Any, row: Mapping[str, Any]) -> Cell:
        d = _parse_date(value)
        if d is None:
            return Cell(display_text(value))
        text = f"{d:%b} {d.day}, {d.year}"
        if self.with_weekday:
            text = f"{d:%a}, {text}"
        return Cell(text)


@dataclass(frozen=True)
class DateTimeFormat:
    """``2025-01-15 10:00`` -> ``Wed, Jan 15, 2025 at 10:00``."""

    def format(self, value: Any, row: Mapping[str, Any]) -> Cell:
        raw = display_text(value).strip()
        date_part, _, time_part = raw.replace("T", " ").partition(" ")
        if _parse_date(date_part) is None:
            return Cell(raw)
        day = DateFormat(with_weekday=True).format(date_part, row)
        return Cell(f"{day.text} at {time_part[:5]}" if time_part else day.text)


@dataclass(frozen=True)
class Badge:
    """Enum label rendered as a badge; ``variants`` maps raw value -> badge variant."""
    variants: Dict[str, str] = field(default_factory=dict)
    labels: Dict[str, str] = field(default_factory=dict)
    default_variant: str = "outline"

    def format(self, value: Any, row: Mapping[str, Any]) -> Cell:
        raw = display_text(value)
        return Cell(self.labels.get(raw, raw), variant=self.variants.get(raw, self.default_variant))


@dataclass(frozen=True)
class Percentage:
    """Progress style: >=80 success, >=60 info, >=40 warning, else danger."""

    def format(self, value: Any, row: Mapping[str, Any]) -> Cell:
        pct = _number(value)
        if pct is None:
            return Cell(display_text(value))
        if pct >= 80:
            tone = "success"
        elif pct >= 60:
            tone = "info"
        elif pct >= 40:
            tone = "warning"
        else:
            tone = "danger"
        return Cell(f"{display_text(value)}%", tone=tone)


@dataclass(frozen=True)
class Rating:
    def format(self, value: Any, row: Mapping[str, Any]) -> Cell:
        return Cell(f"★ {display_text(value)}", tone="warning")


@dataclass(frozen=True)
class Emphasis:
    """Raw value, highlighted with a fixed tone (counts, totals)."""
    tone: str = "info"

    def format(self, value: Any, row: Mapping[str, Any]) -> Cell:
        return Cell(display_text(value), tone=self.tone)


FORMATTERS = {
    "identity": Identity,
    "currency": Currency,
    "date": DateFormat,
    "datetime": DateTimeFormat,
    "badge": Badge,
    "percentage": Percentage,
    "rating": Rating,
    "emphasis": Emphasis,
}


def formatter_for(tag: str, **options):
    """Build a formatter by tag, e.g. ``formatter_for("currency", signed=True)``."""
    try:
        return FORMATTERS[tag](**options)
    except KeyError:
        raise ValueError(f"Unknown formatter '{tag}'") from None
