"""
Calendar month value type used throughout the projection engine.

A YearMonth has no day component. It is ordered, hashable and renders as
"YYYY-MM", which is also how it is stored in the database and sent over
the API.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Any

from pydantic_core import core_schema

YEAR_MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"
_YEAR_MONTH_RE = re.compile(YEAR_MONTH_PATTERN)


@dataclass(frozen=True, order=True, slots=True)
class YearMonth:
    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month out of range: {self.month}")

    @classmethod
    def parse(cls, value: "str | date | YearMonth") -> "YearMonth":
        """Parse "YYYY-MM" strings, dates and YearMonth values."""
        if isinstance(value, YearMonth):
            return value
        if isinstance(value, date):
            return cls(value.year, value.month)
        if isinstance(value, str) and _YEAR_MONTH_RE.match(value.strip()):
            year_str, month_str = value.strip().split("-")
            return cls(int(year_str), int(month_str))
        raise ValueError(f"Could not parse year-month: {value!r}")

    @classmethod
    def from_index(cls, index: int) -> "YearMonth":
        """Inverse of `index`."""
        return cls(index // 12, index % 12 + 1)

    @classmethod
    def from_date(cls, d: date) -> "YearMonth":
        return cls(d.year, d.month)

    @property
    def index(self) -> int:
        """Months since year 0, handy for arithmetic."""
        return self.year * 12 + (self.month - 1)

    def add_months(self, months: int) -> "YearMonth":
        return YearMonth.from_index(self.index + months)

    def months_until(self, other: "YearMonth") -> int:
        """Signed number of months from self to other."""
        return other.index - self.index

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    # Pydantic integration: accept "YYYY-MM" on input, emit it on output.

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any):
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def __get_pydantic_json_schema__(cls, schema: Any, handler: Any) -> dict:
        return {"type": "string", "pattern": YEAR_MONTH_PATTERN, "examples": ["2026-01"]}

    @classmethod
    def _validate(cls, value: Any) -> "YearMonth":
        try:
            return cls.parse(value)
        except (TypeError, ValueError) as e:
            raise ValueError(str(e)) from e


def months_between(start: YearMonth, end: YearMonth) -> int:
    """Number of months from start to end (negative if end is earlier)."""
    return start.months_until(end)


def month_range(start: YearMonth, end: YearMonth) -> list[YearMonth]:
    """Every month from start to end, inclusive."""
    return [start.add_months(i) for i in range(months_between(start, end) + 1)]


def current_year_month(today: date | None = None) -> YearMonth:
    """The month containing `today` (defaults to the system date)."""
    return YearMonth.from_date(today or date.today())
