from __future__ import annotations

from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date, datetime


@dataclass(frozen=True, order=True)
class MonthCursor:
    """The selected month. Moves one month at a time within date's range."""
    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}.")
        if not MINYEAR <= self.year <= MAXYEAR:
            raise ValueError(f"Year must be between {MINYEAR} and {MAXYEAR}, got {self.year}.")

    @classmethod
    def from_date(cls, value: date | datetime) -> "MonthCursor":
        return cls(value.year, value.month)

    @classmethod
    def parse(cls, text: str) -> "MonthCursor":
        """Parse 'YYYY-MM'."""
        try:
            year, month = map(int, text.split("-"))
        except ValueError:
            raise ValueError(f"Expected YYYY-MM, got '{text}'.")
        return cls(year, month)

    def shift(self, months: int) -> "MonthCursor":
        month_index = self.month - 1 + months
        year = self.year + month_index // 12
        month = month_index % 12 + 1
        return MonthCursor(year, month)

    def next(self) -> "MonthCursor":
        return self.shift(1)

    def previous(self) -> "MonthCursor":
        return self.shift(-1)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
