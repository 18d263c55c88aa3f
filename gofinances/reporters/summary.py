# gofinances/reporters/summary.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from gofinances.aggregation import CategorySpend, compute_category_breakdown
from gofinances.config import Settings
from gofinances.core.categories import Category
from gofinances.core.models import Transaction
from gofinances.formatting import format_month_year
from gofinances.months import MonthCursor


@dataclass(frozen=True)
class SummaryReport:
    """Category breakdown for one month, in catalog order."""
    month: MonthCursor
    month_label: str
    categories: List[CategorySpend]

    def chart_points(self) -> List[Dict[str, object]]:
        return [{"x": item.percent, "y": item.total} for item in self.categories]

    def colors(self) -> List[str]:
        return [item.color for item in self.categories]

    def rows(self) -> List[Dict[str, str]]:
        return [
            {"title": item.name, "amount": item.formatted_total, "color": item.color}
            for item in self.categories
        ]

    @property
    def is_empty(self) -> bool:
        return not self.categories


def build_summary(
    records: Sequence[Transaction],
    month: MonthCursor,
    catalog: Sequence[Category],
    settings: Settings | None = None,
) -> SummaryReport:
    settings = settings or Settings()
    return SummaryReport(
        month=month,
        month_label=format_month_year(month.year, month.month, settings.locale),
        categories=compute_category_breakdown(
            records,
            month.month,
            month.year,
            catalog,
            currency=settings.currency,
            locale=settings.locale,
        ),
    )
