"""Totals and per-category breakdowns over a snapshot of transactions.

Everything here is a pure function of its inputs; callers read the snapshot
from storage first and pass the selected month in explicitly.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional, Sequence

from gofinances.core.categories import Category
from gofinances.core.models import NEGATIVE, POSITIVE, Transaction
from gofinances.formatting import format_currency

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class Highlight:
    amount: Decimal
    last_transaction: Optional[datetime]


@dataclass(frozen=True)
class Highlights:
    entries: Highlight
    expenses: Highlight
    # last_transaction is the end of the "01 to <day>" interval: the last expense.
    total: Highlight


@dataclass(frozen=True)
class CategorySpend:
    key: str
    name: str
    color: str
    total: Decimal
    formatted_total: str
    percent: str


def filter_by_month(records: Iterable[Transaction], month: int, year: int) -> List[Transaction]:
    """
    Return only those transactions whose date falls in the given month/year.
    """
    return [tx for tx in records if tx.date.year == year and tx.date.month == month]


def last_transaction_date(records: Iterable[Transaction], tx_type: str) -> Optional[datetime]:
    dates = [tx.date for tx in records if tx.type == tx_type]
    return max(dates) if dates else None


def _sum(records: Iterable[Transaction]) -> Decimal:
    return sum((tx.amount for tx in records), _ZERO)


def compute_highlights(records: Sequence[Transaction]) -> Highlights:
    entries_total = _sum(tx for tx in records if tx.type == POSITIVE)
    expenses_total = _sum(tx for tx in records if tx.type == NEGATIVE)
    last_entry = last_transaction_date(records, POSITIVE)
    last_expense = last_transaction_date(records, NEGATIVE)

    return Highlights(
        entries=Highlight(entries_total, last_entry),
        expenses=Highlight(expenses_total, last_expense),
        total=Highlight(entries_total - expenses_total, last_expense),
    )


def _percent(part: Decimal, whole: Decimal) -> str:
    value = (part / whole * _HUNDRED).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{value}%"


def compute_category_breakdown(
    records: Iterable[Transaction],
    month: int,
    year: int,
    catalog: Sequence[Category],
    *,
    currency: str = "BRL",
    locale: str = "pt_BR",
) -> List[CategorySpend]:
    """Share of a month's expenses per category.

    Results follow catalog order and only categories with spending appear.
    The month total counts every expense in the month, including those whose
    category is missing from the catalog. A month without expenses yields an
    empty list.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}.")

    expenses = [tx for tx in filter_by_month(records, month, year) if tx.type == NEGATIVE]
    month_total = _sum(expenses)
    if month_total == _ZERO:
        return []

    breakdown = []
    for category in catalog:
        category_sum = _sum(tx for tx in expenses if tx.category == category.key)
        if category_sum == _ZERO:
            continue
        breakdown.append(
            CategorySpend(
                key=category.key,
                name=category.name,
                color=category.color,
                total=category_sum,
                formatted_total=format_currency(category_sum, currency, locale),
                percent=_percent(category_sum, month_total),
            )
        )
    return breakdown
