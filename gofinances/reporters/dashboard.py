# gofinances/reporters/dashboard.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from gofinances.aggregation import Highlights, compute_highlights
from gofinances.config import Settings
from gofinances.core.categories import Category, find_category
from gofinances.core.models import Transaction
from gofinances.formatting import (
    format_currency,
    format_day_month,
    format_short_date,
    message,
)


@dataclass(frozen=True)
class HighlightCard:
    title: str
    kind: str
    amount: str
    last_transaction: str


@dataclass(frozen=True)
class TransactionRow:
    id: str
    name: str
    amount: str
    type: str
    category: str
    icon: str
    date: str


@dataclass(frozen=True)
class DashboardReport:
    entries: HighlightCard
    expenses: HighlightCard
    total: HighlightCard
    transactions: List[TransactionRow]

    @property
    def highlights(self) -> List[HighlightCard]:
        return [self.entries, self.expenses, self.total]


def _last_label(moment: Optional[datetime], template: str, settings: Settings) -> str:
    if moment is None:
        return message(settings.locale, "no_transactions")
    return message(settings.locale, template, date=format_day_month(moment, settings.locale))


def format_highlights(highlights: Highlights, settings: Settings) -> List[HighlightCard]:
    def money(value):
        return format_currency(value, settings.currency, settings.locale)

    return [
        HighlightCard(
            title=message(settings.locale, "entries"),
            kind="up",
            amount=money(highlights.entries.amount),
            last_transaction=_last_label(highlights.entries.last_transaction, "last_entry", settings),
        ),
        HighlightCard(
            title=message(settings.locale, "expenses"),
            kind="down",
            amount=money(highlights.expenses.amount),
            last_transaction=_last_label(highlights.expenses.last_transaction, "last_expense", settings),
        ),
        HighlightCard(
            title=message(settings.locale, "total"),
            kind="total",
            amount=money(highlights.total.amount),
            last_transaction=_last_label(highlights.total.last_transaction, "interval", settings),
        ),
    ]


def format_transaction(tx: Transaction, catalog: Sequence[Category], settings: Settings) -> TransactionRow:
    category = find_category(catalog, tx.category)
    return TransactionRow(
        id=tx.id,
        name=tx.name,
        amount=format_currency(tx.amount, settings.currency, settings.locale),
        type=tx.type,
        category=category.name if category else tx.category,
        icon=category.icon if category else "",
        date=format_short_date(tx.date, settings.locale),
    )


def build_dashboard(
    records: Sequence[Transaction],
    catalog: Sequence[Category],
    settings: Settings | None = None,
) -> DashboardReport:
    settings = settings or Settings()
    entries, expenses, total = format_highlights(compute_highlights(records), settings)
    return DashboardReport(
        entries=entries,
        expenses=expenses,
        total=total,
        transactions=[format_transaction(tx, catalog, settings) for tx in records],
    )
