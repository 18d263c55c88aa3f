from datetime import datetime
from decimal import Decimal

import pytest

from gofinances.aggregation import (
    compute_category_breakdown,
    compute_highlights,
    filter_by_month,
    last_transaction_date,
)
from gofinances.core.categories import DEFAULT_CATEGORIES, load_catalog
from gofinances.core.models import Transaction
from gofinances.storage import parse_transactions

CATALOG = load_catalog(DEFAULT_CATEGORIES)


def _tx(amount, tx_type, when, category="food", name="Item", tx_id=None):
    return Transaction(
        id=tx_id or f"{name}-{when.isoformat()}",
        name=name,
        amount=Decimal(amount),
        type=tx_type,
        category=category,
        date=when,
    )


def test_income_and_single_expense_scenario():
    records = [
        _tx("100", "positive", datetime(2024, 1, 5), category="salary"),
        _tx("40", "negative", datetime(2024, 1, 10), category="food"),
    ]

    highlights = compute_highlights(records)
    assert highlights.entries.amount == Decimal("100")
    assert highlights.expenses.amount == Decimal("40")
    assert highlights.total.amount == Decimal("60")

    breakdown = compute_category_breakdown(records, 1, 2024, CATALOG)
    assert len(breakdown) == 1
    food = breakdown[0]
    assert food.key == "food"
    assert food.name == "Alimentação"
    assert food.color == "#FF872C"
    assert food.total == Decimal("40")
    assert food.formatted_total == "R$ 40,00"
    assert food.percent == "100%"


def test_empty_records_have_zero_amounts_and_no_dates():
    highlights = compute_highlights([])
    for highlight in (highlights.entries, highlights.expenses, highlights.total):
        assert highlight.amount == Decimal("0")
        assert highlight.last_transaction is None


def test_total_is_exact_decimal_difference():
    records = [
        _tx("0.1", "positive", datetime(2024, 1, 1), name="a"),
        _tx("0.2", "positive", datetime(2024, 1, 2), name="b"),
        _tx("0.3", "negative", datetime(2024, 1, 3), name="c"),
        _tx("1999.99", "positive", datetime(2024, 2, 3), name="d"),
        _tx("0.01", "negative", datetime(2024, 2, 4), name="e"),
    ]
    highlights = compute_highlights(records)
    assert highlights.entries.amount == Decimal("2000.29")
    assert highlights.expenses.amount == Decimal("0.31")
    assert highlights.total.amount == highlights.entries.amount - highlights.expenses.amount
    assert highlights.total.amount == Decimal("1999.98")


def test_last_transaction_date_is_maximum_per_type():
    records = [
        _tx("10", "positive", datetime(2024, 3, 2), name="a"),
        _tx("10", "positive", datetime(2024, 3, 20), name="b"),
        _tx("10", "positive", datetime(2024, 3, 9), name="c"),
        _tx("5", "negative", datetime(2024, 2, 28), name="d"),
        _tx("5", "negative", datetime(2024, 1, 31), name="e"),
    ]
    highlights = compute_highlights(records)
    assert highlights.entries.last_transaction == datetime(2024, 3, 20)
    assert highlights.expenses.last_transaction == datetime(2024, 2, 28)
    # The total's interval runs up to the last expense.
    assert highlights.total.last_transaction == datetime(2024, 2, 28)


def test_total_interval_is_empty_without_expenses():
    highlights = compute_highlights([_tx("10", "positive", datetime(2024, 3, 2))])
    assert highlights.entries.last_transaction == datetime(2024, 3, 2)
    assert highlights.expenses.last_transaction is None
    assert highlights.total.last_transaction is None


def test_breakdown_follows_catalog_order_and_skips_zero_categories():
    records = [
        _tx("70", "negative", datetime(2024, 5, 1), category="leisure", name="a"),
        _tx("20", "negative", datetime(2024, 5, 2), category="purchases", name="b"),
        _tx("10", "negative", datetime(2024, 5, 3), category="food", name="c"),
    ]
    breakdown = compute_category_breakdown(records, 5, 2024, CATALOG)

    assert [item.key for item in breakdown] == ["purchases", "food", "leisure"]
    assert [item.percent for item in breakdown] == ["20%", "10%", "70%"]
    assert all(item.total > 0 for item in breakdown)


def test_breakdown_only_counts_expenses_in_selected_month():
    records = [
        _tx("40", "negative", datetime(2024, 1, 10), category="food", name="a"),
        _tx("60", "negative", datetime(2024, 2, 10), category="car", name="b"),
        _tx("60", "negative", datetime(2023, 1, 10), category="car", name="c"),
        _tx("500", "positive", datetime(2024, 1, 5), category="salary", name="d"),
    ]
    breakdown = compute_category_breakdown(records, 1, 2024, CATALOG)
    assert [(item.key, item.total, item.percent) for item in breakdown] == [
        ("food", Decimal("40"), "100%"),
    ]


def test_month_without_expenses_yields_empty_breakdown():
    records = [
        _tx("500", "positive", datetime(2024, 1, 5), category="salary"),
        _tx("40", "negative", datetime(2024, 2, 10), category="food"),
    ]
    assert compute_category_breakdown(records, 1, 2024, CATALOG) == []
    assert compute_category_breakdown([], 1, 2024, CATALOG) == []


def test_percents_add_up_to_about_one_hundred():
    records = [
        _tx("1", "negative", datetime(2024, 4, 1), category="food", name="a"),
        _tx("1", "negative", datetime(2024, 4, 2), category="car", name="b"),
        _tx("1", "negative", datetime(2024, 4, 3), category="studies", name="c"),
    ]
    breakdown = compute_category_breakdown(records, 4, 2024, CATALOG)
    percents = [int(item.percent.rstrip("%")) for item in breakdown]
    assert percents == [33, 33, 33]
    assert abs(sum(percents) - 100) <= len(percents)


def test_percent_rounds_half_up():
    records = [
        _tx("1", "negative", datetime(2024, 4, 1), category="food", name="a"),
        _tx("7", "negative", datetime(2024, 4, 2), category="car", name="b"),
    ]
    breakdown = compute_category_breakdown(records, 4, 2024, CATALOG)
    assert [item.percent for item in breakdown] == ["13%", "88%"]


def test_expenses_outside_catalog_still_count_toward_month_total():
    records = [
        _tx("50", "negative", datetime(2024, 6, 1), category="food", name="a"),
        _tx("50", "negative", datetime(2024, 6, 2), category="pets", name="b"),
    ]
    breakdown = compute_category_breakdown(records, 6, 2024, CATALOG)
    assert [(item.key, item.percent) for item in breakdown] == [("food", "50%")]


def test_breakdown_uses_configured_currency_and_locale():
    records = [_tx("1234.5", "negative", datetime(2024, 6, 1), category="car")]
    breakdown = compute_category_breakdown(
        records, 6, 2024, CATALOG, currency="USD", locale="en_US"
    )
    assert breakdown[0].formatted_total == "$1,234.50"


def test_breakdown_rejects_invalid_month():
    with pytest.raises(ValueError):
        compute_category_breakdown([], 13, 2024, CATALOG)


def test_malformed_record_is_skipped_and_aggregation_completes():
    payload = """[
        {"id": "1", "name": "Salary", "amount": "100", "type": "positive",
         "category": "salary", "date": "2024-01-05T10:00:00.000Z"},
        {"id": "2", "name": "Broken", "amount": "abc", "type": "negative",
         "category": "food", "date": "2024-01-06T10:00:00.000Z"},
        {"id": "3", "name": "Lunch", "amount": "40", "type": "negative",
         "category": "food", "date": "2024-01-10T10:00:00.000Z"}
    ]"""
    records = parse_transactions(payload)
    assert [tx.id for tx in records] == ["1", "3"]

    highlights = compute_highlights(records)
    assert highlights.total.amount == Decimal("60")
    breakdown = compute_category_breakdown(records, 1, 2024, CATALOG)
    assert [(item.key, item.percent) for item in breakdown] == [("food", "100%")]


def test_helpers():
    records = [
        _tx("10", "positive", datetime(2024, 1, 5), name="a"),
        _tx("10", "negative", datetime(2024, 2, 5), name="b"),
    ]
    assert [tx.name for tx in filter_by_month(records, 2, 2024)] == ["b"]
    assert last_transaction_date(records, "negative") == datetime(2024, 2, 5)
    assert last_transaction_date([], "positive") is None
