import time
from datetime import datetime
from decimal import Decimal

import pytest

from gofinances.core.models import (
    InvalidRecordError,
    Transaction,
    parse_record,
    to_record,
)


@pytest.fixture
def local_tz(monkeypatch):
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")

    def pin(name):
        monkeypatch.setenv("TZ", name)
        time.tzset()

    yield pin
    monkeypatch.undo()
    time.tzset()


def _raw(**overrides):
    raw = {
        "id": "tx-1",
        "name": "Salary",
        "amount": "1500.00",
        "type": "positive",
        "category": "salary",
        "date": "2024-01-05T12:30:00.000Z",
    }
    raw.update(overrides)
    return raw


def test_parse_record_coerces_stored_shape(local_tz):
    local_tz("UTC")
    tx = parse_record(_raw())
    assert tx == Transaction(
        id="tx-1",
        name="Salary",
        amount=Decimal("1500.00"),
        type="positive",
        category="salary",
        date=datetime(2024, 1, 5, 12, 30),
    )


def test_parse_record_accepts_numeric_amounts_and_naive_dates():
    tx = parse_record(_raw(amount=12.5, date="2024-02-01T08:00:00"))
    assert tx.amount == Decimal("12.5")
    assert tx.date == datetime(2024, 2, 1, 8, 0)


def test_parse_record_converts_offsets_to_local_time(local_tz):
    local_tz("UTC")
    tx = parse_record(_raw(date="2024-03-01T00:30:00-03:00"))
    assert tx.date == datetime(2024, 3, 1, 3, 30)


def test_utc_timestamps_land_in_the_local_month(local_tz):
    local_tz("America/Sao_Paulo")
    tx = parse_record(_raw(date="2024-02-01T02:30:00.000Z"))
    assert tx.date == datetime(2024, 1, 31, 23, 30)


@pytest.mark.parametrize(
    "overrides",
    [
        {"amount": "abc"},
        {"amount": ""},
        {"amount": "NaN"},
        {"amount": "-5"},
        {"amount": "0"},
        {"amount": "1e30"},
        {"amount": "100000000000000000000"},
        {"amount": True},
        {"type": "transfer"},
        {"name": "   "},
        {"date": "yesterday"},
        {"date": 1704456000},
        {"id": None},
        {"category": 7},
    ],
)
def test_parse_record_rejects_malformed_records(overrides):
    with pytest.raises(InvalidRecordError):
        parse_record(_raw(**overrides))


def test_parse_record_rejects_non_objects():
    with pytest.raises(InvalidRecordError):
        parse_record(["tx-1", "Salary"])


def test_parse_record_reports_missing_fields():
    raw = _raw()
    del raw["amount"]
    with pytest.raises(InvalidRecordError, match="Missing amount"):
        parse_record(raw)


def test_to_record_stores_amount_as_text():
    tx = parse_record(_raw(date="2024-01-05T12:30:00"))
    record = to_record(tx)
    assert record["amount"] == "1500.00"
    assert record["date"] == "2024-01-05T12:30:00"
    assert parse_record(record) == tx
