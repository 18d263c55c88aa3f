# gofinances/core/models.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

POSITIVE = "positive"
NEGATIVE = "negative"
TRANSACTION_TYPES = (POSITIVE, NEGATIVE)

_REQUIRED_FIELDS = ("id", "name", "amount", "type", "category", "date")
# Amounts at or above 10**20 cannot be quantized to cents within the default context.
MAX_AMOUNT_EXPONENT = 20


class InvalidRecordError(ValueError):
    """Raised when a stored transaction cannot be coerced into a Transaction."""


@dataclass(frozen=True)
class Transaction:
    id: str
    name: str
    amount: Decimal
    type: str
    category: str
    date: datetime

    @property
    def is_income(self) -> bool:
        return self.type == POSITIVE


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str
    photo: Optional[str] = None


def parse_decimal(value: Any) -> Decimal:
    """Parse a stored amount. Accepts str, int, float or Decimal; rejects NaN/inf."""
    if isinstance(value, bool):
        raise InvalidRecordError(f"Amount is not numeric: {value!r}")
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidRecordError(f"Amount is not numeric: {value!r}")
    if not amount.is_finite():
        raise InvalidRecordError(f"Amount is not finite: {value!r}")
    return amount


def amount_in_range(amount: Decimal) -> bool:
    return amount.adjusted() < MAX_AMOUNT_EXPONENT


def parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise InvalidRecordError(f"Unrecognized date: {value!r}")
    else:
        raise InvalidRecordError(f"Unrecognized date: {value!r}")
    # Aware timestamps become naive local time, the clock new records are written in.
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_record(raw: Any) -> Transaction:
    """Validate and coerce one stored record.

    Raises InvalidRecordError for anything that does not describe a complete,
    positive-amount transaction of a known type.
    """
    if not isinstance(raw, dict):
        raise InvalidRecordError(f"Record is not an object: {raw!r}")

    missing = [f for f in _REQUIRED_FIELDS if raw.get(f) is None]
    if missing:
        raise InvalidRecordError(f"Missing {', '.join(missing)} in record: {raw!r}")

    for field in ("id", "name", "type", "category"):
        if not isinstance(raw[field], str):
            raise InvalidRecordError(f"Field '{field}' is not text in record: {raw!r}")

    name = raw["name"].strip()
    if not name:
        raise InvalidRecordError(f"Empty name in record: {raw!r}")

    tx_type = raw["type"]
    if tx_type not in TRANSACTION_TYPES:
        raise InvalidRecordError(f"Unknown type '{tx_type}' in record: {raw!r}")

    amount = parse_decimal(raw["amount"])
    if amount <= 0:
        raise InvalidRecordError(f"Amount must be positive in record: {raw!r}")
    if not amount_in_range(amount):
        raise InvalidRecordError(f"Amount is too large in record: {raw!r}")

    return Transaction(
        id=raw["id"],
        name=name,
        amount=amount,
        type=tx_type,
        category=raw["category"],
        date=parse_timestamp(raw["date"]),
    )


def to_record(tx: Transaction) -> Dict[str, str]:
    return {
        "id": tx.id,
        "name": tx.name,
        "amount": str(tx.amount),
        "type": tx.type,
        "category": tx.category,
        "date": tx.date.isoformat(),
    }
