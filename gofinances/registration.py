# gofinances/registration.py
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional, Sequence

from gofinances.core.categories import Category, find_category
from gofinances.core.models import (
    TRANSACTION_TYPES,
    InvalidRecordError,
    Transaction,
    amount_in_range,
    parse_decimal,
)
from gofinances.storage import KeyValueStore, append_transaction

logger = logging.getLogger(__name__)


class RegistrationError(ValueError):
    """Raised when the registration form does not validate."""

    def __init__(self, errors: Dict[str, str]) -> None:
        self.errors = errors
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in errors.items()))


def _parse_amount(value) -> Decimal:
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValueError("Amount is required")
    try:
        amount = parse_decimal(text.replace(",", "."))
    except InvalidRecordError:
        raise ValueError("Amount must be numeric")
    if amount <= 0:
        raise ValueError("Amount must be positive")
    if not amount_in_range(amount):
        raise ValueError("Amount is too large")
    return amount


def validate_form(
    name: Optional[str],
    amount,
    tx_type: Optional[str],
    category: Optional[str],
    catalog: Sequence[Category],
) -> Dict[str, object]:
    """Check every field and return the cleaned values, or raise RegistrationError."""
    errors: Dict[str, str] = {}
    cleaned: Dict[str, object] = {}

    cleaned["name"] = (name or "").strip()
    if not cleaned["name"]:
        errors["name"] = "Name is required"

    try:
        cleaned["amount"] = _parse_amount(amount)
    except ValueError as exc:
        errors["amount"] = str(exc)

    if not tx_type:
        errors["type"] = "Select the transaction type"
    elif tx_type not in TRANSACTION_TYPES:
        errors["type"] = f"Unknown transaction type '{tx_type}'"
    cleaned["type"] = tx_type

    if not category:
        errors["category"] = "Select a category"
    elif find_category(catalog, category) is None:
        errors["category"] = f"Unknown category '{category}'"
    cleaned["category"] = category

    if errors:
        raise RegistrationError(errors)
    return cleaned


def register_transaction(
    store: KeyValueStore,
    key: str,
    *,
    name: Optional[str],
    amount,
    type: Optional[str],
    category: Optional[str],
    catalog: Sequence[Category],
    now: Optional[datetime] = None,
) -> Transaction:
    """Validate a new transaction and append it to the list stored under *key*."""
    cleaned = validate_form(name, amount, type, category, catalog)
    tx = Transaction(
        id=str(uuid.uuid4()),
        name=cleaned["name"],
        amount=cleaned["amount"],
        type=cleaned["type"],
        category=cleaned["category"],
        date=now or datetime.now(),
    )
    append_transaction(store, key, tx)
    logger.info("Registered %s transaction %s under %s", tx.type, tx.id, key)
    return tx
