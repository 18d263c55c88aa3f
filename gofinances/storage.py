import json
import logging
import sqlite3
from pathlib import Path
from typing import List, Optional

from gofinances.core.models import InvalidRecordError, Transaction, parse_record, to_record

logger = logging.getLogger(__name__)


def transactions_key(namespace: str, user_id: str) -> str:
    return f"{namespace}:transactions_user:{user_id}"


def user_key(namespace: str) -> str:
    return f"{namespace}:user"


def _init_db(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS kv (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        )
        """
    )
    conn.commit()


class KeyValueStore:
    """Local string-to-string storage kept in a single SQLite table.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file. It is created on first write;
        reads against a missing file return nothing.
    """

    def __init__(self, db_path: str) -> None:
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        try:
            _init_db(conn)
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    def get(self, key: str) -> Optional[str]:
        if not self.db_path.exists():
            return None
        conn = self._connect()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return row[0] if row else None
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        conn = self._connect()
        try:
            conn.execute(
                """
                INSERT INTO kv (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, value),
            )
            conn.commit()
        finally:
            conn.close()

    def remove(self, key: str) -> None:
        if not self.db_path.exists():
            return
        conn = self._connect()
        try:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()


def _load_raw_list(payload: Optional[str], key: str) -> list:
    if payload is None:
        return []
    try:
        data = json.loads(payload)
    except ValueError:
        logger.warning("Stored value under %s is not valid JSON; treating as empty.", key)
        return []
    if not isinstance(data, list):
        logger.warning("Stored value under %s is not a list; treating as empty.", key)
        return []
    return data


def parse_transactions(payload: Optional[str], key: str = "<memory>") -> List[Transaction]:
    """Parse a stored transaction list, skipping records that fail validation."""
    txs = []
    for idx, raw in enumerate(_load_raw_list(payload, key)):
        try:
            txs.append(parse_record(raw))
        except InvalidRecordError as exc:
            logger.warning("Skipping record %d under %s: %s", idx, key, exc)
    return txs


def load_transactions(store: KeyValueStore, key: str) -> List[Transaction]:
    try:
        payload = store.get(key)
    except sqlite3.Error as exc:
        logger.warning("Could not read %s from %s: %s", key, store.db_path, exc)
        return []
    return parse_transactions(payload, key)


def append_transaction(store: KeyValueStore, key: str, tx: Transaction) -> None:
    """Append *tx* to the list stored under *key*.

    Existing raw entries are written back untouched, including ones that fail
    validation on read.
    """
    current = _load_raw_list(store.get(key), key)
    current.append(to_record(tx))
    store.set(key, json.dumps(current, ensure_ascii=False))


def clear_transactions(store: KeyValueStore, key: str) -> None:
    store.remove(key)
