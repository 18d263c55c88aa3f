from __future__ import annotations

from dataclasses import asdict
from pathlib import Path

import anyio
from mcp.server.fastmcp import FastMCP

from gofinances.config import catalog_from_config, load_config, settings_from_config
from gofinances.months import MonthCursor
from gofinances.reporters import build_dashboard, build_summary
from gofinances.storage import KeyValueStore, load_transactions, transactions_key

server = FastMCP(name="GoFinances", instructions="Expose GoFinances reports as MCP tools")


def _open_store(db_path: str) -> KeyValueStore:
    if not Path(db_path).exists():
        raise FileNotFoundError(f"Database not found: {db_path}")
    return KeyValueStore(db_path)


@server.tool(name="list_categories", description="List the category catalog in report order")
async def list_categories(config_path: str | None = None) -> list[dict]:
    cfg = load_config(config_path)
    return [asdict(cat) for cat in catalog_from_config(cfg)]


@server.tool(
    name="get_dashboard",
    description="Entries, expenses and total highlights plus the transaction listing for a user",
)
async def get_dashboard(
    db_path: str,
    user_id: str,
    config_path: str | None = None,
) -> dict:
    """Return the formatted dashboard for ``user_id`` stored in ``db_path``."""

    store = _open_store(db_path)
    cfg = load_config(config_path)
    key = transactions_key(cfg["namespace"], user_id)

    def _run() -> dict:
        txs = load_transactions(store, key)
        report = build_dashboard(txs, catalog_from_config(cfg), settings_from_config(cfg))
        return {
            "highlights": [asdict(card) for card in report.highlights],
            "transactions": [asdict(row) for row in report.transactions],
        }

    return await anyio.to_thread.run_sync(_run)


@server.tool(
    name="get_category_summary",
    description="Per-category share of a month's expenses for a user",
)
async def get_category_summary(
    db_path: str,
    user_id: str,
    month: str,
    config_path: str | None = None,
) -> dict:
    """Return the category breakdown for ``month`` (YYYY-MM).

    Parameters
    ----------
    db_path:
        Path to the SQLite storage file.
    user_id:
        Identity-provider user id scoping the transaction list.
    month:
        Month to summarize, formatted YYYY-MM.
    """

    try:
        cursor = MonthCursor.parse(month)
    except ValueError as exc:
        raise ValueError(f"Invalid month: {month}") from exc

    store = _open_store(db_path)
    cfg = load_config(config_path)
    key = transactions_key(cfg["namespace"], user_id)

    def _run() -> dict:
        txs = load_transactions(store, key)
        report = build_summary(txs, cursor, catalog_from_config(cfg), settings_from_config(cfg))
        return {
            "month": str(report.month),
            "label": report.month_label,
            "categories": [
                {
                    "key": item.key,
                    "name": item.name,
                    "color": item.color,
                    "total": str(item.total),
                    "formatted_total": item.formatted_total,
                    "percent": item.percent,
                }
                for item in report.categories
            ],
        }

    return await anyio.to_thread.run_sync(_run)


def main() -> None:
    server.run()


if __name__ == "__main__":
    main()
