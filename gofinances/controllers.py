"""Screen controllers that load a snapshot and keep only the newest result.

A refresh reads storage off the event loop and then aggregates synchronously.
Every refresh takes a generation token first; when a newer refresh has
started by the time the read returns, the older result is dropped.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Sequence

import anyio

from gofinances.config import Settings
from gofinances.core.categories import Category
from gofinances.core.models import Transaction
from gofinances.months import MonthCursor
from gofinances.reporters.dashboard import DashboardReport, build_dashboard
from gofinances.reporters.summary import SummaryReport, build_summary
from gofinances.storage import KeyValueStore, load_transactions

logger = logging.getLogger(__name__)


class RequestGeneration:
    def __init__(self) -> None:
        self._current = 0

    @property
    def current(self) -> int:
        return self._current

    def next(self) -> int:
        self._current += 1
        return self._current

    def is_current(self, token: int) -> bool:
        return token == self._current


class _Controller:
    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        catalog: Sequence[Category],
        settings: Optional[Settings] = None,
    ) -> None:
        self.store = store
        self.key = key
        self.catalog = tuple(catalog)
        self.settings = settings or Settings()
        self.generation = RequestGeneration()
        self.is_loading = False

    async def _read(self) -> List[Transaction]:
        return await anyio.to_thread.run_sync(load_transactions, self.store, self.key)

    def _accept(self, token: int) -> bool:
        if not self.generation.is_current(token):
            logger.debug("Dropping stale result %d (current is %d)", token, self.generation.current)
            return False
        self.is_loading = False
        return True


class DashboardController(_Controller):
    report: Optional[DashboardReport] = None

    async def refresh(self) -> bool:
        """Reload the dashboard. Returns False when a newer refresh superseded this one."""
        token = self.generation.next()
        self.is_loading = True
        records = await self._read()
        report = build_dashboard(records, self.catalog, self.settings)
        if not self._accept(token):
            return False
        self.report = report
        return True


class SummaryController(_Controller):
    report: Optional[SummaryReport] = None

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        catalog: Sequence[Category],
        settings: Optional[Settings] = None,
        month: Optional[MonthCursor] = None,
    ) -> None:
        super().__init__(store, key, catalog, settings)
        self.month = month or MonthCursor.from_date(date.today())

    def next_month(self) -> MonthCursor:
        self.month = self.month.next()
        return self.month

    def previous_month(self) -> MonthCursor:
        self.month = self.month.previous()
        return self.month

    async def refresh(self) -> bool:
        """Reload the summary for the month selected when the call started."""
        token = self.generation.next()
        month = self.month
        self.is_loading = True
        records = await self._read()
        report = build_summary(records, month, self.catalog, self.settings)
        if not self._accept(token):
            return False
        self.report = report
        return True
