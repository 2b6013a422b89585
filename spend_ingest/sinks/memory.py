"""In-memory sink for dry runs and tests."""

import datetime as dt
from typing import Dict, List, Optional, Sequence, Tuple

from ..errors import SinkError
from ..models import AdRecord, OrderRecord
from .base import UPSERT_ADS, UPSERT_ORDERS, BaseSink


class MemorySink(BaseSink):
    """Keeps every call in lists.

    ``fail_on`` maps a step name to an error message to simulate downstream
    failures.
    """

    def __init__(self, fail_on: Optional[Dict[str, str]] = None):
        self.fail_on = fail_on or {}
        self.ads: List[AdRecord] = []
        self.orders: List[OrderRecord] = []
        self.calls: List[Tuple[str, Optional[dt.date]]] = []

    def _check(self, step: str) -> None:
        if step in self.fail_on:
            raise SinkError(step, self.fail_on[step])

    def upsert_ads(self, rows: Sequence[AdRecord]) -> None:
        self.calls.append((UPSERT_ADS, None))
        self._check(UPSERT_ADS)
        self.ads.extend(rows)

    def upsert_orders(self, rows: Sequence[OrderRecord]) -> None:
        self.calls.append((UPSERT_ORDERS, None))
        self._check(UPSERT_ORDERS)
        self.orders.extend(rows)

    def run_step(self, step: str, run_date: dt.date) -> None:
        self.calls.append((step, run_date))
        self._check(step)
