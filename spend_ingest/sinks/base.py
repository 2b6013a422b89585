"""Sink contract for canonical records and downstream daily steps."""

import datetime as dt
from abc import ABC, abstractmethod
from typing import Sequence

from ..models import AdRecord, OrderRecord

UPSERT_ADS = "upsert_ads_norm"
UPSERT_ORDERS = "upsert_orders_norm"
COMPUTE_DAILY_KPIS = "compute_daily_kpis"
SCORE_NORTH_STAR = "score_north_star"
GENERATE_ALERTS = "generate_alerts"

# Run in this order after every ingestion and by the daily trigger.
DAILY_STEPS = (COMPUTE_DAILY_KPIS, SCORE_NORTH_STAR, GENERATE_ALERTS)
# Failures here are logged, never fatal.
BEST_EFFORT_STEPS = {GENERATE_ALERTS}


class BaseSink(ABC):
    """Downstream store that upserts by natural key.

    Implementations raise ``SinkError`` naming the failed step and never
    retry on their own.
    """

    @abstractmethod
    def upsert_ads(self, rows: Sequence[AdRecord]) -> None:
        pass

    @abstractmethod
    def upsert_orders(self, rows: Sequence[OrderRecord]) -> None:
        pass

    @abstractmethod
    def run_step(self, step: str, run_date: dt.date) -> None:
        """Run a named downstream daily step for ``run_date``."""
        pass
