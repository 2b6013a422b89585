"""Downstream sinks for canonical records."""

from .base import (
    BaseSink,
    BEST_EFFORT_STEPS,
    COMPUTE_DAILY_KPIS,
    DAILY_STEPS,
    GENERATE_ALERTS,
    SCORE_NORTH_STAR,
    UPSERT_ADS,
    UPSERT_ORDERS,
)
from .memory import MemorySink
from .supabase import SupabaseRpcSink

__all__ = [
    "BaseSink",
    "BEST_EFFORT_STEPS",
    "COMPUTE_DAILY_KPIS",
    "DAILY_STEPS",
    "GENERATE_ALERTS",
    "SCORE_NORTH_STAR",
    "UPSERT_ADS",
    "UPSERT_ORDERS",
    "MemorySink",
    "SupabaseRpcSink",
]
