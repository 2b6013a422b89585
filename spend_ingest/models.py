"""Canonical record shapes handed to the downstream sink."""

import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, model_serializer


class AdRecord(BaseModel):
    """One normalized ad-platform export row.

    ``spend_bdt`` and ``conversations`` are only non-zero on campaign-level
    rows; the export repeats aggregates on every delivery level.
    """

    date: dt.date
    campaign_name: str
    adset_name: str = ""
    ad_name: str = ""
    delivery_level: str = ""
    is_prospecting: bool = False
    spend_bdt: float = 0.0
    impressions: Optional[float] = None
    ctr_all: Optional[float] = None
    frequency: Optional[float] = None
    conversations: Optional[float] = None


class OrderRecord(BaseModel):
    """One normalized order export row."""

    order_id: str = Field(min_length=1)
    order_date: dt.date
    order_status: str = ""
    paid_amount_bdt: float = Field(default=0.0, ge=0)
    due_amount_bdt: float = Field(default=0.0, ge=0)
    conversation_id: Optional[str] = None


@dataclass(frozen=True)
class Skip:
    """Outcome of a row that was not admitted."""

    reason: str


class SourceStats(BaseModel):
    total: int = 0
    inserted: int = 0
    skipped: int = 0
    skip_reasons: Dict[str, int] = Field(default_factory=dict, exclude=True)

    def admit(self) -> None:
        self.total += 1
        self.inserted += 1

    def skip(self, reason: str) -> None:
        self.total += 1
        self.skipped += 1
        self.skip_reasons[reason] = self.skip_reasons.get(reason, 0) + 1


class IngestStats(BaseModel):
    ads_total: int = 0
    ads_inserted: int = 0
    ads_skipped: int = 0
    orders_total: int = 0
    orders_inserted: int = 0
    orders_skipped: int = 0

    @classmethod
    def from_sources(cls, ads: SourceStats, orders: SourceStats) -> "IngestStats":
        return cls(
            ads_total=ads.total,
            ads_inserted=ads.inserted,
            ads_skipped=ads.skipped,
            orders_total=orders.total,
            orders_inserted=orders.inserted,
            orders_skipped=orders.skipped,
        )


class IngestResult(BaseModel):
    """Result returned to the caller of one ingestion run.

    ``error`` is only serialized for failed runs.
    """

    ok: bool
    stats: IngestStats = Field(default_factory=IngestStats)
    date: Optional[dt.date] = None
    error: Optional[str] = None

    @model_serializer(mode="wrap")
    def _drop_error_on_success(self, handler) -> Dict[str, Any]:
        data = handler(self)
        if self.ok:
            data.pop("error", None)
        return data
