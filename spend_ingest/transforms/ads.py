"""Ad-platform export transformation (campaign / ad set / ad rows)."""

from typing import Any, Dict, List, Optional, Union

from ..config import (
    ADS_FIELDS,
    DEFAULT_CURRENCY_RATE,
    DELIVERY_LEVEL_MAP,
    PROSPECTING_KEYWORDS,
    REMARKETING_KEYWORDS,
    SUMMARY_ROW_NAMES,
)
from ..models import AdRecord, Skip
from .base import BaseTransform
from .utils import RawRow, to_date, to_number, to_text


def infer_prospecting(campaign_name: Optional[str], adset_name: Optional[str]) -> bool:
    """Cold-traffic naming with no remarketing marker anywhere."""
    hay = f"{campaign_name or ''} {adset_name or ''}".lower()
    if any(k in hay for k in REMARKETING_KEYWORDS):
        return False
    return any(k in hay for k in PROSPECTING_KEYWORDS)


def normalize_delivery_level(value: Any) -> str:
    """Map 'Campaign', 'Ad set', 'Ad' to the canonical levels; unknown -> ''."""
    text = (to_text(value) or "").lower()
    return DELIVERY_LEVEL_MAP.get(" ".join(text.split()), "")


class AdsTransform(BaseTransform):
    """Transform ad export rows to canonical ad records.

    Only campaign-level rows keep spend and conversations; the export repeats
    the campaign aggregate on its ad set and ad rows.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.currency_rate = float(self.config.get("currency_rate", DEFAULT_CURRENCY_RATE))

    @property
    def fields(self) -> Dict[str, List[str]]:
        return ADS_FIELDS

    def spend_bdt(self, row: RawRow) -> Optional[float]:
        spend_sgd = to_number(self.resolve(row, "spend_sgd"))
        if spend_sgd is not None:
            return spend_sgd * self.currency_rate
        return to_number(self.resolve(row, "spend_bdt"))

    def conversations(self, row: RawRow) -> Optional[float]:
        conv = to_number(self.resolve(row, "messaging_conversations"))
        if conv is None:
            conv = to_number(self.resolve(row, "results"))
        return conv

    def normalize_row(self, row: RawRow) -> Union[AdRecord, Skip]:
        day = to_date(self.resolve(row, "date"))
        if day is None:
            return Skip("bad_date")

        campaign = to_text(self.resolve(row, "campaign_name"))
        if not campaign:
            return Skip("missing_campaign")
        if campaign.lower() in SUMMARY_ROW_NAMES:
            return Skip("summary_row")

        adset = to_text(self.resolve(row, "adset_name")) or ""
        level = normalize_delivery_level(self.resolve(row, "delivery_level"))
        is_campaign = level == "campaign"

        return AdRecord(
            date=day,
            campaign_name=campaign,
            adset_name=adset,
            ad_name=to_text(self.resolve(row, "ad_name")) or "",
            delivery_level=level,
            is_prospecting=infer_prospecting(campaign, adset),
            spend_bdt=(self.spend_bdt(row) or 0.0) if is_campaign else 0.0,
            impressions=to_number(self.resolve(row, "impressions")),
            ctr_all=to_number(self.resolve(row, "ctr_all")),
            frequency=to_number(self.resolve(row, "frequency")),
            conversations=self.conversations(row) if is_campaign else 0.0,
        )


def create_ads_transform(currency_rate: float = DEFAULT_CURRENCY_RATE) -> AdsTransform:
    """Factory function to create the ads transformer."""
    return AdsTransform({"currency_rate": currency_rate})
