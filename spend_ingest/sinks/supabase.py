"""Sink that calls the database RPC functions over the PostgREST HTTP API."""

import datetime as dt
import logging
from typing import Any, Dict, Optional, Sequence

import requests
from pydantic import BaseModel

from ..config import Settings
from ..errors import SinkError
from ..models import AdRecord, OrderRecord
from .base import UPSERT_ADS, UPSERT_ORDERS, BaseSink

logger = logging.getLogger(__name__)


class SupabaseRpcSink(BaseSink):
    """POST ``{url}/rest/v1/rpc/<function>`` with the service-role key.

    No retry adapter is mounted: a failed call surfaces immediately and the
    caller decides whether to run the ingestion again.
    """

    def __init__(
        self,
        url: str,
        key: str,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        if not url or not key:
            raise ValueError("Supabase URL and service role key are required")
        self.base_url = url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Content-Type": "application/json",
        }

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseRpcSink":
        return cls(settings.supabase_url, settings.supabase_key, settings.sink_timeout_seconds)

    def rpc(self, function: str, payload: Dict[str, Any]) -> Any:
        url = f"{self.base_url}/rest/v1/rpc/{function}"
        try:
            resp = self.session.post(url, json=payload, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise SinkError(function, f"request failed: {e}") from e
        if not resp.ok:
            raise SinkError(function, f"HTTP {resp.status_code}: {resp.text[:300]}")
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return resp.text

    def _upsert(self, function: str, rows: Sequence[BaseModel]) -> None:
        logger.info(f"[sink] {function} rows={len(rows)}")
        self.rpc(function, {"rows": [r.model_dump(mode="json") for r in rows]})

    def upsert_ads(self, rows: Sequence[AdRecord]) -> None:
        self._upsert(UPSERT_ADS, rows)

    def upsert_orders(self, rows: Sequence[OrderRecord]) -> None:
        self._upsert(UPSERT_ORDERS, rows)

    def run_step(self, step: str, run_date: dt.date) -> None:
        logger.info(f"[sink] {step} run_date={run_date.isoformat()}")
        self.rpc(step, {"run_date": run_date.isoformat()})
