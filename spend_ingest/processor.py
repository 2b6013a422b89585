"""Main ingestion pipeline: read both sources, normalize, hand off to the sink."""

import datetime as dt
import logging
from typing import List, Optional, Sequence, Tuple

from .config import Settings
from .errors import SinkError, SourceError
from .models import AdRecord, IngestResult, IngestStats, OrderRecord, SourceStats
from .readers import RawRows, ReaderRegistry, registry as reader_registry
from .sinks import BEST_EFFORT_STEPS, DAILY_STEPS, BaseSink
from .transforms import AdsTransform, OrdersTransform

logger = logging.getLogger(__name__)


def resolve_run_date(
    orders: Sequence[OrderRecord], ads: Sequence[AdRecord]
) -> Optional[dt.date]:
    """First order's date, else first ad row's date, else None."""
    if orders:
        return orders[0].order_date
    if ads:
        return ads[0].date
    return None


def run_daily_steps(sink: BaseSink, run_date: dt.date) -> None:
    """Run the downstream daily steps in order.

    Raises:
        SinkError: if a required step fails. Alert generation failures are
            only logged.
    """
    for step in DAILY_STEPS:
        try:
            sink.run_step(step, run_date)
        except SinkError as e:
            if step not in BEST_EFFORT_STEPS:
                raise
            logger.warning(f"{step} failed for {run_date.isoformat()}: {e}")


def recompute_daily(sink: BaseSink, run_date: Optional[dt.date] = None) -> dt.date:
    """Re-run the daily steps, by default for yesterday (UTC)."""
    if run_date is None:
        run_date = dt.datetime.now(dt.timezone.utc).date() - dt.timedelta(days=1)
    logger.info(f"Recomputing daily aggregates for {run_date.isoformat()}")
    run_daily_steps(sink, run_date)
    return run_date


class IngestionProcessor:
    """Drives one ingestion run over an ads source and an orders source.

    The two sources are normalized independently; both must load before
    anything is written. Any source or sink failure turns the whole run into
    a failed ``IngestResult`` with the failing stage named in ``error``.
    """

    def __init__(
        self,
        sink: BaseSink,
        settings: Optional[Settings] = None,
    ):
        self.sink = sink
        self.settings = settings or Settings()
        self.reader_registry: ReaderRegistry = reader_registry
        self.ads_transform = AdsTransform({"currency_rate": self.settings.currency_rate})
        self.orders_transform = OrdersTransform()

    def _process_single_source(
        self, source_name: str, data: Optional[bytes], mime_hint: Optional[str]
    ) -> RawRows:
        """Read one source buffer into raw rows."""
        if not data:
            raise SourceError("source is missing or empty")
        try:
            rows = self.reader_registry.load(data, mime_hint)
        except SourceError:
            raise
        except Exception as e:
            raise SourceError(f"could not read source: {e}") from e
        logger.info(f"[{source_name}] read {len(rows)} raw rows (mime={mime_hint or 'unknown'})")
        return rows

    def normalize_ads(self, rows: RawRows) -> Tuple[List[AdRecord], SourceStats]:
        return self.ads_transform.transform(rows)

    def normalize_orders(self, rows: RawRows) -> Tuple[List[OrderRecord], SourceStats]:
        return self.orders_transform.transform(rows)

    def run(
        self,
        ads_data: Optional[bytes],
        ads_mime: Optional[str],
        orders_data: Optional[bytes],
        orders_mime: Optional[str],
    ) -> IngestResult:
        """Run one ingestion; never raises for source or sink failures."""
        stage = "ads source"
        stats = IngestStats()
        try:
            ads_rows = self._process_single_source("ads", ads_data, ads_mime)
            stage = "orders source"
            orders_rows = self._process_single_source("orders", orders_data, orders_mime)

            stage = "ads normalize"
            ads, ads_stats = self.normalize_ads(ads_rows)
            stage = "orders normalize"
            orders, orders_stats = self.normalize_orders(orders_rows)
            stats = IngestStats.from_sources(ads_stats, orders_stats)

            run_date = resolve_run_date(orders, ads)

            stage = "sink"
            self.sink.upsert_ads(ads)
            self.sink.upsert_orders(orders)
            if run_date is None:
                logger.warning("No run date could be resolved; skipping daily recompute")
            else:
                run_daily_steps(self.sink, run_date)
        except SourceError as e:
            logger.error(f"Ingestion failed at {stage}: {e}")
            return IngestResult(ok=False, stats=stats, error=f"{stage}: {e}")
        except SinkError as e:
            logger.error(f"Ingestion failed at sink step {e.step}: {e}")
            return IngestResult(ok=False, stats=stats, error=str(e))
        except Exception as e:
            logger.error(f"Ingestion failed at {stage}: {e}", exc_info=True)
            return IngestResult(ok=False, stats=stats, error=f"{stage}: {e}")

        logger.info(
            f"Ingestion complete: ads {stats.ads_inserted}/{stats.ads_total}, "
            f"orders {stats.orders_inserted}/{stats.orders_total}, date={run_date}"
        )
        return IngestResult(ok=True, stats=stats, date=run_date)
