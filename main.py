#!/usr/bin/env python3
"""
Command line entry point for the ingestion pipeline.

    python main.py ingest --ads ads.xlsx --orders orders.csv
    python main.py recompute --date 2025-09-03
"""

import argparse
import datetime as dt
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import polars as pl

from spend_ingest import IngestionProcessor, Settings, recompute_daily
from spend_ingest.config import load_dotenv_if_present
from spend_ingest.errors import IngestError
from spend_ingest.models import AdRecord, OrderRecord
from spend_ingest.readers import guess_mime_type
from spend_ingest.sinks import BaseSink, MemorySink, SupabaseRpcSink

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def write_records_csv(records, columns: List[str], path: Path) -> None:
    """Write canonical records to CSV with a stable column order."""
    rows = [r.model_dump(mode="json") for r in records]
    if rows:
        df = pl.from_dicts(rows, infer_schema_length=None).select(columns)
    else:
        df = pl.DataFrame({c: [] for c in columns}, schema={c: pl.Utf8 for c in columns})
    df.write_csv(path)
    logger.info(f"Results saved to {path}")


def build_sink(settings: Settings, dry_run: bool) -> BaseSink:
    if dry_run:
        logger.info("Dry run: records are kept in memory, nothing is written downstream")
        return MemorySink()
    return SupabaseRpcSink.from_settings(settings)


def run_ingest(args: argparse.Namespace, settings: Settings) -> int:
    ads_path, orders_path = Path(args.ads), Path(args.orders)
    missing = [str(p) for p in (ads_path, orders_path) if not p.exists()]
    if missing:
        logger.error(f"Missing files: {', '.join(missing)}")
        return 1

    sink = build_sink(settings, args.dry_run)
    processor = IngestionProcessor(sink, settings)
    result = processor.run(
        ads_path.read_bytes(),
        args.ads_type or guess_mime_type(str(ads_path)),
        orders_path.read_bytes(),
        args.orders_type or guess_mime_type(str(orders_path)),
    )
    print(json.dumps(result.model_dump(mode="json"), indent=2))

    if args.output and isinstance(sink, MemorySink) and result.ok:
        out_dir = Path(args.output)
        out_dir.mkdir(parents=True, exist_ok=True)
        write_records_csv(sink.ads, list(AdRecord.model_fields), out_dir / "ads_norm.csv")
        write_records_csv(sink.orders, list(OrderRecord.model_fields), out_dir / "orders_norm.csv")
    return 0 if result.ok else 1


def run_recompute(args: argparse.Namespace, settings: Settings) -> int:
    run_date: Optional[dt.date] = dt.date.fromisoformat(args.date) if args.date else None
    sink = build_sink(settings, args.dry_run)
    try:
        done = recompute_daily(sink, run_date)
    except IngestError as e:
        logger.error(f"Recompute failed: {e}")
        print(json.dumps({"ok": False, "error": str(e)}))
        return 1
    print(json.dumps({"ok": True, "runDate": done.isoformat()}))
    return 0


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--verbose", action="store_true", help="Enable verbose logging"
    )
    parser.add_argument(
        "--rate", type=float, help="SGD to BDT rate (overrides FX_SGD_TO_BDT)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Keep records in memory instead of calling the database",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ad spend and order export ingestion")
    add_common_arguments(parser)
    # Same flags after the subcommand; suppressed defaults keep earlier values.
    common = argparse.ArgumentParser(add_help=False, argument_default=argparse.SUPPRESS)
    add_common_arguments(common)
    sub = parser.add_subparsers(dest="command", required=True)

    ingest = sub.add_parser(
        "ingest", parents=[common], help="Normalize an ads export and an orders export"
    )
    ingest.add_argument("--ads", required=True, help="Ads export file (CSV or XLSX)")
    ingest.add_argument("--orders", required=True, help="Orders export file (CSV or XLSX)")
    ingest.add_argument("--ads-type", help="MIME type of the ads file")
    ingest.add_argument("--orders-type", help="MIME type of the orders file")
    ingest.add_argument(
        "--output", type=str, help="Directory for normalized CSVs (dry run only)"
    )

    recompute = sub.add_parser(
        "recompute", parents=[common], help="Re-run the daily downstream steps"
    )
    recompute.add_argument("--date", help="Run date YYYY-MM-DD (default: yesterday, UTC)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # Configure logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        load_dotenv_if_present()
        settings = Settings.from_env()
        if args.rate is not None:
            settings = settings.model_copy(update={"currency_rate": args.rate})
            if settings.currency_rate <= 0:
                raise ValueError("--rate must be positive")
        if not args.verbose:
            logging.getLogger().setLevel(settings.log_level.upper())

        if args.command == "ingest":
            return run_ingest(args, settings)
        return run_recompute(args, settings)

    except Exception as e:
        logger.error(f"Application failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
