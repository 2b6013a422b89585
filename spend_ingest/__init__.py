"""Daily ad-spend and order export ingestion."""

from .config import Settings
from .errors import IngestError, SinkError, SourceError
from .models import AdRecord, IngestResult, IngestStats, OrderRecord, SourceStats
from .processor import IngestionProcessor, recompute_daily, resolve_run_date
from .readers import ReaderRegistry, CSVReader, ExcelReader

__all__ = [
    "Settings",
    "IngestError",
    "SinkError",
    "SourceError",
    "AdRecord",
    "OrderRecord",
    "IngestResult",
    "IngestStats",
    "SourceStats",
    "IngestionProcessor",
    "recompute_daily",
    "resolve_run_date",
    "ReaderRegistry",
    "CSVReader",
    "ExcelReader",
]
