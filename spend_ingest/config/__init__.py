"""Configuration management for the ingestion pipeline."""

from .source_mappings import (
    ADS_FIELDS,
    ORDERS_FIELDS,
    HEADER_MARKER,
    PREFERRED_SHEET,
)
from .enum_maps import (
    DELIVERY_LEVEL_MAP,
    PROSPECTING_KEYWORDS,
    REMARKETING_KEYWORDS,
    SUMMARY_ROW_NAMES,
)
from .settings import Settings, DEFAULT_CURRENCY_RATE, load_dotenv_if_present

__all__ = [
    "ADS_FIELDS",
    "ORDERS_FIELDS",
    "HEADER_MARKER",
    "PREFERRED_SHEET",
    "DELIVERY_LEVEL_MAP",
    "PROSPECTING_KEYWORDS",
    "REMARKETING_KEYWORDS",
    "SUMMARY_ROW_NAMES",
    "Settings",
    "DEFAULT_CURRENCY_RATE",
    "load_dotenv_if_present",
]
