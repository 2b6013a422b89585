"""Field resolution and scalar coercion helpers shared by the transforms.

None of the coercers raise: a value that cannot be understood comes back
as ``None`` and the calling transform decides whether to drop the row or
fall back to a default.
"""

import math
import re
import unicodedata
from datetime import date, datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

RawRow = Mapping[str, Any]

# Spreadsheet serials count days from 1899-12-30 (Lotus 1900 leap-year bug).
EXCEL_EPOCH = date(1899, 12, 30)
SERIAL_MIN_EXCLUSIVE = 0
SERIAL_MAX_EXCLUSIVE = 100000

_MONTHS = (
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
)

_DAY_FIRST_RE = re.compile(
    r"^(\d{1,2})[./-](\d{1,2})[./-](\d{4})"
    r"(?:[ T]+(\d{1,2}):(\d{2})(?::(\d{2}))?(?:\s*[AaPp][Mm])?)?$"
)
_DAY_MONTHNAME_RE = re.compile(r"^(\d{1,2})-([A-Za-z]{3,})-(\d{4})$")
_BARE_INT_RE = re.compile(r"^\d+$")


def _norm_header_key(s: Any) -> str:
    s = unicodedata.normalize("NFKC", str(s or ""))
    s = re.sub("[\u200b\u200c\u200d\ufeff\u00a0]+", "", s)
    return re.sub(r"\s+", " ", s).strip().lower()


def is_empty(value: Any) -> bool:
    """True for None, NaN and blank strings."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def resolve_field(row: RawRow, candidates: Sequence[str]) -> Any:
    """Return the first non-empty value among the candidate headers.

    Headers are matched case- and whitespace-insensitively, falling back to
    the exact original key. An empty cell under one candidate does not stop
    the search.
    """
    lookup: Dict[str, Any] = {}
    for key in row.keys():
        lookup.setdefault(_norm_header_key(key), key)

    for candidate in candidates:
        key = lookup.get(_norm_header_key(candidate))
        if key is None and candidate in row:
            key = candidate
        if key is None:
            continue
        value = row[key]
        if not is_empty(value):
            return value
    return None


def to_text(value: Any) -> Optional[str]:
    """Cell value as a stripped string; integral floats lose the '.0'."""
    if is_empty(value):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def to_number(value: Any) -> Optional[float]:
    """Parse a number, tolerating thousands separators like '1,234.50'."""
    if is_empty(value) or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        n = float(value)
    else:
        s = str(value).replace(",", "").strip()
        try:
            n = float(s)
        except ValueError:
            return None
    return n if math.isfinite(n) else None


# --- loose date parsing: ordered strategies, first hit wins ---------------


def parse_excel_serial(value: Any) -> Optional[date]:
    """Days since the spreadsheet epoch, for bare integers in a plausible range.

    Numeric cells are truncated to whole days. Year-like strings such as
    '2025' also fall in this range and are read as serials.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        n = int(value)
    elif isinstance(value, int):
        n = value
    elif isinstance(value, str) and _BARE_INT_RE.match(value.strip()):
        n = int(value.strip())
    else:
        return None
    if not SERIAL_MIN_EXCLUSIVE < n < SERIAL_MAX_EXCLUSIVE:
        return None
    return EXCEL_EPOCH + timedelta(days=n)


def _utc_date(d: datetime) -> date:
    if d.tzinfo is not None:
        d = d.astimezone(timezone.utc)
    return d.date()


def parse_iso_or_rfc(value: Any) -> Optional[date]:
    """ISO 8601 or RFC 2822 date/datetime; aware values are shifted to UTC."""
    if isinstance(value, datetime):
        return _utc_date(value)
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    s = value.strip()
    if s.endswith(("Z", "z")):
        s = s[:-1] + "+00:00"
    try:
        return _utc_date(datetime.fromisoformat(s))
    except ValueError:
        pass
    try:
        return _utc_date(parsedate_to_datetime(s))
    except (TypeError, ValueError, IndexError):
        return None


def parse_day_first(value: Any) -> Optional[date]:
    """'dd.mm.yyyy', 'dd/mm/yyyy' or 'dd-mm-yyyy' with an optional time."""
    if not isinstance(value, str):
        return None
    m = _DAY_FIRST_RE.match(value.strip())
    if not m:
        return None
    try:
        return date(int(m.group(3)), int(m.group(2)), int(m.group(1)))
    except ValueError:
        return None


def parse_day_month_name(value: Any) -> Optional[date]:
    """'03-Sep-2025', '3-sept-2025', '03-September-2025'."""
    if not isinstance(value, str):
        return None
    m = _DAY_MONTHNAME_RE.match(value.strip())
    if not m:
        return None
    name = m.group(2).lower()
    month = next((i for i, full in enumerate(_MONTHS, 1) if full.startswith(name)), None)
    if month is None:
        return None
    try:
        return date(int(m.group(3)), month, int(m.group(1)))
    except ValueError:
        return None


DATE_STRATEGIES: List[Callable[[Any], Optional[date]]] = [
    parse_excel_serial,
    parse_iso_or_rfc,
    parse_day_first,
    parse_day_month_name,
]


def to_date(value: Any) -> Optional[date]:
    """Best-effort calendar date for a messy export cell."""
    if is_empty(value):
        return None
    if isinstance(value, str):
        value = unicodedata.normalize("NFKC", value).strip()
    for strategy in DATE_STRATEGIES:
        parsed = strategy(value)
        if parsed is not None:
            return parsed
    return None


def to_date_iso(value: Any) -> Optional[str]:
    """Wrapper that returns ISO 'YYYY-MM-DD' string or None via to_date."""
    d = to_date(value)
    return d.isoformat() if d else None
