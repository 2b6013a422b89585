"""Base transformation class that folds per-row outcomes into records and stats."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from pydantic import BaseModel

from ..models import Skip, SourceStats
from .utils import RawRow, resolve_field

logger = logging.getLogger(__name__)


class BaseTransform(ABC):
    """
    An abstract base class for the source normalizers.

    This class implements the Template Method pattern. ``transform`` walks the
    raw rows once, asks the subclass for a per-row outcome and keeps the
    admission counters, so ``total == inserted + skipped`` always holds.

    Subclasses must implement:
    - fields: the header candidate table for the source.
    - normalize_row(): map one raw row to a canonical record or a ``Skip``.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}

    @property
    @abstractmethod
    def fields(self) -> Dict[str, List[str]]:
        """Return the ordered header candidates per logical field."""
        pass

    @abstractmethod
    def normalize_row(self, row: RawRow) -> Union[BaseModel, Skip]:
        """Core per-row logic to be implemented by subclasses."""
        pass

    def resolve(self, row: RawRow, field: str) -> Any:
        return resolve_field(row, self.fields[field])

    def transform(self, rows: Iterable[RawRow]) -> Tuple[List[BaseModel], SourceStats]:
        """Normalize every row, returning admitted records and counters."""
        records: List[BaseModel] = []
        stats = SourceStats()
        for row in rows:
            outcome = self.normalize_row(row)
            if isinstance(outcome, Skip):
                stats.skip(outcome.reason)
            else:
                records.append(outcome)
                stats.admit()

        logger.info(
            f"[{self.__class__.__name__}] total={stats.total}, inserted={stats.inserted}, skipped={stats.skipped}"
        )
        if stats.skip_reasons:
            logger.debug(f"[{self.__class__.__name__}] skip reasons {stats.skip_reasons}")
        return records, stats

