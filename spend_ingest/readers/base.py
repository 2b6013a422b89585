"""Base reader interface and registry."""

import logging
import mimetypes
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type

logger = logging.getLogger(__name__)

RawRows = List[Dict[str, Any]]

# xlsx files are zip archives; legacy xls files are OLE2 compound documents.
_ZIP_MAGIC = b"PK\x03\x04"
_OLE2_MAGIC = b"\xd0\xcf\x11\xe0"
_GENERIC_HINTS = {"application/octet-stream", "binary/octet-stream"}


class BaseReader(ABC):
    """Base interface for all source readers."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}

    @abstractmethod
    def read(self, data: bytes, **kwargs) -> RawRows:
        """Parse a byte buffer into raw rows (header -> cell value)."""
        pass


class ReaderRegistry:
    """Registry for source readers keyed by format."""

    def __init__(self):
        self._readers: Dict[str, Type[BaseReader]] = {}

    def register(self, file_type: str, reader_class: Type[BaseReader]):
        """Register a reader for specific file type."""
        self._readers[file_type] = reader_class

    def get_reader(self, file_type: str) -> Optional[Type[BaseReader]]:
        """Get reader for file type."""
        return self._readers.get(file_type)

    def detect_format(self, mime_hint: Optional[str], data: bytes = b"") -> str:
        """Pick 'xlsx' or 'csv' from the MIME hint, sniffing content when it says nothing.

        Any hint mentioning a spreadsheet or excel type selects the workbook
        reader; every other hint is treated as delimited text.
        """
        hint = (mime_hint or "").strip().lower()
        if hint and hint not in _GENERIC_HINTS:
            if "spreadsheet" in hint or "excel" in hint:
                return "xlsx"
            return "csv"
        if data.startswith((_ZIP_MAGIC, _OLE2_MAGIC)):
            logger.debug("No MIME hint; content looks like a workbook")
            return "xlsx"
        return "csv"

    def reader_for(self, mime_hint: Optional[str], data: bytes = b"") -> BaseReader:
        file_type = self.detect_format(mime_hint, data)
        reader_class = self.get_reader(file_type)
        if reader_class is None:
            raise KeyError(f"No reader registered for {file_type!r}")
        return reader_class()

    def load(self, data: bytes, mime_hint: Optional[str] = None, **kwargs) -> RawRows:
        """Read a source buffer with the reader matching its format."""
        return self.reader_for(mime_hint, data).read(data, **kwargs)


def guess_mime_type(path: str) -> Optional[str]:
    """MIME hint from a file name, for callers that only have a path."""
    mime, _ = mimetypes.guess_type(path)
    return mime
