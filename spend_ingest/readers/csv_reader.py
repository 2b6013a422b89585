"""CSV file reader."""

import io

import polars as pl

from ..errors import SourceError
from .base import BaseReader, RawRows


class CSVReader(BaseReader):
    """Reader for delimited text with a header line."""

    def read(self, data: bytes, **kwargs) -> RawRows:
        """Decode as UTF-8 and parse with polars, every cell kept as text."""
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise SourceError(f"source is not UTF-8 text: {e}") from e
        if not text.strip():
            return []

        # Default configuration for CSV reading: tolerate ragged/malformed lines
        read_config = {
            "has_header": True,
            "infer_schema_length": 0,
            "ignore_errors": True,
            "truncate_ragged_lines": True,
            **kwargs,
        }
        try:
            df = pl.read_csv(io.BytesIO(text.encode("utf-8")), **read_config)
        except pl.exceptions.PolarsError as e:
            raise SourceError(f"unreadable delimited text: {e}") from e
        return df.to_dicts()
