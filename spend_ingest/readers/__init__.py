"""Source readers for delimited text and workbook exports."""

from .base import BaseReader, ReaderRegistry, RawRows, guess_mime_type
from .csv_reader import CSVReader
from .excel_reader import ExcelReader, find_header_row

__all__ = [
    "BaseReader",
    "ReaderRegistry",
    "RawRows",
    "CSVReader",
    "ExcelReader",
    "find_header_row",
    "guess_mime_type",
    "registry",
]

# Built-in readers
registry = ReaderRegistry()
registry.register("csv", CSVReader)
registry.register("xlsx", ExcelReader)
