import io
from datetime import date, datetime

import openpyxl
import pytest

from spend_ingest.errors import SourceError
from spend_ingest.readers import CSVReader, ExcelReader, find_header_row, registry

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def make_workbook(sheets):
    """Build an .xlsx in memory from {sheet name: list of rows}."""
    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(name)
        for row in rows:
            ws.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


AD_HEADER = ["Reporting ends", "Campaign name", "Delivery level", "Amount spent (SGD)"]


def test_csv_reader_keeps_text_and_nulls_empty_cells():
    data = (
        "\ufeffInvoice Number,Creation Date,Paid Amount\n"
        'INV-1,03/09/2025,"1,200.00"\n'
        "INV-2,03/09/2025,\n"
    ).encode("utf-8")
    rows = CSVReader().read(data)
    assert rows == [
        {"Invoice Number": "INV-1", "Creation Date": "03/09/2025", "Paid Amount": "1,200.00"},
        {"Invoice Number": "INV-2", "Creation Date": "03/09/2025", "Paid Amount": None},
    ]


def test_csv_reader_empty_buffer_yields_no_rows():
    assert CSVReader().read(b"  \n") == []


def test_csv_reader_rejects_non_utf8():
    with pytest.raises(SourceError):
        CSVReader().read(b"\xff\xfeC\x00a\x00")


def test_excel_reader_finds_header_below_title_block():
    data = make_workbook(
        {
            "Raw Data Report": [
                ["Daily performance report"],
                ["Account: Demo Shop", "Currency: SGD"],
                AD_HEADER,
                ["2025-09-03", "Cold Prospecting", "Campaign", 10],
                [None, None, None, None],
                ["2025-09-03", "Total", None, 10],
            ]
        }
    )
    rows = ExcelReader().read(data)
    assert len(rows) == 2
    assert rows[0]["Campaign name"] == "Cold Prospecting"
    assert rows[0]["Amount spent (SGD)"] == 10
    assert rows[1]["Delivery level"] is None


def test_excel_reader_prefers_named_sheet():
    data = make_workbook(
        {
            "Summary": [["Campaign name"], ["from summary"]],
            "Raw Data Report": [["Campaign name"], ["from raw data"]],
        }
    )
    rows = ExcelReader().read(data)
    assert rows == [{"Campaign name": "from raw data"}]


def test_excel_reader_falls_back_to_first_sheet_and_row_zero():
    created = datetime(2025, 9, 3, 14, 30)
    data = make_workbook(
        {
            "Orders": [["Invoice Number", "Creation Date"], ["INV-9", created]],
            "Other": [["ignored"]],
        }
    )
    rows = ExcelReader().read(data)
    assert len(rows) == 1
    assert rows[0]["Invoice Number"] == "INV-9"
    assert rows[0]["Creation Date"].date() == date(2025, 9, 3)


def test_excel_reader_rejects_garbage():
    with pytest.raises(SourceError):
        ExcelReader().read(b"definitely not a workbook")


def test_find_header_row_is_case_insensitive():
    rows = [["Report"], [None, "  CAMPAIGN   Name "], ["x"]]
    assert find_header_row(rows) == 1
    assert find_header_row([["a"], ["b"]]) == 0


@pytest.mark.parametrize(
    "mime, data, expected",
    [
        (XLSX_MIME, b"", "xlsx"),
        ("application/vnd.ms-excel", b"", "xlsx"),
        ("text/csv", b"PK\x03\x04", "csv"),
        ("text/plain", b"", "csv"),
        (None, b"PK\x03\x04rest", "xlsx"),
        ("application/octet-stream", b"PK\x03\x04rest", "xlsx"),
        (None, b"a,b\n1,2\n", "csv"),
    ],
)
def test_registry_detect_format(mime, data, expected):
    assert registry.detect_format(mime, data) == expected


def test_registry_load_dispatches_on_hint():
    data = make_workbook({"Sheet1": [["Campaign name"], ["A"]]})
    assert registry.load(data, XLSX_MIME) == [{"Campaign name": "A"}]
    assert registry.load(b"Campaign name\nB\n", "text/csv") == [{"Campaign name": "B"}]
