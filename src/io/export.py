from __future__ import annotations

import csv
import re
from typing import Iterable
from xml.sax.saxutils import escape, quoteattr

import pandas as pd

from src.normalize.schema import FIELD_NAMES, HackathonRecord

EXPORT_PREFIX = "Hackathons_2024-25_"
WORKSHEET_NAME = "2024-2025 Data"
CSV_MIME_TYPE = "text/csv"
SPREADSHEET_MIME_TYPE = "application/vnd.ms-excel"
_XML_ILLEGAL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")

_SPREADSHEET_HEAD = """<?xml version="1.0"?>
<?mso-application progid="Excel.Sheet"?>
<Workbook xmlns="urn:schemas-microsoft-com:office:spreadsheet" xmlns:o="urn:schemas-microsoft-com:office:office" xmlns:x="urn:schemas-microsoft-com:office:excel" xmlns:ss="urn:schemas-microsoft-com:office:spreadsheet" xmlns:html="http://www.w3.org/TR/REC-html40">
  <Styles>
    <Style ss:ID="Header">
      <Font ss:Bold="1" ss:Color="#FFFFFF"/>
      <Interior ss:Color="#000000" ss:Pattern="Solid"/>
    </Style>
  </Styles>
"""


def records_frame(records: Iterable[HackathonRecord]) -> pd.DataFrame:
    rows = [record.values() for record in records]
    return pd.DataFrame(rows, columns=list(FIELD_NAMES), dtype="object")


def export_filename(region: str, extension: str) -> str:
    return f"{EXPORT_PREFIX}{region}.{extension.lstrip('.')}"


def encode_csv(records: Iterable[HackathonRecord]) -> str:
    header = ",".join(FIELD_NAMES) + "\n"
    frame = records_frame(records)
    if frame.empty:
        return header
    body = frame.to_csv(
        index=False,
        header=False,
        quoting=csv.QUOTE_ALL,
        lineterminator="\n",
    )
    return header + body


def _cell(value: str) -> str:
    text = _XML_ILLEGAL_CHARS.sub("", value)
    return f'<Cell><Data ss:Type="String">{escape(text)}</Data></Cell>'


def encode_spreadsheet_xml(records: Iterable[HackathonRecord]) -> str:
    """Render records as a single-sheet SpreadsheetML 2003 workbook."""

    lines = [
        _SPREADSHEET_HEAD.rstrip("\n"),
        f"  <Worksheet ss:Name={quoteattr(WORKSHEET_NAME)}>",
        "    <Table>",
        '      <Row ss:StyleID="Header">' + "".join(_cell(name) for name in FIELD_NAMES) + "</Row>",
    ]
    for record in records:
        lines.append("      <Row>" + "".join(_cell(value) for value in record.values()) + "</Row>")
    lines.extend(["    </Table>", "  </Worksheet>", "</Workbook>"])
    return "\n".join(lines) + "\n"
