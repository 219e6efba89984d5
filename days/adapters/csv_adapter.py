"""CSV adapter for the events file.

The file is read one physical line at a time: every line is decoded and
parsed on its own, so a line with bad bytes or an unterminated quote is a
single malformed row and never swallows the rows after it.
"""

from __future__ import annotations

import csv
import io
import logging
from typing import Iterator, NamedTuple, Optional

logger = logging.getLogger(__name__)

HEADER = ("date", "category", "description")
ENCODING = "utf-8"


class Row(NamedTuple):
    """Raw cells of one data row; cells missing from a short row are None."""

    row_number: int
    date: Optional[str]
    category: Optional[str]
    description: Optional[str]


def read_lines(file_path: str) -> Iterator[tuple[int, bytes]]:
    """Yield ``(line_number, raw_bytes)`` for every physical line, line endings included."""

    with open(file_path, "rb") as handle:
        for line_number, raw in enumerate(handle, start=1):
            yield line_number, raw


def parse_line(line: str) -> list[str]:
    """Split one physical line of the events file into its cells.

    Raises ``csv.Error`` for an unterminated quote.
    """

    cells = next(csv.reader([line.rstrip("\r\n")], strict=True), None)
    return cells if cells is not None else []


def header_columns(raw: bytes, file_path: str) -> dict[str, int]:
    """Map each required column name to its position in the header line."""

    try:
        cells = parse_line(raw.decode("utf-8-sig"))
    except (UnicodeDecodeError, csv.Error) as exc:
        raise ValueError(f"{file_path}: unreadable header line") from exc

    missing = [field for field in HEADER if field not in cells]
    if missing:
        raise ValueError(f"{file_path}: missing required columns {missing}")
    return {field: cells.index(field) for field in HEADER}


def decode_row(line_number: int, raw: bytes, columns: dict[str, int]) -> Optional[Row]:
    """Turn one raw data line into a Row; None for blank or malformed lines."""

    try:
        text = raw.decode(ENCODING)
    except UnicodeDecodeError:
        logger.warning("undecodable row %d: %r", line_number, raw)
        return None
    if not text.strip():
        return None

    try:
        cells = parse_line(text)
    except csv.Error as exc:
        logger.warning("malformed row %d (%s): %s", line_number, exc, text.rstrip("\r\n"))
        return None

    def cell(field: str) -> Optional[str]:
        index = columns[field]
        return cells[index] if index < len(cells) else None

    return Row(line_number, cell("date"), cell("category"), cell("description"))


def load_rows(file_path: str) -> list[Row]:
    """Read the data rows of an events file.

    Row numbers are physical line numbers, so the first data row is row 2.
    An empty file yields no rows.
    """

    rows: list[Row] = []
    columns = None
    for line_number, raw in read_lines(file_path):
        if columns is None:
            columns = header_columns(raw, file_path)
            continue
        row = decode_row(line_number, raw, columns)
        if row is not None:
            rows.append(row)
    return rows


def format_row(date_text: str, category: str, description: str) -> str:
    """Render one CSV line, quoting fields that contain commas or quotes."""

    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerow([date_text, category, description])
    return buffer.getvalue()


def format_header() -> str:
    return format_row(*HEADER)
