"""Parse performance report spreadsheets (first sheet, header row)."""

import zipfile
from io import BytesIO
from typing import Any

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException


class EmptyReportError(Exception):
    """Report has no data rows or could not be read."""

    def __init__(self, message: str = "The Excel file is empty or could not be read."):
        super().__init__(message)


def parse_report(data: bytes) -> list[dict[str, Any]]:
    """
    Read the first sheet of an .xlsx report into loosely-typed rows.

    The first row is the header. Empty cells are left out of the row dict and
    blank rows are skipped, so a missing column simply has no key.

    Raises:
        EmptyReportError: if the file is unreadable or yields zero rows.
    """
    try:
        workbook = load_workbook(BytesIO(data), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
        raise EmptyReportError() from e

    try:
        sheet = workbook.worksheets[0]
        rows = sheet.iter_rows(values_only=True)
        header = next(rows, None)
        if not header:
            raise EmptyReportError()
        names = [str(h).strip() if h is not None else None for h in header]

        parsed: list[dict[str, Any]] = []
        for values in rows:
            row = {
                name: value
                for name, value in zip(names, values)
                if name and value is not None and value != ""
            }
            if row:
                parsed.append(row)
    finally:
        workbook.close()

    if not parsed:
        raise EmptyReportError()
    return parsed
