"""Excel workbook reading and writing with openpyxl."""

from collections.abc import Iterable, Sequence
from datetime import date, datetime
from io import BytesIO
from typing import Any

from openpyxl import Workbook, load_workbook

from ...core.exceptions import ValidationError
from ...core.utils import is_blank

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
EXCEL_MEDIA_TYPES = {XLSX_MEDIA_TYPE, "application/vnd.ms-excel"}

PROPERTY_COLUMNS = [
    "Name",
    "Address",
    "Type",
    "Status",
    "Bedrooms",
    "Bathrooms",
    "Electricity Number",
    "Water Number",
    "Square Feet",
    "Rent Amount",
    "Currency",
]

TENANT_COLUMNS = [
    "First Name",
    "Last Name",
    "Email",
    "Phone",
    "Property Name",
    "Rent Amount",
    "Currency",
    "Lease Start Date",
    "Lease End Date",
]

COMBINED_COLUMNS = [
    "Property Name",
    "Property Address",
    "Property Type",
    "Property Status",
    "Bedrooms",
    "Bathrooms",
    "Electricity Number",
    "Water Number",
    "Square Feet",
    "Property Rent Amount",
    "Property Currency",
    "Tenant First Name",
    "Tenant Last Name",
    "Tenant Email",
    "Tenant Phone",
    "Tenant Rent Amount",
    "Lease Start Date",
    "Lease End Date",
]

TEMPLATES = {
    "properties": PROPERTY_COLUMNS,
    "tenants": TENANT_COLUMNS,
    "combined": COMBINED_COLUMNS,
}

# Spreadsheet row number of the first data row
FIRST_DATA_ROW = 2


def read_sheet(content: bytes) -> list[tuple]:
    """All rows of the first worksheet, as tuples of cell values."""
    try:
        workbook = load_workbook(BytesIO(content), read_only=True, data_only=True)
        worksheet = workbook.worksheets[0]
        rows = [tuple(row) for row in worksheet.iter_rows(values_only=True)]
        workbook.close()
    except Exception as e:
        raise ValidationError(
            "Could not read Excel file", details={"reason": str(e)}
        ) from e

    if len(rows) < 2:
        raise ValidationError(
            "File must contain at least a header row and one data row"
        )
    return rows


def validate_headers(header: Sequence[Any], expected: Sequence[str]) -> None:
    """Header cells must match the expected names by position."""
    for index, name in enumerate(expected):
        got = header[index] if index < len(header) else None
        got = "" if got is None else str(got).strip()
        if got != name:
            raise ValidationError(
                f'Invalid header at column {index + 1}. Expected "{name}", got "{got}"'
            )


def data_rows(rows: list[tuple], columns: Sequence[str]) -> Iterable[tuple[int, dict]]:
    """Yield (spreadsheet row number, {column: value}) for non-empty rows."""
    for offset, row in enumerate(rows[1:]):
        if all(is_blank(cell) for cell in row):
            continue
        values = {
            name: row[index] if index < len(row) else None
            for index, name in enumerate(columns)
        }
        yield FIRST_DATA_ROW + offset, values


def cell_text(value: Any) -> str | None:
    """Render a cell as text; whole floats lose their ".0" (utility numbers)."""
    if is_blank(value):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def cell_number(value: Any) -> Any:
    """Numbers pass through; text is stripped for schema coercion."""
    if is_blank(value):
        return None
    if isinstance(value, str):
        return value.strip()
    return value


def build_workbook(sheets: dict[str, tuple[list[str], Iterable[Sequence[Any]]]]) -> bytes:
    """Write ``{sheet title: (header, rows)}`` into an xlsx document."""
    workbook = Workbook()
    workbook.remove(workbook.active)
    for title, (header, rows) in sheets.items():
        worksheet = workbook.create_sheet(title=title)
        worksheet.append(header)
        for row in rows:
            worksheet.append(list(row))

    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def build_template(kind: str) -> bytes:
    """A header-only workbook for one import kind."""
    return build_workbook({"Template": (TEMPLATES[kind], [])})
